"""Firestore document type definitions using Pydantic."""

from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field

from routinelog.models.util_types import FriendRequestStatus


class BaseDoc(BaseModel):
    """Base document type for all Firestore documents.

    ``createdAt`` is server assigned, so it may be missing on a document that
    was read back before the server resolved the timestamp.
    """

    id: str
    createdAt: Optional[datetime] = None


class GroupDoc(BaseDoc):
    """users/{uid}/groups/{id}"""

    name: str
    color: str


class ItemDoc(BaseDoc):
    """users/{uid}/items/{id}

    Group name and color are point-in-time copies of the group, refreshed only
    when the item itself is re-saved.
    """

    name: str
    groupId: str
    groupNameSnapshot: Optional[str] = None
    groupColorSnapshot: Optional[str] = None
    isArchived: bool = False


class LogDoc(BaseDoc):
    """users/{uid}/logs/{id}

    ``date`` and ``time`` are checked when written, not when read, so a log
    stored by another client in a looser format still loads.
    """

    date: str
    time: str
    timestamp: Optional[datetime] = None
    itemId: str
    itemNameSnapshot: str
    groupId: Optional[str] = None
    groupColor: Optional[str] = None
    note: Optional[str] = None
    updatedAt: Optional[datetime] = None


class PresetDoc(BaseDoc):
    """users/{uid}/presets/{id}"""

    name: str
    itemIds: List[str] = Field(default_factory=list)


class UserProfileDoc(BaseModel):
    """users/{uid}"""

    uid: str
    username: str
    displayName: Optional[str] = None
    photoURL: Optional[str] = None
    createdAt: Optional[datetime] = None


class FriendRequestDoc(BaseDoc):
    """friendRequests/{id}"""

    fromId: str
    fromUsername: str
    toId: str
    toUsername: str
    status: FriendRequestStatus = FriendRequestStatus.PENDING


class FriendPermissions(BaseModel):
    """What the owner of a friendship record lets that friend see.

    Independent flags, not a tiered level.
    """

    viewCalendar: bool = True
    viewDetails: bool = False
    hideTimes: bool = False


class FriendshipDoc(BaseModel):
    """users/{owner}/friends/{uid}, granted by the owner to ``uid``."""

    uid: str
    username: str
    since: Optional[datetime] = None
    permissions: FriendPermissions = Field(default_factory=FriendPermissions)
