"""Models package initialization."""

from .util_types import FriendRequestStatus, CalendarDayBadge, GroupBucket, SharedLogEntry
from .firestore_types import (
    BaseDoc,
    GroupDoc,
    ItemDoc,
    LogDoc,
    PresetDoc,
    UserProfileDoc,
    FriendRequestDoc,
    FriendPermissions,
    FriendshipDoc,
)
from .function_types import AuthSession, FriendCalendarView

__all__ = [
    # Firestore types
    "BaseDoc",
    "GroupDoc",
    "ItemDoc",
    "LogDoc",
    "PresetDoc",
    "UserProfileDoc",
    "FriendRequestDoc",
    "FriendPermissions",
    "FriendshipDoc",
    # Function types
    "AuthSession",
    "FriendCalendarView",
    # Utility types
    "FriendRequestStatus",
    "CalendarDayBadge",
    "GroupBucket",
    "SharedLogEntry",
]
