"""Utility type definitions."""

from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field


class FriendRequestStatus(str, Enum):
    """Friend request status enumeration."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class CalendarDayBadge(BaseModel):
    """Badge data for one calendar day."""
    date: str
    count: int = 0
    colors: List[str] = Field(default_factory=list)
    maxDots: int = 4

    @property
    def dot_colors(self) -> Optional[List[str]]:
        """One dot per color, or None when the numeric count badge replaces the dots."""
        if len(self.colors) <= self.maxDots:
            return self.colors
        return None


class GroupBucket(BaseModel):
    """Items of one group for display; ``groupId`` is None for the Other bucket."""
    groupId: Optional[str] = None
    name: str
    color: str
    itemIds: List[str] = Field(default_factory=list)


class SharedLogEntry(BaseModel):
    """A friend's log as the viewer is allowed to see it."""
    date: str
    color: str
    label: str
    time: Optional[str] = None
