"""Result types returned by the auth adapter and the friend sharing service."""

from typing import Optional, List, Dict

from pydantic import BaseModel, Field

from routinelog.models.firestore_types import FriendshipDoc
from routinelog.models.util_types import CalendarDayBadge, SharedLogEntry


class AuthSession(BaseModel):
    """Signed-in user as returned by the identity provider."""
    uid: str
    email: str
    idToken: str
    refreshToken: Optional[str] = None

    @property
    def username(self) -> str:
        return self.email.split("@")[0]


class FriendCalendarView(BaseModel):
    """What a viewer may see of a friend's calendar for a date range."""
    friendship: FriendshipDoc
    startDate: str
    endDate: str
    entries: List[SharedLogEntry] = Field(default_factory=list)
    badges: Dict[str, CalendarDayBadge] = Field(default_factory=dict)

    @property
    def calendar_visible(self) -> bool:
        return self.friendship.permissions.viewCalendar

    def entries_for(self, date: str) -> List[SharedLogEntry]:
        """Entries of one day, in log time order."""
        return [entry for entry in self.entries if entry.date == date]
