"""Friend-sharing access control.

What a viewer sees of a friend's calendar is decided by the friend's own
friendship record of the viewer. The three permission flags are independent:

- ``viewCalendar`` false: nothing of the owner's logs is read
- ``viewDetails`` false: item names are replaced by a placeholder label
- ``hideTimes`` true: times are withheld
"""

from typing import Optional

from routinelog.apis.Db import Db
from routinelog.config.loader import (
    AppConfig,
    load_app_config,
    get_calendar_fallback_color,
    get_calendar_max_color_dots,
    get_hidden_item_label,
)
from routinelog.exceptions import StoreReadError
from routinelog.models.firestore_types import FriendPermissions, LogDoc
from routinelog.models.function_types import FriendCalendarView
from routinelog.models.util_types import SharedLogEntry
from routinelog.services.calendar_service import build_calendar_badges, DEFAULT_COLOR
from routinelog.services.friend_service import FriendService
from routinelog.services.item_service import ItemService
from routinelog.services.log_service import LogService
from routinelog.util.logger import get_logger

logger = get_logger(__name__)


def render_shared_log(
    log: LogDoc,
    permissions: FriendPermissions,
    placeholder: str,
    color: Optional[str] = None,
) -> SharedLogEntry:
    """Project one log through the viewer's permissions."""
    return SharedLogEntry(
        date=log.date,
        color=color or log.groupColor or DEFAULT_COLOR,
        label=log.itemNameSnapshot if permissions.viewDetails else placeholder,
        time=None if permissions.hideTimes else log.time,
    )


class SharingService:
    """Builds the permission-filtered view of a friend's calendar."""

    def __init__(self, db: Db, config: Optional[AppConfig] = None):
        self.config = config if config is not None else load_app_config()
        self.friends = FriendService(db, self.config)
        self.items = ItemService(db, self.config)
        self.logs = LogService(db)

    def load_friend_calendar(
        self, viewer_uid: str, owner_uid: str, start_date: str, end_date: str
    ) -> Optional[FriendCalendarView]:
        """Owner's calendar between two dates as ``viewer_uid`` may see it.

        Returns:
            None when the owner has no friendship record of the viewer,
            otherwise the view; it is empty when ``viewCalendar`` is off.
        """
        friendship = self.friends.get_friendship_status(viewer_uid, owner_uid)
        if friendship is None:
            logger.info(f"User {viewer_uid} has no access to {owner_uid}'s calendar")
            return None

        view = FriendCalendarView(friendship=friendship, startDate=start_date, endDate=end_date)
        permissions = friendship.permissions
        if not permissions.viewCalendar:
            return view

        logs = self.logs.get_logs_by_date_range(owner_uid, start_date, end_date)
        try:
            items = self.items.get_items_once(owner_uid)
        except StoreReadError as e:
            # Rules may grant a friend the logs but not the items
            logger.warning(f"Items of {owner_uid} not readable for {viewer_uid}, using log colors: {e}")
            items = []
        fallback_color = get_calendar_fallback_color(self.config)
        view.badges = build_calendar_badges(
            logs, items, fallback_color, get_calendar_max_color_dots(self.config)
        )

        placeholder = get_hidden_item_label(self.config)
        colors_by_item = {item.id: item.groupColorSnapshot for item in items}
        view.entries = [
            render_shared_log(
                log,
                permissions,
                placeholder,
                log.groupColor or colors_by_item.get(log.itemId) or fallback_color,
            )
            for log in logs
        ]
        return view
