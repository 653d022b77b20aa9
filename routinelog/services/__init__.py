"""Services package initialization."""

from .group_service import GroupService, group_items_for_display
from .item_service import ItemService
from .log_service import LogService
from .preset_service import PresetService
from .stats_service import StatsService, get_log_counts_by_date
from .friend_service import FriendService
from .calendar_service import get_log_colors_by_date, build_calendar_badges
from .sharing_service import SharingService, render_shared_log
from .account_service import AccountService

__all__ = [
    "GroupService",
    "group_items_for_display",
    "ItemService",
    "LogService",
    "PresetService",
    "StatsService",
    "get_log_counts_by_date",
    "FriendService",
    "get_log_colors_by_date",
    "build_calendar_badges",
    "SharingService",
    "render_shared_log",
    "AccountService",
]
