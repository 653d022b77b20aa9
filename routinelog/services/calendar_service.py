"""Calendar badge aggregation.

Each calendar day shows the colors of the groups logged that day. Up to
``max_dots`` colors render as dots; beyond that a numeric badge is shown.
"""

from typing import Dict, List, Optional

from routinelog.models.firestore_types import ItemDoc, LogDoc
from routinelog.models.util_types import CalendarDayBadge

DEFAULT_COLOR = "#8b5cf6"


def resolve_log_color(
    log: LogDoc, items_by_id: Optional[Dict[str, ItemDoc]] = None, fallback_color: str = DEFAULT_COLOR
) -> str:
    """The log's own group color, else its item's color snapshot, else the fallback."""
    if log.groupColor:
        return log.groupColor
    if items_by_id:
        item = items_by_id.get(log.itemId)
        if item is not None and item.groupColorSnapshot:
            return item.groupColorSnapshot
    return fallback_color


def get_log_colors_by_date(
    logs: List[LogDoc], items: Optional[List[ItemDoc]] = None, fallback_color: str = DEFAULT_COLOR
) -> Dict[str, List[str]]:
    """Distinct colors per date in first-seen order (exact string match)."""
    items_by_id = {item.id: item for item in items} if items else None
    colors: Dict[str, List[str]] = {}
    for log in logs:
        color = resolve_log_color(log, items_by_id, fallback_color)
        day = colors.setdefault(log.date, [])
        if color not in day:
            day.append(color)
    return colors


def build_calendar_badges(
    logs: List[LogDoc],
    items: Optional[List[ItemDoc]] = None,
    fallback_color: str = DEFAULT_COLOR,
    max_dots: int = 4,
) -> Dict[str, CalendarDayBadge]:
    counts: Dict[str, int] = {}
    for log in logs:
        counts[log.date] = counts.get(log.date, 0) + 1
    colors = get_log_colors_by_date(logs, items, fallback_color)
    return {
        day: CalendarDayBadge(date=day, count=count, colors=colors[day], maxDots=max_dots)
        for day, count in counts.items()
    }
