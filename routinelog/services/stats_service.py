"""Statistics over a user's logs."""

from datetime import date
from typing import Dict, List, Optional

from routinelog.apis.Db import Db
from routinelog.models.firestore_types import LogDoc
from routinelog.services.log_service import LogService
from routinelog.util.dates import get_trailing_date_range


def get_log_counts_by_date(logs: List[LogDoc]) -> Dict[str, int]:
    """Number of logs per date; dates without logs are absent."""
    counts: Dict[str, int] = {}
    for log in logs:
        counts[log.date] = counts.get(log.date, 0) + 1
    return counts


class StatsService:

    def __init__(self, db: Db):
        self.logs = LogService(db)

    def get_usage_stats(self, user_id: str, days: int, today: Optional[date] = None) -> Dict[str, int]:
        """Log counts per item name over the last ``days`` days, ``today`` included."""
        start_date, end_date = get_trailing_date_range(days, today)
        stats: Dict[str, int] = {}
        for log in self.logs.get_logs_by_date_range(user_id, start_date, end_date):
            stats[log.itemNameSnapshot] = stats.get(log.itemNameSnapshot, 0) + 1
        return stats
