"""Log service for logging items and querying logs by day or range."""

from typing import List, Optional, Callable, Dict

from google.cloud.firestore_v1.base_query import FieldFilter

from routinelog.apis.Db import Db
from routinelog.documents.DocumentBase import doc_from_snapshot
from routinelog.documents.logs.Log import Log
from routinelog.documents.logs.LogFactory import LogFactory
from routinelog.exceptions import store_read
from routinelog.models.firestore_types import ItemDoc, LogDoc
from routinelog.util.dates import parse_date, sort_logs_by_time, sort_logs_by_date_and_time
from routinelog.util.logger import get_logger
from routinelog.util.subscription import Subscription

logger = get_logger(__name__)


def _logs_by_time(docs) -> List[LogDoc]:
    return sort_logs_by_time([doc_from_snapshot(LogDoc, snap) for snap in docs])


def _logs_by_date_and_time(docs) -> List[LogDoc]:
    return sort_logs_by_date_and_time([doc_from_snapshot(LogDoc, snap) for snap in docs])


class LogService:
    """Service for a user's log entries."""

    def __init__(self, db: Db):
        self.db = db

    def _date_query(self, user_id: str, date: str):
        parse_date(date)
        return self.db.collection("logs", user_id).where(filter=FieldFilter("date", "==", date))

    def _range_query(self, user_id: str, start_date: str, end_date: str):
        # An inverted range is a valid query that matches nothing
        parse_date(start_date)
        parse_date(end_date)
        return (
            self.db.collection("logs", user_id)
            .where(filter=FieldFilter("date", ">=", start_date))
            .where(filter=FieldFilter("date", "<=", end_date))
            .order_by("date", direction="ASCENDING")
        )

    def add_log(
        self,
        user_id: str,
        date: str,
        time: str,
        item_id: str,
        item_name_snapshot: str,
        note: Optional[str] = None,
        group_id: Optional[str] = None,
        group_color: Optional[str] = None,
    ) -> str:
        log = LogFactory(self.db, user_id).create(
            date, time, item_id, item_name_snapshot, note=note, group_id=group_id, group_color=group_color
        )
        return log.id

    def log_item(self, user_id: str, date: str, time: str, item: ItemDoc, note: Optional[str] = None) -> str:
        """Log ``item``, copying its name and group snapshots onto the entry."""
        return self.add_log(
            user_id,
            date,
            time,
            item.id,
            item.name,
            note=note,
            group_id=item.groupId,
            group_color=item.groupColorSnapshot,
        )

    def add_multiple_logs(
        self, user_id: str, date: str, time: str, items: List[ItemDoc], note: Optional[str] = None
    ) -> List[str]:
        # Group info is not copied for bulk logs
        return [log.id for log in LogFactory(self.db, user_id).create_many(date, time, items, note)]

    def update_log(
        self,
        user_id: str,
        log_id: str,
        date: Optional[str] = None,
        time: Optional[str] = None,
        note: Optional[str] = None,
    ):
        Log(self.db, user_id, log_id).update(date=date, time=time, note=note)

    def delete_log(self, user_id: str, log_id: str):
        Log(self.db, user_id, log_id).delete()

    @store_read("Get logs by date")
    def get_logs_by_date_once(self, user_id: str, date: str) -> List[LogDoc]:
        """Logs of one day ordered by time."""
        return _logs_by_time(self._date_query(user_id, date).get())

    def subscribe_to_logs_by_date(
        self, user_id: str, date: str, callback: Callable[[List[LogDoc]], None]
    ) -> Subscription:
        return Subscription(
            self._date_query(user_id, date), _logs_by_time, callback, name=f"logs of {user_id} on {date}"
        )

    @store_read("Get logs by date range")
    def get_logs_by_date_range(self, user_id: str, start_date: str, end_date: str) -> List[LogDoc]:
        """Logs with ``start_date <= date <= end_date``, ordered by date then time."""
        return _logs_by_date_and_time(self._range_query(user_id, start_date, end_date).get())

    def subscribe_to_logs_by_date_range(
        self, user_id: str, start_date: str, end_date: str, callback: Callable[[List[LogDoc]], None]
    ) -> Subscription:
        return Subscription(
            self._range_query(user_id, start_date, end_date),
            _logs_by_date_and_time,
            callback,
            name=f"logs of {user_id} from {start_date} to {end_date}",
        )

    def get_log_counts_by_item_id(
        self, user_id: str, item_id: str, start_date: str, end_date: str
    ) -> Dict[str, int]:
        """Per-date count of one item's logs within a range.

        Only the date range is queried; the item filter runs in memory so no
        composite index is needed.
        """
        counts: Dict[str, int] = {}
        for log in self.get_logs_by_date_range(user_id, start_date, end_date):
            if log.itemId == item_id:
                counts[log.date] = counts.get(log.date, 0) + 1
        return counts

    @store_read("Count item usage")
    def get_total_item_usage_count(self, user_id: str, item_id: str) -> int:
        """All-time number of logs of an item, counted server-side."""
        query = self.db.collection("logs", user_id).where(filter=FieldFilter("itemId", "==", item_id))
        result = query.count().get()
        return int(result[0][0].value)
