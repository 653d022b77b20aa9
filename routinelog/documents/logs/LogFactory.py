"""Factory for creating Log documents."""

from typing import List, Optional

from routinelog.apis.Db import Db
from routinelog.documents.logs.Log import Log
from routinelog.models.firestore_types import ItemDoc
from routinelog.util.dates import parse_date, normalize_time_input
from routinelog.util.logger import get_logger
from routinelog.util.validators import clean_name, require_id

logger = get_logger(__name__)


class LogFactory:
    """Creates log entries for one user."""

    def __init__(self, db: Db, user_id: str):
        self.db = db
        self.user_id = require_id(user_id, "user_id")

    def create(
        self,
        date: str,
        time: str,
        item_id: str,
        item_name_snapshot: str,
        note: Optional[str] = None,
        group_id: Optional[str] = None,
        group_color: Optional[str] = None,
    ) -> Log:
        """Create a log entry.

        ``time`` accepts loose input ("0930", "9", "09:30") and is stored as
        ``HH:mm``. Missing optional fields are stored as null.

        Args:
            date: Day of the entry, YYYY-MM-DD
            time: Time of day
            item_id: Logged item
            item_name_snapshot: Item name at logging time
            note: Optional free text
            group_id: Item's group at logging time
            group_color: Group color at logging time

        Returns:
            Created Log
        """
        parse_date(date)
        now = self.db.server_timestamp
        data = {
            "date": date,
            "time": normalize_time_input(time),
            "timestamp": now,
            "itemId": require_id(item_id, "itemId"),
            "itemNameSnapshot": clean_name(item_name_snapshot, field="itemNameSnapshot"),
            "groupId": group_id or None,
            "groupColor": group_color or None,
            "note": note or None,
            "updatedAt": now,
        }
        log = Log(self.db, self.user_id, None)
        log.create_doc(data)
        logger.info(f"Created log {log.id} for item {item_id} on {date}")
        return log

    def create_many(self, date: str, time: str, items: List[ItemDoc], note: Optional[str] = None) -> List[Log]:
        """Log several items at the same moment, one write per item.

        Group info is not copied onto these logs.
        """
        return [self.create(date, time, item.id, item.name, note) for item in items]
