"""Log document class."""

from typing import Optional

from routinelog.documents.DocumentBase import DocumentBase
from routinelog.models.firestore_types import LogDoc
from routinelog.util.dates import parse_date, normalize_time_input
from routinelog.util.logger import get_logger

logger = get_logger(__name__)


class Log(DocumentBase[LogDoc]):
    """One occurrence of an item on a date and time."""

    collection_name = "logs"
    pydantic_model = LogDoc

    @property
    def doc(self) -> LogDoc:
        return super().doc

    def update(self, date: Optional[str] = None, time: Optional[str] = None, note: Optional[str] = None):
        """Move or annotate the log; ``updatedAt`` is bumped by the server."""
        if date is not None:
            parse_date(date)
        data = {
            "date": date,
            "time": normalize_time_input(time) if time is not None else None,
            "note": note,
        }
        if all(value is None for value in data.values()):
            return
        self.update_doc(data={**data, "updatedAt": self.db.server_timestamp})
        logger.info(f"Updated log {self.id}")

    def delete(self):
        super().delete()
        logger.info(f"Deleted log {self.id}")
