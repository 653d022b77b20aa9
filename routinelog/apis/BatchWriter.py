"""Chunked Firestore batch writes."""

from typing import Dict, Any

from routinelog.config.loader import FIRESTORE_BATCH_MAX
from routinelog.util.logger import get_logger

logger = get_logger(__name__)


class BatchWriter:
    """Queues writes and commits them in batches of at most ``limit`` operations.

    A batch is committed as soon as it is full, so earlier batches are already
    applied when a later one fails. There is no rollback: callers get the
    exception from the failing commit and the writes committed before it stay.
    """

    def __init__(self, db, limit: int = 490):
        if limit <= 0 or limit > FIRESTORE_BATCH_MAX:
            raise ValueError(f"Batch limit must be between 1 and {FIRESTORE_BATCH_MAX}")
        self.db = db
        self.limit = limit
        self.batches_committed = 0
        self.writes_committed = 0
        self._batch = None
        self._pending = 0

    def _current(self):
        if self._batch is None:
            self._batch = self.db.batch()
        return self._batch

    def _after_write(self):
        self._pending += 1
        if self._pending >= self.limit:
            self._flush()

    def _flush(self):
        if self._batch is None or self._pending == 0:
            return
        batch, count = self._batch, self._pending
        self._batch = None
        self._pending = 0
        batch.commit()
        self.batches_committed += 1
        self.writes_committed += count
        logger.debug(f"Committed batch of {count} writes")

    def update(self, ref, data: Dict[str, Any]) -> None:
        self._current().update(ref, data)
        self._after_write()

    def set(self, ref, data: Dict[str, Any], merge: bool = False) -> None:
        self._current().set(ref, data, merge=merge)
        self._after_write()

    def delete(self, ref) -> None:
        self._current().delete(ref)
        self._after_write()

    def commit(self) -> int:
        """Commit whatever is still queued and return the total writes committed."""
        self._flush()
        return self.writes_committed

    def __enter__(self) -> "BatchWriter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.commit()
