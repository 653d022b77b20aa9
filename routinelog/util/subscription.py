"""Live query subscriptions."""

import threading
from typing import Callable, List, TypeVar, Generic, Optional

from routinelog.util.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class Subscription(Generic[T]):
    """Cancellation handle for a live query.

    Wraps a Firestore ``Watch``. The callback receives the full, mapped result
    set on the first snapshot and again after every change. ``unsubscribe``
    detaches the listener; calling it more than once is a no-op. It does not
    abort writes already in flight.
    """

    def __init__(
        self,
        query,
        mapper: Callable[[list], List[T]],
        callback: Callable[[List[T]], None],
        name: str = "query",
    ):
        self.name = name
        self._mapper = mapper
        self._callback = callback
        self._lock = threading.Lock()
        self._closed = False
        self._watch = None
        self._watch = query.on_snapshot(self._on_snapshot)
        logger.debug(f"Subscribed to {name}")

    def _on_snapshot(self, docs, changes, read_time):
        # Snapshots can still be queued on the listener thread after unsubscribe
        if self._closed:
            return
        self._callback(self._mapper(docs))

    @property
    def active(self) -> bool:
        return not self._closed

    def unsubscribe(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            watch: Optional[object] = self._watch
            self._watch = None
        if watch is not None:
            watch.unsubscribe()
        logger.debug(f"Unsubscribed from {self.name}")

    def __call__(self) -> None:
        self.unsubscribe()

    def __enter__(self) -> "Subscription[T]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unsubscribe()
