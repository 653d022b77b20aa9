"""Item service for item queries and cascading updates."""

from datetime import datetime, timezone
from typing import List, Optional, Callable

from google.cloud.firestore_v1.base_query import FieldFilter

from routinelog.apis.Db import Db
from routinelog.config.loader import AppConfig, load_app_config, get_fanout_batch_limit
from routinelog.documents.DocumentBase import doc_from_snapshot
from routinelog.documents.groups.GroupFactory import GroupFactory
from routinelog.documents.items.Item import Item
from routinelog.documents.items.ItemFactory import ItemFactory
from routinelog.exceptions import store_read
from routinelog.models.firestore_types import ItemDoc
from routinelog.util.logger import get_logger
from routinelog.util.subscription import Subscription

logger = get_logger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def sort_items_by_created_at(items: List[ItemDoc]) -> List[ItemDoc]:
    """Oldest first; items whose server timestamp is still pending come first."""
    return sorted(items, key=lambda item: item.createdAt or _EPOCH)


def _active_items(docs) -> List[ItemDoc]:
    items = [doc_from_snapshot(ItemDoc, snap) for snap in docs]
    return sort_items_by_created_at([item for item in items if not item.isArchived])


class ItemService:
    """Service for orchestrating item operations."""

    def __init__(self, db: Db, config: Optional[AppConfig] = None):
        """Initialize ItemService.

        Args:
            db: Connected database handle
            config: Loaded settings, read from settings.yaml when omitted
        """
        self.db = db
        self.config = config if config is not None else load_app_config()

    def _active_query(self, user_id: str):
        # Sorted client-side to avoid a composite index on (isArchived, createdAt)
        return self.db.collection("items", user_id).where(filter=FieldFilter("isArchived", "==", False))

    def add_item(
        self,
        user_id: str,
        name: str,
        group_id: str,
        group_name_snapshot: Optional[str] = None,
        group_color_snapshot: Optional[str] = None,
    ) -> str:
        factory = ItemFactory(self.db, user_id, self.config)
        return factory.create(name, group_id, group_name_snapshot, group_color_snapshot).id

    def update_item(
        self,
        user_id: str,
        item_id: str,
        name: Optional[str] = None,
        group_id: Optional[str] = None,
        group_name_snapshot: Optional[str] = None,
        group_color_snapshot: Optional[str] = None,
    ) -> int:
        """Update an item and its logs' snapshots.

        Returns:
            Number of logs updated
        """
        item = Item(self.db, user_id, item_id)
        return item.update(
            name=name,
            group_id=group_id,
            group_name_snapshot=group_name_snapshot,
            group_color_snapshot=group_color_snapshot,
            batch_limit=get_fanout_batch_limit(self.config),
        )

    def archive_item(self, user_id: str, item_id: str):
        Item(self.db, user_id, item_id).archive()

    def delete_item(self, user_id: str, item_id: str):
        Item(self.db, user_id, item_id).delete()

    @store_read("Get items")
    def get_items_once(self, user_id: str) -> List[ItemDoc]:
        """Non-archived items, oldest first."""
        return _active_items(self._active_query(user_id).get())

    def subscribe_to_items(self, user_id: str, callback: Callable[[List[ItemDoc]], None]) -> Subscription:
        return Subscription(self._active_query(user_id), _active_items, callback, name=f"items of {user_id}")

    def add_demo_items(self, user_id: str) -> List[str]:
        """Add the starter items to the user's default group."""
        group = GroupFactory(self.db, user_id, self.config).ensure_default()
        items = ItemFactory(self.db, user_id, self.config).create_demo_items(group)
        return [item.id for item in items]
