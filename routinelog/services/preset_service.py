"""Preset service."""

from typing import List, Optional, Callable

from routinelog.apis.Db import Db
from routinelog.config.loader import AppConfig
from routinelog.documents.DocumentBase import doc_from_snapshot
from routinelog.documents.presets.Preset import Preset
from routinelog.documents.presets.PresetFactory import PresetFactory
from routinelog.exceptions import store_read
from routinelog.models.firestore_types import PresetDoc
from routinelog.services.item_service import ItemService
from routinelog.services.log_service import LogService
from routinelog.util.logger import get_logger
from routinelog.util.subscription import Subscription

logger = get_logger(__name__)


class PresetService:
    """Service for presets: named item bundles logged in one step."""

    def __init__(self, db: Db, config: Optional[AppConfig] = None):
        self.db = db
        self.items = ItemService(db, config)
        self.logs = LogService(db)

    def _query(self, user_id: str):
        return self.db.collection("presets", user_id).order_by("createdAt", direction="ASCENDING")

    def add_preset(self, user_id: str, name: str, item_ids: List[str]) -> str:
        return PresetFactory(self.db, user_id).create(name, item_ids).id

    def update_preset(
        self, user_id: str, preset_id: str, name: Optional[str] = None, item_ids: Optional[List[str]] = None
    ):
        Preset(self.db, user_id, preset_id).update(name=name, item_ids=item_ids)

    def delete_preset(self, user_id: str, preset_id: str):
        Preset(self.db, user_id, preset_id).delete()

    @store_read("Get presets")
    def get_presets(self, user_id: str) -> List[PresetDoc]:
        return [doc_from_snapshot(PresetDoc, snap) for snap in self._query(user_id).get()]

    def subscribe_to_presets(self, user_id: str, callback: Callable[[List[PresetDoc]], None]) -> Subscription:
        return Subscription(
            self._query(user_id),
            lambda docs: [doc_from_snapshot(PresetDoc, snap) for snap in docs],
            callback,
            name=f"presets of {user_id}",
        )

    def apply_preset(
        self, user_id: str, preset_id: str, date: str, time: str, note: Optional[str] = None
    ) -> List[str]:
        """Log every active item of a preset at ``date`` and ``time``.

        Archived or deleted items are skipped. The created logs carry no group
        info.

        Returns:
            Ids of the created logs, in preset order
        """
        preset = Preset(self.db, user_id, preset_id).doc
        active = {item.id: item for item in self.items.get_items_once(user_id)}
        items = [active[item_id] for item_id in preset.itemIds if item_id in active]
        skipped = len(preset.itemIds) - len(items)
        if skipped:
            logger.info(f"Preset {preset_id}: skipped {skipped} archived or missing items")
        return self.logs.add_multiple_logs(user_id, date, time, items, note)
