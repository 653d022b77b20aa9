"""Factory for creating Preset documents."""

from typing import List

from routinelog.apis.Db import Db
from routinelog.documents.presets.Preset import Preset
from routinelog.util.logger import get_logger
from routinelog.util.validators import clean_name, require_id

logger = get_logger(__name__)


class PresetFactory:
    """Creates presets for one user."""

    def __init__(self, db: Db, user_id: str):
        self.db = db
        self.user_id = require_id(user_id, "user_id")

    def create(self, name: str, item_ids: List[str]) -> Preset:
        """Create a preset; item ids are stored as given, in order."""
        preset = Preset(self.db, self.user_id, None)
        preset.create_doc({"name": clean_name(name), "itemIds": list(item_ids)})
        logger.info(f"Created preset {preset.id} with {len(item_ids)} items")
        return preset
