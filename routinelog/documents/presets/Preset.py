"""Preset document class."""

from typing import Optional, List

from routinelog.documents.DocumentBase import DocumentBase
from routinelog.models.firestore_types import PresetDoc
from routinelog.util.logger import get_logger
from routinelog.util.validators import clean_name

logger = get_logger(__name__)


class Preset(DocumentBase[PresetDoc]):
    """A named bundle of items logged together."""

    collection_name = "presets"
    pydantic_model = PresetDoc

    @property
    def doc(self) -> PresetDoc:
        return super().doc

    def update(self, name: Optional[str] = None, item_ids: Optional[List[str]] = None):
        self.update_doc(data={
            "name": clean_name(name) if name is not None else None,
            "itemIds": list(item_ids) if item_ids is not None else None,
        })
        logger.info(f"Updated preset {self.id}")

    def delete(self):
        super().delete()
        logger.info(f"Deleted preset {self.id}")
