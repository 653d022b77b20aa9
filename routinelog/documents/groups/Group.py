"""Group document class."""

from typing import Optional

from routinelog.documents.DocumentBase import DocumentBase
from routinelog.models.firestore_types import GroupDoc
from routinelog.util.logger import get_logger
from routinelog.util.validators import clean_name, check_color

logger = get_logger(__name__)


class Group(DocumentBase[GroupDoc]):
    """A user's item group.

    Renaming or recoloring a group does not touch the items or logs that copied
    its name and color.
    """

    collection_name = "groups"
    pydantic_model = GroupDoc

    @property
    def doc(self) -> GroupDoc:
        return super().doc

    def update(self, name: Optional[str] = None, color: Optional[str] = None):
        """Partially update the group.

        Args:
            name: New name, trimmed; must not be empty
            color: New hex color
        """
        data = {
            "name": clean_name(name) if name is not None else None,
            "color": check_color(color) if color is not None else None,
        }
        self.update_doc(data=data)
        logger.info(f"Updated group {self.id}")

    def delete(self):
        """Delete the group. Items keep their groupId."""
        super().delete()
        logger.info(f"Deleted group {self.id}")
