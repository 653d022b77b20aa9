"""Factory for creating Item documents."""

from typing import List, Optional

from routinelog.apis.Db import Db
from routinelog.config.loader import AppConfig, load_app_config, get_demo_item_names
from routinelog.documents.groups.Group import Group
from routinelog.documents.items.Item import Item
from routinelog.util.logger import get_logger
from routinelog.util.validators import clean_name, check_color, require_id

logger = get_logger(__name__)


class ItemFactory:
    """Factory for creating a user's items."""

    def __init__(self, db: Db, user_id: str, config: Optional[AppConfig] = None):
        """Initialize ItemFactory.

        Args:
            db: Connected database handle
            user_id: Owner user ID for created items
            config: Loaded settings, read from settings.yaml when omitted
        """
        self.db = db
        self.user_id = require_id(user_id, "user_id")
        self.config = config if config is not None else load_app_config()

    def create(
        self,
        name: str,
        group_id: str,
        group_name_snapshot: Optional[str] = None,
        group_color_snapshot: Optional[str] = None,
    ) -> Item:
        """Create a single item.

        Items with the same name are allowed.

        Args:
            name: Item name
            group_id: Group the item belongs to
            group_name_snapshot: Copy of the group's name
            group_color_snapshot: Copy of the group's color

        Returns:
            Created Item
        """
        if group_color_snapshot is not None:
            check_color(group_color_snapshot, field="groupColorSnapshot")
        data = {
            "name": clean_name(name),
            "groupId": require_id(group_id, "groupId"),
            "groupNameSnapshot": group_name_snapshot,
            "groupColorSnapshot": group_color_snapshot,
            "isArchived": False,
        }
        item = Item(self.db, self.user_id, None)
        item.create_doc(data)
        logger.info(f"Created item {item.id} for user {self.user_id}")
        return item

    def create_demo_items(self, group: Group) -> List[Item]:
        """Create the configured starter items inside ``group``."""
        items = [
            self.create(name, group.id, group.doc.name, group.doc.color)
            for name in get_demo_item_names(self.config)
        ]
        logger.info(f"Created {len(items)} demo items for user {self.user_id}")
        return items
