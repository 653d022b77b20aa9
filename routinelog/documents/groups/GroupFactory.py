"""Factory for creating Group documents."""

from typing import Optional

from google.cloud.firestore_v1.base_query import FieldFilter

from routinelog.apis.Db import Db
from routinelog.config.loader import AppConfig, load_app_config, get_default_group
from routinelog.documents.DocumentBase import doc_from_snapshot
from routinelog.documents.groups.Group import Group
from routinelog.exceptions import store_read
from routinelog.models.firestore_types import GroupDoc
from routinelog.util.logger import get_logger
from routinelog.util.validators import clean_name, check_color, require_id

logger = get_logger(__name__)


class GroupFactory:
    """Creates groups for one user."""

    def __init__(self, db: Db, user_id: str, config: Optional[AppConfig] = None):
        """Initialize GroupFactory.

        Args:
            db: Connected database handle
            user_id: Owner of the created groups
            config: Loaded settings, read from settings.yaml when omitted
        """
        self.db = db
        self.user_id = require_id(user_id, "user_id")
        self.config = config if config is not None else load_app_config()

    def create(self, name: str, color: str) -> Group:
        """Create a group.

        Args:
            name: Group name, trimmed; must not be empty
            color: Hex color (#rgb or #rrggbb)

        Returns:
            The created Group
        """
        data = {"name": clean_name(name), "color": check_color(color)}
        group = Group(self.db, self.user_id, None)
        group.create_doc(data)
        logger.info(f"Created group {group.id} for user {self.user_id}")
        return group

    @store_read("Default group lookup")
    def _find_default(self, default_name: str) -> Optional[GroupDoc]:
        collection = self.db.collection("groups", self.user_id)
        named = collection.where(filter=FieldFilter("name", "==", default_name)).limit(1).get()
        if named:
            return doc_from_snapshot(GroupDoc, named[0])
        oldest = collection.order_by("createdAt", direction="ASCENDING").limit(1).get()
        if oldest:
            return doc_from_snapshot(GroupDoc, oldest[0])
        return None

    def ensure_default(self) -> Group:
        """Return the default group, creating it when the user has no groups.

        The group named like the configured default wins; otherwise the oldest
        existing group is used.
        """
        default_name, default_color = get_default_group(self.config)
        existing = self._find_default(default_name)
        if existing is not None:
            return Group(self.db, self.user_id, existing.id, existing.model_dump(exclude={"id"}))
        return self.create(default_name, default_color)
