"""Group service for listing groups and arranging items by group."""

from typing import List, Optional, Callable, Dict

from routinelog.apis.Db import Db
from routinelog.config.loader import AppConfig, load_app_config
from routinelog.documents.DocumentBase import doc_from_snapshot
from routinelog.documents.groups.Group import Group
from routinelog.documents.groups.GroupFactory import GroupFactory
from routinelog.exceptions import store_read
from routinelog.models.firestore_types import GroupDoc, ItemDoc
from routinelog.models.util_types import GroupBucket
from routinelog.util.logger import get_logger
from routinelog.util.subscription import Subscription

logger = get_logger(__name__)

OTHER_BUCKET_NAME = "Other"


def group_items_for_display(
    items: List[ItemDoc], groups: List[GroupDoc], fallback_color: str = "#8b5cf6"
) -> List[GroupBucket]:
    """Bucket items under their live group, in group order.

    Items whose groupId no longer resolves (the group was deleted) go to a
    trailing "Other" bucket. Empty groups are kept so they can still be shown.
    """
    buckets: Dict[str, GroupBucket] = {
        group.id: GroupBucket(groupId=group.id, name=group.name, color=group.color)
        for group in groups
    }
    other = GroupBucket(groupId=None, name=OTHER_BUCKET_NAME, color=fallback_color)

    for item in items:
        bucket = buckets.get(item.groupId, other)
        bucket.itemIds.append(item.id)

    result = list(buckets.values())
    if other.itemIds:
        result.append(other)
    return result


class GroupService:
    """Service for a user's groups."""

    def __init__(self, db: Db, config: Optional[AppConfig] = None):
        self.db = db
        self.config = config if config is not None else load_app_config()

    def _query(self, user_id: str):
        return self.db.collection("groups", user_id).order_by("createdAt", direction="ASCENDING")

    def add_group(self, user_id: str, name: str, color: str) -> str:
        return GroupFactory(self.db, user_id, self.config).create(name, color).id

    def update_group(self, user_id: str, group_id: str, name: Optional[str] = None, color: Optional[str] = None):
        Group(self.db, user_id, group_id).update(name=name, color=color)

    def delete_group(self, user_id: str, group_id: str):
        Group(self.db, user_id, group_id).delete()

    @store_read("Get groups")
    def get_groups(self, user_id: str) -> List[GroupDoc]:
        """All groups of the user, oldest first."""
        return [doc_from_snapshot(GroupDoc, snap) for snap in self._query(user_id).get()]

    def subscribe_to_groups(self, user_id: str, callback: Callable[[List[GroupDoc]], None]) -> Subscription:
        return Subscription(
            self._query(user_id),
            lambda docs: [doc_from_snapshot(GroupDoc, snap) for snap in docs],
            callback,
            name=f"groups of {user_id}",
        )

    def ensure_default_group(self, user_id: str) -> str:
        """Id of the user's default group, created on first use."""
        return GroupFactory(self.db, user_id, self.config).ensure_default().id
