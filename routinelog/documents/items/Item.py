"""Item document class."""

from typing import Optional, Dict, Any

from google.cloud.firestore_v1.base_query import FieldFilter

from routinelog.apis.BatchWriter import BatchWriter
from routinelog.documents.DocumentBase import DocumentBase
from routinelog.exceptions import store_write
from routinelog.models.firestore_types import ItemDoc
from routinelog.util.logger import get_logger
from routinelog.util.validators import clean_name, check_color

logger = get_logger(__name__)


class Item(DocumentBase[ItemDoc]):
    """Item document class for managing a user's trackable items."""

    collection_name = "items"
    pydantic_model = ItemDoc

    @property
    def doc(self) -> ItemDoc:
        """Get the typed document."""
        return super().doc

    def update(
        self,
        name: Optional[str] = None,
        group_id: Optional[str] = None,
        group_name_snapshot: Optional[str] = None,
        group_color_snapshot: Optional[str] = None,
        batch_limit: int = 490,
    ) -> int:
        """Update the item and copy the new values onto its logs.

        Logs with this itemId get ``itemNameSnapshot``, ``groupId`` and
        ``groupColor`` refreshed for each of name, group id and color snapshot
        that is given. An empty ``name`` counts as not given. Log writes go out
        in batches of at most ``batch_limit`` after the item itself is written;
        nothing is atomic across batches.

        Args:
            name: New item name
            group_id: New group id
            group_name_snapshot: Group name copy
            group_color_snapshot: Group color copy
            batch_limit: Writes per batch

        Returns:
            Number of logs updated
        """
        # An empty name leaves the name unchanged
        name = clean_name(name) if name else None
        if group_color_snapshot is not None:
            check_color(group_color_snapshot, field="groupColorSnapshot")

        self.update_doc(data={
            "name": name,
            "groupId": group_id or None,
            "groupNameSnapshot": group_name_snapshot,
            "groupColorSnapshot": group_color_snapshot,
        })
        logger.info(f"Updated item {self.id}")

        log_changes = {
            "itemNameSnapshot": name,
            "groupId": group_id or None,
            "groupColor": group_color_snapshot or None,
        }
        log_changes = {k: v for k, v in log_changes.items() if v is not None}
        if not log_changes:
            return 0

        updated = self._fan_out_to_logs(log_changes, batch_limit)
        logger.info(f"Propagated item {self.id} changes to {updated} logs")
        return updated

    @store_write("Log fan-out")
    def _fan_out_to_logs(self, changes: Dict[str, Any], batch_limit: int) -> int:
        logs = (
            self.db.collection("logs", self.user_id)
            .where(filter=FieldFilter("itemId", "==", self.id))
            .get()
        )
        writer = BatchWriter(self.db, limit=batch_limit)
        for log in logs:
            writer.update(log.reference, changes)
        return writer.commit()

    def archive(self):
        """Hide the item from item lists; its logs are untouched."""
        self.update_doc(data={"isArchived": True})
        logger.info(f"Archived item {self.id}")

    def delete(self):
        """Delete the item. Logs referencing it remain."""
        super().delete()
        logger.info(f"Deleted item {self.id}")
