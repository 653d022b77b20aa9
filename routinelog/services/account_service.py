"""Account lifecycle: registration and full account deletion."""

from typing import Optional

from routinelog.apis.AuthApi import AuthApi
from routinelog.apis.BatchWriter import BatchWriter
from routinelog.apis.Db import Db
from routinelog.config.loader import AppConfig, load_app_config, get_fanout_batch_limit
from routinelog.exceptions import store_write
from routinelog.models.function_types import AuthSession
from routinelog.services.friend_service import FriendService
from routinelog.util.logger import get_logger

logger = get_logger(__name__)

USER_SUBCOLLECTIONS = ("groups", "items", "logs", "presets", "friends")


class AccountService:
    """Ties the identity adapter to the user's stored data."""

    def __init__(self, db: Db, auth: AuthApi, config: Optional[AppConfig] = None):
        self.db = db
        self.auth = auth
        self.config = config if config is not None else load_app_config()
        self.friends = FriendService(db, self.config)

    def register(self, username: str, password: str, display_name: Optional[str] = None) -> AuthSession:
        """Create the auth account and its searchable profile."""
        session = self.auth.register(username, password)
        self.friends.create_user_profile(session.uid, session.username, display_name=display_name)
        return session

    @store_write("Delete user data")
    def delete_all_user_data(self, uid: str) -> int:
        """Delete every document the user owns, then the profile.

        Friendship records other users hold of ``uid`` are left in place.

        Returns:
            Number of documents deleted
        """
        writer = BatchWriter(self.db, limit=get_fanout_batch_limit(self.config))
        for name in USER_SUBCOLLECTIONS:
            for snapshot in self.db.collection(name, uid).get():
                writer.delete(snapshot.reference)
        writer.delete(self.db.collection("users").document(uid))
        deleted = writer.commit()
        logger.info(f"Deleted {deleted} documents of user {uid}")
        return deleted

    def delete_account(self, username: str, password: str) -> None:
        """Delete the signed-in user's data and then the auth account.

        The password is checked first, so a wrong password deletes nothing.
        """
        session = self.auth.reauthenticate(username, password)
        self.delete_all_user_data(session.uid)
        self.auth.delete_account(username, password)
