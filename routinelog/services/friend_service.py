"""Friend service: user profiles, friend requests and friendships.

A friendship is stored twice, once under each user at
``users/{owner}/friends/{friend}``. Each copy holds the permissions its owner
grants to that friend, so the two sides are edited independently.
"""

from typing import List, Optional, Callable, Union

from google.cloud.firestore_v1.base_query import FieldFilter

from routinelog.apis.Db import Db
from routinelog.config.loader import AppConfig, load_app_config, get_default_friend_permissions
from routinelog.documents.DocumentBase import doc_from_snapshot
from routinelog.exceptions import DuplicateError, NotFoundError, ValidationError, store_read, store_write
from routinelog.models.firestore_types import (
    FriendPermissions,
    FriendRequestDoc,
    FriendshipDoc,
    UserProfileDoc,
)
from routinelog.models.util_types import FriendRequestStatus
from routinelog.util.logger import get_logger
from routinelog.util.subscription import Subscription
from routinelog.util.validators import clean_name, require_id

logger = get_logger(__name__)


def _requests(docs) -> List[FriendRequestDoc]:
    return [doc_from_snapshot(FriendRequestDoc, snap) for snap in docs]


def _friendships(docs) -> List[FriendshipDoc]:
    return sorted(
        (FriendshipDoc(**snap.to_dict()) for snap in docs),
        key=lambda friendship: friendship.username,
    )


class FriendService:
    """Service for the social graph between users."""

    def __init__(self, db: Db, config: Optional[AppConfig] = None):
        self.db = db
        self.config = config if config is not None else load_app_config()

    def _friend_ref(self, owner_uid: str, friend_uid: str):
        return self.db.collection("friends", owner_uid).document(friend_uid)

    # Profiles

    @store_write("Create user profile")
    def create_user_profile(
        self,
        uid: str,
        username: str,
        display_name: Optional[str] = None,
        photo_url: Optional[str] = None,
    ):
        """Write the searchable profile at ``users/{uid}``."""
        data = {
            "uid": require_id(uid, "uid"),
            "username": clean_name(username, field="username").lower(),
            "createdAt": self.db.server_timestamp,
        }
        if display_name:
            data["displayName"] = display_name
        if photo_url:
            data["photoURL"] = photo_url
        self.db.collection("users").document(uid).set(data)
        logger.info(f"Created profile for user {uid}")

    @store_read("Get user profile")
    def get_user_profile(self, uid: str) -> Optional[UserProfileDoc]:
        snapshot = self.db.collection("users").document(uid).get()
        if not snapshot.exists:
            return None
        return UserProfileDoc(**snapshot.to_dict())

    @store_read("Search user")
    def search_user_by_username(self, username: str) -> Optional[UserProfileDoc]:
        """Exact, case-insensitive username lookup."""
        if not username or not username.strip():
            return None
        results = (
            self.db.collection("users")
            .where(filter=FieldFilter("username", "==", username.strip().lower()))
            .limit(1)
            .get()
        )
        if not results:
            return None
        return UserProfileDoc(**results[0].to_dict())

    # Requests

    def _pending_between(self, from_id: str, to_id: str) -> bool:
        pending = (
            self.db.collection("friendRequests")
            .where(filter=FieldFilter("fromId", "==", from_id))
            .where(filter=FieldFilter("toId", "==", to_id))
            .where(filter=FieldFilter("status", "==", FriendRequestStatus.PENDING.value))
            .limit(1)
            .get()
        )
        return len(pending) > 0

    @store_write("Send friend request")
    def send_friend_request(self, from_id: str, from_username: str, to_id: str, to_username: str) -> str:
        """Create a pending request from one user to another.

        Raises:
            ValidationError: When a user adds themselves
            DuplicateError: When a request is already pending in either
                direction, or the users are already friends
        """
        require_id(from_id, "fromId")
        require_id(to_id, "toId")
        if from_id == to_id:
            raise ValidationError("You cannot add yourself as a friend", field="toId")
        if self._pending_between(from_id, to_id) or self._pending_between(to_id, from_id):
            raise DuplicateError("Request already pending", identifier=to_id)
        if self._friend_ref(from_id, to_id).get().exists:
            raise DuplicateError("Already friends", identifier=to_id)

        ref = self.db.collection("friendRequests").document()
        ref.set({
            "fromId": from_id,
            "fromUsername": from_username,
            "toId": to_id,
            "toUsername": to_username,
            "status": FriendRequestStatus.PENDING.value,
            "createdAt": self.db.server_timestamp,
        })
        logger.info(f"Friend request {ref.id} sent from {from_id} to {to_id}")
        return ref.id

    def _incoming_query(self, uid: str):
        return (
            self.db.collection("friendRequests")
            .where(filter=FieldFilter("toId", "==", uid))
            .where(filter=FieldFilter("status", "==", FriendRequestStatus.PENDING.value))
        )

    @store_read("Get incoming requests")
    def get_incoming_requests(self, uid: str) -> List[FriendRequestDoc]:
        return _requests(self._incoming_query(uid).get())

    def subscribe_to_incoming_requests(
        self, uid: str, callback: Callable[[List[FriendRequestDoc]], None]
    ) -> Subscription:
        return Subscription(self._incoming_query(uid), _requests, callback, name=f"requests to {uid}")

    @store_write("Respond to friend request")
    def respond_to_friend_request(self, request_id: str, response: Union[FriendRequestStatus, str]):
        """Accept or reject a pending request.

        Accepting writes the new status and a friendship record under each user
        in one batch; both records start with the configured permissions.
        """
        try:
            response = FriendRequestStatus(response)
        except ValueError as e:
            raise ValidationError(f"Invalid response '{response}'", field="response") from e
        if response == FriendRequestStatus.PENDING:
            raise ValidationError("Response must be accepted or rejected", field="response")

        request_ref = self.db.collection("friendRequests").document(request_id)
        snapshot = request_ref.get()
        if not snapshot.exists:
            raise NotFoundError("FriendRequest", request_id)
        request = doc_from_snapshot(FriendRequestDoc, snapshot)
        if request.status != FriendRequestStatus.PENDING:
            raise ValidationError(f"Friend request {request_id} was already {request.status.value}", field="status")

        batch = self.db.batch()
        batch.update(request_ref, {"status": response.value})
        if response == FriendRequestStatus.ACCEPTED:
            permissions = get_default_friend_permissions(self.config)
            now = self.db.server_timestamp
            batch.set(self._friend_ref(request.toId, request.fromId), {
                "uid": request.fromId,
                "username": request.fromUsername,
                "since": now,
                "permissions": dict(permissions),
            })
            batch.set(self._friend_ref(request.fromId, request.toId), {
                "uid": request.toId,
                "username": request.toUsername,
                "since": now,
                "permissions": dict(permissions),
            })
        batch.commit()
        logger.info(f"Friend request {request_id} {response.value}")

    # Friendships

    def _friends_query(self, uid: str):
        return self.db.collection("friends", uid)

    @store_read("Get friends")
    def get_friends(self, uid: str) -> List[FriendshipDoc]:
        """Friends of ``uid`` ordered by username."""
        return _friendships(self._friends_query(uid).get())

    def subscribe_to_friends(self, uid: str, callback: Callable[[List[FriendshipDoc]], None]) -> Subscription:
        return Subscription(self._friends_query(uid), _friendships, callback, name=f"friends of {uid}")

    @store_write("Remove friend")
    def remove_friend(self, uid: str, friend_uid: str):
        """End the friendship on both sides."""
        batch = self.db.batch()
        batch.delete(self._friend_ref(uid, friend_uid))
        batch.delete(self._friend_ref(friend_uid, uid))
        batch.commit()
        logger.info(f"Removed friendship between {uid} and {friend_uid}")

    @store_write("Update friend permissions")
    def update_friend_permissions(self, uid: str, friend_uid: str, permissions: FriendPermissions):
        """Change what ``friend_uid`` may see of ``uid``'s calendar."""
        self._friend_ref(uid, friend_uid).update({"permissions": permissions.model_dump()})
        logger.info(f"Updated permissions of {friend_uid} on {uid}")

    @store_read("Get friendship status")
    def get_friendship_status(self, viewer_uid: str, owner_uid: str) -> Optional[FriendshipDoc]:
        """The owner's record of the viewer, holding what the viewer may see."""
        snapshot = self._friend_ref(owner_uid, viewer_uid).get()
        if not snapshot.exists:
            return None
        return FriendshipDoc(**snapshot.to_dict())
