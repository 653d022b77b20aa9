"""Firestore client handle for Routine Log."""

import os
import logging
import uuid
from typing import Dict, Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from routinelog.config.env_loader import get_firebase_settings
from routinelog.exceptions import RoutineLogError


class Db:
    """Database handle with an explicit lifecycle.

    Created once by the caller, connected, and passed into the documents and
    services. A pre-built Firestore client can be injected instead of letting
    ``connect`` initialise a Firebase app.

        db = Db().connect()
        ...
        db.close()
    """

    server_timestamp = firestore.firestore.SERVER_TIMESTAMP

    def __init__(self, client=None, app_name: Optional[str] = None):
        self.logger = logging.getLogger("routinelog.db")
        self.firestore = client
        self.collections: Dict[str, Any] = {}
        # Unique per handle unless named
        self._app_name = app_name or f"routinelog-{uuid.uuid4().hex[:12]}"
        self._app = None
        if client is not None:
            self._init_collections()

    def connect(self) -> "Db":
        """Initialize the Firebase app and Firestore client if not already done."""
        if self.firestore is None:
            self._app = self._init_app()
            self.firestore = firestore.client(self._app)
            self._init_collections()
            self.logger.info("Firestore initialized")
        return self

    def _init_app(self):
        settings = get_firebase_settings()
        options = {"projectId": settings["project_id"]} if settings["project_id"] else None

        if settings["credentials_path"]:
            cred = credentials.Certificate(settings["credentials_path"])
        else:
            # Application default credentials; emulators need none
            cred = None

        return firebase_admin.initialize_app(cred, options, name=self._app_name)

    def _init_collections(self):
        """Initialize collection references."""
        self.collections = {
            "users": self.firestore.collection("users"),
            "friendRequests": self.firestore.collection("friendRequests"),
            "groups": lambda uid: self.firestore.collection(f"users/{uid}/groups"),
            "items": lambda uid: self.firestore.collection(f"users/{uid}/items"),
            "logs": lambda uid: self.firestore.collection(f"users/{uid}/logs"),
            "presets": lambda uid: self.firestore.collection(f"users/{uid}/presets"),
            "friends": lambda uid: self.firestore.collection(f"users/{uid}/friends"),
        }

    def close(self) -> None:
        """Release the Firebase app created by ``connect``. Safe to call twice."""
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None
            self.firestore = None
            self.collections = {}
            self.logger.info("Firestore closed")

    @property
    def connected(self) -> bool:
        return self.firestore is not None

    def collection(self, name: str, uid: Optional[str] = None):
        """Get a collection reference, user scoped when ``uid`` is given."""
        if not self.connected:
            raise RoutineLogError("Database is not connected, call connect() first", code="NOT_CONNECTED")
        ref = self.collections[name]
        if uid is not None:
            if not uid:
                raise RoutineLogError("A user id is required", code="NO_USER")
            return ref(uid)
        return ref

    def batch(self):
        return self.firestore.batch()

    def __enter__(self) -> "Db":
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @staticmethod
    def is_production():
        return os.getenv("ENV") == "production"

    @staticmethod
    def is_development():
        return os.getenv("ENV") == "development"
