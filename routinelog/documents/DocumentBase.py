"""Document base class for Firestore operations."""

from typing import Type, Optional, TypeVar, Generic, Dict, Any

from google.cloud.firestore_v1.collection import CollectionReference
from pydantic import ValidationError as ModelValidationError

from routinelog.apis.Db import Db
from routinelog.exceptions import NotFoundError, RoutineLogError, StoreReadError, store_read, store_write
from routinelog.models.firestore_types import BaseDoc

DocLike = TypeVar('DocLike', bound=BaseDoc)


def remove_none_values(d):
    """Recursively remove None values from dictionaries."""
    if isinstance(d, dict):
        return {k: remove_none_values(v) for k, v in d.items() if v is not None}
    elif isinstance(d, list):
        return [remove_none_values(v) for v in d if v is not None]
    else:
        return d


def ignore_none(func):
    """Decorator to remove None values from the data argument."""

    def wrapper(*args, **kwargs):
        if 'data' in kwargs:
            kwargs['data'] = remove_none_values(kwargs['data'])
        return func(*args, **kwargs)

    return wrapper


def doc_from_snapshot(model: Type[DocLike], snapshot) -> DocLike:
    """Build a typed document from a snapshot; the id comes from the path.

    Raises:
        StoreReadError: If the stored data does not fit ``model``
    """
    try:
        return model(**{**snapshot.to_dict(), "id": snapshot.id})
    except ModelValidationError as e:
        raise StoreReadError(f"Decode {model.__name__} {snapshot.id}", str(e)) from e


class DocumentBase(Generic[DocLike]):
    """A document under ``users/{user_id}/{collection_name}``.

    The document body is read lazily, so updates and deletes never read first.
    """

    collection_name: str = None  # type: ignore
    pydantic_model: Type[DocLike] = None  # type: ignore

    def __init__(self, db: Db, user_id: str, id: str, doc: Optional[dict] = None):
        """
        Initialize the document.
        :param id: Id of the document, if id is Falsy, a new id will be allocated.
        :param doc: Already loaded document body, skips the read on first access.
        """
        if not self.pydantic_model or not self.collection_name:
            raise RoutineLogError("pydantic_model and collection_name must be set", code="INTERNAL")
        self.db = db
        self.user_id = user_id
        self.collection_ref: CollectionReference = db.collection(self.collection_name, user_id)
        self.id = id or self.collection_ref.document().id
        self._doc: Optional[DocLike] = None
        if doc:
            self._doc = self.pydantic_model(**{**doc, "id": self.id})

    @store_read("Document read")
    def _load_doc(self) -> DocLike:
        snapshot = self.get_doc_ref().get()
        if not snapshot.exists:
            raise NotFoundError(self.pydantic_model.__name__, self.id)
        return doc_from_snapshot(self.pydantic_model, snapshot)

    @property
    def doc(self) -> DocLike:
        if self._doc is None:
            self._doc = self._load_doc()
        return self._doc

    @store_write("Document create")
    def create_doc(self, data: Dict[str, Any]) -> str:
        """Write a new document; ``createdAt`` is assigned by the server."""
        self.get_doc_ref().set({**data, "createdAt": self.db.server_timestamp})
        self._doc = None
        return self.id

    @ignore_none
    @store_write("Document update")
    def update_doc(self, data):
        if not data:
            return
        self.get_doc_ref().update(data)
        self._doc = None

    @store_write("Document delete")
    def delete(self):
        self.get_doc_ref().delete()
        self._doc = None

    def get_doc_ref(self):
        return self.collection_ref.document(self.id)
