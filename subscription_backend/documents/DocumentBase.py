"""Document base class for Firestore operations."""

from typing import Type, Optional, TypeVar, Generic, Any
from google.cloud.firestore_v1.collection import CollectionReference
from subscription_backend.apis.Db import Db
from subscription_backend.exceptions import NotFoundError
from subscription_backend.models.firestore_types import BaseDoc

DocLike = TypeVar('DocLike', bound=BaseDoc)
Self = TypeVar('Self', bound='DocumentBase')


class DocumentBase(Generic[DocLike]):
    collection_name: str = None  # type: ignore
    pydantic_model: Type[DocLike] = None  # type: ignore

    def __init__(self, id: str, doc: dict | None = None, db: Optional[Db] = None):
        """
        Initialize the document.
        :param id: Id of the document.
        :param doc: Already-read document data; fetched from Firestore when omitted.
        :param db: Db to use; defaults to the cached instance.
        """
        self.id = id
        self._db = db

        if doc is None:
            self._init_doc()  # fetches the document from FB with provided ID
        else:
            self._doc = self.pydantic_model(**doc)

    @property
    def db(self) -> Db:
        if self._db is None:
            self._db = Db.get_instance()
        return self._db

    @property
    def collection_ref(self) -> CollectionReference:
        return self.db.collections[self.collection_name]

    def _init_doc(self):
        doc = self.get_doc_snap()

        if not doc.exists:
            raise NotFoundError(self.collection_name, self.id)

        self._doc = self.pydantic_model(**(doc.to_dict() or {}))

    @classmethod
    def find(cls: Type[Self], id: str, db: Optional[Db] = None) -> Optional[Self]:
        """Load a document, returning None instead of raising when it is missing."""
        try:
            return cls(id, db=db)
        except NotFoundError:
            return None

    @classmethod
    def from_snapshot(cls: Type[Self], snapshot: Any, db: Optional[Db] = None) -> Self:
        """Wrap a snapshot returned by a query or a transactional read."""
        return cls(snapshot.id, snapshot.to_dict() or {}, db=db)

    @property
    def doc(self) -> DocLike:
        return self._doc

    def merge_doc(self, data: dict):
        """Merge fields into the stored document, leaving other fields untouched."""
        self.get_doc_ref().set(data, merge=True)
        self._doc = self._doc.model_copy(update=data)

    def update_doc(self, data: dict):
        """Update fields of an existing document."""
        self.get_doc_ref().update(data)
        self._doc = self._doc.model_copy(update=data)

    def get_doc_ref(self):
        return self.collection_ref.document(self.id)

    def get_doc_snap(self):
        return self.get_doc_ref().get()
