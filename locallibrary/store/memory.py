import copy
from typing import Dict, List, Optional

from locallibrary.logging.setup import get_logger
from locallibrary.store.base import (
    Document,
    DocumentStore,
    Filter,
    SortSpec,
    matches,
    project,
    sort_documents,
)

logger = get_logger(__name__)


class MemoryDocumentStore(DocumentStore):
    """
    In-memory document store.
    Useful for development, demos and tests; data is lost on restart.
    """

    def __init__(self, timeout: float = 10.0):
        super().__init__(timeout=timeout)
        self._collections: Dict[str, Dict[str, Document]] = {}

    def _collection(self, name: str) -> Dict[str, Document]:
        return self._collections.setdefault(name, {})

    async def connect(self) -> None:
        logger.info("Using in-memory document store")

    async def close(self) -> None:
        self._collections.clear()

    async def _find_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        document = self._collection(collection).get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    async def _find(
        self,
        collection: str,
        filter: Optional[Filter],
        projection: Optional[List[str]],
        sort: Optional[SortSpec],
    ) -> List[Document]:
        documents = [
            copy.deepcopy(doc)
            for doc in self._collection(collection).values()
            if matches(doc, filter)
        ]
        documents = sort_documents(documents, sort)
        return [project(doc, projection) for doc in documents]

    async def _count_documents(self, collection: str, filter: Optional[Filter]) -> int:
        return sum(1 for doc in self._collection(collection).values() if matches(doc, filter))

    async def _insert(self, collection: str, document: Document) -> None:
        self._collection(collection)[document["id"]] = copy.deepcopy(document)

    async def _update_by_id(
        self, collection: str, doc_id: str, fields: Document
    ) -> Optional[Document]:
        documents = self._collection(collection)
        if doc_id not in documents:
            return None
        documents[doc_id] = {"id": doc_id, **copy.deepcopy(fields)}
        return copy.deepcopy(documents[doc_id])

    async def _delete_by_id(self, collection: str, doc_id: str) -> None:
        self._collection(collection).pop(doc_id, None)
