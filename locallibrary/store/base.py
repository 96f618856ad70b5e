"""
Document store interface.

Every backend stores plain JSON-compatible documents keyed by a string
``id`` inside named collections. The public coroutines are bounded by a
timeout and logged; backends implement the underscored hooks.
"""

import asyncio
import uuid
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Dict, Iterable, List, Optional, Sequence, Tuple

from locallibrary.core.exceptions import StoreTimeoutError
from locallibrary.logging.integration import log_store_operation

Document = Dict[str, Any]
Filter = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]

ASCENDING = 1
DESCENDING = -1


def new_id() -> str:
    """Generate a new document identifier."""
    return uuid.uuid4().hex


def matches(document: Document, filter: Optional[Filter]) -> bool:
    """
    Field equality match. A list-valued field matches when it contains the
    requested value, the same way MongoDB treats array fields.
    """
    if not filter:
        return True
    for key, expected in filter.items():
        actual = document.get(key)
        if isinstance(actual, list) and not isinstance(expected, list):
            if expected not in actual:
                return False
        elif actual != expected:
            return False
    return True


def project(document: Document, projection: Optional[Iterable[str]]) -> Document:
    """Keep only the projected fields; ``id`` is always kept."""
    if not projection:
        return document
    fields = set(projection) | {"id"}
    return {key: value for key, value in document.items() if key in fields}


def sort_documents(documents: List[Document], sort: Optional[SortSpec]) -> List[Document]:
    """Stable multi-key sort; missing values sort first in ascending order."""
    if not sort:
        return documents
    result = list(documents)
    for field, direction in reversed(list(sort)):
        result.sort(
            key=lambda doc: (
                doc.get(field) is not None,
                doc.get(field) if doc.get(field) is not None else "",
            ),
            reverse=direction == DESCENDING,
        )
    return result


class DocumentStore(ABC):
    """Base class for document store backends."""

    def __init__(self, timeout: float = 10.0):
        """
        Args:
            timeout: Upper bound in seconds for every store call
        """
        self.timeout = timeout

    async def connect(self) -> None:
        """Open connections / create schema. Called once at startup."""

    async def close(self) -> None:
        """Release connections. Called once at shutdown."""

    async def _bounded(self, operation: str, collection: str, awaitable: Awaitable):
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise StoreTimeoutError(operation, collection, self.timeout) from e

    @log_store_operation("find_by_id")
    async def find_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        """Point lookup; None when no document has this id."""
        return await self._bounded(
            "find_by_id", collection, self._find_by_id(collection, doc_id)
        )

    @log_store_operation("find")
    async def find(
        self,
        collection: str,
        filter: Optional[Filter] = None,
        projection: Optional[Iterable[str]] = None,
        sort: Optional[SortSpec] = None,
    ) -> List[Document]:
        """
        Collection scan.

        Args:
            collection: Collection name
            filter: Field equality filter
            projection: Field names to return (``id`` is always included)
            sort: Sequence of ``(field, ASCENDING|DESCENDING)``

        Returns:
            Matching documents, sorted when ``sort`` is given
        """
        projection = list(projection) if projection else None
        return await self._bounded(
            "find", collection, self._find(collection, filter, projection, sort)
        )

    @log_store_operation("count")
    async def count_documents(self, collection: str, filter: Optional[Filter] = None) -> int:
        return await self._bounded(
            "count", collection, self._count_documents(collection, filter)
        )

    @log_store_operation("insert")
    async def insert(self, collection: str, fields: Document) -> Document:
        """Insert a new document and return it with its assigned ``id``."""
        fields = {key: value for key, value in fields.items() if key != "id"}
        document = {"id": new_id(), **fields}
        await self._bounded("insert", collection, self._insert(collection, document))
        return document

    @log_store_operation("update")
    async def update_by_id(
        self, collection: str, doc_id: str, fields: Document
    ) -> Optional[Document]:
        """
        Replace the stored fields of an existing document, keeping its id.

        Returns:
            The updated document, or None when no document has this id
        """
        fields = {key: value for key, value in fields.items() if key != "id"}
        return await self._bounded(
            "update", collection, self._update_by_id(collection, doc_id, fields)
        )

    @log_store_operation("delete")
    async def delete_by_id(self, collection: str, doc_id: str) -> None:
        """Delete by id; no-op when absent."""
        await self._bounded("delete", collection, self._delete_by_id(collection, doc_id))

    @abstractmethod
    async def _find_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        ...

    @abstractmethod
    async def _find(
        self,
        collection: str,
        filter: Optional[Filter],
        projection: Optional[List[str]],
        sort: Optional[SortSpec],
    ) -> List[Document]:
        ...

    @abstractmethod
    async def _count_documents(self, collection: str, filter: Optional[Filter]) -> int:
        ...

    @abstractmethod
    async def _insert(self, collection: str, document: Document) -> None:
        ...

    @abstractmethod
    async def _update_by_id(
        self, collection: str, doc_id: str, fields: Document
    ) -> Optional[Document]:
        ...

    @abstractmethod
    async def _delete_by_id(self, collection: str, doc_id: str) -> None:
        ...
