"""
Document store backends.

- Memory: in-process dictionaries, for development and tests
- SQL: JSON documents in a relational table through async SQLAlchemy
- Mongo: MongoDB through motor
"""

from locallibrary.store.base import ASCENDING, DESCENDING, DocumentStore
from locallibrary.store.factory import StoreBackendType, create_store
from locallibrary.store.memory import MemoryDocumentStore

__all__ = [
    "ASCENDING",
    "DESCENDING",
    "DocumentStore",
    "MemoryDocumentStore",
    "StoreBackendType",
    "create_store",
]
