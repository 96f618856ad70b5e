from enum import Enum
from typing import Optional

from locallibrary.core.config import Settings, get_settings
from locallibrary.logging.setup import get_logger
from locallibrary.store.base import DocumentStore

logger = get_logger(__name__)


class StoreBackendType(str, Enum):
    """Available document store backends."""

    MEMORY = "memory"
    SQL = "sql"
    MONGO = "mongo"


def create_store(settings: Optional[Settings] = None) -> DocumentStore:
    """
    Build the document store selected by STORE_BACKEND.

    Backends are imported lazily so the driver of an unused backend is never
    loaded.

    Args:
        settings: Settings to read from (defaults to the cached settings)

    Returns:
        A not yet connected DocumentStore
    """
    settings = settings or get_settings()
    backend_type = StoreBackendType(settings.STORE_BACKEND)
    timeout = settings.STORE_TIMEOUT_SECONDS

    logger.info(f"Creating document store backend: {backend_type.value}")

    if backend_type == StoreBackendType.MEMORY:
        from locallibrary.store.memory import MemoryDocumentStore

        return MemoryDocumentStore(timeout=timeout)

    if backend_type == StoreBackendType.MONGO:
        from locallibrary.store.mongo import MongoDocumentStore

        return MongoDocumentStore(
            url=settings.MONGODB_URL, database=settings.MONGODB_DB, timeout=timeout
        )

    from locallibrary.store.sql import SQLDocumentStore

    return SQLDocumentStore(
        database_url=settings.DATABASE_URL, echo=settings.DB_ECHO, timeout=timeout
    )
