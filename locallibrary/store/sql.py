"""
SQL document store.

Documents live in a single ``documents`` table keyed by (collection, id)
with the fields in a JSON column. Works with any async SQLAlchemy driver
(``sqlite+aiosqlite``, ``postgresql+asyncpg``). Each operation uses its own
session so concurrent reads within one request never share a session.
"""

from typing import List, Optional

from sqlalchemy import JSON, Column, String, delete, func, select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from locallibrary.core.exceptions import StoreError
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

Base = declarative_base()


class DocumentRecord(Base):
    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    id = Column(String(32), primary_key=True)
    body = Column(JSON, nullable=False)

    def to_document(self) -> Document:
        return {"id": self.id, **(self.body or {})}

    def __repr__(self):
        return f"<DocumentRecord(collection='{self.collection}', id='{self.id}')>"


class SQLDocumentStore(DocumentStore):
    """Document store backed by a relational database through SQLAlchemy."""

    def __init__(self, database_url: str, echo: bool = False, timeout: float = 10.0):
        super().__init__(timeout=timeout)
        self.database_url = database_url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    async def connect(self) -> None:
        self.engine = create_async_engine(self.database_url, echo=self.echo)
        self._session_factory = async_sessionmaker(
            self.engine, expire_on_commit=False, autoflush=False
        )
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"SQL document store ready ({self.engine.url.get_backend_name()})")

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self._session_factory = None

    def _session(self):
        if self._session_factory is None:
            raise StoreError("SQL document store is not connected")
        return self._session_factory()

    async def _find_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        async with self._session() as session:
            record = await session.get(DocumentRecord, (collection, doc_id))
            return record.to_document() if record is not None else None

    async def _find(
        self,
        collection: str,
        filter: Optional[Filter],
        projection: Optional[List[str]],
        sort: Optional[SortSpec],
    ) -> List[Document]:
        async with self._session() as session:
            result = await session.execute(
                select(DocumentRecord).where(DocumentRecord.collection == collection)
            )
            records = result.scalars().all()

        # List fields match by containment; filters run in Python
        documents = [record.to_document() for record in records]
        documents = [doc for doc in documents if matches(doc, filter)]
        documents = sort_documents(documents, sort)
        return [project(doc, projection) for doc in documents]

    async def _count_documents(self, collection: str, filter: Optional[Filter]) -> int:
        if filter:
            return len(await self._find(collection, filter, ["id"], None))

        async with self._session() as session:
            result = await session.execute(
                select(func.count())
                .select_from(DocumentRecord)
                .where(DocumentRecord.collection == collection)
            )
            return result.scalar_one()

    async def _insert(self, collection: str, document: Document) -> None:
        body = {key: value for key, value in document.items() if key != "id"}
        async with self._session() as session:
            session.add(DocumentRecord(collection=collection, id=document["id"], body=body))
            await session.commit()

    async def _update_by_id(
        self, collection: str, doc_id: str, fields: Document
    ) -> Optional[Document]:
        async with self._session() as session:
            record = await session.get(DocumentRecord, (collection, doc_id))
            if record is None:
                return None
            record.body = dict(fields)
            await session.commit()
            return record.to_document()

    async def _delete_by_id(self, collection: str, doc_id: str) -> None:
        async with self._session() as session:
            await session.execute(
                delete(DocumentRecord).where(
                    DocumentRecord.collection == collection,
                    DocumentRecord.id == doc_id,
                )
            )
            await session.commit()
