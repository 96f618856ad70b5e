from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ReturnDocument

from locallibrary.core.exceptions import StoreError
from locallibrary.logging.setup import get_logger
from locallibrary.store.base import Document, DocumentStore, Filter, SortSpec

logger = get_logger(__name__)


def _from_mongo(raw: Optional[Dict[str, Any]]) -> Optional[Document]:
    if raw is None:
        return None
    document = dict(raw)
    document["id"] = str(document.pop("_id"))
    return document


def _to_mongo_filter(filter: Optional[Filter]) -> Dict[str, Any]:
    if not filter:
        return {}
    return {("_id" if key == "id" else key): value for key, value in filter.items()}


class MongoDocumentStore(DocumentStore):
    """
    MongoDB document store using motor.
    Documents are stored with the generated string id as ``_id``; the motor
    client owns the connection pool.
    """

    def __init__(self, url: str, database: str, timeout: float = 10.0):
        super().__init__(timeout=timeout)
        self.url = url
        self.database_name = database
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        self.client = AsyncIOMotorClient(
            self.url, serverSelectionTimeoutMS=int(self.timeout * 1000)
        )
        self.db = self.client[self.database_name]
        logger.info(f"MongoDB document store ready (database '{self.database_name}')")

    async def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None
            self.db = None

    def _collection(self, name: str):
        if self.db is None:
            raise StoreError("MongoDB document store is not connected")
        return self.db[name]

    async def _find_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        return _from_mongo(await self._collection(collection).find_one({"_id": doc_id}))

    async def _find(
        self,
        collection: str,
        filter: Optional[Filter],
        projection: Optional[List[str]],
        sort: Optional[SortSpec],
    ) -> List[Document]:
        mongo_projection = {field: 1 for field in projection} if projection else None
        cursor = self._collection(collection).find(
            _to_mongo_filter(filter), mongo_projection
        )
        if sort:
            cursor = cursor.sort(list(sort))
        return [_from_mongo(raw) for raw in await cursor.to_list(length=None)]

    async def _count_documents(self, collection: str, filter: Optional[Filter]) -> int:
        return await self._collection(collection).count_documents(_to_mongo_filter(filter))

    async def _insert(self, collection: str, document: Document) -> None:
        fields = {key: value for key, value in document.items() if key != "id"}
        await self._collection(collection).insert_one({"_id": document["id"], **fields})

    async def _update_by_id(
        self, collection: str, doc_id: str, fields: Document
    ) -> Optional[Document]:
        raw = await self._collection(collection).find_one_and_replace(
            {"_id": doc_id}, dict(fields), return_document=ReturnDocument.AFTER
        )
        return _from_mongo(raw)

    async def _delete_by_id(self, collection: str, doc_id: str) -> None:
        await self._collection(collection).delete_one({"_id": doc_id})
