"""
Test the document store contract on the in-memory and SQL backends.
"""
import asyncio

import pytest
import pytest_asyncio

from locallibrary.core.exceptions import StoreError, StoreTimeoutError
from locallibrary.store import ASCENDING, DESCENDING, MemoryDocumentStore
from locallibrary.store.sql import SQLDocumentStore


@pytest_asyncio.fixture(params=["memory", "sql"])
async def document_store(request, tmp_path):
    """Each test runs against both backends."""
    if request.param == "memory":
        store = MemoryDocumentStore(timeout=5.0)
    else:
        store = SQLDocumentStore(f"sqlite+aiosqlite:///{tmp_path / 'library.db'}", timeout=5.0)
    await store.connect()
    yield store
    await store.close()


class TestDocumentStore:
    async def test_insert_assigns_id(self, document_store):
        document = await document_store.insert("books", {"title": "Emma"})
        assert document["id"]
        assert await document_store.find_by_id("books", document["id"]) == document

    async def test_insert_ignores_given_id(self, document_store):
        document = await document_store.insert("books", {"id": "mine", "title": "Emma"})
        assert document["id"] != "mine"

    async def test_find_by_id_missing(self, document_store):
        assert await document_store.find_by_id("books", "missing") is None

    async def test_collections_are_separate(self, document_store):
        await document_store.insert("books", {"name": "x"})
        assert await document_store.find("genres") == []
        assert await document_store.count_documents("genres") == 0

    async def test_find_filter_sort_projection(self, document_store):
        await document_store.insert("books", {"title": "Emma", "author": "a1", "summary": "s1"})
        await document_store.insert("books", {"title": "Persuasion", "author": "a1", "summary": "s2"})
        await document_store.insert("books", {"title": "Dracula", "author": "a2", "summary": "s3"})

        documents = await document_store.find(
            "books", filter={"author": "a1"}, projection=["title"], sort=[("title", DESCENDING)]
        )
        assert [doc["title"] for doc in documents] == ["Persuasion", "Emma"]
        assert all(set(doc) == {"id", "title"} for doc in documents)

    async def test_list_field_matches_by_containment(self, document_store):
        await document_store.insert("books", {"title": "A", "genre": ["g1", "g2"]})
        await document_store.insert("books", {"title": "B", "genre": ["g2"]})

        documents = await document_store.find("books", filter={"genre": "g1"})
        assert [doc["title"] for doc in documents] == ["A"]
        assert await document_store.count_documents("books", {"genre": "g2"}) == 2

    async def test_sort_puts_missing_values_first(self, document_store):
        await document_store.insert("authors", {"family_name": "Tolkien"})
        await document_store.insert("authors", {"first_name": "Anonymous"})
        await document_store.insert("authors", {"family_name": "Austen"})

        documents = await document_store.find("authors", sort=[("family_name", ASCENDING)])
        assert [doc.get("family_name") for doc in documents] == [None, "Austen", "Tolkien"]

    async def test_count_with_filter(self, document_store):
        for status in ["Available", "Loaned", "Available"]:
            await document_store.insert("bookinstances", {"status": status})
        assert await document_store.count_documents("bookinstances") == 3
        assert await document_store.count_documents("bookinstances", {"status": "Available"}) == 2

    async def test_update_replaces_fields_and_keeps_id(self, document_store):
        document = await document_store.insert("books", {"title": "Emma", "isbn": "1"})

        updated = await document_store.update_by_id(
            "books", document["id"], {"id": "other", "title": "Emma (annotated)"}
        )
        assert updated == {"id": document["id"], "title": "Emma (annotated)"}
        assert await document_store.find_by_id("books", document["id"]) == updated

    async def test_update_missing_returns_none(self, document_store):
        assert await document_store.update_by_id("books", "missing", {"title": "x"}) is None

    async def test_delete(self, document_store):
        document = await document_store.insert("books", {"title": "Emma"})
        await document_store.delete_by_id("books", document["id"])
        await document_store.delete_by_id("books", "missing")
        assert await document_store.find_by_id("books", document["id"]) is None

    async def test_concurrent_reads(self, document_store):
        document = await document_store.insert("books", {"title": "Emma"})
        results = await asyncio.gather(
            *(document_store.find_by_id("books", document["id"]) for _ in range(10))
        )
        assert all(result == document for result in results)


class StalledStore(MemoryDocumentStore):
    async def _find_by_id(self, collection, doc_id):
        await asyncio.sleep(1)
        return None


class TestStoreTimeout:
    async def test_stalled_call_raises_timeout(self):
        store = StalledStore(timeout=0.05)

        with pytest.raises(StoreTimeoutError) as exc_info:
            await store.find_by_id("books", "b1")

        assert isinstance(exc_info.value, StoreError)
        assert exc_info.value.operation == "find_by_id"
        assert exc_info.value.collection == "books"


class TestSQLDocumentStore:
    async def test_data_survives_reconnect(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'library.db'}"
        store = SQLDocumentStore(url)
        await store.connect()
        document = await store.insert("genres", {"name": "Fantasy"})
        await store.close()

        reopened = SQLDocumentStore(url)
        await reopened.connect()
        try:
            assert await reopened.find_by_id("genres", document["id"]) == document
        finally:
            await reopened.close()

    async def test_not_connected(self):
        store = SQLDocumentStore("sqlite+aiosqlite:///unused.db")
        with pytest.raises(StoreError):
            await store.find("books")
