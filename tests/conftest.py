"""
Test configuration and fixtures for the Local Library catalog.
"""
import asyncio
from typing import Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient

from locallibrary.catalog.models import Author, Book, BookInstance, Genre
from locallibrary.catalog.repositories import CatalogRepository
from locallibrary.main import create_app
from locallibrary.store import MemoryDocumentStore


@pytest.fixture
def store() -> MemoryDocumentStore:
    """Fresh in-memory document store."""
    return MemoryDocumentStore(timeout=5.0)


@pytest.fixture
def repo(store: MemoryDocumentStore) -> CatalogRepository:
    return CatalogRepository(store)


@pytest.fixture
def app(store: MemoryDocumentStore) -> FastAPI:
    """Application wired to the in-memory store."""
    return create_app(store=store)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Test client that runs the lifespan, does not follow redirects and turns
    unhandled errors into 500 responses instead of raising them.
    """
    with TestClient(app, follow_redirects=False, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def seed(repo: CatalogRepository):
    """
    Insert an entity from a synchronous test. The in-memory store holds no
    loop-bound state, so running the coroutine on a private loop is safe.
    """

    def _seed(entity):
        return asyncio.run(repo.insert(entity))

    return _seed


@pytest_asyncio.fixture
async def catalog(repo: CatalogRepository) -> dict:
    """A small catalog: two authors, two genres, two books and three copies."""
    tolkien = await repo.insert(Author(first_name="John", family_name="Tolkien"))
    austen = await repo.insert(Author(first_name="Jane", family_name="Austen"))
    fantasy = await repo.insert(Genre(name="Fantasy"))
    romance = await repo.insert(Genre(name="Romance"))
    hobbit = await repo.insert(
        Book(
            title="The Hobbit",
            author=tolkien.id,
            summary="There and back again.",
            isbn="9780261103344",
            genre=[fantasy.id],
        )
    )
    emma = await repo.insert(
        Book(
            title="Emma",
            author=austen.id,
            summary="A novel about youthful hubris.",
            isbn="9780141439587",
            genre=[romance.id],
        )
    )
    copies = [
        await repo.insert(BookInstance(book=hobbit.id, imprint="Allen & Unwin, 1937", status="Available")),
        await repo.insert(BookInstance(book=hobbit.id, imprint="HarperCollins, 2012", status="Loaned")),
        await repo.insert(BookInstance(book=emma.id, imprint="Penguin, 2003", status="Available")),
    ]
    return {
        "tolkien": tolkien,
        "austen": austen,
        "fantasy": fantasy,
        "romance": romance,
        "hobbit": hobbit,
        "emma": emma,
        "copies": copies,
    }
