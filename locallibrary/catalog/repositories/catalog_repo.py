import asyncio
from typing import Dict, Iterable, List, Optional, Type, TypeVar

from locallibrary.catalog.models import Author, Book, BookInstance, CatalogEntity, Genre
from locallibrary.store.base import ASCENDING, DocumentStore, Filter, SortSpec

EntityT = TypeVar("EntityT", bound=CatalogEntity)


class CatalogRepository:
    """
    Repository for the catalog collections.

    Maps entity classes to their store collections, converts documents to
    entities and resolves references between them. One instance is built at
    startup and shared by every request.
    """

    def __init__(self, store: DocumentStore):
        """
        Args:
            store: Connected document store backend
        """
        self.store = store

    # Generic operations

    async def get(self, model: Type[EntityT], entity_id: str) -> Optional[EntityT]:
        """Point lookup; None when no entity has this id."""
        document = await self.store.find_by_id(model.collection, entity_id)
        return model.from_document(document) if document else None

    async def list(
        self,
        model: Type[EntityT],
        filter: Optional[Filter] = None,
        projection: Optional[Iterable[str]] = None,
        sort: Optional[SortSpec] = None,
    ) -> List[EntityT]:
        documents = await self.store.find(
            model.collection, filter=filter, projection=projection, sort=sort
        )
        return [model.from_document(document) for document in documents]

    async def count(self, model: Type[CatalogEntity], filter: Optional[Filter] = None) -> int:
        return await self.store.count_documents(model.collection, filter)

    async def insert(self, entity: EntityT) -> EntityT:
        """Persist a candidate and return it with its new id."""
        document = await self.store.insert(entity.collection, entity.to_document())
        entity.id = document["id"]
        return entity

    async def update(self, entity: EntityT) -> Optional[EntityT]:
        """
        Replace the stored fields of ``entity`` keyed by its id.

        Returns:
            The stored entity after the update, or None when it no longer exists
        """
        document = await self.store.update_by_id(
            entity.collection, entity.id, entity.to_document()
        )
        return type(entity).from_document(document) if document else None

    async def delete(self, model: Type[CatalogEntity], entity_id: str) -> None:
        await self.store.delete_by_id(model.collection, entity_id)

    # Reference resolution

    async def _get_many(self, model: Type[EntityT], ids: Iterable[str]) -> Dict[str, EntityT]:
        unique_ids = list(dict.fromkeys(i for i in ids if i))
        entities = await asyncio.gather(*(self.get(model, i) for i in unique_ids))
        return {i: entity for i, entity in zip(unique_ids, entities) if entity is not None}

    async def resolve_books(self, books: List[Book], genres: bool = False) -> List[Book]:
        """Populate ``resolved_author`` (and optionally ``resolved_genres``)."""
        genre_ids = [g for book in books for g in book.genre] if genres else []
        authors, genres_by_id = await asyncio.gather(
            self._get_many(Author, (book.author for book in books)),
            self._get_many(Genre, genre_ids),
        )
        for book in books:
            book.resolved_author = authors.get(book.author)
            if genres:
                book.resolved_genres = [genres_by_id[g] for g in book.genre if g in genres_by_id]
        return books

    async def resolve_book_instances(self, instances: List[BookInstance]) -> List[BookInstance]:
        """Populate ``resolved_book`` on each instance."""
        books = await self._get_many(Book, (instance.book for instance in instances))
        for instance in instances:
            instance.resolved_book = books.get(instance.book)
        return instances

    # Catalog queries

    async def get_book(self, book_id: str) -> Optional[Book]:
        book = await self.get(Book, book_id)
        if book is not None:
            await self.resolve_books([book], genres=True)
        return book

    async def get_book_instance(self, instance_id: str) -> Optional[BookInstance]:
        instance = await self.get(BookInstance, instance_id)
        if instance is not None:
            await self.resolve_book_instances([instance])
        return instance

    async def list_authors(self) -> List[Author]:
        return await self.list(Author, sort=[("family_name", ASCENDING)])

    async def list_genres(self) -> List[Genre]:
        return await self.list(Genre, sort=[("name", ASCENDING)])

    async def list_books(self, resolve: bool = True) -> List[Book]:
        books = await self.list(Book, sort=[("title", ASCENDING)])
        if resolve:
            await self.resolve_books(books)
        return books

    async def list_book_titles(self) -> List[Book]:
        """All books projected to ``title``, sorted by title."""
        return await self.list(Book, projection=["title"], sort=[("title", ASCENDING)])

    async def list_book_instances(self) -> List[BookInstance]:
        instances = await self.list(BookInstance, sort=[("book", ASCENDING)])
        return await self.resolve_book_instances(instances)

    async def books_by_author(self, author_id: str) -> List[Book]:
        return await self.list(Book, filter={"author": author_id}, projection=["title", "summary"])

    async def books_in_genre(self, genre_id: str) -> List[Book]:
        return await self.list(Book, filter={"genre": genre_id}, projection=["title", "summary"])

    async def instances_of_book(self, book_id: str) -> List[BookInstance]:
        return await self.list(BookInstance, filter={"book": book_id})

    async def find_genre_by_name(self, name: str) -> Optional[Genre]:
        """Case-insensitive exact match on the genre name."""
        wanted = name.casefold()
        for genre in await self.list(Genre, projection=["name"]):
            if genre.name and genre.name.casefold() == wanted:
                return genre
        return None
