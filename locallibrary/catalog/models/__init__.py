from locallibrary.catalog.models.author import Author
from locallibrary.catalog.models.base import CATALOG_PREFIX, CatalogEntity
from locallibrary.catalog.models.book import Book
from locallibrary.catalog.models.book_instance import BookInstance, BookInstanceStatus
from locallibrary.catalog.models.genre import Genre

__all__ = [
    "CATALOG_PREFIX",
    "Author",
    "Book",
    "BookInstance",
    "BookInstanceStatus",
    "CatalogEntity",
    "Genre",
]
