from locallibrary.catalog.services.author_service import AuthorService
from locallibrary.catalog.services.book_instance_service import BookInstanceService
from locallibrary.catalog.services.book_service import BookService
from locallibrary.catalog.services.catalog_service import CatalogService
from locallibrary.catalog.services.genre_service import GenreService
from locallibrary.catalog.services.results import Redirect, ViewResult

__all__ = [
    "AuthorService",
    "BookInstanceService",
    "BookService",
    "CatalogService",
    "GenreService",
    "Redirect",
    "ViewResult",
]
