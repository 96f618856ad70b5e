from typing import ClassVar, List, Optional

from pydantic import Field

from locallibrary.catalog.models.author import Author
from locallibrary.catalog.models.base import CatalogEntity
from locallibrary.catalog.models.genre import Genre


class Book(CatalogEntity):
    collection: ClassVar[str] = "books"
    url_path: ClassVar[str] = "book"

    title: Optional[str] = None
    author: Optional[str] = None
    summary: Optional[str] = None
    isbn: Optional[str] = None
    genre: List[str] = Field(default_factory=list)

    # Populated by the repository, never stored
    resolved_author: Optional[Author] = Field(default=None, exclude=True)
    resolved_genres: List[Genre] = Field(default_factory=list, exclude=True)

    def __repr__(self):
        return f"<Book(id={self.id}, title='{self.title}')>"
