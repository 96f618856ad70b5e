from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from pydantic import Field

from locallibrary.catalog.models.base import CatalogEntity
from locallibrary.catalog.models.book import Book
from locallibrary.common.utils.date_utils import format_date_med, format_iso_date, now


class BookInstanceStatus(str, Enum):
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"

    @classmethod
    def values(cls):
        return [status.value for status in cls]


class BookInstance(CatalogEntity):
    """A physical copy of a book."""

    collection: ClassVar[str] = "bookinstances"
    url_path: ClassVar[str] = "bookinstance"

    book: Optional[str] = None
    imprint: Optional[str] = None
    status: str = BookInstanceStatus.MAINTENANCE.value
    due_back: Optional[datetime] = Field(default_factory=now)

    resolved_book: Optional[Book] = Field(default=None, exclude=True)

    @property
    def due_back_formatted(self) -> str:
        return format_date_med(self.due_back)

    @property
    def due_back_yyyy_mm_dd(self) -> str:
        return format_iso_date(self.due_back)

    def __repr__(self):
        return f"<BookInstance(id={self.id}, book={self.book}, status='{self.status}')>"
