from datetime import date
from typing import ClassVar, Optional

from locallibrary.catalog.models.base import CatalogEntity
from locallibrary.common.utils.date_utils import format_date_med, format_iso_date


class Author(CatalogEntity):
    collection: ClassVar[str] = "authors"
    url_path: ClassVar[str] = "author"

    first_name: Optional[str] = None
    family_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None

    @property
    def name(self) -> str:
        """``"family_name, first_name"``, or empty when either part is missing."""
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return ""

    @property
    def lifespan(self) -> str:
        return f"{format_date_med(self.date_of_birth)} - {format_date_med(self.date_of_death)}"

    @property
    def date_of_birth_formatted(self) -> str:
        return format_iso_date(self.date_of_birth)

    @property
    def date_of_death_formatted(self) -> str:
        return format_iso_date(self.date_of_death)

    def __repr__(self):
        return f"<Author(id={self.id}, name='{self.name}')>"
