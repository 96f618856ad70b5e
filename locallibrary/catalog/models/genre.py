from typing import ClassVar, Optional

from locallibrary.catalog.models.base import CatalogEntity


class Genre(CatalogEntity):
    collection: ClassVar[str] = "genres"
    url_path: ClassVar[str] = "genre"

    name: Optional[str] = None

    def __repr__(self):
        return f"<Genre(id={self.id}, name='{self.name}')>"
