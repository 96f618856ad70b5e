from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict

CATALOG_PREFIX = "/catalog"


class CatalogEntity(BaseModel):
    """
    Base for catalog documents.

    Stored fields are pydantic fields. Derived values (``url``, formatted
    dates, ...) are plain properties, so ``model_dump`` never includes them
    and they are recomputed on every access. Resolved references are declared
    with ``Field(exclude=True)`` and are never written back to the store.
    """

    model_config = ConfigDict(extra="ignore")

    collection: ClassVar[str]
    url_path: ClassVar[str]

    id: Optional[str] = None

    @property
    def url(self) -> str:
        """Canonical detail path; empty for a candidate that has no id yet."""
        if not self.id:
            return ""
        return f"{CATALOG_PREFIX}/{self.url_path}/{self.id}"

    @classmethod
    def list_url(cls) -> str:
        return f"{CATALOG_PREFIX}/{cls.url_path}s"

    def to_document(self) -> Dict[str, Any]:
        """Storable field set: JSON-compatible, without id and unset optionals."""
        return self.model_dump(mode="json", exclude={"id"}, exclude_none=True)

    @classmethod
    def from_document(cls, document: Dict[str, Any]):
        return cls.model_validate(document)
