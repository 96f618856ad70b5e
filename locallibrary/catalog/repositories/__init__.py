from locallibrary.catalog.repositories.catalog_repo import CatalogRepository

__all__ = ["CatalogRepository"]
