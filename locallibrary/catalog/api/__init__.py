from locallibrary.catalog.api.router import catalog_router

__all__ = ["catalog_router"]
