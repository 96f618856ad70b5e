from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.catalog.api import authors, book_instances, books, genres
from locallibrary.catalog.api.deps import get_catalog_service, render
from locallibrary.catalog.models import CATALOG_PREFIX
from locallibrary.catalog.services import CatalogService

catalog_router = APIRouter(prefix=CATALOG_PREFIX)


@catalog_router.get("", response_class=HTMLResponse, tags=["catalog"])
async def index(request: Request, service: CatalogService = Depends(get_catalog_service)):
    """Dashboard with catalog counts."""
    return render(request, await service.index())


catalog_router.include_router(authors.router, tags=["authors"])
catalog_router.include_router(books.router, tags=["books"])
catalog_router.include_router(genres.router, tags=["genres"])
catalog_router.include_router(book_instances.router, tags=["bookinstances"])
