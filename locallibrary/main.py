from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from locallibrary.catalog.api import catalog_router
from locallibrary.catalog.models import CATALOG_PREFIX
from locallibrary.catalog.repositories import CatalogRepository
from locallibrary.core.config import get_settings
from locallibrary.core.errors import http_error_handler, server_error_handler
from locallibrary.logging.setup import get_logger, setup_logging
from locallibrary.middlewares import setup_middlewares
from locallibrary.store import DocumentStore, create_store

settings = get_settings()
logger = get_logger("locallibrary.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the document store on startup and close it on shutdown."""
    setup_logging()
    logger.info(f"Starting {settings.PROJECT_NAME} ({settings.APP_ENV})")

    store: DocumentStore = app.state.store or create_store(settings)
    await store.connect()
    app.state.store = store
    app.state.repository = CatalogRepository(store)

    try:
        yield
    finally:
        logger.info(f"Shutting down {settings.PROJECT_NAME}")
        await store.close()


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Document store to use instead of the one selected by
            STORE_BACKEND. It is connected and closed by the lifespan.

    Returns:
        FastAPI application
    """
    app = FastAPI(
        lifespan=lifespan,
        **settings.fastapi_kwargs,
    )
    app.state.store = store
    app.state.templates = Jinja2Templates(directory=settings.TEMPLATES_DIR)

    setup_middlewares(app)

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, server_error_handler)

    app.include_router(catalog_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(CATALOG_PREFIX, status_code=status.HTTP_303_SEE_OTHER)

    @app.get("/health", tags=["health"])
    async def health_check():
        """Liveness check."""
        return {
            "status": "ok",
            "version": settings.PROJECT_VERSION,
            "environment": settings.APP_ENV,
            "store_backend": settings.STORE_BACKEND,
        }

    return app


app = create_app()
