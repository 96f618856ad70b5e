from typing import Any, Dict

from fastapi import Depends, Request
from fastapi.responses import RedirectResponse
from starlette import status

from locallibrary.catalog.repositories import CatalogRepository
from locallibrary.catalog.services import (
    AuthorService,
    BookInstanceService,
    BookService,
    CatalogService,
    GenreService,
    Redirect,
    ViewResult,
)


def get_repository(request: Request) -> CatalogRepository:
    """The repository built in the application lifespan."""
    return request.app.state.repository


def get_catalog_service(repo: CatalogRepository = Depends(get_repository)) -> CatalogService:
    return CatalogService(repo)


def get_author_service(repo: CatalogRepository = Depends(get_repository)) -> AuthorService:
    return AuthorService(repo)


def get_book_service(repo: CatalogRepository = Depends(get_repository)) -> BookService:
    return BookService(repo)


def get_genre_service(repo: CatalogRepository = Depends(get_repository)) -> GenreService:
    return GenreService(repo)


def get_book_instance_service(
    repo: CatalogRepository = Depends(get_repository),
) -> BookInstanceService:
    return BookInstanceService(repo)


async def get_form_data(request: Request) -> Dict[str, Any]:
    """
    Submitted form fields. Repeated fields (checkbox groups) become lists,
    single fields stay plain strings. Field chains that expect one value keep
    the last of a repeated field.
    """
    form = await request.form()
    data: Dict[str, Any] = {}
    for key in form.keys():
        values = form.getlist(key)
        data[key] = values if len(values) > 1 else values[0]
    return data


def render(request: Request, result):
    """Turn a service result into a template or a 303 redirect response."""
    if isinstance(result, Redirect):
        return RedirectResponse(result.url, status_code=status.HTTP_303_SEE_OTHER)
    if isinstance(result, ViewResult):
        templates = request.app.state.templates
        return templates.TemplateResponse(request, result.template, result.context)
    raise TypeError(f"Unexpected handler result: {result!r}")
