from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.catalog.api.deps import get_author_service, get_form_data, render
from locallibrary.catalog.services import AuthorService

router = APIRouter()


@router.get("/authors", response_class=HTMLResponse)
async def author_list(request: Request, service: AuthorService = Depends(get_author_service)):
    return render(request, await service.list())


@router.get("/author/create", response_class=HTMLResponse)
async def author_create_get(request: Request, service: AuthorService = Depends(get_author_service)):
    return render(request, await service.create_form())


@router.post("/author/create")
async def author_create_post(
    request: Request,
    data: Dict[str, Any] = Depends(get_form_data),
    service: AuthorService = Depends(get_author_service),
):
    return render(request, await service.create(data))


@router.get("/author/{author_id}/delete", response_class=HTMLResponse)
async def author_delete_get(request: Request, author_id: str, service: AuthorService = Depends(get_author_service)):
    return render(request, await service.delete_form(author_id))


@router.post("/author/{author_id}/delete")
async def author_delete_post(request: Request, author_id: str, service: AuthorService = Depends(get_author_service)):
    return render(request, await service.delete(author_id))


@router.get("/author/{author_id}/update", response_class=HTMLResponse)
async def author_update_get(request: Request, author_id: str, service: AuthorService = Depends(get_author_service)):
    return render(request, await service.update_form(author_id))


@router.post("/author/{author_id}/update")
async def author_update_post(
    request: Request,
    author_id: str,
    data: Dict[str, Any] = Depends(get_form_data),
    service: AuthorService = Depends(get_author_service),
):
    return render(request, await service.update(author_id, data))


@router.get("/author/{author_id}", response_class=HTMLResponse)
async def author_detail(request: Request, author_id: str, service: AuthorService = Depends(get_author_service)):
    return render(request, await service.detail(author_id))
