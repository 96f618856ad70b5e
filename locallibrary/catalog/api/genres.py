from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.catalog.api.deps import get_genre_service, get_form_data, render
from locallibrary.catalog.services import GenreService

router = APIRouter()


@router.get("/genres", response_class=HTMLResponse)
async def genre_list(request: Request, service: GenreService = Depends(get_genre_service)):
    return render(request, await service.list())


@router.get("/genre/create", response_class=HTMLResponse)
async def genre_create_get(request: Request, service: GenreService = Depends(get_genre_service)):
    return render(request, await service.create_form())


@router.post("/genre/create")
async def genre_create_post(
    request: Request,
    data: Dict[str, Any] = Depends(get_form_data),
    service: GenreService = Depends(get_genre_service),
):
    return render(request, await service.create(data))


@router.get("/genre/{genre_id}/delete", response_class=HTMLResponse)
async def genre_delete_get(request: Request, genre_id: str, service: GenreService = Depends(get_genre_service)):
    return render(request, await service.delete_form(genre_id))


@router.post("/genre/{genre_id}/delete")
async def genre_delete_post(request: Request, genre_id: str, service: GenreService = Depends(get_genre_service)):
    return render(request, await service.delete(genre_id))


@router.get("/genre/{genre_id}/update", response_class=HTMLResponse)
async def genre_update_get(request: Request, genre_id: str, service: GenreService = Depends(get_genre_service)):
    return render(request, await service.update_form(genre_id))


@router.post("/genre/{genre_id}/update")
async def genre_update_post(
    request: Request,
    genre_id: str,
    data: Dict[str, Any] = Depends(get_form_data),
    service: GenreService = Depends(get_genre_service),
):
    return render(request, await service.update(genre_id, data))


@router.get("/genre/{genre_id}", response_class=HTMLResponse)
async def genre_detail(request: Request, genre_id: str, service: GenreService = Depends(get_genre_service)):
    return render(request, await service.detail(genre_id))
