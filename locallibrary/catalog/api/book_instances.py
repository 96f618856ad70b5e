from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.catalog.api.deps import get_book_instance_service, get_form_data, render
from locallibrary.catalog.services import BookInstanceService

router = APIRouter()


@router.get("/bookinstances", response_class=HTMLResponse)
async def bookinstance_list(request: Request, service: BookInstanceService = Depends(get_book_instance_service)):
    return render(request, await service.list())


@router.get("/bookinstance/create", response_class=HTMLResponse)
async def bookinstance_create_get(request: Request, service: BookInstanceService = Depends(get_book_instance_service)):
    return render(request, await service.create_form())


@router.post("/bookinstance/create")
async def bookinstance_create_post(
    request: Request,
    data: Dict[str, Any] = Depends(get_form_data),
    service: BookInstanceService = Depends(get_book_instance_service),
):
    return render(request, await service.create(data))


@router.get("/bookinstance/{bookinstance_id}/delete", response_class=HTMLResponse)
async def bookinstance_delete_get(request: Request, bookinstance_id: str, service: BookInstanceService = Depends(get_book_instance_service)):
    return render(request, await service.delete_form(bookinstance_id))


@router.post("/bookinstance/{bookinstance_id}/delete")
async def bookinstance_delete_post(request: Request, bookinstance_id: str, service: BookInstanceService = Depends(get_book_instance_service)):
    return render(request, await service.delete(bookinstance_id))


@router.get("/bookinstance/{bookinstance_id}/update", response_class=HTMLResponse)
async def bookinstance_update_get(request: Request, bookinstance_id: str, service: BookInstanceService = Depends(get_book_instance_service)):
    return render(request, await service.update_form(bookinstance_id))


@router.post("/bookinstance/{bookinstance_id}/update")
async def bookinstance_update_post(
    request: Request,
    bookinstance_id: str,
    data: Dict[str, Any] = Depends(get_form_data),
    service: BookInstanceService = Depends(get_book_instance_service),
):
    return render(request, await service.update(bookinstance_id, data))


@router.get("/bookinstance/{bookinstance_id}", response_class=HTMLResponse)
async def bookinstance_detail(request: Request, bookinstance_id: str, service: BookInstanceService = Depends(get_book_instance_service)):
    return render(request, await service.detail(bookinstance_id))
