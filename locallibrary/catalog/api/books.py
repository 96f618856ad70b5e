from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.catalog.api.deps import get_book_service, get_form_data, render
from locallibrary.catalog.services import BookService

router = APIRouter()


@router.get("/books", response_class=HTMLResponse)
async def book_list(request: Request, service: BookService = Depends(get_book_service)):
    return render(request, await service.list())


@router.get("/book/create", response_class=HTMLResponse)
async def book_create_get(request: Request, service: BookService = Depends(get_book_service)):
    return render(request, await service.create_form())


@router.post("/book/create")
async def book_create_post(
    request: Request,
    data: Dict[str, Any] = Depends(get_form_data),
    service: BookService = Depends(get_book_service),
):
    return render(request, await service.create(data))


@router.get("/book/{book_id}/delete", response_class=HTMLResponse)
async def book_delete_get(request: Request, book_id: str, service: BookService = Depends(get_book_service)):
    return render(request, await service.delete_form(book_id))


@router.post("/book/{book_id}/delete")
async def book_delete_post(request: Request, book_id: str, service: BookService = Depends(get_book_service)):
    return render(request, await service.delete(book_id))


@router.get("/book/{book_id}/update", response_class=HTMLResponse)
async def book_update_get(request: Request, book_id: str, service: BookService = Depends(get_book_service)):
    return render(request, await service.update_form(book_id))


@router.post("/book/{book_id}/update")
async def book_update_post(
    request: Request,
    book_id: str,
    data: Dict[str, Any] = Depends(get_form_data),
    service: BookService = Depends(get_book_service),
):
    return render(request, await service.update(book_id, data))


@router.get("/book/{book_id}", response_class=HTMLResponse)
async def book_detail(request: Request, book_id: str, service: BookService = Depends(get_book_service)):
    return render(request, await service.detail(book_id))
