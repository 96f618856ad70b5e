import asyncio
from typing import Any, List, Mapping, Optional

from locallibrary.catalog.models import Book
from locallibrary.catalog.repositories import CatalogRepository
from locallibrary.catalog.services.results import Redirect, ViewResult
from locallibrary.catalog.validation import FieldError, book_form
from locallibrary.core.exceptions import NotFoundException


class BookService:
    def __init__(self, repo: CatalogRepository):
        self.repo = repo

    async def list(self) -> ViewResult:
        books = await self.repo.list_books()
        return ViewResult("book_list.html", {"title": "Book List", "book_list": books})

    async def detail(self, book_id: str) -> ViewResult:
        """
        Book with its author, genres and copies.

        Raises:
            NotFoundException: If no book has this id
        """
        book, instances = await asyncio.gather(
            self.repo.get_book(book_id),
            self.repo.instances_of_book(book_id),
        )
        if book is None:
            raise NotFoundException("Book not found")

        return ViewResult(
            "book_detail.html",
            {"title": book.title, "book": book, "book_instances": instances},
        )

    async def _form(
        self, title: str, book: Book, errors: Optional[List[FieldError]] = None
    ) -> ViewResult:
        authors, genres = await asyncio.gather(
            self.repo.list_authors(), self.repo.list_genres()
        )
        return ViewResult(
            "book_form.html",
            {
                "title": title,
                "authors": authors,
                "genres": genres,
                "book": book,
                "errors": errors or [],
            },
        )

    async def create_form(self) -> ViewResult:
        return await self._form("Create Book", Book())

    async def create(self, data: Mapping[str, Any]):
        result = book_form.validate(data)
        book = Book(**result.values)

        if not result.is_valid:
            return await self._form("Create Book", book, result.errors)

        await self.repo.insert(book)
        return Redirect(book.url)

    async def update_form(self, book_id: str) -> ViewResult:
        book = await self.repo.get(Book, book_id)
        if book is None:
            raise NotFoundException("Book not found")
        return await self._form("Update Book", book)

    async def update(self, book_id: str, data: Mapping[str, Any]):
        result = book_form.validate(data)
        book = Book(id=book_id, **result.values)

        if not result.is_valid:
            if await self.repo.get(Book, book_id) is None:
                raise NotFoundException("Book not found")
            return await self._form("Update Book", book, result.errors)

        updated = await self.repo.update(book)
        if updated is None:
            raise NotFoundException("Book not found")
        return Redirect(updated.url)

    async def _delete_view(self, book_id: str):
        book, instances = await asyncio.gather(
            self.repo.get(Book, book_id),
            self.repo.instances_of_book(book_id),
        )
        if book is None:
            return None
        return ViewResult(
            "book_delete.html",
            {"title": "Delete Book", "book": book, "book_instances": instances},
        )

    async def delete_form(self, book_id: str):
        view = await self._delete_view(book_id)
        return view or Redirect(Book.list_url())

    async def delete(self, book_id: str):
        """Delete a book unless copies of it still exist."""
        view = await self._delete_view(book_id)
        if view is not None and view.context["book_instances"]:
            return view

        await self.repo.delete(Book, book_id)
        return Redirect(Book.list_url())
