import asyncio
from typing import Any, List, Mapping, Optional

from locallibrary.catalog.models import Book, BookInstance, BookInstanceStatus
from locallibrary.catalog.repositories import CatalogRepository
from locallibrary.catalog.services.results import Redirect, ViewResult
from locallibrary.catalog.validation import FieldError, book_instance_form
from locallibrary.core.exceptions import NotFoundException


class BookInstanceService:
    def __init__(self, repo: CatalogRepository):
        self.repo = repo

    async def list(self) -> ViewResult:
        instances = await self.repo.list_book_instances()
        return ViewResult(
            "bookinstance_list.html",
            {"title": "Book Instance List", "bookinstance_list": instances},
        )

    async def detail(self, instance_id: str) -> ViewResult:
        instance = await self.repo.get_book_instance(instance_id)
        if instance is None:
            raise NotFoundException("Book copy not found")

        return ViewResult(
            "bookinstance_detail.html", {"title": "Book Copy", "bookinstance": instance}
        )

    def _form(
        self,
        title: str,
        instance: BookInstance,
        books: List[Book],
        errors: Optional[List[FieldError]] = None,
    ) -> ViewResult:
        return ViewResult(
            "bookinstance_form.html",
            {
                "title": title,
                "book_list": books,
                "selected_book": instance.book,
                "status_choices": BookInstanceStatus.values(),
                "bookinstance": instance,
                "errors": errors or [],
            },
        )

    async def _load_for_update(self, instance_id: str):
        """Stored instance and every book, fetched concurrently."""
        instance, books = await asyncio.gather(
            self.repo.get_book_instance(instance_id),
            self.repo.list(Book),
        )
        if instance is None:
            raise NotFoundException("Copy not found.")
        return instance, books

    async def create_form(self) -> ViewResult:
        books = await self.repo.list_book_titles()
        return self._form("Create Book Instance", BookInstance(), books)

    async def create(self, data: Mapping[str, Any]):
        """
        Validate a submitted copy and persist it.

        The book reference is only checked for presence, so a copy may point
        at a book id that does not exist.

        Returns:
            Redirect to the new copy, or the form with errors
        """
        result = book_instance_form.validate(data)
        instance = BookInstance(**result.values)

        if not result.is_valid:
            books = await self.repo.list_book_titles()
            return self._form("Create Book Instance", instance, books, result.errors)

        await self.repo.insert(instance)
        return Redirect(instance.url)

    async def update_form(self, instance_id: str) -> ViewResult:
        instance, books = await self._load_for_update(instance_id)
        return self._form("Update Book Instance", instance, books)

    async def update(self, instance_id: str, data: Mapping[str, Any]):
        result = book_instance_form.validate(data)
        # Candidate carries the stored id
        instance = BookInstance(id=instance_id, **result.values)

        if not result.is_valid:
            _, books = await self._load_for_update(instance_id)
            return self._form("Update Book Instance", instance, books, result.errors)

        updated = await self.repo.update(instance)
        if updated is None:
            raise NotFoundException("Copy not found.")
        return Redirect(updated.url)

    async def delete_form(self, instance_id: str):
        instance = await self.repo.get_book_instance(instance_id)
        if instance is None:
            return Redirect(BookInstance.list_url())

        return ViewResult(
            "bookinstance_delete.html", {"title": "Delete Copy", "bookinstance": instance}
        )

    async def delete(self, instance_id: str) -> Redirect:
        await self.repo.delete(BookInstance, instance_id)
        return Redirect(BookInstance.list_url())
