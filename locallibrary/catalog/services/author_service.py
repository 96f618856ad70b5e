import asyncio
from typing import Any, Mapping

from locallibrary.catalog.models import Author
from locallibrary.catalog.repositories import CatalogRepository
from locallibrary.catalog.services.results import Redirect, ViewResult
from locallibrary.catalog.validation import author_form
from locallibrary.core.exceptions import NotFoundException, NotImplementedException

class AuthorService:
    def __init__(self, repo: CatalogRepository):
        self.repo = repo

    async def list(self) -> ViewResult:
        authors = await self.repo.list_authors()
        return ViewResult("author_list.html", {"title": "Author List", "author_list": authors})

    async def detail(self, author_id: str) -> ViewResult:
        """
        Author with all their books, fetched concurrently.

        Raises:
            NotFoundException: If no author has this id
        """
        author, books = await asyncio.gather(
            self.repo.get(Author, author_id),
            self.repo.books_by_author(author_id),
        )
        if author is None:
            raise NotFoundException("Author not found")

        return ViewResult(
            "author_detail.html",
            {"title": "Author Detail", "author": author, "author_books": books},
        )

    def _form(self, author: Author, errors=None) -> ViewResult:
        return ViewResult(
            "author_form.html",
            {"title": "Create Author", "author": author, "errors": errors or []},
        )

    async def create_form(self) -> ViewResult:
        return self._form(Author())

    async def create(self, data: Mapping[str, Any]):
        result = author_form.validate(data)
        author = Author(**result.values)

        if not result.is_valid:
            return self._form(author, result.errors)

        await self.repo.insert(author)
        return Redirect(author.url)

    # Extension points: not implemented yet

    async def update_form(self, author_id: str) -> ViewResult:
        raise NotImplementedException("Author update GET is not implemented")

    async def update(self, author_id: str, data: Mapping[str, Any]):
        raise NotImplementedException("Author update POST is not implemented")

    async def delete_form(self, author_id: str) -> ViewResult:
        raise NotImplementedException("Author delete GET is not implemented")

    async def delete(self, author_id: str):
        raise NotImplementedException("Author delete POST is not implemented")
