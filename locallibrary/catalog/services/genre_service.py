import asyncio
from typing import Any, List, Mapping, Optional

from locallibrary.catalog.models import Genre
from locallibrary.catalog.repositories import CatalogRepository
from locallibrary.catalog.services.results import Redirect, ViewResult
from locallibrary.catalog.validation import FieldError, genre_form
from locallibrary.core.exceptions import NotFoundException


class GenreService:
    def __init__(self, repo: CatalogRepository):
        self.repo = repo

    async def list(self) -> ViewResult:
        genres = await self.repo.list_genres()
        return ViewResult("genre_list.html", {"title": "Genre List", "genre_list": genres})

    async def detail(self, genre_id: str) -> ViewResult:
        genre, books = await asyncio.gather(
            self.repo.get(Genre, genre_id),
            self.repo.books_in_genre(genre_id),
        )
        if genre is None:
            raise NotFoundException("Genre not found")

        return ViewResult(
            "genre_detail.html",
            {"title": "Genre Detail", "genre": genre, "genre_books": books},
        )

    def _form(
        self, title: str, genre: Genre, errors: Optional[List[FieldError]] = None
    ) -> ViewResult:
        return ViewResult(
            "genre_form.html", {"title": title, "genre": genre, "errors": errors or []}
        )

    async def create_form(self) -> ViewResult:
        return self._form("Create Genre", Genre())

    async def create(self, data: Mapping[str, Any]):
        """
        Create a genre, or redirect to the existing one when a genre with
        the same name (ignoring case) is already stored.
        """
        result = genre_form.validate(data)
        genre = Genre(**result.values)

        if not result.is_valid:
            return self._form("Create Genre", genre, result.errors)

        existing = await self.repo.find_genre_by_name(genre.name)
        if existing is not None:
            return Redirect(existing.url)

        await self.repo.insert(genre)
        return Redirect(genre.url)

    async def update_form(self, genre_id: str) -> ViewResult:
        genre = await self.repo.get(Genre, genre_id)
        if genre is None:
            raise NotFoundException("Genre not found")
        return self._form("Update Genre", genre)

    async def update(self, genre_id: str, data: Mapping[str, Any]):
        result = genre_form.validate(data)
        genre = Genre(id=genre_id, **result.values)

        if not result.is_valid:
            if await self.repo.get(Genre, genre_id) is None:
                raise NotFoundException("Genre not found")
            return self._form("Update Genre", genre, result.errors)

        updated = await self.repo.update(genre)
        if updated is None:
            raise NotFoundException("Genre not found")
        return Redirect(updated.url)

    async def _delete_view(self, genre_id: str):
        genre, books = await asyncio.gather(
            self.repo.get(Genre, genre_id),
            self.repo.books_in_genre(genre_id),
        )
        if genre is None:
            return None
        return ViewResult(
            "genre_delete.html",
            {"title": "Delete Genre", "genre": genre, "genre_books": books},
        )

    async def delete_form(self, genre_id: str):
        view = await self._delete_view(genre_id)
        return view or Redirect(Genre.list_url())

    async def delete(self, genre_id: str):
        """Delete a genre unless books are still filed under it."""
        view = await self._delete_view(genre_id)
        if view is not None and view.context["genre_books"]:
            return view

        await self.repo.delete(Genre, genre_id)
        return Redirect(Genre.list_url())
