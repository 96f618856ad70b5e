import asyncio

from locallibrary.catalog.models import Author, Book, BookInstance, BookInstanceStatus, Genre
from locallibrary.catalog.repositories import CatalogRepository
from locallibrary.catalog.services.results import ViewResult

class CatalogService:
    def __init__(self, repo: CatalogRepository):
        self.repo = repo

    async def index(self) -> ViewResult:
        """
        Dashboard counts. The five counts are issued concurrently; if any of
        them fails the whole call fails.
        """
        (
            book_count,
            bookinstance_count,
            bookinstance_available_count,
            author_count,
            genre_count,
        ) = await asyncio.gather(
            self.repo.count(Book),
            self.repo.count(BookInstance),
            self.repo.count(BookInstance, {"status": BookInstanceStatus.AVAILABLE.value}),
            self.repo.count(Author),
            self.repo.count(Genre),
        )

        return ViewResult(
            "index.html",
            {
                "title": "Local Library Home",
                "book_count": book_count,
                "bookinstance_count": bookinstance_count,
                "bookinstance_available_count": bookinstance_available_count,
                "author_count": author_count,
                "genre_count": genre_count,
            },
        )
