"""
Test catalog entities and their derived fields.
"""
from datetime import date, datetime, timezone

from locallibrary.catalog.models import Author, Book, BookInstance, BookInstanceStatus, Genre


class TestAuthor:
    def test_name_with_both_parts(self):
        author = Author(first_name="John", family_name="Tolkien")
        assert author.name == "Tolkien, John"

    def test_name_empty_when_a_part_is_missing(self):
        assert Author(first_name="John").name == ""
        assert Author(family_name="Tolkien").name == ""
        assert Author().name == ""

    def test_lifespan(self):
        author = Author(
            first_name="John",
            family_name="Tolkien",
            date_of_birth=date(1892, 1, 3),
            date_of_death=date(1973, 9, 2),
        )
        assert author.lifespan == "Jan 3, 1892 - Sep 2, 1973"

    def test_lifespan_blank_sides(self):
        assert Author(date_of_birth=date(2014, 10, 6)).lifespan == "Oct 6, 2014 - "
        assert Author().lifespan == " - "

    def test_formatted_dates_for_inputs(self):
        author = Author(date_of_birth=date(1775, 12, 16))
        assert author.date_of_birth_formatted == "1775-12-16"
        assert author.date_of_death_formatted == ""

    def test_derived_fields_not_stored(self):
        author = Author(id="a1", first_name="Jane", family_name="Austen")
        document = author.to_document()
        assert document == {"first_name": "Jane", "family_name": "Austen"}


class TestUrls:
    def test_url_is_built_from_id(self):
        assert Author(id="abc").url == "/catalog/author/abc"
        assert Book(id="abc").url == "/catalog/book/abc"
        assert Genre(id="abc").url == "/catalog/genre/abc"
        assert BookInstance(id="abc").url == "/catalog/bookinstance/abc"

    def test_url_empty_without_id(self):
        assert Author().url == ""

    def test_list_url(self):
        assert BookInstance.list_url() == "/catalog/bookinstances"
        assert Genre.list_url() == "/catalog/genres"


class TestBookInstance:
    def test_defaults(self):
        instance = BookInstance(book="b1", imprint="Penguin")
        assert instance.status == BookInstanceStatus.MAINTENANCE.value
        assert instance.due_back is not None
        assert instance.due_back.tzinfo is not None

    def test_due_back_formats_share_the_same_day(self):
        instance = BookInstance(due_back=datetime(2014, 10, 6, 23, 30, tzinfo=timezone.utc))
        assert instance.due_back_formatted == "Oct 6, 2014"
        assert instance.due_back_yyyy_mm_dd == "2014-10-06"

    def test_formats_blank_without_due_back(self):
        instance = BookInstance(due_back=None)
        assert instance.due_back_formatted == ""
        assert instance.due_back_yyyy_mm_dd == ""

    def test_resolved_book_not_serialized(self):
        instance = BookInstance(book="b1", imprint="Penguin", resolved_book=Book(id="b1", title="Emma"))
        document = instance.to_document()
        assert "resolved_book" not in document
        assert document["book"] == "b1"

    def test_document_round_trip(self):
        instance = BookInstance(
            book="b1",
            imprint="Penguin",
            status="Loaned",
            due_back=datetime(2024, 5, 1, tzinfo=timezone.utc),
        )
        restored = BookInstance.from_document({"id": "i1", **instance.to_document()})
        assert restored.id == "i1"
        assert restored.status == "Loaned"
        assert restored.due_back == instance.due_back

    def test_status_values(self):
        assert BookInstanceStatus.values() == ["Available", "Maintenance", "Loaned", "Reserved"]
