"""
Test the validation and sanitization pipeline.
"""
from datetime import date, datetime, timedelta, timezone

import pytest

from locallibrary.catalog.validation import (
    FormValidator,
    author_form,
    body,
    book_form,
    book_instance_form,
    genre_form,
)
from locallibrary.catalog.validation.rules import Escape, IsAlphanumeric, IsISO8601, ToDate, ToList


class TestRules:
    def test_escape_replaces_markup_characters(self):
        assert Escape().sanitize("<b>\"Tom's\" & Jerry</b>") == (
            "&lt;b&gt;&quot;Tom&#x27;s&quot; &amp; Jerry&lt;&#x2F;b&gt;"
        )

    def test_escape_is_idempotent(self):
        once = Escape().sanitize("a & b < c / 'd' \\ `e`")
        assert Escape().sanitize(once) == once

    def test_escape_applies_to_each_list_item(self):
        assert Escape().sanitize(["<a>", "b"]) == ["&lt;a&gt;", "b"]

    def test_is_alphanumeric(self):
        rule = IsAlphanumeric()
        assert rule.check("Tolkien1892")
        assert rule.check("")
        assert not rule.check("JR@R")
        assert not rule.check("John Ronald")

    @pytest.mark.parametrize(
        "value",
        ["2014-10-06", "2014-10-06T10:20", "2014-10-06T10:20:30Z", "2014-10-06T10:20:30+05:30"],
    )
    def test_iso8601_accepts(self, value):
        assert IsISO8601().check(value)

    @pytest.mark.parametrize("value", ["06/10/2014", "2014-13-01", "2014-02-30", "yesterday", ""])
    def test_iso8601_rejects(self, value):
        assert not IsISO8601().check(value)

    def test_to_date(self):
        assert ToDate(date_only=True).sanitize("1892-01-03") == date(1892, 1, 3)
        assert ToDate().sanitize("2024-05-01") == datetime(2024, 5, 1, tzinfo=timezone.utc)
        assert ToDate().sanitize("not a date") is None

    def test_to_date_only_reads_the_utc_day(self):
        late_evening = datetime(1892, 1, 3, 23, tzinfo=timezone(timedelta(hours=-5)))
        assert ToDate(date_only=True).sanitize("1892-01-03T23:00-05:00") == date(1892, 1, 4)
        assert ToDate(date_only=True).sanitize(late_evening) == date(1892, 1, 4)

    def test_short_fraction_of_a_second(self):
        expected = datetime(2014, 10, 6, 10, 20, 30, 500000, tzinfo=timezone.utc)
        assert IsISO8601().check("2014-10-06T10:20:30.5")
        assert ToDate().sanitize("2014-10-06T10:20:30.5Z") == expected

    def test_to_list(self):
        assert ToList().sanitize(None) == []
        assert ToList().sanitize("g1") == ["g1"]
        assert ToList().sanitize(["g1", "g2"]) == ["g1", "g2"]


class TestFieldChain:
    def test_errors_accumulate_within_a_field(self):
        form = FormValidator(
            body("code").trim().is_length(min=5).with_message("too short").is_alphanumeric().with_message("bad chars")
        )
        result = form.validate({"code": " a-b "})
        assert [error.message for error in result.errors] == ["too short", "bad chars"]
        assert result.values["code"] == "a-b"

    def test_default_message(self):
        form = FormValidator(body("when", "Invalid when").is_iso8601())
        result = form.validate({"when": "soon"})
        assert result.errors[0].message == "Invalid when"
        assert result.errors[0].field == "when"
        assert result.errors[0].value == "soon"

    def test_optional_field_is_omitted_when_falsy(self):
        form = FormValidator(body("when").optional().is_iso8601().to_date())
        result = form.validate({"when": ""})
        assert result.is_valid
        assert "when" not in result.values

    def test_repeated_field_keeps_last_value(self):
        form = FormValidator(body("name").trim().is_length(min=1), body("tags").to_list().escape())
        result = form.validate({"name": ["John", " Ronald "], "tags": ["a", "<b>"]})
        assert result.is_valid
        assert result.values["name"] == "Ronald"
        assert result.values["tags"] == ["a", "&lt;b&gt;"]

    def test_with_message_requires_a_validator(self):
        with pytest.raises(ValueError):
            body("name").trim().with_message("nothing to attach to")


class TestAuthorForm:
    def test_blank_first_name_gives_exactly_one_error(self):
        result = author_form.validate({"first_name": "", "family_name": "Tolkien"})

        assert not result.is_valid
        assert len(result.errors) == 1
        assert result.errors[0].field == "first_name"
        assert result.errors[0].message == "First name must be specified."
        assert result.values["family_name"] == "Tolkien"

    def test_non_alphanumeric_first_name(self):
        result = author_form.validate({"first_name": "JR@R", "family_name": "Tolkien"})

        assert [(e.field, e.message) for e in result.errors] == [
            ("first_name", "First name must be alphanumeric characters only.")
        ]

    def test_name_too_long(self):
        result = author_form.validate({"first_name": "a" * 101, "family_name": "Tolkien"})
        assert result.errors_for("first_name")[0].message == "First name must be at most 100 characters."

    def test_valid_submission_is_cleaned(self):
        result = author_form.validate(
            {
                "first_name": "  John ",
                "family_name": "Tolkien",
                "date_of_birth": "1892-01-03",
                "date_of_death": "",
            }
        )
        assert result.is_valid
        assert result.values == {
            "first_name": "John",
            "family_name": "Tolkien",
            "date_of_birth": date(1892, 1, 3),
        }

    def test_invalid_dates(self):
        result = author_form.validate(
            {"first_name": "John", "family_name": "Tolkien", "date_of_birth": "03/01/1892", "date_of_death": "x"}
        )
        assert [e.message for e in result.errors] == ["Invalid date of birth", "Invalid date of death"]

    def test_pipeline_is_idempotent(self):
        first = author_form.validate({"first_name": "John", "family_name": "Tolkien", "date_of_birth": "1892-01-03"})
        second = author_form.validate(first.values)
        assert second.is_valid
        assert second.values == first.values


class TestBookInstanceForm:
    def test_missing_book_and_imprint(self):
        result = book_instance_form.validate({"book": "  ", "imprint": ""})
        assert [(e.field, e.message) for e in result.errors] == [
            ("book", "Book must be specified"),
            ("imprint", "Imprint must be specified."),
        ]

    def test_status_is_optional(self):
        result = book_instance_form.validate({"book": "b1", "imprint": "Penguin"})
        assert result.is_valid
        assert "status" not in result.values
        assert "due_back" not in result.values

    def test_unknown_status(self):
        result = book_instance_form.validate({"book": "b1", "imprint": "Penguin", "status": "Lost"})
        assert [e.message for e in result.errors] == ["Invalid status"]

    def test_due_back_converted_to_utc_datetime(self):
        result = book_instance_form.validate(
            {"book": "b1", "imprint": "Penguin", "status": "Loaned", "due_back": "2024-05-01"}
        )
        assert result.is_valid
        assert result.values["due_back"] == datetime(2024, 5, 1, tzinfo=timezone.utc)

    def test_invalid_due_back(self):
        result = book_instance_form.validate({"book": "b1", "imprint": "Penguin", "due_back": "tomorrow"})
        assert [e.message for e in result.errors] == ["Invalid date"]

    def test_imprint_is_escaped_once(self):
        data = {"book": "b1", "imprint": "Allen & Unwin", "status": "Available", "due_back": "2024-05-01"}
        first = book_instance_form.validate(data)
        second = book_instance_form.validate(first.values)
        assert first.values["imprint"] == "Allen &amp; Unwin"
        assert second.values == first.values


class TestBookForm:
    def test_required_fields(self):
        result = book_form.validate({})
        assert [e.message for e in result.errors] == [
            "Title must not be empty.",
            "Author must not be empty.",
            "Summary must not be empty.",
            "ISBN must not be empty",
        ]
        assert result.values["genre"] == []

    def test_single_genre_becomes_list(self):
        result = book_form.validate(
            {"title": "Emma", "author": "a1", "summary": "Matchmaking.", "isbn": "123", "genre": "g1"}
        )
        assert result.is_valid
        assert result.values["genre"] == ["g1"]


class TestGenreForm:
    @pytest.mark.parametrize("name", ["", "ab", "x" * 101])
    def test_name_length(self, name):
        result = genre_form.validate({"name": name})
        assert [e.message for e in result.errors] == ["Genre name must contain at least 3 characters"]

    def test_valid_name(self):
        result = genre_form.validate({"name": " Science Fiction "})
        assert result.values == {"name": "Science Fiction"}
