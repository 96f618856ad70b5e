from locallibrary.catalog.validation.chain import (
    FieldChain,
    FieldError,
    FormValidator,
    ValidationResult,
    body,
)
from locallibrary.catalog.validation.forms import (
    author_form,
    book_form,
    book_instance_form,
    genre_form,
)

__all__ = [
    "FieldChain",
    "FieldError",
    "FormValidator",
    "ValidationResult",
    "body",
    "author_form",
    "book_form",
    "book_instance_form",
    "genre_form",
]
