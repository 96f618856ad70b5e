from locallibrary.catalog.models import BookInstanceStatus
from locallibrary.catalog.validation.chain import FieldChain, FormValidator, body

NAME_MAX_LENGTH = 100


def _person_name(name: str, label: str) -> FieldChain:
    return (
        body(name)
        .trim()
        .is_length(min=1)
        .with_message(f"{label} must be specified.")
        .escape()
        .is_alphanumeric()
        .with_message(f"{label} must be alphanumeric characters only.")
        .is_length(max=NAME_MAX_LENGTH)
        .with_message(f"{label} must be at most {NAME_MAX_LENGTH} characters.")
    )


def _required_text(name: str, message: str) -> FieldChain:
    return body(name).trim().not_empty().with_message(message).escape()


author_form = FormValidator(
    _person_name("first_name", "First name"),
    _person_name("family_name", "Family name"),
    body("date_of_birth", "Invalid date of birth").optional().is_iso8601().to_date(date_only=True),
    body("date_of_death", "Invalid date of death").optional().is_iso8601().to_date(date_only=True),
)

book_form = FormValidator(
    _required_text("title", "Title must not be empty."),
    _required_text("author", "Author must not be empty."),
    _required_text("summary", "Summary must not be empty."),
    _required_text("isbn", "ISBN must not be empty"),
    body("genre").to_list().escape(),
)

genre_form = FormValidator(
    body("name")
    .trim()
    .is_length(min=3, max=NAME_MAX_LENGTH)
    .with_message("Genre name must contain at least 3 characters")
    .escape(),
)

# Used for both create and update
book_instance_form = FormValidator(
    _required_text("book", "Book must be specified"),
    _required_text("imprint", "Imprint must be specified."),
    body("status").escape().optional().is_in(BookInstanceStatus.values()).with_message("Invalid status"),
    body("due_back", "Invalid date").optional().is_iso8601().to_date(),
)
