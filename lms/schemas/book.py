# lms/schemas/book.py
from typing import Annotated, Literal, Optional, Union
from pydantic import AfterValidator, BaseModel, Field, TypeAdapter, model_validator

from lms.utils import validators


def _check_title(value: str) -> str:
    if not validators.is_not_blank(value):
        raise ValueError("Title must not be blank")
    return value.strip()

def _check_author(value: str) -> str:
    if not validators.is_not_blank(value):
        raise ValueError("Author must not be blank")
    return value.strip()

def _check_genre(value: str) -> str:
    if not validators.is_valid_genre(value):
        raise ValueError(f"Genre must be non-blank and at most {validators.MAX_GENRE_LENGTH} characters")
    return value.strip()

def _check_isbn(value: str) -> str:
    if not validators.is_valid_isbn(value):
        raise ValueError("ISBN must be 10 characters (last may be X) or 13 digits")
    return validators.normalize_isbn(value)


Title = Annotated[str, AfterValidator(_check_title)]
Author = Annotated[str, AfterValidator(_check_author)]
Genre = Annotated[str, AfterValidator(_check_genre)]
Isbn = Annotated[str, AfterValidator(_check_isbn)]
Copies = Annotated[int, Field(gt=0, strict=True)]


class BookBase(BaseModel):
    title: Title
    author: Author
    genre: Genre
    isbn: Isbn
    total_copies: Copies


class BookCreate(BookBase):
    available_copies: Optional[int] = None

    @model_validator(mode="after")
    def default_available_copies(self):
        if self.available_copies is None:
            self.available_copies = self.total_copies
        elif not 0 <= self.available_copies <= self.total_copies:
            raise ValueError("Available copies must be between 0 and the total number of copies")
        return self


class BookUpdate(BookBase):
    """Full replacement of a book's catalogue details.

    Available copies are not part of the update: they follow from the new
    total and the number of copies currently on loan.
    """
    pass


# Single-field updates. One model per settable field; the ``field`` literal
# is the discriminator, so an unknown field cannot be constructed.

class BookTitleUpdate(BaseModel):
    field: Literal["title"] = "title"
    value: Title


class BookAuthorUpdate(BaseModel):
    field: Literal["author"] = "author"
    value: Author


class BookGenreUpdate(BaseModel):
    field: Literal["genre"] = "genre"
    value: Genre


class BookIsbnUpdate(BaseModel):
    field: Literal["isbn"] = "isbn"
    value: Isbn


class BookTotalCopiesUpdate(BaseModel):
    field: Literal["total_copies"] = "total_copies"
    value: Copies


BookFieldUpdate = Annotated[
    Union[BookTitleUpdate, BookAuthorUpdate, BookGenreUpdate, BookIsbnUpdate, BookTotalCopiesUpdate],
    Field(discriminator="field"),
]

BOOK_UPDATABLE_FIELDS = ("title", "author", "genre", "isbn", "total_copies")

_book_field_update_adapter = TypeAdapter(BookFieldUpdate)


def parse_book_field_update(field: str, value) -> BookFieldUpdate:
    """Build the update variant for ``field``.

    Raises pydantic.ValidationError for an unknown field or a value of the
    wrong type.
    """
    return _book_field_update_adapter.validate_python({"field": field, "value": value})
