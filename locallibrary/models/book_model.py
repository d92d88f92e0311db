"""Book models."""
from typing import ClassVar, List, Optional, Type
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from locallibrary.models.author_model import Author
from locallibrary.models.genre_model import Genre
from locallibrary.utils.validation import (
    FormRules,
    IdList,
    Required,
    RequiredId,
    Sanitized,
    SanitizedList,
    SubmittedForm,
)


class Book(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    title: str
    summary: str
    isbn: str
    author_id: Optional[UUID] = None
    genre_ids: List[UUID] = Field(default_factory=list)

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def path(self) -> str:
        return f"/books/{self.id}"


class BookView(BaseModel):
    """A book with its author and genres resolved."""
    book: Book
    author: Optional[Author] = None
    genres: List[Genre] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def id(self) -> UUID:
        return self.book.id

    @property
    def title(self) -> str:
        return self.book.title

    @property
    def path(self) -> str:
        return self.book.path


class BookRules(FormRules):
    title: Required
    author_id: RequiredId = Field(alias="author")
    summary: Required
    isbn: Required
    genre_ids: IdList = Field(default_factory=list, alias="genre")

    messages = {
        "title": "Title must not be empty.",
        "author": "Author must not be empty.",
        "summary": "Summary must not be empty.",
        "isbn": "ISBN must not be empty",
        "genre": "Invalid genre",
    }
    invalid = {"author": "Invalid author"}


class BookForm(SubmittedForm):
    """Book fields as submitted from the form.

    ``author`` and ``genre`` hold ids as strings; ``genre`` may repeat.
    """
    title: Sanitized = ""
    author: Sanitized = ""
    summary: Sanitized = ""
    isbn: Sanitized = ""
    genre: SanitizedList = ()

    rules: ClassVar[Type[FormRules]] = BookRules

    @classmethod
    def from_record(cls, book: Book) -> "BookForm":
        # Stored text is already escaped.
        return cls.model_construct(
            title=book.title,
            author=str(book.author_id) if book.author_id else "",
            summary=book.summary,
            isbn=book.isbn,
            genre=tuple(str(genre_id) for genre_id in book.genre_ids),
        )
