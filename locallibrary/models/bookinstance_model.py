"""Book copy models."""
from datetime import date
from enum import Enum
from typing import Annotated, ClassVar, Optional, Type
from uuid import UUID, uuid4

from pydantic import BaseModel, BeforeValidator, Field

from locallibrary.models.book_model import Book
from locallibrary.utils.validation import (
    FormRules,
    OptionalDate,
    Required,
    RequiredId,
    Sanitized,
    SubmittedForm,
)


class BookInstanceStatus(str, Enum):
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


STATUS_CHOICES = [status.value for status in BookInstanceStatus]


class BookInstance(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    book_id: Optional[UUID] = None
    imprint: str
    status: BookInstanceStatus = BookInstanceStatus.MAINTENANCE
    due_back: Optional[date] = None

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def due_back_formatted(self) -> str:
        if self.due_back is None:
            return ""
        return f"{self.due_back:%b} {self.due_back.day}, {self.due_back.year}"

    @property
    def path(self) -> str:
        return f"/bookinstances/{self.id}"


class BookInstanceView(BaseModel):
    """A copy with its book resolved."""
    instance: BookInstance
    book: Optional[Book] = None

    model_config = {"frozen": True}

    @property
    def path(self) -> str:
        return self.instance.path

    @property
    def title(self) -> str:
        return self.book.title if self.book else ""


def default_status(value: str) -> str:
    return value or BookInstanceStatus.MAINTENANCE.value


class BookInstanceRules(FormRules):
    book_id: RequiredId = Field(alias="book")
    imprint: Required
    status: Annotated[BookInstanceStatus, BeforeValidator(default_status)]
    due_back: OptionalDate = None

    messages = {
        "book": "Book must be specified",
        "imprint": "Imprint must be specified",
        "status": "Invalid status",
        "due_back": "Invalid date",
    }
    invalid = {"book": "Invalid book"}


class BookInstanceForm(SubmittedForm):
    book: Sanitized = ""
    imprint: Sanitized = ""
    status: Sanitized = ""
    due_back: Sanitized = ""

    rules: ClassVar[Type[FormRules]] = BookInstanceRules
