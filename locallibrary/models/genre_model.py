"""Genre models."""
from typing import ClassVar, Type
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from locallibrary.utils.validation import FormRules, Required, Sanitized, SubmittedForm


class Genre(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def path(self) -> str:
        return f"/genres/{self.id}"


class GenreRules(FormRules):
    name: Required

    messages = {"name": "Genre name required"}


class GenreForm(SubmittedForm):
    name: Sanitized = ""

    rules: ClassVar[Type[FormRules]] = GenreRules
