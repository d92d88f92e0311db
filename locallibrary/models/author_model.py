"""Author models."""
from datetime import date
from typing import ClassVar, Optional, Type
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from locallibrary.utils.validation import FormRules, OptionalDate, Required, Sanitized, SubmittedForm


class Author(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    first_name: str
    family_name: str
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def name(self) -> str:
        """Full name as "family_name, first_name", blank if either is missing."""
        if not (self.first_name and self.family_name):
            return ""
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self) -> str:
        birth = self.date_of_birth.isoformat() if self.date_of_birth else ""
        death = self.date_of_death.isoformat() if self.date_of_death else ""
        return f"{birth} - {death}"

    @property
    def path(self) -> str:
        return f"/authors/{self.id}"


class AuthorRules(FormRules):
    first_name: Required
    family_name: Required
    date_of_birth: OptionalDate = None
    date_of_death: OptionalDate = None

    messages = {
        "first_name": "First name must be specified.",
        "family_name": "Family name must be specified.",
        "date_of_birth": "Invalid date of birth",
        "date_of_death": "Invalid date of death",
    }


class AuthorForm(SubmittedForm):
    """Author fields as submitted from the form."""
    first_name: Sanitized = ""
    family_name: Sanitized = ""
    date_of_birth: Sanitized = ""
    date_of_death: Sanitized = ""

    rules: ClassVar[Type[FormRules]] = AuthorRules
