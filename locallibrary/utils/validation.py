"""Form validation and sanitization.

Submitted forms are immutable pydantic models whose text fields are trimmed
and escaped as the form is built. Each form names a ``FormRules`` model that
states what a persistable submission looks like (required text, ids, dates,
choices) with ordinary pydantic types. Checking a form validates its values
against those rules and turns any ``ValidationError`` into ``FieldError``
entries carrying the user-facing messages. The outcome is a
``ValidationResult``: the sanitized form (for re-rendering), the errors, and
the converted values that ``record()`` turns into a persist-ready model once
there are no errors left.
"""
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Annotated, Any, ClassVar, Dict, Generic, Iterable, List, Optional, Sequence, Tuple, Type, TypeVar, Union
from uuid import UUID

from markupsafe import escape
from pydantic import AfterValidator, BaseModel, BeforeValidator, StringConstraints, ValidationError
from pydantic_core import PydanticCustomError

FormT = TypeVar("FormT", bound="SubmittedForm")
ModelT = TypeVar("ModelT", bound=BaseModel)

# Error types meaning "nothing was submitted" rather than "submitted but malformed".
REQUIRED_ERRORS = {"missing", "required", "string_too_short"}


class FieldError(BaseModel):
    param: str
    msg: str
    value: str = ""

    model_config = {"frozen": True}


class FormInvalid(ValueError):
    """Raised when building a record from a form that failed validation."""

    def __init__(self, errors: Sequence[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(error.msg for error in self.errors))


def sanitize(value: Optional[str]) -> str:
    """Trim surrounding whitespace and escape markup."""
    if value is None:
        return ""
    return str(escape(str(value).strip()))


def as_list(value: Union[None, str, Iterable[str]]) -> List[str]:
    """Coerce a multi-valued form field into a list.

    Absent becomes empty, a lone scalar becomes a one-element list.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def sanitize_all(value: Union[None, str, Iterable[str]]) -> Tuple[str, ...]:
    """Sanitize every value of a multi-valued field, dropping blanks."""
    return tuple(item for item in map(sanitize, as_list(value)) if item)


def require_value(value: Any) -> Any:
    if not value:
        raise PydanticCustomError("required", "Value required")
    return value


def blank_to_none(value: Any) -> Any:
    return value or None


def unique(values: List[UUID]) -> List[UUID]:
    return list(dict.fromkeys(values))


# Field types for submitted forms.
Sanitized = Annotated[str, BeforeValidator(sanitize)]
SanitizedList = Annotated[Tuple[str, ...], BeforeValidator(sanitize_all)]

# Field types for form rules. Values reaching them are already sanitized.
Required = Annotated[str, StringConstraints(min_length=1)]
RequiredId = Annotated[UUID, BeforeValidator(require_value)]
IdList = Annotated[List[UUID], AfterValidator(unique)]
OptionalDate = Annotated[Optional[date], BeforeValidator(blank_to_none)]


@dataclass(frozen=True)
class ValidationResult(Generic[FormT]):
    form: FormT
    errors: List[FieldError] = field(default_factory=list)
    values: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> List[str]:
        return [error.msg for error in self.errors]

    def with_errors(self, errors: Iterable[FieldError]) -> "ValidationResult[FormT]":
        return replace(self, errors=[*self.errors, *errors])

    def record(self, model: Type[ModelT], **overrides: Any) -> ModelT:
        """Build the persist-ready model. Refuses when validation failed."""
        if self.errors:
            raise FormInvalid(self.errors)
        return model(**{**self.values, **overrides})


class FormRules(BaseModel):
    """The converted values of a valid submission.

    Fields are declared under their record names and aliased to the form's
    parameter names. ``messages`` holds the message for each parameter;
    ``invalid`` overrides it when a value was given but could not be parsed.
    """

    messages: ClassVar[Dict[str, str]] = {}
    invalid: ClassVar[Dict[str, str]] = {}

    @classmethod
    def field_errors(cls, exc: ValidationError) -> List[FieldError]:
        errors = []
        for error in exc.errors():
            param = str(error["loc"][0])
            if error["type"] in REQUIRED_ERRORS:
                msg = cls.messages[param]
            else:
                msg = cls.invalid.get(param, cls.messages[param])
            value = error.get("input", "")
            errors.append(FieldError(param=param, msg=msg, value="" if value is None else str(value)))
        return errors

    @classmethod
    def apply(cls, form: FormT) -> ValidationResult[FormT]:
        try:
            checked = cls.model_validate(form.model_dump())
        except ValidationError as exc:
            return ValidationResult(form=form, errors=cls.field_errors(exc))
        return ValidationResult(form=form, values=checked.model_dump())


class SubmittedForm(BaseModel):
    """Base for the fields of a submitted HTML form."""

    rules: ClassVar[Type[FormRules]]

    model_config = {"frozen": True}

    def check(self: FormT) -> ValidationResult[FormT]:
        return self.rules.apply(self)
