"""Record models for the catalog collections.

Each collection is described by a ``Schema`` wrapping a pydantic model.
A single generic function, ``validate_record``, checks a candidate record
against any schema and reports every violated field at once.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Annotated, Any, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, BeforeValidator, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from utils.validators import IDENTIFIER_PATTERN, DateValidator


class ValidationError(ValueError):
    """Raised when a record violates its schema.

    ``errors`` maps every offending field to a message, in schema order.
    """

    def __init__(self, schema_name: str, errors: Dict[str, str]) -> None:
        self.schema_name = schema_name
        self.errors = dict(errors)
        details = "; ".join(f"{name}: {message}" for name, message in self.errors.items())
        super().__init__(f"{schema_name} validation failed: {details}")

    @property
    def fields(self) -> List[str]:
        return list(self.errors)


def _iso_date(value: Any) -> date:
    parsed = DateValidator.parse_date(value)
    if parsed is None:
        raise ValueError("must be a valid date (YYYY-MM-DD)")
    return parsed


IsoDate = Annotated[date, BeforeValidator(_iso_date)]
RequiredText = Annotated[StrictStr, Field(min_length=1)]
Name = Annotated[StrictStr, Field(min_length=1, max_length=100)]
Identifier = Annotated[StrictStr, Field(pattern=IDENTIFIER_PATTERN)]


class AuthorRecord(BaseModel):
    first_name: Name
    family_name: Name
    date_of_birth: Optional[IsoDate] = None
    date_of_death: Optional[IsoDate] = None


class BookRecord(BaseModel):
    title: RequiredText
    author: Identifier
    summary: RequiredText
    isbn: RequiredText
    genre: Optional[List[Identifier]] = Field(default_factory=list)


@dataclass(frozen=True)
class Schema:
    name: str
    collection: str
    url_prefix: str
    model: Type[BaseModel]
    # field name -> referenced record kind
    references: Dict[str, str] = field(default_factory=dict)

    @property
    def field_names(self) -> List[str]:
        return list(self.model.model_fields)


def _message(schema: Schema, error: Dict[str, Any]) -> str:
    """Turn one pydantic error into a short, field-level message."""
    kind = error["type"]
    ctx = error.get("ctx") or {}
    name = error["loc"][0]
    in_list = len(error["loc"]) > 1

    if kind == "missing" or (not in_list and error.get("input") is None):
        return "is required"
    ref = schema.references.get(name)
    if ref:
        if kind == "list_type":
            return f"must be a list of {ref} identifiers"
        if in_list:
            return f"must contain only valid {ref} identifiers"
        return f"must be a valid {ref} identifier"
    if kind == "string_too_short":
        return "is required" if error.get("input") == "" else f"must be at least {ctx['min_length']} characters"
    if kind == "string_too_long":
        return f"must be at most {ctx['max_length']} characters"
    if kind == "string_type":
        return "must be text"
    if kind == "value_error":
        return str(ctx.get("error", error["msg"]))
    if kind.startswith("date"):
        return "must be a valid date (YYYY-MM-DD)"
    return error["msg"]


def validate_record(schema: Schema, record: Mapping[str, Any]) -> Mapping[str, Any]:
    """Check ``record`` against ``schema`` and return it unchanged.

    Undeclared keys are ignored. Raises ``ValidationError`` listing every
    violated field when any check fails.
    """
    try:
        schema.model.model_validate(dict(record))
    except PydanticValidationError as e:
        found: Dict[str, str] = {}
        for error in e.errors():
            name = error["loc"][0]
            found.setdefault(name, _message(schema, error))
        errors = {name: found[name] for name in schema.field_names if name in found}
        raise ValidationError(schema.name, errors) from e
    return record


AUTHOR_SCHEMA = Schema(
    name="Author",
    collection="authors",
    url_prefix="/catalog/author/",
    model=AuthorRecord,
)

BOOK_SCHEMA = Schema(
    name="Book",
    collection="books",
    url_prefix="/catalog/book/",
    model=BookRecord,
    references={"author": "Author", "genre": "Genre"},
)
