from datetime import date
from typing import Annotated

import pytest
from pydantic import BaseModel, Field, StrictStr

from database import new_id
from schemas import (
    AUTHOR_SCHEMA,
    BOOK_SCHEMA,
    Schema,
    ValidationError,
    validate_record,
)
from utils.validators import DateValidator


class TagRecord(BaseModel):
    label: Annotated[StrictStr, Field(min_length=3)]


def valid_book(**overrides):
    record = {
        "title": "The Left Hand of Darkness",
        "author": new_id(),
        "summary": "An envoy visits the planet Gethen.",
        "isbn": "9780441478125",
        "genre": [new_id()],
    }
    record.update(overrides)
    return record


@pytest.mark.parametrize("record", [
    {"first_name": "Ursula", "family_name": "Le Guin"},
    {"first_name": "Ursula", "family_name": "Le Guin", "date_of_birth": date(1929, 10, 21)},
    {"first_name": "Ursula", "family_name": "Le Guin",
     "date_of_birth": "1929-10-21", "date_of_death": "2018-01-22"},
    {"first_name": "A" * 100, "family_name": "B" * 100},
])
def test_valid_author_is_returned_unchanged(record):
    snapshot = dict(record)
    assert validate_record(AUTHOR_SCHEMA, record) == snapshot


def test_missing_names_are_all_reported():
    with pytest.raises(ValidationError) as excinfo:
        validate_record(AUTHOR_SCHEMA, {})
    assert excinfo.value.fields == ["first_name", "family_name"]


def test_empty_string_counts_as_missing():
    with pytest.raises(ValidationError) as excinfo:
        validate_record(AUTHOR_SCHEMA, {"first_name": "", "family_name": "Le Guin"})
    assert excinfo.value.errors == {"first_name": "is required"}


def test_overlong_names_are_all_reported():
    record = {"first_name": "x" * 101, "family_name": "y" * 150}
    with pytest.raises(ValidationError) as excinfo:
        validate_record(AUTHOR_SCHEMA, record)
    assert set(excinfo.value.errors) == {"first_name", "family_name"}
    assert "at most 100" in excinfo.value.errors["first_name"]


def test_missing_and_overlong_reported_together():
    record = {"first_name": "x" * 101, "date_of_birth": "1920-02-30"}
    with pytest.raises(ValidationError) as excinfo:
        validate_record(AUTHOR_SCHEMA, record)
    assert excinfo.value.fields == ["first_name", "family_name", "date_of_birth"]


def test_non_text_name_rejected():
    with pytest.raises(ValidationError) as excinfo:
        validate_record(AUTHOR_SCHEMA, {"first_name": 42, "family_name": "Le Guin"})
    assert excinfo.value.errors["first_name"] == "must be text"


def test_death_before_birth_is_accepted():
    record = {"first_name": "Ursula", "family_name": "Le Guin",
              "date_of_birth": "2000-01-01", "date_of_death": "1900-01-01"}
    assert validate_record(AUTHOR_SCHEMA, record) is record


def test_error_message_names_every_field():
    with pytest.raises(ValidationError, match="first_name: is required; family_name: is required"):
        validate_record(AUTHOR_SCHEMA, {})


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        validate_record(BOOK_SCHEMA, {})


def test_book_missing_author_fails():
    record = valid_book()
    del record["author"]
    with pytest.raises(ValidationError) as excinfo:
        validate_record(BOOK_SCHEMA, record)
    assert excinfo.value.fields == ["author"]


def test_book_with_empty_genre_passes():
    record = valid_book(genre=[])
    assert validate_record(BOOK_SCHEMA, record) == record


def test_book_without_genre_passes():
    record = valid_book()
    del record["genre"]
    assert validate_record(BOOK_SCHEMA, record) == record


def test_book_reference_must_be_identifier():
    with pytest.raises(ValidationError) as excinfo:
        validate_record(BOOK_SCHEMA, valid_book(author="not-an-id", genre=["also-bad"]))
    assert excinfo.value.fields == ["author", "genre"]


def test_book_genre_must_be_a_list():
    with pytest.raises(ValidationError) as excinfo:
        validate_record(BOOK_SCHEMA, valid_book(genre=new_id()))
    assert "list" in excinfo.value.errors["genre"]


def test_unresolved_reference_is_not_checked():
    # Syntactically valid id of a record that does not exist
    assert validate_record(BOOK_SCHEMA, valid_book(author="0" * 32))


def test_undeclared_fields_are_ignored():
    record = valid_book(shelf="B4")
    assert validate_record(BOOK_SCHEMA, record)["shelf"] == "B4"


def test_min_length_constraint():
    schema = Schema("Tag", "tags", "/tags/", TagRecord)
    with pytest.raises(ValidationError) as excinfo:
        validate_record(schema, {"label": "ab"})
    assert "at least 3" in excinfo.value.errors["label"]


def test_field_names_follow_model_order():
    assert AUTHOR_SCHEMA.field_names == ["first_name", "family_name", "date_of_birth", "date_of_death"]


@pytest.mark.parametrize("value", ["19200303", "1920-W10-3", " 1920-03-03 ", "1920-3-3", 19200303])
def test_only_iso_calendar_dates_are_accepted(value):
    record = {"first_name": "Ursula", "family_name": "Le Guin", "date_of_birth": value}
    with pytest.raises(ValidationError) as excinfo:
        validate_record(AUTHOR_SCHEMA, record)
    assert excinfo.value.errors == {"date_of_birth": "must be a valid date (YYYY-MM-DD)"}


def test_date_parser_rejects_other_iso_forms():
    assert DateValidator.parse_date("1920-03-03") == date(1920, 3, 3)
    assert DateValidator.parse_date("19200303") is None
    assert DateValidator.parse_date("1920-W10-3") is None
    assert DateValidator.parse_date(" 1920-03-03 ") is None
