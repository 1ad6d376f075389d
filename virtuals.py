"""Derived display fields, computed on read and never stored.

Every function takes the entity it describes as an explicit argument.
"""

from datetime import date
from typing import Any, Optional

from utils.validators import DateValidator


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_long_date(value: Any) -> str:
    """Format a date as e.g. ``March 3rd, 1920``; empty string when absent."""
    parsed: Optional[date] = DateValidator.parse_date(value)
    if parsed is None:
        return ""
    return f"{parsed.strftime('%B')} {_ordinal(parsed.day)}, {parsed.year}"


def iso_date(value: Any) -> str:
    parsed = DateValidator.parse_date(value)
    return parsed.isoformat() if parsed else ""


def full_name(author) -> str:
    return author.family_name + ", " + author.first_name


def lifespan(author) -> str:
    text = ""
    if author.date_of_birth:
        text = format_long_date(author.date_of_birth)
    text += " - "
    if author.date_of_death:
        text += format_long_date(author.date_of_death)
    return text


def entity_url(entity) -> str:
    if not entity.id:
        raise ValueError(f"{type(entity).__name__} has no identifier yet")
    return entity.schema.url_prefix + entity.id
