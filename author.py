from __future__ import annotations

from datetime import date

import virtuals
from schemas import AUTHOR_SCHEMA
from utils.validators import DateValidator


class Author:
    """An author record from the catalog."""

    schema = AUTHOR_SCHEMA

    def __init__(self, first_name: str, family_name: str, date_of_birth: date | str | None = None,
                 date_of_death: date | str | None = None, id: str | None = None) -> None:
        self.id = id
        self.first_name = first_name
        self.family_name = family_name
        self.date_of_birth = DateValidator.parse_date(date_of_birth)
        self.date_of_death = DateValidator.parse_date(date_of_death)

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.name} ({self.lifespan})"

    def __repr__(self) -> str:
        return f"Author(id={self.id!r}, name={self.name!r})"

    @property
    def name(self) -> str:
        return virtuals.full_name(self)

    @property
    def lifespan(self) -> str:
        return virtuals.lifespan(self)

    @property
    def url(self) -> str:
        return virtuals.entity_url(self)

    @property
    def date_of_birth_yyyy_mm_dd(self) -> str:
        return virtuals.iso_date(self.date_of_birth)

    @property
    def date_of_death_yyyy_mm_dd(self) -> str:
        return virtuals.iso_date(self.date_of_death)

    def to_dict(self) -> dict:
        return {
            "first_name": self.first_name,
            "family_name": self.family_name,
            "date_of_birth": self.date_of_birth,
            "date_of_death": self.date_of_death,
        }

    @staticmethod
    def from_dict(data: dict, id: str | None = None) -> "Author":
        return Author(
            first_name=data["first_name"],
            family_name=data["family_name"],
            date_of_birth=data.get("date_of_birth"),
            date_of_death=data.get("date_of_death"),
            id=id or data.get("id"),
        )
