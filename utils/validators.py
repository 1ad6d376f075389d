import re
from datetime import date, datetime
from typing import Any, Optional

# Record identifiers issued by the document store (uuid4 hex)
IDENTIFIER_PATTERN = r"^[0-9a-f]{32}$"

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class DateValidator:
    """Accepts date objects and ISO ``YYYY-MM-DD`` strings only."""

    @staticmethod
    def parse_date(value: Any) -> Optional[date]:
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str) and _ISO_DATE_RE.fullmatch(value):
            try:
                return date.fromisoformat(value)
            except ValueError:
                return None
        return None

    @staticmethod
    def is_valid_date(value: Any) -> bool:
        return DateValidator.parse_date(value) is not None
