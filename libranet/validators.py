import re
from datetime import date
from typing import Optional, Union

from libranet.errors import InvalidDate

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


class DateValidator:
    """Strict YYYY-MM-DD calendar date parsing.

    ``date.fromisoformat`` alone is too lenient on newer interpreters (it also
    takes ``20240101`` and week dates), so the shape is checked first.
    """

    @staticmethod
    def normalize_date(raw: Optional[str]) -> str:
        if raw is None:
            return ""
        return raw.strip()

    @staticmethod
    def is_valid_date(raw: Optional[str]) -> bool:
        try:
            DateValidator.parse_date(raw)
        except InvalidDate:
            return False
        return True

    @staticmethod
    def parse_date(raw: Optional[str]) -> date:
        s = DateValidator.normalize_date(raw)
        match = _ISO_DATE.match(s)
        if not match:
            raise InvalidDate(s)
        year, month, day = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError as e:
            # e.g. 2024-02-30
            raise InvalidDate(s) from e


class NumberValidator:
    """Checks for the kind-specific numbers carried by catalog items."""

    @staticmethod
    def require_positive_int(name: str, value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
        return value

    @staticmethod
    def require_positive_number(name: str, value: Union[int, float]) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{name} must be a number, got {value!r}")
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
        return float(value)
