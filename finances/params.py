# finances/params.py
"""
Helpers for raw request values (query strings, path segments).

Public API:
- parse_id(raw, label) -> int        # "12" -> 12, "abc" -> InvalidInputError
- parse_year(raw) -> int             # "2025" -> 2025
- parse_month(raw) -> str            # trims, rejects empty
"""

from __future__ import annotations

from typing import Optional, Union

from finances.errors import InvalidInputError

__all__ = ["parse_id", "parse_year", "parse_month"]

MIN_YEAR = 1
MAX_YEAR = 9999


def parse_id(raw: Union[str, int, None], label: str = "ID") -> int:
    """Convert a path id to a positive int."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    else:
        text = (raw or "").strip()
        if not text.isdigit():
            raise InvalidInputError(f"Invalid {label}")
        value = int(text)
    if value < 1:
        raise InvalidInputError(f"Invalid {label}")
    return value


def parse_year(raw: Union[str, int, None]) -> int:
    """Year must be a whole number between 1 and 9999."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        year = raw
    else:
        text = (raw or "").strip()
        try:
            year = int(text)
        except ValueError:
            raise InvalidInputError("Year must be a valid number") from None
    if year < MIN_YEAR or year > MAX_YEAR:
        raise InvalidInputError("Year must be between 1 and 9999")
    return year


def parse_month(raw: Optional[str]) -> str:
    month = (raw or "").strip()
    if not month:
        raise InvalidInputError("Month is required")
    return month
