"""
Date Utilities

Canonical dates are `YYYY-MM-DD` strings built from explicit year, month and
day integers. Nothing in this module goes through a timezone-aware
conversion: a string is split into its three integer components and rebuilt,
so a date never moves by a day because of a UTC offset or a DST change.

Display dates are the long localized form (day, full month name, year).
"""

import re
from datetime import date, datetime
from typing import Optional, Union

from finance_tracker.scheduling.errors import ContractViolationError, InvalidDateError


DateLike = Union[str, date]

DEFAULT_LOCALE = "pt-BR"

# Optional time component is accepted and dropped as-is.
_CANONICAL_PATTERN = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ]\S*)?\s*$")

MONTH_NAMES: dict[str, tuple[str, ...]] = {
    "pt-BR": (
        "janeiro", "fevereiro", "março", "abril", "maio", "junho",
        "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
    ),
    "en-US": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}

_DISPLAY_PATTERNS = {
    "pt-BR": re.compile(r"^\s*(?P<day>\d{1,2}) de (?P<month>\w+) de (?P<year>\d{1,4})\s*$", re.IGNORECASE),
    "en-US": re.compile(r"^\s*(?P<month>\w+) (?P<day>\d{1,2}), (?P<year>\d{1,4})\s*$", re.IGNORECASE),
}


def _month_names(locale: str) -> tuple[str, ...]:
    try:
        return MONTH_NAMES[locale]
    except KeyError:
        raise ContractViolationError(
            f"Unsupported locale: {locale}. Supported: {sorted(MONTH_NAMES)}"
        ) from None


def _build_date(year: int, month: int, day: int, source: object) -> date:
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateError(f"Impossible date {source!r}: {e}") from e


def parse_date(value: DateLike) -> date:
    """
    Read a calendar date.

    Accepts a `date` (a `datetime` keeps its own calendar fields, no
    conversion) or a `YYYY-MM-DD` string, with or without zero padding and
    with an optional trailing time component.

    Raises:
        InvalidDateError: If the value is not a well-formed, existing date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(
            f"Expected a date or a YYYY-MM-DD string, got {type(value).__name__}"
        )

    match = _CANONICAL_PATTERN.match(value)
    if not match:
        raise InvalidDateError(f"Malformed date: {value!r}")

    year, month, day = (int(part) for part in match.groups())
    return _build_date(year, month, day, value)


def local_date(value: Optional[DateLike] = None) -> str:
    """
    Canonical `YYYY-MM-DD` string for a calendar day.

    With no argument, returns today's local date.
    """
    if value is None:
        return date.today().isoformat()
    return parse_date(value).isoformat()


def format_date(value: DateLike, locale: str = DEFAULT_LOCALE) -> str:
    """
    Long-form display date, e.g. "10 de outubro de 2024" or "October 10, 2024".
    """
    names = _month_names(locale)
    d = parse_date(value)
    month = names[d.month - 1]

    if locale == "en-US":
        return f"{month} {d.day}, {d.year}"
    return f"{d.day} de {month} de {d.year}"


def parse_display_date(text: str, locale: str = DEFAULT_LOCALE) -> str:
    """Read a date produced by `format_date` back into its canonical form."""
    names = [name.lower() for name in _month_names(locale)]

    match = _DISPLAY_PATTERNS[locale].match(text)
    if not match:
        raise InvalidDateError(f"Unrecognized {locale} display date: {text!r}")

    month_name = match.group("month").lower()
    if month_name not in names:
        raise InvalidDateError(f"Unknown month name {month_name!r} in {text!r}")

    parsed = _build_date(
        int(match.group("year")),
        names.index(month_name) + 1,
        int(match.group("day")),
        text,
    )
    return parsed.isoformat()
