"""Lenient timestamp parsing for scheduler exports."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timezone
from typing import Any

from dateutil.parser import isoparse, parse as parse_loose
from openpyxl.utils.datetime import from_excel

_NUMERIC_DATE = re.compile(
    r"^(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{2,4})"
    r"(?:\s+(\d{1,2}):(\d{2})(?::(\d{2})(?:\.(\d{1,6}))?)?(?:\s*([AaPp][Mm]))?)?$"
)

# Two defaults that differ in every date field; a loose parse must agree under
# both, otherwise part of the date was filled in rather than read.
_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _normalize_text(text: str) -> str:
    text = text.replace("\ufeff", "").replace("\u00a0", " ").replace(",", " ")
    return " ".join(text.split())


def _naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _from_typed(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return _naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time())
    if hasattr(value, "to_pydatetime"):
        converted = value.to_pydatetime()
        return _naive(converted) if isinstance(converted, datetime) else None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Excel serial day number from a cell without a date format.
        if value != value or value <= 0:
            return None
        try:
            converted = from_excel(value)
        except (ValueError, OverflowError):
            return None
        return converted if isinstance(converted, datetime) else None
    return None


def _from_iso(text: str) -> datetime | None:
    try:
        return _naive(isoparse(text))
    except (ValueError, OverflowError):
        return None


def _from_parts(year: str, month: str, day: str, match: re.Match) -> datetime | None:
    hour, minute, second, fraction, meridiem = match.group(4, 5, 6, 7, 8)
    full_year = int(year)
    if len(year) == 2:
        full_year += 2000
    hour_value = int(hour or 0)
    if meridiem:
        if not 1 <= hour_value <= 12:
            return None
        hour_value %= 12
        if meridiem.lower() == "pm":
            hour_value += 12
    try:
        return datetime(
            full_year,
            int(month),
            int(day),
            hour_value,
            int(minute or 0),
            int(second or 0),
            int((fraction or "0").ljust(6, "0")),
        )
    except ValueError:
        return None


def _from_day_first(text: str) -> datetime | None:
    match = _NUMERIC_DATE.match(text)
    if not match:
        return None
    day, month, year = match.group(1, 2, 3)
    return _from_parts(year, month, day, match)


def _from_month_first(text: str) -> datetime | None:
    match = _NUMERIC_DATE.match(text)
    if not match:
        return None
    month, day, year = match.group(1, 2, 3)
    return _from_parts(year, month, day, match)


def _from_free_text(text: str) -> datetime | None:
    try:
        first, second = (parse_loose(text, dayfirst=True, default=default) for default in _DEFAULTS)
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return _naive(first)


def parse_datetime(value: Any) -> datetime | None:
    """Parse a cell value into a naive datetime, or ``None`` when it is not one.

    Attempts run in a fixed order and the first success wins: an already-typed
    value, an ISO-8601 string, ``day/month/year [time] [AM|PM]``,
    ``month/day/year [time] [AM|PM]`` and finally a free-form reading such as
    ``Mar 15, 2024 10:30`` or ``2024/03/15``. Ambiguous strings such as
    ``03/04/2024`` therefore always read day-first. A free-form string must
    name a full date; a bare time or month is rejected.
    """

    if value is None:
        return None

    typed = _from_typed(value)
    if typed is not None or not isinstance(value, str):
        return typed

    raw = value.replace("\ufeff", "").strip()
    if not raw:
        return None
    # ISO allows a comma before the fraction, so try it before commas go.
    parsed = _from_iso(raw)
    if parsed is not None:
        return parsed

    text = _normalize_text(value)
    if not text:
        return None

    for attempt in (_from_iso, _from_day_first, _from_month_first, _from_free_text):
        parsed = attempt(text)
        if parsed is not None:
            return parsed
    return None
