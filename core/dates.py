"""Date and time helpers shared by validators and payload assembly."""

from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Any, Final

_ISO_DATE_RE: Final[re.Pattern[str]] = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")
_DISPLAY_DATE_RE: Final[re.Pattern[str]] = re.compile(r"^([0-9]{1,2})\s*/\s*([0-9]{1,2})\s*/\s*([0-9]{4})$")
_TIME_24H_RE: Final[re.Pattern[str]] = re.compile(r"^([0-9]{1,2}):([0-9]{2})(?::([0-9]{2}))?$")
_TIME_12H_RE: Final[re.Pattern[str]] = re.compile(r"^([0-9]{1,2}):([0-9]{2})\s*([AaPp][Mm])$")


def _build_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_iso_date(value: str | None) -> date | None:
    """Parse a strict local ``YYYY-MM-DD`` string, rejecting impossible dates."""

    if not isinstance(value, str):
        return None
    match = _ISO_DATE_RE.match(value.strip())
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    return _build_date(year, month, day)


def coerce_date(value: Any) -> date | None:
    """Return a ``date`` for ``value`` or ``None`` when it cannot be read.

    Accepts ``date``/``datetime`` objects, ISO ``YYYY-MM-DD`` strings and the
    ``DD / MM / YYYY`` labels shown next to date pickers.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    candidate = value.strip()
    if not candidate:
        return None
    parsed = parse_iso_date(candidate)
    if parsed is not None:
        return parsed
    match = _DISPLAY_DATE_RE.match(candidate)
    if match:
        day, month, year = (int(part) for part in match.groups())
        return _build_date(year, month, day)
    return None


def coerce_time(value: Any) -> time | None:
    """Return a ``time`` for ``value`` (``time``, ``datetime``, ``HH:MM`` or ``h:MM AM``)."""

    if isinstance(value, datetime):
        return value.time().replace(microsecond=0)
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        return None
    candidate = value.strip()
    match = _TIME_12H_RE.match(candidate)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        if not 1 <= hours <= 12 or minutes > 59:
            return None
        hours = hours % 12
        if match.group(3).lower() == "pm":
            hours += 12
        return time(hours, minutes)
    match = _TIME_24H_RE.match(candidate)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        seconds = int(match.group(3) or 0)
        try:
            return time(hours, minutes, seconds)
        except ValueError:
            return None
    return None


def to_iso_date(value: Any) -> str | None:
    """Return ``value`` formatted as ``YYYY-MM-DD`` or ``None``."""

    parsed = coerce_date(value)
    return parsed.isoformat() if parsed is not None else None


def combine_iso_datetime(day: Any, moment: Any) -> str | None:
    """Return an ISO timestamp for ``moment`` on ``day``."""

    parsed_day = coerce_date(day)
    parsed_time = coerce_time(moment)
    if parsed_day is None or parsed_time is None:
        return None
    return datetime.combine(parsed_day, parsed_time).isoformat()


def format_date_label(value: date) -> str:
    """Return the ``DD / MM / YYYY`` label used next to date pickers."""

    return f"{value.day:02d} / {value.month:02d} / {value.year}"


def format_time_label(value: time) -> str:
    """Return a 12-hour clock label such as ``9:05 PM``."""

    suffix = "PM" if value.hour >= 12 else "AM"
    hours = value.hour % 12 or 12
    return f"{hours}:{value.minute:02d} {suffix}"


def compute_age(born: date, today: date) -> int:
    """Return the age in full years on ``today``."""

    had_birthday = (today.month, today.day) >= (born.month, born.day)
    return today.year - born.year - (0 if had_birthday else 1)


__all__ = [
    "coerce_date",
    "coerce_time",
    "combine_iso_datetime",
    "compute_age",
    "format_date_label",
    "format_time_label",
    "parse_iso_date",
    "to_iso_date",
]
