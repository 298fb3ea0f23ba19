"""Date normalization for key dates."""

import re
from datetime import date, datetime

from .models import DateKind, KeyDate, NormalizedDate

ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def parse_iso_date(value: str) -> date | None:
    """Parse a strict YYYY-MM-DD calendar date."""
    if not ISO_DATE.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def normalize(raw: KeyDate) -> NormalizedDate | None:
    """Reduce either KeyDate variant to a (label, date, kind) triple.

    Returns None when no real calendar date can be found. Never raises on
    malformed input.
    """
    match raw.variant:
        case "structured":
            day = parse_iso_date(raw.date)
            if day is None:
                return None
            return NormalizedDate(label=raw.label, date=day, kind=raw.kind)
        case "legacy":
            found = ISO_DATE.search(raw.text)
            if not found:
                return None
            day = parse_iso_date(found.group())
            if day is None:
                return None
            return NormalizedDate(label=raw.text, date=day, kind=DateKind.DEADLINE)
    return None


def days_between(as_of: date | datetime, day: date | datetime) -> int:
    """Whole calendar days from ``as_of`` to ``day`` (negative if past)."""
    if isinstance(as_of, datetime):
        as_of = as_of.date()
    if isinstance(day, datetime):
        day = day.date()
    return (day - as_of).days
