"""Aggregation of key dates into an ordered, windowed deadline view."""

from collections.abc import Iterable
from datetime import date, datetime

from .dates import days_between, normalize
from .models import Deadline, Document, Urgency

DEFAULT_WINDOW_DAYS = 60
CRITICAL_DAYS = 7
SOON_DAYS = 30


def urgency_for(
    days_until: int,
    critical_days: int = CRITICAL_DAYS,
    soon_days: int = SOON_DAYS,
) -> Urgency:
    if days_until < critical_days:
        return Urgency.CRITICAL
    if days_until < soon_days:
        return Urgency.SOON
    return Urgency.NORMAL


def axis_position(days_until: int, window_days: int = DEFAULT_WINDOW_DAYS) -> float:
    """Relative position on the [0, 1] deadline axis."""
    if window_days <= 0:
        return 0.0
    return min(max(days_until / window_days, 0.0), 1.0)


def upcoming_deadlines(
    docs: Iterable[Document],
    as_of: date | datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    critical_days: int = CRITICAL_DAYS,
    soon_days: int = SOON_DAYS,
) -> list[Deadline]:
    """Collect key dates falling within ``window_days`` of ``as_of``.

    Past dates and dates beyond the window are dropped, not clamped. The
    result is sorted by days remaining; ties keep document order, then
    key date order within a document.
    """
    found: list[Deadline] = []
    for doc in docs:
        if doc.analysis is None:
            continue
        for key_date in doc.analysis.key_dates:
            normalized = normalize(key_date)
            if normalized is None:
                continue
            days_until = days_between(as_of, normalized.date)
            if not 0 <= days_until <= window_days:
                continue
            found.append(
                Deadline(
                    label=normalized.label,
                    date=normalized.date,
                    kind=normalized.kind,
                    document_id=doc.id,
                    document_name=doc.name,
                    days_until=days_until,
                    urgency=urgency_for(days_until, critical_days, soon_days),
                    position=axis_position(days_until, window_days),
                )
            )

    # list.sort is stable
    found.sort(key=lambda deadline: deadline.days_until)
    return found
