"""Unit tests for key date normalization."""

from datetime import date, datetime

import pytest

from fitin.domain.dates import days_between, normalize, parse_iso_date
from fitin.domain.models import DateKind, LegacyKeyDate, NormalizedDate, StructuredKeyDate


class TestStructuredKeyDates:
    """Tests for the structured variant."""

    @pytest.mark.parametrize("kind", list(DateKind))
    def test_valid_date_passes_through(self, kind: DateKind) -> None:
        raw = StructuredKeyDate(label="Rinnovo", date="2025-02-01", kind=kind)
        assert normalize(raw) == NormalizedDate(
            label="Rinnovo", date=date(2025, 2, 1), kind=kind
        )

    @pytest.mark.parametrize(
        "value",
        ["2025-13-01", "2025-02-30", "2025/02/01", "2025-2-1", "20250201", "", "soon"],
    )
    def test_invalid_date_is_none(self, value: str) -> None:
        assert normalize(StructuredKeyDate(label="x", date=value)) is None

    def test_leap_day(self) -> None:
        assert normalize(StructuredKeyDate(label="x", date="2024-02-29")) is not None
        assert normalize(StructuredKeyDate(label="x", date="2025-02-29")) is None


class TestLegacyKeyDates:
    """Tests for the legacy free-text variant."""

    def test_embedded_iso_date(self) -> None:
        result = normalize(LegacyKeyDate(text="Scadenza permesso 2025-03-15"))
        assert result == NormalizedDate(
            label="Scadenza permesso 2025-03-15",
            date=date(2025, 3, 15),
            kind=DateKind.DEADLINE,
        )

    def test_no_date(self) -> None:
        assert normalize(LegacyKeyDate(text="no date here")) is None

    def test_empty_string(self) -> None:
        assert normalize(LegacyKeyDate(text="")) is None

    def test_non_iso_separators(self) -> None:
        assert normalize(LegacyKeyDate(text="Scadenza 15/03/2025")) is None

    def test_invalid_embedded_date(self) -> None:
        assert normalize(LegacyKeyDate(text="Scadenza 2025-13-45")) is None

    def test_first_match_wins(self) -> None:
        result = normalize(LegacyKeyDate(text="from 2025-01-10 to 2025-02-10"))
        assert result is not None
        assert result.date == date(2025, 1, 10)


class TestDeterminism:
    def test_same_input_same_output(self) -> None:
        for raw in (
            StructuredKeyDate(label="Visita", date="2025-05-05", kind=DateKind.APPOINTMENT),
            LegacyKeyDate(text="Entro il 2025-05-05"),
            LegacyKeyDate(text="mai"),
        ):
            assert normalize(raw) == normalize(raw)


class TestParseIsoDate:
    def test_valid(self) -> None:
        assert parse_iso_date("2025-01-31") == date(2025, 1, 31)

    def test_rejects_datetime_suffix(self) -> None:
        assert parse_iso_date("2025-01-31T10:00:00") is None


class TestDaysBetween:
    def test_future(self) -> None:
        assert days_between(date(2025, 1, 1), date(2025, 3, 2)) == 60

    def test_past(self) -> None:
        assert days_between(date(2025, 1, 1), date(2024, 12, 31)) == -1

    def test_ignores_time_of_day(self) -> None:
        as_of = datetime(2025, 1, 1, 23, 59)
        assert days_between(as_of, date(2025, 1, 2)) == 1
        assert days_between(as_of, date(2025, 1, 1)) == 0
