"""Domain models.

Analysis and timeline data arrive from an LLM and are untrusted. The
``from_dict`` constructors are the ingress boundary: they coerce unknown enum
values to safe defaults and drop entries of the wrong type instead of raising.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, ClassVar


class DateKind(str, Enum):
    """What a key date means for the user."""

    DEADLINE = "deadline"
    APPOINTMENT = "appointment"
    EXPIRY = "expiry"

    @classmethod
    def coerce(cls, value: Any) -> "DateKind":
        try:
            return cls(value)
        except ValueError:
            return cls.DEADLINE


class StepStatus(str, Enum):
    """Progress of a procedural step."""

    DONE = "done"
    PENDING = "pending"
    URGENT = "urgent"

    @classmethod
    def coerce(cls, value: Any) -> "StepStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.PENDING


class Urgency(str, Enum):
    """Display band of an upcoming deadline."""

    CRITICAL = "critical"
    SOON = "soon"
    NORMAL = "normal"


@dataclass(frozen=True)
class StructuredKeyDate:
    """Key date as produced by the current analysis service."""

    variant: ClassVar[str] = "structured"

    label: str
    date: str  # YYYY-MM-DD, not yet validated
    kind: DateKind = DateKind.DEADLINE

    def to_dict(self) -> dict:
        return {"label": self.label, "date": self.date, "type": self.kind.value}


@dataclass(frozen=True)
class LegacyKeyDate:
    """Free-text key date from older analyses, e.g. "Scadenza 2025-03-15"."""

    variant: ClassVar[str] = "legacy"

    text: str

    def to_dict(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


KeyDate = StructuredKeyDate | LegacyKeyDate


def parse_key_date(raw: Any) -> KeyDate | None:
    """Build a KeyDate from one ``keyDates`` entry, or None if unusable."""
    if isinstance(raw, str):
        return LegacyKeyDate(text=raw)
    if isinstance(raw, dict):
        label = raw.get("label")
        value = raw.get("date")
        return StructuredKeyDate(
            label=label if isinstance(label, str) else "",
            date=value if isinstance(value, str) else "",
            kind=DateKind.coerce(raw.get("type", raw.get("kind"))),
        )
    return None


@dataclass(frozen=True)
class NormalizedDate:
    """Canonical form of any KeyDate that carries a real calendar date."""

    label: str
    date: date
    kind: DateKind


@dataclass(frozen=True)
class TimelineStep:
    """A procedural milestone within one document."""

    stage: str
    estimated_date: str  # Free text, e.g. "in 2 weeks"
    status: StepStatus = StepStatus.PENDING
    tip: str | None = None

    @property
    def is_open(self) -> bool:
        return self.status is not StepStatus.DONE

    @classmethod
    def from_dict(cls, data: Any) -> "TimelineStep | None":
        if not isinstance(data, dict):
            return None
        tip = data.get("tip")
        return cls(
            stage=_text(data.get("stage")),
            estimated_date=_text(data.get("estimatedDate")),
            status=StepStatus.coerce(data.get("status")),
            tip=tip if isinstance(tip, str) and tip else None,
        )

    def to_dict(self) -> dict:
        data = {
            "stage": self.stage,
            "estimatedDate": self.estimated_date,
            "status": self.status.value,
        }
        if self.tip:
            data["tip"] = self.tip
        return data


def parse_timeline(data: Any) -> list[TimelineStep]:
    """Parse ``{"steps": [...]}`` or a bare list of steps."""
    if isinstance(data, dict):
        data = data.get("steps")
    if not isinstance(data, list):
        return []
    steps = (TimelineStep.from_dict(item) for item in data)
    return [step for step in steps if step is not None]


@dataclass
class Analysis:
    """LLM classification of a document."""

    category: str = ""
    summary: str = ""
    key_dates: list[KeyDate] = field(default_factory=list)
    action_items: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Analysis | None":
        if not isinstance(data, dict):
            return None

        raw_dates = data.get("keyDates")
        key_dates = []
        if isinstance(raw_dates, list):
            for raw in raw_dates:
                key_date = parse_key_date(raw)
                if key_date is not None:
                    key_dates.append(key_date)

        raw_actions = data.get("actionItems")
        actions = []
        if isinstance(raw_actions, list):
            actions = [item for item in raw_actions if isinstance(item, str)]

        return cls(
            category=_text(data.get("category")),
            summary=_text(data.get("summary")),
            key_dates=key_dates,
            action_items=actions,
        )

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "summary": self.summary,
            "keyDates": [key_date.to_dict() for key_date in self.key_dates],
            "actionItems": list(self.action_items),
        }


@dataclass(frozen=True)
class Document:
    """A processed upload held in the vault."""

    id: str
    name: str
    type: str
    created_at: datetime
    updated_at: datetime
    ocr_text: str = ""
    timeline: list[TimelineStep] = field(default_factory=list)
    tips: str = ""
    analysis: Analysis | None = None

    @property
    def effective_category(self) -> str:
        """Analysis category if known, otherwise the declared type."""
        if self.analysis and self.analysis.category:
            return self.analysis.category
        return self.type

    @property
    def summary(self) -> str:
        return self.analysis.summary if self.analysis else ""

    @classmethod
    def from_dict(cls, data: dict) -> "Document":
        """Load a persisted record.

        Raises KeyError/ValueError/TypeError when identity or timestamps are
        missing or corrupt; the store skips such records.
        """
        return cls(
            id=str(data["id"]),
            name=_text(data.get("name")),
            type=_text(data.get("type")),
            created_at=_timestamp(data["createdAt"]),
            updated_at=_timestamp(data.get("updatedAt") or data["createdAt"]),
            ocr_text=_text(data.get("ocrText")),
            timeline=parse_timeline(data.get("timeline")),
            tips=_text(data.get("tips")),
            analysis=Analysis.from_dict(data.get("analysis")),
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "ocrText": self.ocr_text,
            "timeline": [step.to_dict() for step in self.timeline],
            "tips": self.tips,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
        if self.analysis is not None:
            data["analysis"] = self.analysis.to_dict()
        return data


@dataclass(frozen=True)
class Deadline:
    """An upcoming key date placed on the deadline axis."""

    label: str
    date: date
    kind: DateKind
    document_id: str
    document_name: str
    days_until: int
    urgency: Urgency
    position: float  # 0.0 = today, 1.0 = end of window


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _timestamp(value: str) -> datetime:
    """Parse an ISO timestamp; values without an offset are taken as UTC."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
