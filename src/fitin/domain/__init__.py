"""Domain layer - core business logic."""

from .categories import Category, classify, group_by_category
from .dates import normalize
from .deadlines import upcoming_deadlines
from .models import (
    Analysis,
    DateKind,
    Deadline,
    Document,
    LegacyKeyDate,
    NormalizedDate,
    StepStatus,
    StructuredKeyDate,
    TimelineStep,
    Urgency,
)

__all__ = [
    "Analysis",
    "Category",
    "DateKind",
    "Deadline",
    "Document",
    "LegacyKeyDate",
    "NormalizedDate",
    "StepStatus",
    "StructuredKeyDate",
    "TimelineStep",
    "Urgency",
    "classify",
    "group_by_category",
    "normalize",
    "upcoming_deadlines",
]
