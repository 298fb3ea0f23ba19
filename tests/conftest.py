"""Shared test fixtures."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from fitin.adapters.storage import MemoryDocumentStore
from fitin.domain.models import (
    Analysis,
    DateKind,
    Document,
    LegacyKeyDate,
    StepStatus,
    StructuredKeyDate,
    TimelineStep,
)
from fitin.ports.analyzer import AnalyzerPort
from fitin.ports.storage import DocumentStore


def build_document(
    name: str = "Document",
    type: str = "",
    analysis: Analysis | None = None,
    timeline: list[TimelineStep] | None = None,
    doc_id: str | None = None,
) -> Document:
    """Build a document directly, bypassing any store."""
    created = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return Document(
        id=doc_id or name.lower().replace(" ", "-"),
        name=name,
        type=type,
        created_at=created,
        updated_at=created,
        timeline=timeline or [],
        analysis=analysis,
    )


@pytest.fixture
def make_document():
    """Factory for documents that do not go through a store."""
    return build_document


@pytest.fixture
def sample_analysis() -> Analysis:
    """Analysis of a residence permit receipt."""
    return Analysis(
        category="Residence Permit",
        summary="Receipt for a permesso di soggiorno renewal request.",
        key_dates=[
            StructuredKeyDate(label="Rinnovo", date="2025-02-01", kind=DateKind.EXPIRY),
            LegacyKeyDate(text="Appuntamento questura 2025-01-10"),
            LegacyKeyDate(text="entro 30 giorni"),
        ],
        action_items=["Bring four passport photos"],
    )


@pytest.fixture
def sample_timeline() -> list[TimelineStep]:
    return [
        TimelineStep(stage="Send kit postale", estimated_date="done", status=StepStatus.DONE),
        TimelineStep(
            stage="Fingerprinting",
            estimated_date="in 2 weeks",
            status=StepStatus.URGENT,
            tip="Arrive early",
        ),
        TimelineStep(stage="Collect permit", estimated_date="in 2 months"),
    ]


@pytest.fixture
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def mock_store() -> MagicMock:
    """Mock storage port."""
    return MagicMock(spec=DocumentStore)


@pytest.fixture
def mock_analyzer(sample_analysis: Analysis, sample_timeline: list[TimelineStep]) -> MagicMock:
    """Mock analyzer port."""
    mock = MagicMock(spec=AnalyzerPort)
    mock.analyze.return_value = sample_analysis
    mock.timeline.return_value = sample_timeline
    return mock
