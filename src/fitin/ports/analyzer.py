"""Analyzer port - interface for AI document analysis."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import Analysis, TimelineStep


class AnalyzerPort(ABC):
    """Interface for LLM-based classification and timeline extraction."""

    @abstractmethod
    def analyze(self, text: str) -> "Analysis | None":
        """Classify document text and extract key dates and action items."""
        pass

    @abstractmethod
    def timeline(self, text: str) -> "list[TimelineStep]":
        """Extract the procedural steps described by the document."""
        pass
