"""Storage port - interface for the document vault."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..domain.models import Analysis, Document, TimelineStep


class DocumentStore(ABC):
    """Interface for durable per-document state.

    Missing ids are never an error: ``get`` and ``update`` return None and
    ``delete`` does nothing.
    """

    @abstractmethod
    def create(
        self,
        *,
        name: str,
        type: str = "",
        ocr_text: str = "",
        timeline: "list[TimelineStep] | None" = None,
        tips: str = "",
        analysis: "Analysis | None" = None,
    ) -> "Document":
        """Create and persist a document with a fresh id."""
        pass

    @abstractmethod
    def get(self, doc_id: str) -> "Document | None":
        pass

    @abstractmethod
    def list(self) -> "list[Document]":
        """All documents, newest first."""
        pass

    @abstractmethod
    def update(self, doc_id: str, **changes: Any) -> "Document | None":
        """Replace mutable fields and bump ``updated_at``."""
        pass

    @abstractmethod
    def delete(self, doc_id: str) -> None:
        pass
