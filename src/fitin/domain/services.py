"""Domain services - orchestrate business logic."""

import logging

from ..ports.analyzer import AnalyzerPort
from ..ports.storage import DocumentStore
from .models import Analysis, Document, TimelineStep

logger = logging.getLogger(__name__)


class VaultService:
    """Commits OCR'd uploads to the vault.

    Analysis is best effort: when the analyzer is missing or fails, the
    document is stored without one and can be re-analyzed later.
    """

    def __init__(self, store: DocumentStore, analyzer: AnalyzerPort | None = None) -> None:
        self.store = store
        self.analyzer = analyzer

    def save(
        self,
        name: str,
        type: str,
        ocr_text: str,
        timeline: list[TimelineStep] | None = None,
        tips: str = "",
        analysis: Analysis | None = None,
    ) -> Document:
        """Store a document, analyzing its text unless an analysis is given.

        A timeline is extracted only when none is passed. The analysis
        category, when present, replaces the declared type.
        """
        logger.info(f"Saving to vault: {name}")

        if analysis is None:
            analysis = self._analyze(ocr_text)
        if timeline is None:
            timeline = self._timeline(ocr_text)

        return self.store.create(
            name=name,
            type=analysis.category if analysis and analysis.category else type,
            ocr_text=ocr_text,
            timeline=timeline,
            tips=tips,
            analysis=analysis,
        )

    def reanalyze(self, doc_id: str) -> Document | None:
        """Refresh analysis and timeline of a stored document.

        Returns None if the document does not exist. Parts the analyzer could
        not produce keep their previous value.
        """
        doc = self.store.get(doc_id)
        if doc is None:
            logger.warning(f"Document not found: {doc_id}")
            return None

        changes: dict = {}
        analysis = self._analyze(doc.ocr_text)
        if analysis is not None:
            changes["analysis"] = analysis
            if analysis.category:
                changes["type"] = analysis.category

        timeline = self._timeline(doc.ocr_text)
        if timeline:
            changes["timeline"] = timeline

        if not changes:
            logger.info(f"Nothing new for {doc.name}")
            return doc
        return self.store.update(doc_id, **changes)

    def _analyze(self, text: str) -> Analysis | None:
        if self.analyzer is None or not text.strip():
            return None
        try:
            return self.analyzer.analyze(text)
        except Exception as e:
            logger.exception(f"Analysis failed: {e}")
            return None

    def _timeline(self, text: str) -> list[TimelineStep]:
        if self.analyzer is None or not text.strip():
            return []
        try:
            return self.analyzer.timeline(text)
        except Exception as e:
            logger.exception(f"Timeline extraction failed: {e}")
            return []
