"""In-memory document store."""

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from ...domain.models import Analysis, Document, TimelineStep
from ...ports.storage import DocumentStore

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at"})


class MemoryDocumentStore(DocumentStore):
    """Document store kept in process memory.

    Subclasses make it durable by overriding ``_flush``, which is called after
    every mutation. If flushing fails the mutation is rolled back.
    """

    def __init__(self, documents: list[Document] | None = None) -> None:
        # Kept newest first: new documents are prepended
        self._documents: list[Document] = list(documents or [])

    def create(
        self,
        *,
        name: str,
        type: str = "",
        ocr_text: str = "",
        timeline: list[TimelineStep] | None = None,
        tips: str = "",
        analysis: Analysis | None = None,
    ) -> Document:
        now = self._now()
        doc = Document(
            id=uuid.uuid4().hex,
            name=name,
            type=type,
            created_at=now,
            updated_at=now,
            ocr_text=ocr_text,
            timeline=list(timeline or []),
            tips=tips,
            analysis=analysis,
        )
        self._commit([doc, *self._documents])
        logger.info(f"Created document {doc.id}: {doc.name}")
        return doc

    def get(self, doc_id: str) -> Document | None:
        for doc in self._documents:
            if doc.id == doc_id:
                return doc
        return None

    def update(self, doc_id: str, **changes: Any) -> Document | None:
        frozen = IMMUTABLE_FIELDS.intersection(changes)
        if frozen:
            raise ValueError(f"Cannot change {', '.join(sorted(frozen))}")

        current = self.get(doc_id)
        if current is None:
            logger.debug(f"Update of unknown document {doc_id} ignored")
            return None

        updated = replace(current, **changes, updated_at=self._now())
        self._commit([updated if doc.id == doc_id else doc for doc in self._documents])
        logger.info(f"Updated document {doc_id}")
        return updated

    def delete(self, doc_id: str) -> None:
        remaining = [doc for doc in self._documents if doc.id != doc_id]
        if len(remaining) == len(self._documents):
            logger.debug(f"Delete of unknown document {doc_id} ignored")
            return
        self._commit(remaining)
        logger.info(f"Deleted document {doc_id}")

    def list(self) -> "list[Document]":
        # sorted() is stable, so equal timestamps keep prepend order
        return sorted(self._documents, key=lambda doc: doc.created_at, reverse=True)

    def _commit(self, documents: "list[Document]") -> None:
        previous = self._documents
        self._documents = documents
        try:
            self._flush()
        except Exception:
            self._documents = previous
            raise

    def _flush(self) -> None:
        pass

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)
