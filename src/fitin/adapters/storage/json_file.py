"""Document store persisted as a single JSON file."""

import json
import logging
import os
import tempfile
from pathlib import Path

from ...domain.models import Document
from .memory import MemoryDocumentStore

logger = logging.getLogger(__name__)

COLLECTION_KEY = "documents"


class JsonFileDocumentStore(MemoryDocumentStore):
    """Key-value JSON file holding the full snapshot under ``"documents"``.

    The whole collection is rewritten on every mutation. An unreadable or
    corrupt file is logged and treated as an empty vault.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(load_documents(path))

    def _flush(self) -> None:
        payload = {COLLECTION_KEY: [doc.to_dict() for doc in self._documents]}
        self.path.parent.mkdir(parents=True, exist_ok=True)

        tmp = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        )
        tmp_path = Path(tmp.name)
        try:
            with tmp:
                json.dump(payload, tmp, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

        logger.debug(f"Wrote {len(self._documents)} documents to {self.path}")


def load_documents(path: Path) -> list[Document]:
    """Read persisted documents, skipping anything that cannot be loaded."""
    if not path.exists():
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load documents from {path}: {e}")
        return []

    records = data.get(COLLECTION_KEY) if isinstance(data, dict) else None
    if not isinstance(records, list):
        logger.warning(f"No document collection in {path}, starting empty")
        return []

    documents = []
    for record in records:
        try:
            documents.append(Document.from_dict(record))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping corrupt document record: {e}")
    logger.debug(f"Loaded {len(documents)} documents from {path}")
    return documents
