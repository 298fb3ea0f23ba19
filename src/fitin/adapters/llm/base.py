"""Common parsing for chat-based analyzers."""

import logging
from abc import abstractmethod

from ...domain.models import Analysis, TimelineStep, parse_timeline
from ...ports.analyzer import AnalyzerPort
from .prompts import ANALYSIS_PROMPT, TIMELINE_PROMPT
from .validation import DOC_BEGIN, DOC_END, extract_json, looks_suspicious, sanitize_field

logger = logging.getLogger(__name__)

ANALYSIS_TEXT_LIMIT = 8000
TIMELINE_TEXT_LIMIT = 3000


class ChatAnalyzer(AnalyzerPort):
    """Analyzer that sends a system prompt plus delimited document text."""

    @abstractmethod
    def _complete(self, system: str, user: str) -> str:
        """Return the raw text of the model reply."""
        pass

    def analyze(self, text: str) -> Analysis | None:
        reply = self._complete(ANALYSIS_PROMPT, wrap_document(text, ANALYSIS_TEXT_LIMIT))
        return self._parse_analysis(reply)

    def timeline(self, text: str) -> list[TimelineStep]:
        reply = self._complete(TIMELINE_PROMPT, wrap_document(text, TIMELINE_TEXT_LIMIT))
        return self._parse_timeline(reply)

    def _parse_analysis(self, reply: str) -> Analysis | None:
        data = extract_json(reply)
        analysis = Analysis.from_dict(data)
        if analysis is None:
            logger.warning(f"Invalid analysis response: {reply[:200]}")
            return None

        if looks_suspicious(analysis.category):
            logger.warning(f"Suspicious category rejected: {analysis.category[:50]}")
        analysis.category = sanitize_field(analysis.category, "")
        return analysis

    def _parse_timeline(self, reply: str) -> list[TimelineStep]:
        data = extract_json(reply)
        if data is None:
            logger.warning(f"Invalid timeline response: {reply[:200]}")
            return []
        return parse_timeline(data)


def wrap_document(text: str, limit: int) -> str:
    if len(text) > limit:
        text = text[:limit] + "\n\n[Truncated...]"
    return f"{DOC_BEGIN}\n{text}\n{DOC_END}"
