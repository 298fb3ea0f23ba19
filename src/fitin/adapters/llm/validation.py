"""LLM response validation for prompt injection mitigation."""

import json
import re
from typing import Any

# Unique delimiters for document text boundaries
DOC_BEGIN = "<<<DOCUMENT_TEXT_BEGIN>>>"
DOC_END = "<<<DOCUMENT_TEXT_END>>>"

# Pattern for suspicious content: path traversal, code-like, control chars
_SUSPICIOUS_PATTERN = re.compile(r'\.\./|[{}<>`]|[\x00-\x1f]')

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def looks_suspicious(text: str) -> bool:
    """Check if text looks like injection attempt."""
    if not text:
        return False
    return bool(_SUSPICIOUS_PATTERN.search(text))


def sanitize_field(text: Any, fallback: str) -> str:
    """Return text if it is a safe string, otherwise fallback."""
    if not text or not isinstance(text, str):
        return fallback
    if looks_suspicious(text):
        return fallback
    return text


def extract_json(text: str) -> Any:
    """Pull a JSON document out of a model reply.

    Accepts a bare JSON reply, a ```json fenced block, or an object embedded
    in prose. Returns None if nothing parses.
    """
    candidates = [text.strip()]
    fenced = _FENCED_JSON.search(text)
    if fenced:
        candidates.append(fenced.group(1).strip())
    embedded = _JSON_OBJECT.search(text)
    if embedded:
        candidates.append(embedded.group())

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    return None
