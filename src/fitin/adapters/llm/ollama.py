"""Analyzer using Ollama."""

import logging
from urllib.parse import urlparse

import httpx

from .base import ChatAnalyzer

logger = logging.getLogger(__name__)


class OllamaAnalyzer(ChatAnalyzer):
    """Analyzer implementation using a local Ollama server."""

    def __init__(
        self,
        model: str = "gemma3:4b",
        base_url: str = "http://localhost:11434",
        timeout: float = 120.0,
    ) -> None:
        parsed = urlparse(base_url)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"Invalid ollama base_url scheme: {parsed.scheme}")
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _complete(self, system: str, user: str) -> str:
        logger.info(f"Analyzing document with Ollama ({self.model})")

        response = httpx.post(
            f"{self.base_url}/api/chat",
            json={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                "stream": False,
                "format": "json",
            },
            timeout=self.timeout,
        )
        response.raise_for_status()

        return response.json()["message"]["content"]
