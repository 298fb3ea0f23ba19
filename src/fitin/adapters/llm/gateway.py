"""Analyzer using an OpenAI-compatible chat completions gateway."""

import logging
from urllib.parse import urlparse

import httpx

from .base import ChatAnalyzer

logger = logging.getLogger(__name__)


class GatewayAnalyzer(ChatAnalyzer):
    """Analyzer implementation using a hosted AI gateway."""

    def __init__(
        self,
        api_key: str,
        model: str = "google/gemini-2.5-flash",
        base_url: str = "https://ai.gateway.lovable.dev/v1",
        timeout: float = 120.0,
    ) -> None:
        parsed = urlparse(base_url)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"Invalid gateway base_url scheme: {parsed.scheme}")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _complete(self, system: str, user: str) -> str:
        logger.info(f"Analyzing document with AI gateway ({self.model})")

        response = httpx.post(
            f"{self.base_url}/chat/completions",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                "temperature": 0.3,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()

        choices = response.json().get("choices") or [{}]
        return choices[0].get("message", {}).get("content") or ""
