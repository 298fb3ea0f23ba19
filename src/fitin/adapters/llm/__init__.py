"""LLM adapters."""

from ...config import LLMConfig, LLMProvider
from ...ports.analyzer import AnalyzerPort
from .gateway import GatewayAnalyzer
from .ollama import OllamaAnalyzer

__all__ = ["GatewayAnalyzer", "OllamaAnalyzer", "create_analyzer"]


def create_analyzer(config: LLMConfig) -> AnalyzerPort:
    """Create analyzer based on configuration."""
    if config.provider == LLMProvider.GATEWAY:
        return GatewayAnalyzer(
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url,
            timeout=config.timeout,
        )
    elif config.provider == LLMProvider.OLLAMA:
        return OllamaAnalyzer(
            model=config.ollama_model,
            base_url=config.ollama_url,
            timeout=config.timeout,
        )
    else:
        raise ValueError(f"Unknown LLM provider: {config.provider}")
