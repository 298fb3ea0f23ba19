"""Ports - interfaces for external dependencies."""

from .analyzer import AnalyzerPort
from .storage import DocumentStore

__all__ = ["AnalyzerPort", "DocumentStore"]
