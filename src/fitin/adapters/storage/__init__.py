"""Storage adapters."""

from .json_file import JsonFileDocumentStore
from .memory import MemoryDocumentStore

__all__ = ["JsonFileDocumentStore", "MemoryDocumentStore"]
