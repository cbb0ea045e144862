"""Vector memory for the assistant, backed by Chroma."""

from .store import DEFAULT_COLLECTION, DEFAULT_TOP_K, MemoryStore  # noqa: F401

__all__ = ["MemoryStore", "DEFAULT_COLLECTION", "DEFAULT_TOP_K"]
