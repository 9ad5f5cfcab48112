"""Storage backends."""

from .memory_store import InMemoryVectorStore, matches_filter

__all__ = ["InMemoryVectorStore", "matches_filter"]
