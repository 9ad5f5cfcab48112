"""Query augmenter protocol definition."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from rag_advisors.models.document import Document
from rag_advisors.models.query import Query


@runtime_checkable
class QueryAugmenter(Protocol):
    """Protocol for folding retrieved documents into the outgoing query."""

    def augment(self, query: Query, documents: Sequence[Document]) -> Query:
        """Return a new query whose text embeds the document context."""
        ...
