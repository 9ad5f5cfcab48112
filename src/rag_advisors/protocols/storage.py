"""Storage-side collaborator protocols.

The library never evaluates filter expressions; it only threads the
values produced by a ``FilterExpressionParser`` through to the store.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from rag_advisors.models.document import Document
from rag_advisors.models.search import SearchRequest


@runtime_checkable
class VectorStore(Protocol):
    """Protocol for similarity search backends."""

    def similarity_search(self, request: SearchRequest) -> list[Document]:
        """Return documents similar to ``request.query``.

        Parameters:
            request: Query text, result limit, similarity threshold and
                optional filter expression.

        Returns:
            At most ``request.top_k`` documents scoring at least
            ``request.similarity_threshold``, most similar first.
        """
        ...


@runtime_checkable
class FilterExpressionParser(Protocol):
    """Protocol for turning filter text into a store-specific expression."""

    def parse(self, text: str) -> Any:
        """Parse ``text`` into an opaque filter expression."""
        ...
