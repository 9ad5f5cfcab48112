"""Document retriever protocol definition."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rag_advisors.models.document import Document
from rag_advisors.models.query import Query


@runtime_checkable
class DocumentRetriever(Protocol):
    """Protocol for fetching candidate documents for a query."""

    def retrieve(self, query: Query) -> list[Document]:
        """Retrieve documents relevant to ``query``.

        Parameters:
            query: The query to search for.  ``query.context`` may carry a
                per-call filter expression.

        Returns:
            Documents ranked by relevance, most relevant first.

        Raises:
            RetrievalError: If the underlying store fails.  Failures are
                never retried or replaced by an empty result.
        """
        ...
