"""Document joiner protocol definition."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from rag_advisors.models.document import Document
from rag_advisors.models.query import Query


@runtime_checkable
class DocumentJoiner(Protocol):
    """Protocol for merging per-query result sets into one document list."""

    def join(
        self, documents_for_query: Mapping[Query, Sequence[Sequence[Document]]]
    ) -> list[Document]:
        """Join the result lists of every query.

        Parameters:
            documents_for_query: For each query (in retrieval order), the
                result lists retrieved for it.

        Returns:
            A single list of documents.
        """
        ...
