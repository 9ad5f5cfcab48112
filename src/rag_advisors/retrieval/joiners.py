"""Document joining strategies for multi-query retrieval."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from rag_advisors.models.document import Document
from rag_advisors.models.query import Query

from ._rrf import rrf_fuse

logger = logging.getLogger(__name__)


def _ranked_lists(
    documents_for_query: Mapping[Query, Sequence[Sequence[Document]]],
) -> list[Sequence[Document]]:
    """Flatten the mapping into result lists, in query then retrieval order."""
    return [docs for lists in documents_for_query.values() for docs in lists]


class ConcatenationDocumentJoiner:
    """Concatenates result lists and drops duplicate documents.

    Documents are visited in the supplied order; the first occurrence of an
    id wins, with its score and content.  Later duplicates are discarded,
    never merged or re-scored, so joining an already-joined list returns it
    unchanged.

    Implements the ``DocumentJoiner`` protocol.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "ConcatenationDocumentJoiner()"

    def join(
        self, documents_for_query: Mapping[Query, Sequence[Sequence[Document]]]
    ) -> list[Document]:
        seen: set[str] = set()
        joined: list[Document] = []
        for docs in _ranked_lists(documents_for_query):
            for doc in docs:
                if doc.id not in seen:
                    seen.add(doc.id)
                    joined.append(doc)
        logger.debug(
            "ConcatenationDocumentJoiner joined %d queries into %d documents",
            len(documents_for_query),
            len(joined),
        )
        return joined


class ReciprocalRankFusionDocumentJoiner:
    """Fuses result lists with Reciprocal Rank Fusion.

    Documents retrieved by several queries, or ranked high by any of them,
    move to the front.  Implements the ``DocumentJoiner`` protocol.

    Parameters:
        k: RRF smoothing constant (default 60).
        top_k: Optional cap on the number of joined documents.
    """

    __slots__ = ("_k", "_top_k")

    def __init__(self, k: int = 60, top_k: int | None = None) -> None:
        if k < 0:
            msg = "k must be non-negative"
            raise ValueError(msg)
        if top_k is not None and top_k < 1:
            msg = "top_k must be at least 1"
            raise ValueError(msg)
        self._k = k
        self._top_k = top_k

    def __repr__(self) -> str:
        return f"ReciprocalRankFusionDocumentJoiner(k={self._k}, top_k={self._top_k})"

    def join(
        self, documents_for_query: Mapping[Query, Sequence[Sequence[Document]]]
    ) -> list[Document]:
        return rrf_fuse(_ranked_lists(documents_for_query), k=self._k, top_k=self._top_k)
