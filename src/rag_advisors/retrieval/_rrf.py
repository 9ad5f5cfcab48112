"""Reciprocal Rank Fusion (RRF) utility for combining ranked document lists."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rag_advisors.models.document import Document

logger = logging.getLogger(__name__)

__all__ = ["rrf_fuse"]


def rrf_fuse(
    ranked_lists: Sequence[Sequence[Document]],
    k: int = 60,
    top_k: int | None = None,
) -> list[Document]:
    """Fuse multiple ranked lists using Reciprocal Rank Fusion.

    RRF score for document d:
        score(d) = sum(1 / (k + rank_i(d))) for each list i

    Parameters:
        ranked_lists: Lists of documents ranked by relevance.
        k: Smoothing constant (default 60, from original RRF paper).
        top_k: Maximum number of documents to return. If None, return all.

    Returns:
        Fused list sorted by RRF score.  Each document keeps the content of
        its first occurrence; ``score`` holds the fused value and
        ``metadata["rrf_score"]`` repeats it for diagnostics.  Ties keep
        first-seen order.
    """
    if k < 0:
        msg = "k must be non-negative"
        raise ValueError(msg)

    rrf_scores: dict[str, float] = {}
    first_seen: dict[str, Document] = {}

    for ranking in ranked_lists:
        for rank, doc in enumerate(ranking, start=1):
            rrf_scores[doc.id] = rrf_scores.get(doc.id, 0.0) + 1.0 / (k + rank)
            first_seen.setdefault(doc.id, doc)

    # sorted() is stable, so equal scores keep insertion order
    sorted_ids = sorted(rrf_scores, key=lambda x: rrf_scores[x], reverse=True)
    if top_k is not None:
        sorted_ids = sorted_ids[:top_k]

    logger.debug("RRF fused %d lists into %d documents", len(ranked_lists), len(sorted_ids))
    return [
        first_seen[doc_id].model_copy(
            update={
                "score": rrf_scores[doc_id],
                "metadata": {**first_seen[doc_id].metadata, "rrf_score": rrf_scores[doc_id]},
            }
        )
        for doc_id in sorted_ids
    ]
