"""Document retrieval and joining strategies."""

from ._filters import FILTER_EXPRESSION, resolve_filter_expression
from ._rrf import rrf_fuse
from .joiners import ConcatenationDocumentJoiner, ReciprocalRankFusionDocumentJoiner
from .vector_store import VectorStoreDocumentRetriever

__all__ = [
    "FILTER_EXPRESSION",
    "ConcatenationDocumentJoiner",
    "ReciprocalRankFusionDocumentJoiner",
    "VectorStoreDocumentRetriever",
    "resolve_filter_expression",
    "rrf_fuse",
]
