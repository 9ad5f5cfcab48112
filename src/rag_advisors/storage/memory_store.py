"""In-memory vector store for development and testing."""

from __future__ import annotations

import heapq
import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from rag_advisors._math import cosine_similarity
from rag_advisors.models.document import Document
from rag_advisors.models.search import SearchRequest

logger = logging.getLogger(__name__)


def matches_filter(metadata: Mapping[str, Any], filter_expression: Any) -> bool:
    """Check a document's metadata against a filter expression.

    This store understands two expression shapes: a mapping of metadata key
    to required value (all must match), or a callable predicate taking the
    metadata.  ``None`` matches everything.
    """
    if filter_expression is None:
        return True
    if callable(filter_expression):
        return bool(filter_expression(metadata))
    if isinstance(filter_expression, Mapping):
        return all(metadata.get(k) == v for k, v in filter_expression.items())
    msg = f"Unsupported filter expression type: {type(filter_expression).__name__}"
    raise TypeError(msg)


class InMemoryVectorStore:
    """Brute-force cosine similarity vector store.

    For development/testing only. Production use should provide
    FAISS, Chroma, Qdrant, etc. via the VectorStore protocol.
    The embed_fn is user-provided -- rag-advisors never calls a model directly.

    Parameters:
        embed_fn: Callable ``(str) -> list[float]`` used for documents and queries.
    """

    __slots__ = ("_documents", "_embed_fn", "_embeddings", "_large_store_warned", "_lock")

    _LARGE_STORE_THRESHOLD: int = 5000

    def __init__(self, embed_fn: Callable[[str], list[float]]) -> None:
        self._embed_fn = embed_fn
        self._documents: dict[str, Document] = {}
        self._embeddings: dict[str, list[float]] = {}
        self._large_store_warned: bool = False
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(documents={len(self._documents)})"

    def __len__(self) -> int:
        return len(self._documents)

    def add(self, documents: list[Document]) -> int:
        """Embed and store documents, replacing any with the same id. Returns count added."""
        embedded = [(doc, self._embed_fn(doc.text)) for doc in documents]
        with self._lock:
            for doc, embedding in embedded:
                self._documents[doc.id] = doc
                self._embeddings[doc.id] = embedding
        return len(embedded)

    def delete(self, document_id: str) -> bool:
        with self._lock:
            removed = self._documents.pop(document_id, None) is not None
            self._embeddings.pop(document_id, None)
            return removed

    def similarity_search(self, request: SearchRequest) -> list[Document]:
        query_embedding = self._embed_fn(request.query)
        with self._lock:
            n = len(self._embeddings)
            if n > self._LARGE_STORE_THRESHOLD and not self._large_store_warned:
                logger.warning(
                    "InMemoryVectorStore has %d documents. Consider using a dedicated "
                    "vector database (FAISS, Chroma) for better performance.",
                    n,
                )
                self._large_store_warned = True
            scored: list[tuple[float, Document]] = []
            for doc_id, embedding in self._embeddings.items():
                doc = self._documents[doc_id]
                if not matches_filter(doc.metadata, request.filter_expression):
                    continue
                score = max(0.0, cosine_similarity(query_embedding, embedding))
                if score >= request.similarity_threshold:
                    scored.append((score, doc))
        top = heapq.nlargest(request.top_k, scored, key=lambda x: x[0])
        return [doc.model_copy(update={"score": score}) for score, doc in top]
