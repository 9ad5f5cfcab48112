"""Vector store backed document retrieval."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from rag_advisors.exceptions import ConfigurationError, RagAdvisorError, RetrievalError
from rag_advisors.models.document import Document
from rag_advisors.models.query import Query
from rag_advisors.models.search import (
    DEFAULT_TOP_K,
    SIMILARITY_THRESHOLD_ACCEPT_ALL,
    SearchRequest,
)
from rag_advisors.protocols.storage import FilterExpressionParser, VectorStore

from ._filters import resolve_filter_expression

logger = logging.getLogger(__name__)


class VectorStoreDocumentRetriever:
    """Retrieves documents from a ``VectorStore`` by similarity search.

    ``filter_expression`` is handed to the store as an opaque value, so a
    store-level predicate such as ``lambda metadata: ...`` passes through
    unchanged.  A default that must be computed per call goes in
    ``filter_expression_fn`` instead, which is called with no arguments on
    every retrieval.  A filter expression found in ``query.context`` under
    ``FILTER_EXPRESSION`` takes precedence over both.

    Implements the ``DocumentRetriever`` protocol.

    Parameters:
        vector_store: The store to search.
        similarity_threshold: Minimum similarity score in ``[0, 1]``.
        top_k: Maximum number of documents per search.
        filter_expression: Static default filter expression.
        filter_expression_fn: Zero-argument callable producing the default
            filter expression per call.  Mutually exclusive with
            ``filter_expression``.
        filter_parser: Parser applied to string filter overrides.
    """

    __slots__ = (
        "_filter_expression",
        "_filter_expression_fn",
        "_filter_parser",
        "_search_request",
        "_vector_store",
    )

    def __init__(
        self,
        vector_store: VectorStore,
        similarity_threshold: float = SIMILARITY_THRESHOLD_ACCEPT_ALL,
        top_k: int = DEFAULT_TOP_K,
        filter_expression: Any | None = None,
        filter_parser: FilterExpressionParser | None = None,
        filter_expression_fn: Callable[[], Any] | None = None,
    ) -> None:
        if filter_expression is not None and filter_expression_fn is not None:
            msg = "filter_expression and filter_expression_fn cannot be set at the same time"
            raise ConfigurationError(msg)
        self._vector_store = vector_store
        self._search_request = SearchRequest(
            top_k=top_k, similarity_threshold=similarity_threshold
        )
        self._filter_expression = filter_expression
        self._filter_expression_fn = filter_expression_fn
        self._filter_parser = filter_parser

    def __repr__(self) -> str:
        return (
            f"VectorStoreDocumentRetriever(top_k={self._search_request.top_k}, "
            f"similarity_threshold={self._search_request.similarity_threshold})"
        )

    def _default_filter_expression(self) -> Any | None:
        if self._filter_expression_fn is not None:
            return self._filter_expression_fn()
        return self._filter_expression

    def build_search_request(self, query: Query) -> SearchRequest:
        """Build the per-call search request for ``query``."""
        filter_expression = resolve_filter_expression(
            query.context, self._default_filter_expression(), self._filter_parser
        )
        return self._search_request.mutate(query=query.text, filter_expression=filter_expression)

    def retrieve(self, query: Query) -> list[Document]:
        request = self.build_search_request(query)
        try:
            documents = self._vector_store.similarity_search(request)
        except (RagAdvisorError, TimeoutError):
            raise
        except Exception as e:
            msg = f"Similarity search failed for query {request.query!r}"
            raise RetrievalError(msg, request=request) from e
        logger.debug(
            "VectorStoreDocumentRetriever found %d documents for: %s",
            len(documents),
            request.query,
        )
        return list(documents)
