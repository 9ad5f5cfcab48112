"""RetrievalAugmentationPipeline -- the orchestrator for rag-advisors."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from typing_extensions import TypedDict

from rag_advisors.augmentation.augmenter import ContextualQueryAugmenter
from rag_advisors.exceptions import (
    ConfigurationError,
    RagAdvisorError,
    RetrievalError,
    TransformationError,
)
from rag_advisors.models.document import Document
from rag_advisors.models.query import Query
from rag_advisors.protocols.augmenter import QueryAugmenter
from rag_advisors.protocols.joiner import DocumentJoiner
from rag_advisors.protocols.query_transform import QueryExpander, QueryTransformer
from rag_advisors.protocols.retriever import DocumentRetriever
from rag_advisors.retrieval.joiners import ConcatenationDocumentJoiner

from .callbacks import PipelineCallback, notify_callbacks

logger = logging.getLogger(__name__)


class PipelineDiagnostics(TypedDict, total=False):
    """Typed schema for the diagnostics dict produced by the pipeline."""

    transformers: list[str]
    expanded_queries: int
    documents_retrieved: int
    documents_joined: int
    empty_context: bool
    time_ms: float


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Everything one pipeline run produced.

    ``augmented_query`` is what goes to the model; ``documents`` is what the
    advisors expose as retrieval metadata.
    """

    original_query: Query
    transformed_query: Query
    expanded_queries: list[Query]
    documents_by_query: dict[Query, list[list[Document]]]
    documents: list[Document]
    augmented_query: Query
    diagnostics: PipelineDiagnostics = field(default_factory=lambda: PipelineDiagnostics())


def _require(component: Any, protocol: type, name: str) -> None:
    if not isinstance(component, protocol):
        msg = f"{name} must implement {protocol.__name__}, got {type(component).__name__}"
        raise ConfigurationError(msg)


class RetrievalAugmentationPipeline:
    """Composes query transformation, retrieval, joining and augmentation.

    Usage::

        pipeline = RetrievalAugmentationPipeline(
            VectorStoreDocumentRetriever(store, top_k=5),
            query_transformers=[RewriteQueryTransformer(rewrite)],
            query_expander=MultiQueryExpander(variations, number_of_queries=3),
        )
        result = pipeline.run(Query(text="What is RAG?"))

    Every run follows the same fixed order:
        1. Apply the query transformers left to right (none means identity)
        2. Expand the transformed query, or use it alone
        3. Retrieve documents for each expanded query
        4. Join all result lists once
        5. Augment the *original* query with the joined documents

    Components are checked against their protocols at construction, and the
    pipeline holds no per-call state, so one instance can serve concurrent
    calls.  Failures are never converted into empty results: transformer
    and expander failures raise ``TransformationError`` before retrieval,
    store failures raise ``RetrievalError``.
    """

    __slots__ = (
        "_callbacks",
        "_document_joiner",
        "_document_retriever",
        "_query_augmenter",
        "_query_expander",
        "_query_transformers",
    )

    def __init__(
        self,
        document_retriever: DocumentRetriever,
        *,
        query_transformers: Sequence[QueryTransformer] = (),
        query_expander: QueryExpander | None = None,
        document_joiner: DocumentJoiner | None = None,
        query_augmenter: QueryAugmenter | None = None,
        callbacks: Sequence[PipelineCallback] = (),
    ) -> None:
        _require(document_retriever, DocumentRetriever, "document_retriever")
        for transformer in query_transformers:
            _require(transformer, QueryTransformer, "query_transformers")
        if query_expander is not None:
            _require(query_expander, QueryExpander, "query_expander")
        if document_joiner is not None:
            _require(document_joiner, DocumentJoiner, "document_joiner")
        if query_augmenter is not None:
            _require(query_augmenter, QueryAugmenter, "query_augmenter")

        self._document_retriever = document_retriever
        self._query_transformers: tuple[QueryTransformer, ...] = tuple(query_transformers)
        self._query_expander = query_expander
        self._document_joiner: DocumentJoiner = document_joiner or ConcatenationDocumentJoiner()
        self._query_augmenter: QueryAugmenter = query_augmenter or ContextualQueryAugmenter()
        self._callbacks: tuple[PipelineCallback, ...] = tuple(callbacks)

    # -- Read-only properties --

    @property
    def query_transformers(self) -> tuple[QueryTransformer, ...]:
        return self._query_transformers

    @property
    def query_expander(self) -> QueryExpander | None:
        return self._query_expander

    @property
    def document_retriever(self) -> DocumentRetriever:
        return self._document_retriever

    @property
    def document_joiner(self) -> DocumentJoiner:
        return self._document_joiner

    @property
    def query_augmenter(self) -> QueryAugmenter:
        return self._query_augmenter

    def __repr__(self) -> str:
        return (
            f"RetrievalAugmentationPipeline("
            f"transformers={len(self._query_transformers)}, "
            f"expander={self._query_expander!r}, "
            f"retriever={self._document_retriever!r}, "
            f"joiner={self._document_joiner!r}, "
            f"augmenter={self._query_augmenter!r})"
        )

    def _fire(self, event: str, *args: Any) -> None:
        notify_callbacks(self._callbacks, event, *args, logger=logger)

    # -- Stages --

    def _transform(self, query: Query) -> Query:
        current = query
        for transformer in self._query_transformers:
            name = type(transformer).__name__
            try:
                result = transformer.transform(current)
            except (RagAdvisorError, TimeoutError):
                raise
            except Exception as e:
                msg = f"Query transformer '{name}' failed"
                raise TransformationError(msg, transformer=name) from e
            if not isinstance(result, Query):
                msg = f"Query transformer '{name}' must return a Query"
                raise TransformationError(msg, transformer=name)
            current = result
        return current

    def _expand(self, query: Query) -> list[Query]:
        if self._query_expander is None:
            return [query]
        name = type(self._query_expander).__name__
        try:
            expanded = self._query_expander.expand(query)
        except (RagAdvisorError, TimeoutError):
            raise
        except Exception as e:
            msg = f"Query expander '{name}' failed"
            raise TransformationError(msg, transformer=name) from e
        if not expanded:
            msg = f"Query expander '{name}' returned no queries"
            raise TransformationError(msg, transformer=name)
        return list(expanded)

    def _retrieve(self, query: Query) -> list[Document]:
        try:
            documents = self._document_retriever.retrieve(query)
        except (RagAdvisorError, TimeoutError):
            raise
        except Exception as e:
            msg = f"Document retriever failed for query {query.text!r}"
            raise RetrievalError(msg) from e
        self._fire("on_documents_retrieved", query, list(documents))
        return list(documents)

    # -- Entry point --

    def run(self, query: Query) -> PipelineResult:
        """Execute the pipeline for ``query`` and return every intermediate result."""
        start_time = time.monotonic()
        self._fire("on_pipeline_start", query)
        try:
            result = self._run(query, start_time)
        except Exception as e:
            self._fire("on_pipeline_error", query, e)
            raise
        self._fire("on_pipeline_end", result)
        return result

    def _run(self, query: Query, start_time: float) -> PipelineResult:
        transformed = self._transform(query)
        if self._query_transformers:
            self._fire("on_query_transformed", query, transformed)

        expanded = self._expand(transformed)

        documents_by_query: dict[Query, list[list[Document]]] = {}
        retrieved = 0
        for expanded_query in expanded:
            docs = self._retrieve(expanded_query)
            retrieved += len(docs)
            documents_by_query.setdefault(expanded_query, []).append(docs)

        documents = list(self._document_joiner.join(documents_by_query))
        augmented = self._query_augmenter.augment(query, documents)

        diagnostics = PipelineDiagnostics(
            transformers=[type(t).__name__ for t in self._query_transformers],
            expanded_queries=len(expanded),
            documents_retrieved=retrieved,
            documents_joined=len(documents),
            empty_context=not documents,
            time_ms=round((time.monotonic() - start_time) * 1000, 2),
        )
        logger.debug(
            "Pipeline retrieved %d documents (%d after join) for %d queries",
            retrieved,
            len(documents),
            len(expanded),
        )
        return PipelineResult(
            original_query=query,
            transformed_query=transformed,
            expanded_queries=expanded,
            documents_by_query=documents_by_query,
            documents=documents,
            augmented_query=augmented,
            diagnostics=diagnostics,
        )
