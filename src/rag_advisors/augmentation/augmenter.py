"""Contextual query augmentation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from rag_advisors.models.document import Document
from rag_advisors.models.query import Query
from rag_advisors.protocols.template import TemplateRenderer

from .templates import (
    DEFAULT_EMPTY_CONTEXT_PROMPT_TEMPLATE,
    DEFAULT_PROMPT_TEMPLATE,
    DEFAULT_REFUSAL_PROMPT_TEMPLATE,
    FormatTemplateRenderer,
    validate_template,
)

logger = logging.getLogger(__name__)

QUERY_PLACEHOLDER = "query"
CONTEXT_PLACEHOLDER = "context"


def join_document_texts(documents: Sequence[Document]) -> str:
    """Default document formatter: document texts separated by newlines."""
    return "\n".join(doc.text for doc in documents)


class ContextualQueryAugmenter:
    """Rewrites the query text into a prompt that embeds retrieved context.

    Three templates cover the three outcomes of retrieval:

    * documents found: ``prompt_template`` with ``{context}`` and ``{query}``;
    * nothing found and ``allow_empty_context`` is false (the default):
      ``refusal_prompt_template``, which steers the model toward declining
      to answer instead of inventing one;
    * nothing found and ``allow_empty_context`` is true:
      ``empty_context_prompt_template`` with ``{query}``.

    Templates are checked for their placeholders at construction time when
    the renderer can list them.

    Implements the ``QueryAugmenter`` protocol.

    Parameters:
        prompt_template: Template used when documents were retrieved.
        refusal_prompt_template: Template used for empty context when empty
            context is not allowed.
        empty_context_prompt_template: Template used for empty context when
            empty context is allowed.
        allow_empty_context: Selects between the two empty-context templates.
        document_formatter: Renders the documents into the ``{context}`` value.
        renderer: Template renderer (default ``FormatTemplateRenderer``).
    """

    __slots__ = (
        "_allow_empty_context",
        "_document_formatter",
        "_empty_context_prompt_template",
        "_prompt_template",
        "_refusal_prompt_template",
        "_renderer",
    )

    def __init__(
        self,
        prompt_template: str = DEFAULT_PROMPT_TEMPLATE,
        refusal_prompt_template: str = DEFAULT_REFUSAL_PROMPT_TEMPLATE,
        empty_context_prompt_template: str = DEFAULT_EMPTY_CONTEXT_PROMPT_TEMPLATE,
        allow_empty_context: bool = False,
        document_formatter: Callable[[Sequence[Document]], str] | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self._renderer: TemplateRenderer = renderer or FormatTemplateRenderer()
        validate_template(
            self._renderer,
            prompt_template,
            {QUERY_PLACEHOLDER, CONTEXT_PLACEHOLDER},
            "prompt_template",
        )
        validate_template(
            self._renderer,
            empty_context_prompt_template,
            {QUERY_PLACEHOLDER},
            "empty_context_prompt_template",
        )
        validate_template(self._renderer, refusal_prompt_template, set(), "refusal_prompt_template")
        self._prompt_template = prompt_template
        self._refusal_prompt_template = refusal_prompt_template
        self._empty_context_prompt_template = empty_context_prompt_template
        self._allow_empty_context = allow_empty_context
        self._document_formatter = document_formatter or join_document_texts

    def __repr__(self) -> str:
        return f"ContextualQueryAugmenter(allow_empty_context={self._allow_empty_context})"

    @property
    def allow_empty_context(self) -> bool:
        return self._allow_empty_context

    def augment(self, query: Query, documents: Sequence[Document]) -> Query:
        if not documents:
            return self._augment_empty_context(query)

        context = self._document_formatter(documents)
        text = self._renderer.render(
            self._prompt_template,
            {QUERY_PLACEHOLDER: query.text, CONTEXT_PLACEHOLDER: context},
        )
        logger.debug("Augmented query with %d documents", len(documents))
        return query.mutate(text=text)

    def _augment_empty_context(self, query: Query) -> Query:
        if self._allow_empty_context:
            logger.debug("No documents retrieved; using the empty-context template")
            template = self._empty_context_prompt_template
        else:
            logger.debug("No documents retrieved; instructing the model to decline")
            template = self._refusal_prompt_template
        text = self._renderer.render(template, {QUERY_PLACEHOLDER: query.text})
        return query.mutate(text=text)
