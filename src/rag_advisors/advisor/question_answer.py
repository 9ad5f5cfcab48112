"""Single-retrieval question answering advisor."""

from __future__ import annotations

import logging

from rag_advisors.augmentation.templates import (
    DEFAULT_QUESTION_ANSWER_TEMPLATE,
    FormatTemplateRenderer,
    validate_template,
)
from rag_advisors.exceptions import RagAdvisorError, RetrievalError
from rag_advisors.models.advised import AdvisedRequest
from rag_advisors.models.search import SearchRequest
from rag_advisors.protocols.storage import FilterExpressionParser, VectorStore
from rag_advisors.protocols.template import TemplateRenderer
from rag_advisors.retrieval._filters import resolve_filter_expression

from .base import DEFAULT_ORDER, RETRIEVED_DOCUMENTS, BaseRetrievalAdvisor

logger = logging.getLogger(__name__)

QUESTION_ANSWER_CONTEXT = "question_answer_context"


class QuestionAnswerAdvisor(BaseRetrievalAdvisor):
    """Searches a vector store with the user text and appends the results.

    A simpler alternative to ``RetrievalAugmentationAdvisor``: one search,
    no query transformation, and the rendered template is appended to the
    user's own text instead of replacing it.  The per-call filter
    expression in the advise context overrides the one in
    ``search_request``.

    Parameters:
        vector_store: The store to search.
        search_request: Base request providing ``top_k``, the similarity
            threshold and the default filter expression.
        prompt_template: Template with a ``{question_answer_context}``
            placeholder.
        order: Position in the advisor chain; lower runs first.
        protect_from_blocking: Run the search off the event loop when streaming.
        filter_parser: Parser applied to string filter overrides.
        renderer: Template renderer (default ``FormatTemplateRenderer``).
    """

    def __init__(
        self,
        vector_store: VectorStore,
        search_request: SearchRequest | None = None,
        prompt_template: str = DEFAULT_QUESTION_ANSWER_TEMPLATE,
        order: int = DEFAULT_ORDER,
        protect_from_blocking: bool = True,
        filter_parser: FilterExpressionParser | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        super().__init__(order=order, protect_from_blocking=protect_from_blocking)
        self._renderer: TemplateRenderer = renderer or FormatTemplateRenderer()
        validate_template(
            self._renderer, prompt_template, {QUESTION_ANSWER_CONTEXT}, "prompt_template"
        )
        self._vector_store = vector_store
        self._search_request = search_request or SearchRequest()
        self._prompt_template = prompt_template
        self._filter_parser = filter_parser

    def __repr__(self) -> str:
        return (
            f"QuestionAnswerAdvisor(order={self._order}, "
            f"top_k={self._search_request.top_k})"
        )

    def build_search_request(self, request: AdvisedRequest) -> SearchRequest:
        """Build the search request for one call."""
        filter_expression = resolve_filter_expression(
            request.advise_context,
            self._search_request.filter_expression,
            self._filter_parser,
        )
        return self._search_request.mutate(
            query=request.user_text, filter_expression=filter_expression
        )

    def before(self, request: AdvisedRequest) -> AdvisedRequest:
        context = dict(request.advise_context)
        search_request = self.build_search_request(request)
        try:
            documents = list(self._vector_store.similarity_search(search_request))
        except (RagAdvisorError, TimeoutError):
            raise
        except Exception as e:
            msg = f"Similarity search failed for query {search_request.query!r}"
            raise RetrievalError(msg, request=search_request) from e
        context[RETRIEVED_DOCUMENTS] = documents

        document_context = "\n".join(doc.text for doc in documents)
        advice = self._renderer.render(
            self._prompt_template, {QUESTION_ANSWER_CONTEXT: document_context}
        )
        augmented = f"{request.user_text}\n{advice}"
        logger.debug("QuestionAnswerAdvisor attached %d documents", len(documents))
        return AdvisedRequest(
            prompt=request.prompt.augment_user_message(augmented),
            advise_context=context,
        )
