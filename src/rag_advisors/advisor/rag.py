"""Advisor running the modular retrieval-augmentation pipeline."""

from __future__ import annotations

import logging

from rag_advisors.exceptions import ConfigurationError
from rag_advisors.models.advised import AdvisedRequest
from rag_advisors.models.messages import Message, UserMessage
from rag_advisors.models.query import Query
from rag_advisors.pipeline.pipeline import RetrievalAugmentationPipeline

from .base import DEFAULT_ORDER, RETRIEVED_DOCUMENTS, BaseRetrievalAdvisor

logger = logging.getLogger(__name__)


def _split_history(messages: list[Message]) -> list[Message]:
    """Return the messages preceding the last user message."""
    for i in range(len(messages) - 1, -1, -1):
        if isinstance(messages[i], UserMessage):
            return list(messages[:i])
    return list(messages)


class RetrievalAugmentationAdvisor(BaseRetrievalAdvisor):
    """Augments the user message with context from a ``RetrievalAugmentationPipeline``.

    The last user message becomes the query text, earlier messages its
    history, and a copy of the advise context its context (so a per-call
    filter expression reaches the retriever).  The augmented query text
    replaces the user message and the joined documents are stored under
    ``RETRIEVED_DOCUMENTS``.

    Parameters:
        pipeline: The configured retrieval-augmentation pipeline.
        order: Position in the advisor chain; lower runs first.
        protect_from_blocking: Run the pipeline off the event loop when streaming.
    """

    def __init__(
        self,
        pipeline: RetrievalAugmentationPipeline,
        order: int = DEFAULT_ORDER,
        protect_from_blocking: bool = True,
    ) -> None:
        if not isinstance(pipeline, RetrievalAugmentationPipeline):
            msg = "pipeline must be a RetrievalAugmentationPipeline"
            raise ConfigurationError(msg)
        super().__init__(order=order, protect_from_blocking=protect_from_blocking)
        self._pipeline = pipeline

    def __repr__(self) -> str:
        return f"RetrievalAugmentationAdvisor(order={self._order}, pipeline={self._pipeline!r})"

    @property
    def pipeline(self) -> RetrievalAugmentationPipeline:
        return self._pipeline

    def before(self, request: AdvisedRequest) -> AdvisedRequest:
        context = dict(request.advise_context)
        prompt = request.prompt
        query = Query(
            text=prompt.user_message.text,
            history=_split_history(prompt.messages),
            context=context,
        )
        result = self._pipeline.run(query)
        context[RETRIEVED_DOCUMENTS] = result.documents
        logger.debug(
            "RetrievalAugmentationAdvisor attached %d documents", len(result.documents)
        )
        return AdvisedRequest(
            prompt=prompt.augment_user_message(result.augmented_query.text),
            advise_context=context,
        )
