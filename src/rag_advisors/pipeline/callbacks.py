"""Pipeline callback protocol for observability and event hooks."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from rag_advisors.models.document import Document
from rag_advisors.models.query import Query

if TYPE_CHECKING:
    from .pipeline import PipelineResult

PIPELINE_EVENTS = frozenset(
    {
        "on_pipeline_start",
        "on_query_transformed",
        "on_documents_retrieved",
        "on_pipeline_end",
        "on_pipeline_error",
    }
)


@runtime_checkable
class PipelineCallback(Protocol):
    """Protocol for retrieval-augmentation pipeline event callbacks.

    Callbacks only need to define the methods they care about; missing
    methods are skipped.
    """

    def on_pipeline_start(self, query: Query) -> None: ...
    def on_query_transformed(self, original: Query, transformed: Query) -> None: ...
    def on_documents_retrieved(self, query: Query, documents: list[Document]) -> None: ...
    def on_pipeline_end(self, result: PipelineResult) -> None: ...
    def on_pipeline_error(self, query: Query, error: Exception) -> None: ...


def notify_callbacks(
    callbacks: Sequence[Any],
    event: str,
    *args: Any,
    logger: logging.Logger,
) -> None:
    """Deliver one pipeline event to every callback that handles it.

    Callbacks are observers: an exception raised by one is logged at
    ``WARNING`` with its traceback, and delivery continues with the next.

    Parameters:
        callbacks: The registered callback objects, in registration order.
        event: One of ``PIPELINE_EVENTS``.
        *args: The event payload.
        logger: Logger that records callback failures.

    Raises:
        ValueError: If ``event`` is not a pipeline event.
    """
    if event not in PIPELINE_EVENTS:
        msg = f"Unknown pipeline event: {event!r}"
        raise ValueError(msg)
    for callback in callbacks:
        handler = getattr(callback, event, None)
        if not callable(handler):
            continue
        try:
            handler(*args)
        except Exception:
            logger.warning(
                "Pipeline callback %s.%s failed", type(callback).__name__, event, exc_info=True
            )
