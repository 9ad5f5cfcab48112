"""Shared helpers for invoking user-supplied generation callbacks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from rag_advisors.exceptions import RagAdvisorError, TransformationError
from rag_advisors.models.query import Query

logger = logging.getLogger(__name__)


def generate(transformer: str, fn: Callable[..., Any], *args: Any) -> Any:
    """Invoke a generation callback, wrapping failures in ``TransformationError``.

    Library errors and ``TimeoutError`` propagate unchanged.
    """
    try:
        return fn(*args)
    except (RagAdvisorError, TimeoutError):
        raise
    except Exception as e:
        msg = f"{transformer} failed to generate a result"
        raise TransformationError(msg, transformer=transformer) from e


def with_text(transformer: str, query: Query, text: str | None) -> Query:
    """Return ``query`` with new text, keeping the original when ``text`` is blank."""
    if text is None or not text.strip():
        logger.warning("%s returned an empty result; keeping the original query", transformer)
        return query
    return query.mutate(text=text.strip())
