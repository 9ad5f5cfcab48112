"""Built-in query transformation strategies.

All transformers accept callback functions for LLM generation so that
``rag-advisors`` never calls an LLM directly.  Users supply their own
generation functions and the transformers handle orchestration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rag_advisors.models.messages import Message
from rag_advisors.models.query import Query
from rag_advisors.query._generation import generate, with_text

logger = logging.getLogger(__name__)


class CompressionQueryTransformer:
    """Collapses conversation history and a follow-up into one standalone query.

    Follow-up questions such as "and what about its population?" only make
    sense next to the preceding turns.  This transformer asks the supplied
    callback for a self-contained rewrite.  When the query carries no
    history it is returned unchanged.

    Parameters:
        generate_fn: A callable ``(list[Message], str) -> str`` receiving the
            history and the follow-up query, returning the standalone query.
    """

    __slots__ = ("_generate_fn",)

    def __init__(self, generate_fn: Callable[[list[Message], str], str]) -> None:
        self._generate_fn = generate_fn

    def __repr__(self) -> str:
        return "CompressionQueryTransformer()"

    def transform(self, query: Query) -> Query:
        if not query.history:
            logger.debug("CompressionQueryTransformer: no history, returning query unchanged")
            return query
        compressed = generate(
            "CompressionQueryTransformer", self._generate_fn, list(query.history), query.text
        )
        logger.debug("CompressionQueryTransformer: %r -> %r", query.text, compressed)
        return with_text("CompressionQueryTransformer", query, compressed)


class RewriteQueryTransformer:
    """Restates a query so it matches a target search system better.

    Verbose or ambiguous user phrasing often retrieves poorly; the rewrite
    callback is asked for a concise query aimed at ``target_search_system``.

    Parameters:
        generate_fn: A callable ``(str, str) -> str`` taking the query text
            and the target search system name.
        target_search_system: Description of the system the query is
            rewritten for (default ``"vector store"``).
    """

    __slots__ = ("_generate_fn", "_target_search_system")

    def __init__(
        self,
        generate_fn: Callable[[str, str], str],
        target_search_system: str = "vector store",
    ) -> None:
        if not target_search_system.strip():
            msg = "target_search_system must not be empty"
            raise ValueError(msg)
        self._generate_fn = generate_fn
        self._target_search_system = target_search_system

    def __repr__(self) -> str:
        return f"RewriteQueryTransformer(target_search_system={self._target_search_system!r})"

    def transform(self, query: Query) -> Query:
        rewritten = generate(
            "RewriteQueryTransformer",
            self._generate_fn,
            query.text,
            self._target_search_system,
        )
        logger.debug("RewriteQueryTransformer: %r -> %r", query.text, rewritten)
        return with_text("RewriteQueryTransformer", query, rewritten)


class TranslationQueryTransformer:
    """Translates a query into the language the embedding model expects.

    When ``detect_language_fn`` is supplied it is consulted first: a query
    already in ``target_language``, or one whose language cannot be
    determined (``None``), is returned unchanged without calling
    ``generate_fn``.

    Parameters:
        generate_fn: A callable ``(str, str) -> str`` taking the query text
            and target language, returning the translation.
        target_language: Language name, e.g. ``"english"``.
        detect_language_fn: Optional callable ``(str) -> str | None``.
    """

    __slots__ = ("_detect_language_fn", "_generate_fn", "_target_language")

    def __init__(
        self,
        generate_fn: Callable[[str, str], str],
        target_language: str,
        detect_language_fn: Callable[[str], str | None] | None = None,
    ) -> None:
        if not target_language.strip():
            msg = "target_language must not be empty"
            raise ValueError(msg)
        self._generate_fn = generate_fn
        self._target_language = target_language
        self._detect_language_fn = detect_language_fn

    def __repr__(self) -> str:
        return f"TranslationQueryTransformer(target_language={self._target_language!r})"

    def transform(self, query: Query) -> Query:
        if self._detect_language_fn is not None:
            detected = generate(
                "TranslationQueryTransformer", self._detect_language_fn, query.text
            )
            if detected is None or detected.strip().lower() == self._target_language.lower():
                logger.debug(
                    "TranslationQueryTransformer: detected language %r, skipping", detected
                )
                return query
        translated = generate(
            "TranslationQueryTransformer",
            self._generate_fn,
            query.text,
            self._target_language,
        )
        logger.debug("TranslationQueryTransformer: %r -> %r", query.text, translated)
        return with_text("TranslationQueryTransformer", query, translated)
