"""Multi-query expansion."""

from __future__ import annotations

import logging
from collections.abc import Callable

from rag_advisors.exceptions import ConfigurationError
from rag_advisors.models.query import Query
from rag_advisors.query._generation import generate

logger = logging.getLogger(__name__)


class MultiQueryExpander:
    """Expands one query into several phrasings for broader retrieval coverage.

    The expander always returns exactly ``number_of_queries`` queries on
    success.  With ``include_original`` the original query comes first and
    fills one of the slots.  If the callback returns fewer variations than
    needed, the expansion is abandoned and only the original query is
    returned.

    Parameters:
        generate_fn: A callable ``(str, int) -> list[str]`` that takes a
            query string and count, returning that many query variations.
        number_of_queries: Total number of queries to produce (default 3).
        include_original: Whether the original query is part of the result.
    """

    __slots__ = ("_generate_fn", "_include_original", "_number_of_queries")

    def __init__(
        self,
        generate_fn: Callable[[str, int], list[str]],
        number_of_queries: int = 3,
        include_original: bool = False,
    ) -> None:
        if number_of_queries < 1:
            msg = "number_of_queries must be at least 1"
            raise ConfigurationError(msg)
        self._generate_fn = generate_fn
        self._number_of_queries = number_of_queries
        self._include_original = include_original

    def __repr__(self) -> str:
        return (
            f"MultiQueryExpander(number_of_queries={self._number_of_queries}, "
            f"include_original={self._include_original})"
        )

    @property
    def number_of_queries(self) -> int:
        return self._number_of_queries

    @property
    def include_original(self) -> bool:
        return self._include_original

    def expand(self, query: Query) -> list[Query]:
        needed = self._number_of_queries - 1 if self._include_original else self._number_of_queries
        if needed == 0:
            return [query]

        variations = generate("MultiQueryExpander", self._generate_fn, query.text, needed)
        variations = [v.strip() for v in variations or [] if v and v.strip()]
        if len(variations) < needed:
            logger.warning(
                "MultiQueryExpander expected %d variations but got %d; using the original query",
                needed,
                len(variations),
            )
            return [query]

        logger.debug("MultiQueryExpander generated %d variations for: %s", needed, query.text)
        expanded = [query.mutate(text=v) for v in variations[:needed]]
        if self._include_original:
            return [query, *expanded]
        return expanded
