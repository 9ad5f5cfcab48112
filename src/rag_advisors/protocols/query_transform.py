"""Query transformation protocol definitions.

Any object with a ``transform`` (or ``expand``) method matching these
signatures can be used in the pipeline -- no inheritance required.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rag_advisors.models.query import Query


@runtime_checkable
class QueryTransformer(Protocol):
    """Protocol for one-to-one query transformation strategies.

    Transformers run in order before retrieval; each receives the output
    of the previous one.  Implementations may call a language model, but
    the call must complete before ``transform`` returns.
    """

    def transform(self, query: Query) -> Query:
        """Transform a query into a new query.

        Parameters:
            query: The query produced by the previous stage.

        Returns:
            A new ``Query``; the input is never modified.

        Raises:
            TransformationError: If no result could be produced.
        """
        ...


@runtime_checkable
class QueryExpander(Protocol):
    """Protocol for one-to-many query expansion strategies."""

    def expand(self, query: Query) -> list[Query]:
        """Expand a query into an ordered list of queries.

        Parameters:
            query: The transformed query.

        Returns:
            A non-empty list of ``Query`` objects.
        """
        ...
