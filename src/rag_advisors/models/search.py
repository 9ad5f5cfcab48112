"""Search request model handed to vector stores."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TOP_K = 4
SIMILARITY_THRESHOLD_ACCEPT_ALL = 0.0


class SearchRequest(BaseModel):
    """Parameters for a single similarity search.

    ``filter_expression`` is opaque to this library: it is produced by a
    filter parser (or supplied directly) and only interpreted by the store.
    """

    query: str = ""
    top_k: int = Field(default=DEFAULT_TOP_K, ge=1)
    similarity_threshold: float = Field(
        default=SIMILARITY_THRESHOLD_ACCEPT_ALL, ge=0.0, le=1.0
    )
    filter_expression: Any | None = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def has_filter_expression(self) -> bool:
        return self.filter_expression is not None

    def mutate(self, **updates: Any) -> SearchRequest:
        """Derive a per-call request, validating the updated fields."""
        fields: dict[str, Any] = {
            "query": self.query,
            "top_k": self.top_k,
            "similarity_threshold": self.similarity_threshold,
            "filter_expression": self.filter_expression,
        }
        fields.update(updates)
        return SearchRequest(**fields)
