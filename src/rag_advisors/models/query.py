"""Query model passed through the retrieval-augmentation pipeline."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rag_advisors.models.messages import Message


class Query(BaseModel):
    """The user's information need as it flows through the pipeline.

    Queries are immutable: transformers return new instances instead of
    editing ``text``, ``history`` or ``context`` in place.  A query hashes
    by its text and the texts of its history so it can key the per-query
    result mapping handed to document joiners.
    """

    text: str
    history: list[Message] = Field(default_factory=list)
    context: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def __hash__(self) -> int:
        return hash((self.text, tuple((m.role, m.text) for m in self.history)))

    def mutate(self, **updates: Any) -> Query:
        """Return a copy with ``updates`` applied and fresh history/context containers."""
        fields: dict[str, Any] = {
            "text": self.text,
            "history": list(self.history),
            "context": dict(self.context),
        }
        fields.update(updates)
        return Query(**fields)
