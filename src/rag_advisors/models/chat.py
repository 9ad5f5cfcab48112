"""Chat response models returned by the model and passed through advisors."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rag_advisors.models.messages import AssistantMessage


class Generation(BaseModel):
    """One candidate output of a model call or one fragment of a stream."""

    output: AssistantMessage = Field(default_factory=AssistantMessage)
    finish_reason: str | None = None

    model_config = ConfigDict(frozen=True)


class ChatResponse(BaseModel):
    """A complete model response, or a single fragment of a streamed one."""

    results: list[Generation] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def text(self) -> str:
        """Text of the first generation, or an empty string."""
        if not self.results:
            return ""
        return self.results[0].output.text

    @property
    def is_terminal(self) -> bool:
        """True when any generation carries a finish reason."""
        return any(
            g.finish_reason is not None and g.finish_reason.strip() != ""
            for g in self.results
        )

    def with_metadata(self, key: str, value: Any) -> ChatResponse:
        """Return a copy with ``key`` set in a fresh metadata dict."""
        return self.model_copy(update={"metadata": {**self.metadata, key: value}})
