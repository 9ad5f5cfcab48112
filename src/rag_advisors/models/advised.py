"""Request and response envelopes flowing through the advisor chain."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rag_advisors.models.chat import ChatResponse
from rag_advisors.models.messages import Prompt


class AdvisedRequest(BaseModel):
    """A prompt plus the advise context shared by the advisors of one call.

    The context is the only state passed across the before/after boundary.
    Every ``with_*`` derivation copies it, so two requests never alias the
    same mapping.
    """

    prompt: Prompt
    advise_context: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, user_text: str, **advise_context: Any) -> AdvisedRequest:
        """Shortcut for a single-user-message request."""
        return cls(prompt=Prompt.build(content=user_text), advise_context=advise_context)

    @property
    def user_text(self) -> str:
        return self.prompt.user_message.text

    def with_prompt(self, prompt: Prompt) -> AdvisedRequest:
        return AdvisedRequest(prompt=prompt, advise_context=dict(self.advise_context))

    def with_context(self, **updates: Any) -> AdvisedRequest:
        return AdvisedRequest(
            prompt=self.prompt, advise_context={**self.advise_context, **updates}
        )


class AdvisedResponse(BaseModel):
    """A chat response (or stream fragment) plus the advise context."""

    response: ChatResponse | None = None
    advise_context: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_request(cls, request: AdvisedRequest, response: ChatResponse) -> AdvisedResponse:
        return cls(response=response, advise_context=dict(request.advise_context))

    @property
    def is_terminal(self) -> bool:
        return self.response is not None and self.response.is_terminal

    def with_response(self, response: ChatResponse) -> AdvisedResponse:
        return AdvisedResponse(response=response, advise_context=dict(self.advise_context))
