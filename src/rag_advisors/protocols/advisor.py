"""Advisor chain protocol definitions.

Advisors wrap a single chat model invocation.  The unary shape is fully
synchronous; the streaming shape is an async iterator of response
fragments.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable

from rag_advisors.models.advised import AdvisedRequest, AdvisedResponse
from rag_advisors.models.chat import ChatResponse
from rag_advisors.models.messages import Prompt


@runtime_checkable
class ChatModel(Protocol):
    """Protocol for the language model at the end of the advisor chain."""

    def call(self, prompt: Prompt) -> ChatResponse:
        """Invoke the model and return the complete response."""
        ...

    def stream(self, prompt: Prompt) -> AsyncIterator[ChatResponse]:
        """Invoke the model and yield response fragments as they arrive.

        The last fragment of a well-formed stream carries a finish reason.
        """
        ...


@runtime_checkable
class CallAdvisorChain(Protocol):
    """The remainder of a unary advisor chain."""

    def next_call(self, request: AdvisedRequest) -> AdvisedResponse: ...


@runtime_checkable
class StreamAdvisorChain(Protocol):
    """The remainder of a streaming advisor chain."""

    def next_stream(self, request: AdvisedRequest) -> AsyncIterator[AdvisedResponse]: ...


@runtime_checkable
class CallAdvisor(Protocol):
    """Protocol for advisors intercepting unary calls.

    Advisors are sorted by ``order`` before execution; lower values run
    first on the request path.
    """

    @property
    def name(self) -> str: ...

    @property
    def order(self) -> int: ...

    def around_call(
        self, request: AdvisedRequest, chain: CallAdvisorChain
    ) -> AdvisedResponse: ...


@runtime_checkable
class StreamAdvisor(Protocol):
    """Protocol for advisors intercepting streaming calls."""

    @property
    def name(self) -> str: ...

    @property
    def order(self) -> int: ...

    def around_stream(
        self, request: AdvisedRequest, chain: StreamAdvisorChain
    ) -> AsyncIterator[AdvisedResponse]: ...
