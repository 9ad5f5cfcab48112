"""Default advisor chain ending in a chat model call."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any

from rag_advisors.exceptions import ConfigurationError
from rag_advisors.models.advised import AdvisedRequest, AdvisedResponse
from rag_advisors.protocols.advisor import CallAdvisor, ChatModel, StreamAdvisor

logger = logging.getLogger(__name__)


class AdvisorChain:
    """Runs advisors in ``order`` and finally invokes the chat model.

    Usage::

        chain = AdvisorChain(model, [RetrievalAugmentationAdvisor(pipeline)])
        response = chain.call(AdvisedRequest.of("What is RAG?"))

        async for fragment in chain.stream(AdvisedRequest.of("What is RAG?")):
            ...

    Advisors are sorted once by ``order`` (stable, lowest first).  A chain
    never changes after construction: advancing creates a successor at the
    next position, so one chain can serve concurrent and repeated calls.
    """

    __slots__ = ("_advisors", "_call_advisors", "_chat_model", "_position", "_stream_advisors")

    def __init__(
        self,
        chat_model: ChatModel,
        advisors: Sequence[Any] = (),
        *,
        _position: int = 0,
    ) -> None:
        if not isinstance(chat_model, ChatModel):
            msg = f"chat_model must implement ChatModel, got {type(chat_model).__name__}"
            raise ConfigurationError(msg)
        for advisor in advisors:
            if not isinstance(advisor, (CallAdvisor, StreamAdvisor)):
                msg = f"{type(advisor).__name__} is neither a CallAdvisor nor a StreamAdvisor"
                raise ConfigurationError(msg)
        ordered = sorted(advisors, key=lambda a: a.order)
        self._chat_model = chat_model
        self._advisors = tuple(ordered)
        self._call_advisors: tuple[CallAdvisor, ...] = tuple(
            a for a in ordered if isinstance(a, CallAdvisor)
        )
        self._stream_advisors: tuple[StreamAdvisor, ...] = tuple(
            a for a in ordered if isinstance(a, StreamAdvisor)
        )
        self._position = _position

    def __repr__(self) -> str:
        names = ", ".join(a.name for a in self._call_advisors)
        return f"AdvisorChain([{names}], position={self._position})"

    @property
    def call_advisors(self) -> list[CallAdvisor]:
        """The unary advisors in execution order."""
        return list(self._call_advisors)

    @property
    def stream_advisors(self) -> list[StreamAdvisor]:
        """The streaming advisors in execution order."""
        return list(self._stream_advisors)

    def _successor(self) -> AdvisorChain:
        return AdvisorChain(self._chat_model, self._advisors, _position=self._position + 1)

    # -- Entry points --

    def call(self, request: AdvisedRequest) -> AdvisedResponse:
        """Run ``request`` through every unary advisor and the model."""
        return self.next_call(request)

    def stream(self, request: AdvisedRequest) -> AsyncIterator[AdvisedResponse]:
        """Run ``request`` through every streaming advisor and the model."""
        return self.next_stream(request)

    # -- Chain links --

    def next_call(self, request: AdvisedRequest) -> AdvisedResponse:
        if self._position < len(self._call_advisors):
            advisor = self._call_advisors[self._position]
            logger.debug("Advising call with %s", advisor.name)
            return advisor.around_call(request, self._successor())
        response = self._chat_model.call(request.prompt)
        return AdvisedResponse.from_request(request, response)

    def next_stream(self, request: AdvisedRequest) -> AsyncIterator[AdvisedResponse]:
        if self._position < len(self._stream_advisors):
            advisor = self._stream_advisors[self._position]
            logger.debug("Advising stream with %s", advisor.name)
            return advisor.around_stream(request, self._successor())
        return self._model_stream(request)

    async def _model_stream(self, request: AdvisedRequest) -> AsyncIterator[AdvisedResponse]:
        stream = self._chat_model.stream(request.prompt)
        try:
            async for fragment in stream:
                yield AdvisedResponse.from_request(request, fragment)
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()
