"""Shared before/after advisor logic for retrieval advisors."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from rag_advisors.exceptions import StreamIntegrityError
from rag_advisors.models.advised import AdvisedRequest, AdvisedResponse
from rag_advisors.models.chat import ChatResponse
from rag_advisors.protocols.advisor import CallAdvisorChain, StreamAdvisorChain

logger = logging.getLogger(__name__)

RETRIEVED_DOCUMENTS = "qa_retrieved_documents"

DEFAULT_ORDER = 0


class BaseRetrievalAdvisor(ABC):
    """Base class for advisors that retrieve context before the model call.

    Subclasses implement ``before``, which must store the retrieved
    documents in the advise context under ``RETRIEVED_DOCUMENTS``.  This
    class supplies ``after`` and both invocation shapes:

    * ``around_call`` runs ``before``, the rest of the chain, then ``after``.
    * ``around_stream`` runs ``before`` once, then yields every fragment of
      the downstream stream as it arrives.  Only the terminal fragment (the
      one carrying a finish reason) goes through ``after``.  A stream that
      ends without a terminal fragment raises ``StreamIntegrityError``
      after the fragments already delivered.

    ``before`` usually blocks on network calls.  With
    ``protect_from_blocking`` (the default) the streaming shape runs it in a
    worker thread via ``asyncio.to_thread`` so the event loop stays free;
    the unary shape always runs it inline.

    Parameters:
        order: Position in the advisor chain; lower runs first.
        protect_from_blocking: Run ``before`` off the event loop when streaming.
    """

    def __init__(
        self, order: int = DEFAULT_ORDER, protect_from_blocking: bool = True
    ) -> None:
        self._order = order
        self._protect_from_blocking = protect_from_blocking

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def order(self) -> int:
        return self._order

    @property
    def protect_from_blocking(self) -> bool:
        return self._protect_from_blocking

    @abstractmethod
    def before(self, request: AdvisedRequest) -> AdvisedRequest:
        """Retrieve context and return the augmented request."""

    def after(self, response: AdvisedResponse) -> AdvisedResponse:
        """Attach the retrieved documents to the response metadata.

        The generated text is left untouched.
        """
        documents = response.advise_context.get(RETRIEVED_DOCUMENTS, [])
        chat_response = response.response or ChatResponse()
        return response.with_response(
            chat_response.with_metadata(RETRIEVED_DOCUMENTS, list(documents))
        )

    def around_call(
        self, request: AdvisedRequest, chain: CallAdvisorChain
    ) -> AdvisedResponse:
        advised = self.before(request)
        response = chain.next_call(advised)
        return self.after(response)

    async def around_stream(
        self, request: AdvisedRequest, chain: StreamAdvisorChain
    ) -> AsyncIterator[AdvisedResponse]:
        if self._protect_from_blocking:
            advised = await asyncio.to_thread(self.before, request)
        else:
            advised = self.before(request)

        fragments = 0
        terminal_seen = False
        stream = chain.next_stream(advised)
        try:
            async for response in stream:
                fragments += 1
                if response.is_terminal:
                    terminal_seen = True
                    response = self.after(response)
                yield response
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

        if not terminal_seen:
            msg = f"{self.name}: stream ended after {fragments} fragments without a finish reason"
            raise StreamIntegrityError(msg, fragments=fragments)
