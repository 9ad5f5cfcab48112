"""Shared fixtures for rag-advisors tests."""

from __future__ import annotations

import math
from collections.abc import AsyncIterator
from typing import Any

from rag_advisors.models.chat import ChatResponse, Generation
from rag_advisors.models.document import Document
from rag_advisors.models.messages import AssistantMessage, Prompt
from rag_advisors.models.query import Query
from rag_advisors.models.search import SearchRequest


def make_embedding(seed: int, dim: int = 64) -> list[float]:
    """Create a deterministic fake embedding using math.sin."""
    raw = [math.sin(seed * 1000 + i) for i in range(dim)]
    norm = math.sqrt(sum(x * x for x in raw))
    if norm == 0:
        return raw
    return [x / norm for x in raw]


def make_document(
    doc_id: str, text: str | None = None, score: float | None = None, **metadata: Any
) -> Document:
    return Document(id=doc_id, text=text or f"content of {doc_id}", score=score, metadata=metadata)


def make_fragment(text: str, finish_reason: str | None = None) -> ChatResponse:
    """A single streamed chat response fragment."""
    return ChatResponse(
        results=[Generation(output=AssistantMessage(text=text), finish_reason=finish_reason)]
    )


class FakeVectorStore:
    """Vector store returning pre-configured documents and recording requests."""

    def __init__(self, documents: list[Document] | None = None, error: Exception | None = None) -> None:
        self._documents = documents or []
        self._error = error
        self.requests: list[SearchRequest] = []

    def similarity_search(self, request: SearchRequest) -> list[Document]:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return self._documents[: request.top_k]


class FakeRetriever:
    """Retriever returning documents per query text, recording every query it sees."""

    def __init__(
        self,
        documents: list[Document] | dict[str, list[Document]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._documents = documents if documents is not None else []
        self._error = error
        self.queries: list[Query] = []

    def retrieve(self, query: Query) -> list[Document]:
        self.queries.append(query)
        if self._error is not None:
            raise self._error
        if isinstance(self._documents, dict):
            return list(self._documents.get(query.text, []))
        return list(self._documents)


class EchoChatModel:
    """Chat model that answers with the text of the last user message.

    ``stream`` splits the echoed text into words, the last fragment
    carrying ``finish_reason="stop"``.
    """

    def __init__(self) -> None:
        self.prompts: list[Prompt] = []

    def call(self, prompt: Prompt) -> ChatResponse:
        self.prompts.append(prompt)
        return make_fragment(prompt.user_message.text, finish_reason="stop")

    async def stream(self, prompt: Prompt) -> AsyncIterator[ChatResponse]:
        self.prompts.append(prompt)
        words = prompt.user_message.text.split()
        for i, word in enumerate(words):
            yield make_fragment(word, finish_reason="stop" if i == len(words) - 1 else None)


class ScriptedStreamingModel:
    """Chat model that streams a fixed list of fragments."""

    def __init__(self, fragments: list[ChatResponse], error_after: int | None = None) -> None:
        self._fragments = fragments
        self._error_after = error_after
        self.prompts: list[Prompt] = []
        self.closed = False

    def call(self, prompt: Prompt) -> ChatResponse:
        self.prompts.append(prompt)
        return self._fragments[-1]

    async def stream(self, prompt: Prompt) -> AsyncIterator[ChatResponse]:
        self.prompts.append(prompt)
        try:
            for i, fragment in enumerate(self._fragments):
                if self._error_after is not None and i == self._error_after:
                    msg = "model connection dropped"
                    raise ConnectionError(msg)
                yield fragment
        finally:
            self.closed = True


async def collect(stream: AsyncIterator[Any]) -> list[Any]:
    return [item async for item in stream]
