"""Data models for queries, documents, prompts and advised envelopes."""

from .advised import AdvisedRequest, AdvisedResponse
from .chat import ChatResponse, Generation
from .document import Document
from .messages import (
    AssistantMessage,
    ChatOptions,
    Message,
    Prompt,
    SystemMessage,
    UserMessage,
)
from .query import Query
from .search import DEFAULT_TOP_K, SIMILARITY_THRESHOLD_ACCEPT_ALL, SearchRequest

__all__ = [
    "DEFAULT_TOP_K",
    "SIMILARITY_THRESHOLD_ACCEPT_ALL",
    "AdvisedRequest",
    "AdvisedResponse",
    "AssistantMessage",
    "ChatOptions",
    "ChatResponse",
    "Document",
    "Generation",
    "Message",
    "Prompt",
    "Query",
    "SearchRequest",
    "SystemMessage",
    "UserMessage",
]
