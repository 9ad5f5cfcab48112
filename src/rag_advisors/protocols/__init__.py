"""Protocol definitions for rag-advisors' pluggable architecture."""

from .advisor import (
    CallAdvisor,
    CallAdvisorChain,
    ChatModel,
    StreamAdvisor,
    StreamAdvisorChain,
)
from .augmenter import QueryAugmenter
from .joiner import DocumentJoiner
from .query_transform import QueryExpander, QueryTransformer
from .retriever import DocumentRetriever
from .storage import FilterExpressionParser, VectorStore
from .template import TemplateRenderer

__all__ = [
    "CallAdvisor",
    "CallAdvisorChain",
    "ChatModel",
    "DocumentJoiner",
    "DocumentRetriever",
    "FilterExpressionParser",
    "QueryAugmenter",
    "QueryExpander",
    "QueryTransformer",
    "StreamAdvisor",
    "StreamAdvisorChain",
    "TemplateRenderer",
    "VectorStore",
]
