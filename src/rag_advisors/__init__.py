"""rag-advisors: Retrieval-augmented generation pipelines and advisors.

Advisors:
    AdvisorChain, RetrievalAugmentationAdvisor, QuestionAnswerAdvisor,
    BaseRetrievalAdvisor, RETRIEVED_DOCUMENTS, FILTER_EXPRESSION

Pipeline:
    RetrievalAugmentationPipeline, PipelineResult, PipelineDiagnostics,
    PipelineCallback

Query Transformation:
    CompressionQueryTransformer, RewriteQueryTransformer,
    TranslationQueryTransformer, MultiQueryExpander

Retrieval & Joining:
    VectorStoreDocumentRetriever, ConcatenationDocumentJoiner,
    ReciprocalRankFusionDocumentJoiner

Augmentation:
    ContextualQueryAugmenter, FormatTemplateRenderer

Protocols (extension points):
    QueryTransformer, QueryExpander, DocumentRetriever, DocumentJoiner,
    QueryAugmenter, VectorStore, FilterExpressionParser, TemplateRenderer,
    ChatModel, CallAdvisor, StreamAdvisor, CallAdvisorChain, StreamAdvisorChain

Storage:
    InMemoryVectorStore

Models & Types:
    Query, Document, SearchRequest, Prompt, ChatOptions, Message,
    UserMessage, AssistantMessage, SystemMessage, ChatResponse, Generation,
    AdvisedRequest, AdvisedResponse

Exceptions:
    RagAdvisorError, TransformationError, RetrievalError,
    ConfigurationError, StreamIntegrityError
"""

from importlib.metadata import PackageNotFoundError, version

from rag_advisors.advisor import (
    RETRIEVED_DOCUMENTS,
    AdvisorChain,
    BaseRetrievalAdvisor,
    QuestionAnswerAdvisor,
    RetrievalAugmentationAdvisor,
)
from rag_advisors.augmentation import ContextualQueryAugmenter, FormatTemplateRenderer
from rag_advisors.exceptions import (
    ConfigurationError,
    RagAdvisorError,
    RetrievalError,
    StreamIntegrityError,
    TransformationError,
)
from rag_advisors.models import (
    AdvisedRequest,
    AdvisedResponse,
    AssistantMessage,
    ChatOptions,
    ChatResponse,
    Document,
    Generation,
    Message,
    Prompt,
    Query,
    SearchRequest,
    SystemMessage,
    UserMessage,
)
from rag_advisors.pipeline import (
    PipelineCallback,
    PipelineDiagnostics,
    PipelineResult,
    RetrievalAugmentationPipeline,
)
from rag_advisors.protocols import (
    CallAdvisor,
    CallAdvisorChain,
    ChatModel,
    DocumentJoiner,
    DocumentRetriever,
    FilterExpressionParser,
    QueryAugmenter,
    QueryExpander,
    QueryTransformer,
    StreamAdvisor,
    StreamAdvisorChain,
    TemplateRenderer,
    VectorStore,
)
from rag_advisors.query import (
    CompressionQueryTransformer,
    MultiQueryExpander,
    RewriteQueryTransformer,
    TranslationQueryTransformer,
)
from rag_advisors.retrieval import (
    FILTER_EXPRESSION,
    ConcatenationDocumentJoiner,
    ReciprocalRankFusionDocumentJoiner,
    VectorStoreDocumentRetriever,
)
from rag_advisors.storage import InMemoryVectorStore

try:
    __version__ = version("rag-advisors")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "FILTER_EXPRESSION",
    "RETRIEVED_DOCUMENTS",
    "AdvisedRequest",
    "AdvisedResponse",
    "AdvisorChain",
    "AssistantMessage",
    "BaseRetrievalAdvisor",
    "CallAdvisor",
    "CallAdvisorChain",
    "ChatModel",
    "ChatOptions",
    "ChatResponse",
    "CompressionQueryTransformer",
    "ConcatenationDocumentJoiner",
    "ConfigurationError",
    "ContextualQueryAugmenter",
    "Document",
    "DocumentJoiner",
    "DocumentRetriever",
    "FilterExpressionParser",
    "FormatTemplateRenderer",
    "Generation",
    "InMemoryVectorStore",
    "Message",
    "MultiQueryExpander",
    "PipelineCallback",
    "PipelineDiagnostics",
    "PipelineResult",
    "Prompt",
    "Query",
    "QueryAugmenter",
    "QueryExpander",
    "QueryTransformer",
    "QuestionAnswerAdvisor",
    "RagAdvisorError",
    "ReciprocalRankFusionDocumentJoiner",
    "RetrievalAugmentationAdvisor",
    "RetrievalAugmentationPipeline",
    "RetrievalError",
    "RewriteQueryTransformer",
    "SearchRequest",
    "StreamAdvisor",
    "StreamAdvisorChain",
    "StreamIntegrityError",
    "SystemMessage",
    "TemplateRenderer",
    "TransformationError",
    "TranslationQueryTransformer",
    "UserMessage",
    "VectorStore",
    "VectorStoreDocumentRetriever",
    "__version__",
]
