"""Query transformation and expansion strategies."""

from .expander import MultiQueryExpander
from .transformers import (
    CompressionQueryTransformer,
    RewriteQueryTransformer,
    TranslationQueryTransformer,
)

__all__ = [
    "CompressionQueryTransformer",
    "MultiQueryExpander",
    "RewriteQueryTransformer",
    "TranslationQueryTransformer",
]
