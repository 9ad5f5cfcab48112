"""Query augmentation and prompt templates."""

from .augmenter import ContextualQueryAugmenter, join_document_texts
from .templates import (
    DEFAULT_EMPTY_CONTEXT_PROMPT_TEMPLATE,
    DEFAULT_PROMPT_TEMPLATE,
    DEFAULT_QUESTION_ANSWER_TEMPLATE,
    DEFAULT_REFUSAL_PROMPT_TEMPLATE,
    FormatTemplateRenderer,
)

__all__ = [
    "DEFAULT_EMPTY_CONTEXT_PROMPT_TEMPLATE",
    "DEFAULT_PROMPT_TEMPLATE",
    "DEFAULT_QUESTION_ANSWER_TEMPLATE",
    "DEFAULT_REFUSAL_PROMPT_TEMPLATE",
    "ContextualQueryAugmenter",
    "FormatTemplateRenderer",
    "join_document_texts",
]
