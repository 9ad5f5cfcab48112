"""Advisors intercepting chat model calls."""

from .base import DEFAULT_ORDER, RETRIEVED_DOCUMENTS, BaseRetrievalAdvisor
from .chain import AdvisorChain
from .question_answer import QUESTION_ANSWER_CONTEXT, QuestionAnswerAdvisor
from .rag import RetrievalAugmentationAdvisor

__all__ = [
    "DEFAULT_ORDER",
    "QUESTION_ANSWER_CONTEXT",
    "RETRIEVED_DOCUMENTS",
    "AdvisorChain",
    "BaseRetrievalAdvisor",
    "QuestionAnswerAdvisor",
    "RetrievalAugmentationAdvisor",
]
