"""Custom exceptions for rag-advisors."""

from __future__ import annotations

from typing import Any

__all__ = [
    "ConfigurationError",
    "RagAdvisorError",
    "RetrievalError",
    "StreamIntegrityError",
    "TransformationError",
]


class RagAdvisorError(Exception):
    """Base exception for all rag-advisors errors."""


class TransformationError(RagAdvisorError):
    """Raised when a query transformer or expander cannot produce a result."""

    def __init__(self, message: str, transformer: str | None = None) -> None:
        super().__init__(message)
        self.transformer = transformer


class RetrievalError(RagAdvisorError):
    """Raised when the document store fails to answer a search request."""

    def __init__(self, message: str, request: Any | None = None) -> None:
        super().__init__(message)
        self.request = request


class ConfigurationError(RagAdvisorError, ValueError):
    """Raised at construction time when components are wired inconsistently."""


class StreamIntegrityError(RagAdvisorError):
    """Raised when a response stream ends without a terminal fragment."""

    def __init__(self, message: str, fragments: int = 0) -> None:
        super().__init__(message)
        self.fragments = fragments
