"""Document model returned by retrievers."""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A retrieved unit of context.

    The pipeline only reads ``text``, ``metadata`` and ``score``; documents
    are frozen so a joiner or augmenter cannot alter what a retriever
    returned.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    text: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    score: float | None = None

    model_config = ConfigDict(frozen=True)
