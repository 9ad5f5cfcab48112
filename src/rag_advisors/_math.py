"""Vector math used by the in-memory vector store."""

from __future__ import annotations

import math
from collections.abc import Sequence


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between two embeddings, clamped to ``[-1, 1]``.

    A zero vector has similarity ``0.0`` with everything.

    Raises:
        ValueError: If the embeddings are empty or differ in dimensionality.
    """
    if len(a) != len(b):
        msg = f"embeddings differ in dimensionality ({len(a)} != {len(b)})"
        raise ValueError(msg)
    if not a:
        msg = "cannot compare empty embeddings"
        raise ValueError(msg)

    denominator = math.hypot(*a) * math.hypot(*b)
    if denominator == 0:
        return 0.0
    dot = math.fsum(x * y for x, y in zip(a, b, strict=True))
    return max(-1.0, min(1.0, dot / denominator))
