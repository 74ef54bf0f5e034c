"""Vector similarity helpers."""

import math
from typing import Optional, Sequence


def cosine_similarity(
    vec1: Optional[Sequence[float]], vec2: Optional[Sequence[float]]
) -> float:
    """
    Cosine similarity between two vectors, in [-1, 1].

    Returns 0.0 instead of raising when either vector is missing or empty,
    when their lengths differ, or when either has zero magnitude.
    """
    if not vec1 or not vec2 or len(vec1) != len(vec2):
        return 0.0

    dot_product = sum(a * b for a, b in zip(vec1, vec2))
    magnitude1 = math.sqrt(sum(a * a for a in vec1))
    magnitude2 = math.sqrt(sum(b * b for b in vec2))

    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0

    return dot_product / (magnitude1 * magnitude2)


def cosine_distance(
    vec1: Optional[Sequence[float]], vec2: Optional[Sequence[float]]
) -> float:
    """pgvector-style cosine distance (``<=>``): 0 for identical direction, up to 2."""
    return 1.0 - cosine_similarity(vec1, vec2)
