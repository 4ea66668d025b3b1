"""
Vector similarity helpers used for nearest-neighbour ranking.
"""

from typing import Optional, Sequence

import numpy as np


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity between two vectors, in [-1, 1].

    A zero-magnitude vector has no direction, so its similarity to
    anything is 0.0.
    """
    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    if vec_a.shape != vec_b.shape:
        raise ValueError(f"Vector length mismatch: {vec_a.shape[0]} != {vec_b.shape[0]}")

    magnitude_a = np.linalg.norm(vec_a)
    magnitude_b = np.linalg.norm(vec_b)
    if magnitude_a == 0 or magnitude_b == 0:
        return 0.0

    similarity = np.dot(vec_a, vec_b) / (magnitude_a * magnitude_b)
    return float(np.clip(similarity, -1.0, 1.0))


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean (L2) distance between two vectors."""
    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    if vec_a.shape != vec_b.shape:
        raise ValueError(f"Vector length mismatch: {vec_a.shape[0]} != {vec_b.shape[0]}")
    return float(np.linalg.norm(vec_a - vec_b))


def rank_by_similarity(
    query: Sequence[float],
    candidates: Sequence[Sequence[float]],
    limit: Optional[int] = None,
    min_score: Optional[float] = None,
) -> list[tuple[int, float]]:
    """
    Rank candidates by cosine similarity to a query.

    Args:
        query: The query vector
        candidates: Candidate vectors, all the same length as the query
        limit: Keep at most this many results
        min_score: Drop candidates scoring below this

    Returns:
        (candidate index, score) pairs, highest score first. Equal scores
        keep their candidate order.
    """
    scored = [(i, cosine_similarity(query, candidate)) for i, candidate in enumerate(candidates)]
    if min_score is not None:
        scored = [(i, score) for i, score in scored if score >= min_score]

    # list.sort is stable, so ties stay in candidate order
    scored.sort(key=lambda x: x[1], reverse=True)

    if limit is not None:
        scored = scored[:limit]
    return scored
