"""Shared input handling for the algorithm modules."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from ..exceptions import ShapeMismatchError

Array2D = np.ndarray
EmbIn = Union[np.ndarray, Sequence[Sequence[float]]]


def as_embedding_matrix(embeddings: EmbIn) -> Array2D:
    """
    Convert an embedding batch to a float64 ``(n, d)`` array.

    The result never shares memory with the caller's array, so algorithms are
    free to work on it in place.

    Raises:
        ShapeMismatchError: If rows differ in length or the input is not 2-D.
    """
    if isinstance(embeddings, np.ndarray):
        if embeddings.ndim == 1 and embeddings.size == 0:
            return np.zeros((0, 0), dtype=np.float64)
        if embeddings.ndim != 2:
            raise ShapeMismatchError(
                "embeddings must be a 2-D array", expected=2, actual=embeddings.ndim
            )
        return np.array(embeddings, dtype=np.float64, copy=True)

    rows = list(embeddings)
    if not rows:
        return np.zeros((0, 0), dtype=np.float64)
    for r in rows:
        if np.ndim(r) != 1:
            raise ShapeMismatchError(
                "embeddings must be a 2-D array", expected=2, actual=np.ndim(r) + 1
            )
    widths = [len(r) for r in rows]
    if len(set(widths)) > 1:
        bad = next(i for i, w in enumerate(widths) if w != widths[0])
        raise ShapeMismatchError(
            f"all vectors must share one dimension (row {bad} differs)",
            expected=widths[0],
            actual=widths[bad],
        )
    return np.array(rows, dtype=np.float64).reshape(len(rows), widths[0])
