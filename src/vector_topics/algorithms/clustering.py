"""
Centroid-based clustering of embeddings.

Provides k-means with k-means++ seeding. Cluster ids are arbitrary: two runs
with different seeds may number the same groups differently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from ..exceptions import InvalidParameterError
from ..utils.logging_config import get_logger
from ._shared import Array2D, EmbIn, as_embedding_matrix

logger = get_logger(__name__)


@dataclass
class ClusteringResult:
    """Result of a single clustering run."""

    labels: np.ndarray
    centroids: Array2D
    objective: float
    n_iter: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def sizes(self) -> np.ndarray:
        """Number of points per cluster id, including empty ids."""
        return np.bincount(self.labels, minlength=self.centroids.shape[0])


# ------------------------------------------------------------------
# K-means++ initialisation & assignment helpers
# ------------------------------------------------------------------

def _sq_distances(X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """(n, K) squared Euclidean distances, clipped at zero."""
    cross = X @ centroids.T
    dists = np.einsum("ij,ij->i", X, X)[:, None] - 2.0 * cross
    dists += np.einsum("ij,ij->i", centroids, centroids)[None, :]
    return np.maximum(dists, 0.0, out=dists)


def _kmeanspp_indices(
    X: np.ndarray, K: int, rng: np.random.Generator
) -> np.ndarray:
    """Row indices of the K seeds chosen by the k-means++ rule."""
    n = X.shape[0]
    chosen = np.empty(K, dtype=int)
    chosen[0] = rng.integers(0, n)
    nearest = _sq_distances(X, X[chosen[:1]])[:, 0]

    for k in range(1, K):
        nearest[chosen[:k]] = 0.0
        total = nearest.sum()
        # total is 0 once every point coincides with a seed
        idx = rng.integers(0, n) if total <= 0.0 else rng.choice(n, p=nearest / total)
        chosen[k] = idx
        np.minimum(nearest, _sq_distances(X, X[idx:idx + 1])[:, 0], out=nearest)
    return chosen


def _assign(X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Assign each row of *X* to its nearest centroid."""
    return np.argmin(_sq_distances(X, centroids), axis=1)


def kmeans(
    embeddings: EmbIn,
    k: int,
    *,
    seed: Optional[int] = None,
    max_iter: int = 300,
) -> ClusteringResult:
    """
    Lloyd's k-means with k-means++ seeding and Euclidean distance.

    The first centroid is a uniformly random point; each further centroid is
    drawn with probability proportional to its squared distance to the nearest
    centroid chosen so far. Assignment and mean updates then alternate until
    the assignment stops changing or *max_iter* is reached. A cluster that
    loses all its points keeps its previous centroid.

    Args:
        embeddings: (n, d) data points
        k: Number of clusters, 1 <= k <= n
        seed: Random seed. ``None`` draws fresh entropy, so ids may differ
            between runs.
        max_iter: Maximum number of assignment/update rounds

    Returns:
        ClusteringResult with labels in [0, k), final centroids and inertia

    Raises:
        InvalidParameterError: If k < 1, k > n or max_iter < 1
        ShapeMismatchError: If the rows are ragged
    """
    X = as_embedding_matrix(embeddings)
    n = X.shape[0]

    if k < 1:
        raise InvalidParameterError("k", k, "must be >= 1")
    if k > n:
        raise InvalidParameterError("k", k, f"cannot exceed number of samples ({n})")
    if max_iter < 1:
        raise InvalidParameterError("max_iter", max_iter, "must be >= 1")

    rng = np.random.default_rng(seed)
    seeds = _kmeanspp_indices(X, k, rng)
    centroids = X[seeds].copy()
    labels = _assign(X, centroids)

    n_iter = 0
    converged = False
    for t in range(1, max_iter + 1):
        n_iter = t
        for j in range(k):
            members = labels == j
            if members.any():
                centroids[j] = X[members].mean(axis=0)

        new_labels = _assign(X, centroids)
        if np.array_equal(new_labels, labels):
            converged = True
            break
        labels = new_labels

    inertia = float(np.sum((X - centroids[labels]) ** 2))
    logger.debug(
        "k-means k=%d n=%d finished after %d iterations (converged=%s, inertia=%.6g)",
        k, n, n_iter, converged, inertia,
    )
    return ClusteringResult(
        labels=labels.astype(int),
        centroids=centroids,
        objective=inertia,
        n_iter=n_iter,
        metadata={"converged": converged, "seed": seed, "init_indices": seeds.tolist()},
    )


def cluster(
    embeddings: EmbIn,
    k: int,
    *,
    seed: Optional[int] = None,
    max_iter: int = 300,
) -> np.ndarray:
    """
    Partition embeddings into *k* groups.

    Thin wrapper over :func:`kmeans` returning only the assignment.

    Returns:
        Integer array of shape (n,) with one cluster id in [0, k) per row
    """
    return kmeans(embeddings, k, seed=seed, max_iter=max_iter).labels
