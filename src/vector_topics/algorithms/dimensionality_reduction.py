"""
Dimensionality reduction for embeddings.

Provides an eigen-decomposition of the sample covariance (power iteration
with deflation) and the projection used to place embeddings in 3-D.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..config import config
from ..exceptions import InvalidParameterError
from ..utils.logging_config import get_logger
from ._shared import Array2D, EmbIn, as_embedding_matrix

logger = get_logger(__name__)


@dataclass
class EigenPair:
    """One principal direction of variance."""

    eigenvalue: float
    eigenvector: np.ndarray


def _orthonormalize(v: np.ndarray, basis: Array2D) -> Optional[np.ndarray]:
    """Remove the components of *v* along *basis* rows and normalise.

    Returns None when nothing is left of *v*.
    """
    if basis.shape[0]:
        v = v - basis.T @ (basis @ v)
    norm = np.linalg.norm(v)
    if norm < 1e-300:
        return None
    return v / norm


def _fix_sign(v: np.ndarray) -> np.ndarray:
    """Flip *v* so that its largest-magnitude component is positive."""
    if v[int(np.argmax(np.abs(v)))] < 0:
        return -v
    return v


def eigen_decompose(
    embeddings: EmbIn,
    n_components: Optional[int] = None,
    *,
    max_iter: Optional[int] = None,
    tol: Optional[float] = None,
    rank_tol: float = 1e-9,
    seed: int = 0,
) -> List[EigenPair]:
    """
    Eigenpairs of the sample covariance, largest eigenvalue first.

    The covariance ``C = Xcᵀ Xc / (n - 1)`` of the centred data is never built;
    each power-iteration step applies it as ``Xcᵀ (Xc v) / (n - 1)``. After every
    step the iterate is re-orthogonalised against the eigenvectors already
    found, which both deflates C and keeps the returned vectors orthonormal.

    Args:
        embeddings: Input data of shape (n_samples, n_features)
        n_components: Maximum number of pairs to extract. ``None`` extracts
            everything the data supports, up to ``min(n - 1, d)``.
        max_iter: Iteration cap per eigenpair (default ``config.analysis.eigen_max_iter``)
        tol: Convergence threshold on the change of the unit iterate
            (default ``config.analysis.eigen_tol``)
        rank_tol: Pairs with ``eigenvalue <= rank_tol * largest`` are treated
            as numerical noise and extraction stops there. Eigenvalues below
            ``eps * d * sum(x²) / (n - 1)`` are noise as well, which catches
            identical rows whose mean is not exactly representable.
        seed: Seed for the start vectors, fixed so runs are reproducible

    Returns:
        List of EigenPair sorted by eigenvalue descending. It may be shorter
        than requested when the data is rank deficient.

    Raises:
        InvalidParameterError: If n_components < 1
    """
    if n_components is not None and n_components < 1:
        raise InvalidParameterError("n_components", n_components, "must be >= 1")
    max_iter = config.analysis.eigen_max_iter if max_iter is None else max_iter
    tol = config.analysis.eigen_tol if tol is None else tol

    X = as_embedding_matrix(embeddings)
    n, d = X.shape
    limit = min(n - 1, d) if n >= 2 else 0
    if n_components is not None:
        limit = min(limit, n_components)
    if limit <= 0:
        return []

    Xc = X - X.mean(axis=0, keepdims=True)
    scale = 1.0 / (n - 1)

    def cov_mul(v: np.ndarray) -> np.ndarray:
        return (Xc.T @ (Xc @ v)) * scale

    # Rounding noise of the centring step is on the order of eps * |x|²,
    # so anything at or below this floor is not variance.
    noise_floor = np.finfo(np.float64).eps * d * np.einsum("ij,ij->", X, X) * scale

    rng = np.random.default_rng(seed)
    basis = np.zeros((0, d))
    pairs: List[EigenPair] = []
    lead = 0.0

    for j in range(limit):
        v = _orthonormalize(rng.standard_normal(d), basis)
        if v is None:
            break

        n_iter = 0
        for n_iter in range(1, max_iter + 1):
            w = _orthonormalize(cov_mul(v), basis)
            if w is None:
                break
            delta = np.linalg.norm(w - v)
            v = w
            if delta < tol:
                break

        eigenvalue = float(v @ cov_mul(v))
        if j == 0:
            lead = eigenvalue
        if lead <= 0.0 or eigenvalue <= max(rank_tol * lead, noise_floor):
            logger.debug("Rank exhausted after %d eigenpairs", j)
            break

        v = _fix_sign(v)
        logger.debug("Eigenpair %d: eigenvalue=%.6g after %d iterations", j, eigenvalue, n_iter)
        pairs.append(EigenPair(eigenvalue=eigenvalue, eigenvector=v))
        basis = np.vstack([basis, v[None, :]])

    return sorted(pairs, key=lambda p: -p.eigenvalue)


def reduce(
    embeddings: EmbIn,
    target_dim: Optional[int] = None,
    *,
    max_iter: Optional[int] = None,
    tol: Optional[float] = None,
    rank_tol: float = 1e-9,
    seed: int = 0,
) -> Array2D:
    """
    Project embeddings onto their top principal directions.

    Each row is projected as-is (``point[j] = embedding · eigenvector[j]``);
    only the covariance is computed on centred data.

    With fewer than ``target_dim + 1`` rows there is not enough variance to
    estimate, so no decomposition happens: each row's first ``target_dim``
    components are returned, zero-padded when ``d < target_dim``.

    When the data is rank deficient and yields fewer than ``target_dim``
    eigenpairs, the result is narrower: ``(n, n_eigenpairs)``. It is never
    padded in that case.

    Args:
        embeddings: Input data of shape (n_samples, n_features)
        target_dim: Number of output components (default
            ``config.analysis.target_dim``, normally 3)
        max_iter, tol, rank_tol, seed: Passed to :func:`eigen_decompose`

    Returns:
        Array of shape (n_samples, k_used) with k_used <= target_dim

    Raises:
        InvalidParameterError: If target_dim < 1
        ShapeMismatchError: If the rows are ragged
    """
    if target_dim is None:
        target_dim = config.analysis.target_dim
    if target_dim < 1:
        raise InvalidParameterError("target_dim", target_dim, "must be >= 1")

    X = as_embedding_matrix(embeddings)
    n, d = X.shape

    if n < target_dim + 1:
        logger.debug(
            "Only %d vectors for %d components; slicing instead of decomposing", n, target_dim
        )
        Z = np.zeros((n, target_dim), dtype=np.float64)
        w = min(d, target_dim)
        Z[:, :w] = X[:, :w]
        return Z

    pairs = eigen_decompose(
        X, target_dim, max_iter=max_iter, tol=tol, rank_tol=rank_tol, seed=seed
    )
    if len(pairs) < target_dim:
        logger.debug(
            "Input rank supports %d of %d requested components", len(pairs), target_dim
        )
    if not pairs:
        return np.zeros((n, 0), dtype=np.float64)

    components = np.stack([p.eigenvector for p in pairs])  # (k_used, d)
    return X @ components.T
