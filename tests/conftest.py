"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test modules.
"""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so random test data is reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def cats_and_rockets():
    """
    Six short documents in two obvious groups.

    Embeddings are hand-built 2-D points: the cat documents sit near (0, 0),
    the rocket documents near (10, 10).

    Returns:
        Tuple of (texts, embeddings, cat_indices, rocket_indices)
    """
    texts = [
        "Cats love sleeping in the warm sun.",
        "My cat chases mice and other cats.",
        "Rockets launch into orbit.",
        "Happy cats purr, and cats nap.",
        "The rocket engine powers rockets skyward.",
        "Rockets need fuel; rockets fly fast.",
    ]
    embeddings = np.array([
        [0.0, 0.0],
        [0.1, 0.2],
        [10.0, 10.0],
        [0.2, 0.1],
        [10.1, 9.9],
        [9.8, 10.2],
    ])
    return texts, embeddings, {0, 1, 3}, {2, 4, 5}


@pytest.fixture
def anisotropic_data(rng):
    """200 x 5 Gaussian data with clearly separated per-axis variances."""
    scales = np.array([10.0, 5.0, 2.0, 1.0, 0.5])
    return rng.standard_normal((200, 5)) * scales
