"""
Configuration management for vector_topics.

Loads tuning defaults from environment variables (typically from a .env file).
Uses python-dotenv to load .env automatically.

Usage:
    from vector_topics.config import config

    max_iter = config.analysis.kmeans_max_iter
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import InvalidParameterError

# Look for .env in project root (parent of src/)
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

ENV_PREFIX = "VECTOR_TOPICS_"

logger = logging.getLogger(__name__)


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(ENV_PREFIX + name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidParameterError(ENV_PREFIX + name, raw, "must be an integer")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(ENV_PREFIX + name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise InvalidParameterError(ENV_PREFIX + name, raw, "must be a number")


@dataclass
class AnalysisConfig:
    """Numeric defaults for projection and clustering."""

    target_dim: int = 3
    eigen_max_iter: int = 1000
    eigen_tol: float = 1e-10
    kmeans_max_iter: int = 300
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate ranges."""
        if self.target_dim < 1:
            raise InvalidParameterError("target_dim", self.target_dim, "must be >= 1")
        if self.eigen_max_iter < 1:
            raise InvalidParameterError("eigen_max_iter", self.eigen_max_iter, "must be >= 1")
        if self.eigen_tol <= 0:
            raise InvalidParameterError("eigen_tol", self.eigen_tol, "must be > 0")
        if self.kmeans_max_iter < 1:
            raise InvalidParameterError("kmeans_max_iter", self.kmeans_max_iter, "must be >= 1")

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Build from ``VECTOR_TOPICS_*`` environment variables."""
        return cls(
            target_dim=_env_int("TARGET_DIM", 3),
            eigen_max_iter=_env_int("EIGEN_MAX_ITER", 1000),
            eigen_tol=_env_float("EIGEN_TOL", 1e-10),
            kmeans_max_iter=_env_int("KMEANS_MAX_ITER", 300),
            seed=_env_int("SEED", None),
        )


class Config:
    """
    Application configuration loaded from environment variables.

    Environment variables can be set:
    1. In a .env file in the project root
    2. In the system environment
    """

    def __init__(self):
        """Load configuration from environment.

        A malformed or out-of-range analysis variable must not break
        ``import vector_topics``, so it is logged and the defaults are used.
        Call ``AnalysisConfig.from_env()`` directly to get the error.
        """
        try:
            self.analysis = AnalysisConfig.from_env()
        except InvalidParameterError as e:
            logger.warning("Ignoring analysis settings from environment: %s", e)
            self.analysis = AnalysisConfig()
        self.log_level = os.getenv(ENV_PREFIX + "LOG_LEVEL", "WARNING").upper()

    def reload(self) -> None:
        """Re-read the environment (used by tests)."""
        self.__init__()


# Global config instance
config = Config()
