"""
vector_topics - Core Package

Analytical core for embedding visualisation.

This package provides:
- Eigen-decomposition projection of embeddings to a few components
- k-means clustering with k-means++ seeding
- c-TF-IDF keyword labeling of clusters as topics
"""

__version__ = "0.1.0"

from .algorithms import (
    ClusteringResult,
    EigenPair,
    Topic,
    TopicPipelineConfig,
    cluster,
    compute_ctfidf,
    default_k,
    eigen_decompose,
    kmeans,
    label_topics,
    reduce,
    run_topic_pipeline,
    topic_index_map,
    topics_to_frame,
)
from .config import config
from .exceptions import InvalidParameterError, ShapeMismatchError, VectorTopicsError
from .utils import TokenizerConfig, get_logger, setup_logging

# Explicitly import subpackages to make them discoverable
from . import algorithms
from . import utils

__all__ = [
    "ClusteringResult",
    "EigenPair",
    "Topic",
    "TopicPipelineConfig",
    "TokenizerConfig",
    "cluster",
    "compute_ctfidf",
    "default_k",
    "eigen_decompose",
    "kmeans",
    "label_topics",
    "reduce",
    "run_topic_pipeline",
    "topic_index_map",
    "topics_to_frame",
    "config",
    "InvalidParameterError",
    "ShapeMismatchError",
    "VectorTopicsError",
    "get_logger",
    "setup_logging",
    "algorithms",
    "utils",
]
