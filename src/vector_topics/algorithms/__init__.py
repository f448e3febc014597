"""
Algorithm Core Library - eigen projection, clustering and topic labeling.

This module provides core algorithm implementations with minimal dependencies,
separate from any UI or embedding code. Designed for reuse and testing.
"""

from .dimensionality_reduction import EigenPair, eigen_decompose, reduce
from .clustering import ClusteringResult, cluster, kmeans
from .topics import Topic, compute_ctfidf, label_topics
from .pipeline import (
    TopicPipelineConfig,
    default_k,
    run_topic_pipeline,
    topic_index_map,
    topics_to_frame,
)

__all__ = [
    # Dimensionality reduction
    "EigenPair",
    "eigen_decompose",
    "reduce",
    # Clustering
    "ClusteringResult",
    "cluster",
    "kmeans",
    # Topic labeling
    "Topic",
    "compute_ctfidf",
    "label_topics",
    # Pipeline orchestration
    "TopicPipelineConfig",
    "default_k",
    "run_topic_pipeline",
    "topic_index_map",
    "topics_to_frame",
]
