"""
Topic pipeline orchestration.

Composes clustering and c-TF-IDF labeling, and provides the helpers that map
topics back onto document order for plotting.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import pandas as pd

from ..config import config
from ..exceptions import ShapeMismatchError
from ..utils.logging_config import get_logger
from ..utils.text_utils import DEFAULT_TOKENIZER, TokenizerConfig
from ._shared import EmbIn, as_embedding_matrix
from .clustering import cluster
from .topics import Topic, label_topics

logger = get_logger(__name__)


@dataclass
class TopicPipelineConfig:
    """Configuration for a topic pipeline run."""

    seed: Optional[int] = None
    max_iter: int = 300
    tokenizer: TokenizerConfig = DEFAULT_TOKENIZER
    top_n: int = 5
    label_terms: int = 3

    @classmethod
    def from_config(cls) -> "TopicPipelineConfig":
        """Defaults taken from the global ``config.analysis``."""
        return cls(seed=config.analysis.seed, max_iter=config.analysis.kmeans_max_iter)


def default_k(n: int) -> int:
    """Cluster count used when the caller gives none: ``max(2, floor(sqrt(n/2)))`` within [1, n]."""
    k = max(2, int(math.floor(math.sqrt(n / 2.0))))
    return max(1, min(k, n))


def run_topic_pipeline(
    texts: Sequence[str],
    embeddings: EmbIn,
    k: Optional[int] = None,
    *,
    cfg: Optional[TopicPipelineConfig] = None,
) -> List[Topic]:
    """
    Cluster documents by embedding and label each cluster.

    Pipeline:
    1. Check that texts and embeddings describe the same documents
    2. Cluster embeddings into k groups (``default_k(n)`` when k is None)
    3. Label every cluster with c-TF-IDF keywords

    An explicit k is passed to the clusterer as given, so k=0 or k>n raise.

    Args:
        texts: Document text per index
        embeddings: (n, d) embeddings aligned with *texts*
        k: Number of clusters, or None for the default
        cfg: Run options; defaults come from ``config.analysis``

    Returns:
        Topics sorted by id, each carrying its document indices. Empty when
        *texts* is empty.

    Raises:
        ShapeMismatchError: If texts and embeddings differ in length, or
            embedding rows are ragged
        InvalidParameterError: If k is out of range
    """
    if len(texts) == 0:
        return []

    cfg = cfg or TopicPipelineConfig.from_config()
    X = as_embedding_matrix(embeddings)
    if X.shape[0] != len(texts):
        raise ShapeMismatchError(
            "texts and embeddings must have the same length",
            expected=len(texts),
            actual=X.shape[0],
        )

    n_clusters = default_k(len(texts)) if k is None else k
    logger.info("Clustering %d documents into %d topics", len(texts), n_clusters)

    labels = cluster(X, n_clusters, seed=cfg.seed, max_iter=cfg.max_iter)
    return label_topics(
        texts,
        labels,
        tokenizer=cfg.tokenizer,
        top_n=cfg.top_n,
        label_terms=cfg.label_terms,
    )


def topic_index_map(topics: Sequence[Topic]) -> Dict[int, Topic]:
    """Map each document index to the Topic that contains it."""
    return {i: topic for topic in topics for i in topic.indices}


def topics_to_frame(
    topics: Sequence[Topic], points: Optional[EmbIn] = None
) -> pd.DataFrame:
    """
    One row per document, in document order, for the plotting layer.

    Columns: ``doc_index``, ``topic_id``, ``topic_label`` and, when *points*
    is given, its coordinates as ``x, y, z`` (3 columns) or ``c0..c{k-1}``.

    Raises:
        ShapeMismatchError: If points has a different row count than the
            number of documents covered by *topics*
    """
    by_index = topic_index_map(topics)
    order = sorted(by_index)
    df = pd.DataFrame({
        "doc_index": order,
        "topic_id": [by_index[i].id for i in order],
        "topic_label": [by_index[i].label for i in order],
    })

    if points is not None:
        P = as_embedding_matrix(points)
        if order != list(range(P.shape[0])):
            raise ShapeMismatchError(
                "points must have one row per document index",
                expected=len(order),
                actual=P.shape[0],
            )
        cols = ["x", "y", "z"] if P.shape[1] == 3 else [f"c{j}" for j in range(P.shape[1])]
        for j, col in enumerate(cols):
            df[col] = P[:, j]
    return df
