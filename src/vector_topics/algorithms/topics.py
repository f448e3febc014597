"""
Topic labeling with class-based TF-IDF (c-TF-IDF).

All documents of a cluster are treated as one class. A token scores high when
it is frequent inside its cluster and present in few other clusters:

    score = count_in_cluster * log(1 + n_clusters / n_clusters_with_token)
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..exceptions import InvalidParameterError, ShapeMismatchError
from ..utils.text_utils import TokenizerConfig, count_words


@dataclass
class Topic:
    """A cluster enriched with ranked keywords and a readable label."""

    id: int
    label: str
    keywords: List[str] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    keyword_scores: List[float] = field(default_factory=list)
    docs: List[str] = field(default_factory=list)  # texts at `indices`, same order

    @property
    def size(self) -> int:
        return len(self.indices)


def compute_ctfidf(
    word_counts_per_cluster: Mapping[int, Counter],
) -> Dict[int, List[Tuple[str, float]]]:
    """
    Score every token of every cluster with c-TF-IDF.

    Args:
        word_counts_per_cluster: cluster_id -> raw token counts for the
            cluster's documents

    Returns:
        cluster_id -> ``(token, score)`` pairs, highest score first, ties
        broken alphabetically
    """
    n_clusters = len(word_counts_per_cluster)

    clusters_with_word: Counter = Counter()
    for counts in word_counts_per_cluster.values():
        clusters_with_word.update(w for w, c in counts.items() if c > 0)

    ranked: Dict[int, List[Tuple[str, float]]] = {}
    for cid, counts in word_counts_per_cluster.items():
        scores = [
            (word, count * math.log(1.0 + n_clusters / clusters_with_word[word]))
            for word, count in counts.items()
            if count > 0
        ]
        scores.sort(key=lambda ws: (-ws[1], ws[0]))
        ranked[cid] = scores
    return ranked


def label_topics(
    texts: Sequence[str],
    cluster_ids: Sequence[int],
    *,
    tokenizer: Optional[TokenizerConfig] = None,
    top_n: int = 5,
    label_terms: int = 3,
    separator: str = "_",
) -> List[Topic]:
    """
    Turn a cluster assignment into labeled topics.

    Args:
        texts: Document text per index
        cluster_ids: Cluster id per index, aligned with *texts*
        tokenizer: Tokenization options (stopwords, min length, pattern)
        top_n: Number of keywords kept per topic
        label_terms: Number of leading keywords joined into the label
        separator: Join string for the label

    Returns:
        One Topic per distinct cluster id, sorted by id. A cluster whose
        documents yield no keywords is labeled ``"Topic <id>"``. Each topic
        carries its document indices and the matching texts.

    Raises:
        ShapeMismatchError: If texts and cluster_ids differ in length
        InvalidParameterError: If a cluster id is negative or not integral,
            or top_n/label_terms < 1
    """
    if len(texts) != len(cluster_ids):
        raise ShapeMismatchError(
            "texts and cluster ids must have the same length",
            expected=len(texts),
            actual=len(cluster_ids),
        )
    if top_n < 1:
        raise InvalidParameterError("top_n", top_n, "must be >= 1")
    if label_terms < 1:
        raise InvalidParameterError("label_terms", label_terms, "must be >= 1")

    # Group documents by cluster, keeping index order
    docs_per_cluster: Dict[int, List[str]] = {}
    indices_per_cluster: Dict[int, List[int]] = {}
    for i, raw in enumerate(np.asarray(cluster_ids).tolist()):
        try:
            integral = float(raw).is_integer()
        except (TypeError, ValueError):
            integral = False
        if not integral:
            raise InvalidParameterError("cluster id", raw, f"must be an integer (index {i})")
        label = int(raw)
        if label < 0:
            raise InvalidParameterError("cluster id", label, f"must be >= 0 (index {i})")
        docs_per_cluster.setdefault(label, []).append(texts[i])
        indices_per_cluster.setdefault(label, []).append(i)

    word_counts = {
        cid: count_words(docs, tokenizer) for cid, docs in docs_per_cluster.items()
    }
    ranked = compute_ctfidf(word_counts)

    topics: List[Topic] = []
    for cid in sorted(docs_per_cluster):
        top = ranked[cid][:top_n]
        keywords = [w for w, _ in top]
        topics.append(Topic(
            id=cid,
            label=separator.join(keywords[:label_terms]) or f"Topic {cid}",
            keywords=keywords,
            indices=indices_per_cluster[cid],
            keyword_scores=[s for _, s in top],
            docs=docs_per_cluster[cid],
        ))
    return topics
