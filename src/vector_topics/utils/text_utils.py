"""
Tokenization used for topic keywords.

Deliberately simple: lower-case, punctuation to spaces, whitespace split,
short-token and stopword filtering. Behaviour is driven by a
:class:`TokenizerConfig` so tests can swap in synthetic vocabularies.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional

from ..exceptions import InvalidParameterError

ENGLISH_STOPWORDS: FrozenSet[str] = frozenset({
    "a", "about", "above", "after", "again", "against", "all", "am", "an", "and",
    "any", "are", "aren't", "as", "at",
    "be", "because", "been", "before", "being", "below", "between", "both", "but", "by",
    "can't", "cannot", "could", "couldn't",
    "did", "didn't", "do", "does", "doesn't", "doing", "don't", "down", "during",
    "each", "few", "for", "from", "further",
    "had", "hadn't", "has", "hasn't", "have", "haven't", "having", "he", "he'd",
    "he'll", "he's", "her", "here", "here's", "hers", "herself", "him", "himself",
    "his", "how", "how's",
    "i", "i'd", "i'll", "i'm", "i've", "if", "in", "into", "is", "isn't", "it",
    "it's", "its", "itself",
    "let's", "me", "more", "most", "mustn't", "my", "myself",
    "no", "nor", "not",
    "of", "off", "on", "once", "only", "or", "other", "ought", "our", "ours",
    "ourselves", "out", "over", "own",
    "same", "shan't", "she", "she'd", "she'll", "she's", "should", "shouldn't",
    "so", "some", "such",
    "than", "that", "that's", "the", "their", "theirs", "them", "themselves",
    "then", "there", "there's", "these", "they", "they'd", "they'll", "they're",
    "they've", "this", "those", "through", "to", "too",
    "under", "until", "up", "very",
    "was", "wasn't", "we", "we'd", "we'll", "we're", "we've", "were", "weren't",
    "what", "what's", "when", "when's", "where", "where's", "which", "while",
    "who", "who's", "whom", "why", "why's", "with", "won't", "would", "wouldn't",
    "you", "you'd", "you'll", "you're", "you've", "your", "yours", "yourself",
    "yourselves",
})


@dataclass(frozen=True)
class TokenizerConfig:
    """
    Options controlling keyword tokenization.

    Attributes:
        stopwords: Tokens removed after splitting.
        min_token_length: Tokens shorter than this are dropped (default 3,
            i.e. anything of length <= 2 goes).
        non_word_pattern: Regex whose matches are replaced by a space before
            splitting.
    """

    stopwords: FrozenSet[str] = field(default=ENGLISH_STOPWORDS)
    min_token_length: int = 3
    non_word_pattern: str = r"[^\w\s]"

    def __post_init__(self):
        # Accept any iterable of words, store it frozen
        object.__setattr__(self, "stopwords", frozenset(self.stopwords))
        if self.min_token_length < 1:
            raise InvalidParameterError(
                "min_token_length", self.min_token_length, "must be >= 1"
            )

    def with_stopwords(self, extra: Iterable[str]) -> "TokenizerConfig":
        """Return a copy whose stopword set also contains *extra*."""
        return TokenizerConfig(
            stopwords=self.stopwords | frozenset(extra),
            min_token_length=self.min_token_length,
            non_word_pattern=self.non_word_pattern,
        )


DEFAULT_TOKENIZER = TokenizerConfig()


def tokenize(text: str, config: Optional[TokenizerConfig] = None) -> List[str]:
    """
    Split a document into keyword candidates.

    Args:
        text: Raw document text. ``None`` is treated as empty.
        config: Tokenizer options, defaults to :data:`DEFAULT_TOKENIZER`.

    Returns:
        Tokens in document order, duplicates kept.
    """
    cfg = config or DEFAULT_TOKENIZER
    cleaned = re.sub(cfg.non_word_pattern, " ", (text or "").lower())
    return [
        w
        for w in cleaned.split()
        if len(w) >= cfg.min_token_length and w not in cfg.stopwords
    ]


def count_words(docs: Iterable[str], config: Optional[TokenizerConfig] = None) -> Counter:
    """Raw token counts across *docs*."""
    counts: Counter = Counter()
    for doc in docs:
        counts.update(tokenize(doc, config))
    return counts
