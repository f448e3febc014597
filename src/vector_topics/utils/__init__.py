"""Utility modules for vector_topics."""

from .logging_config import get_logger, setup_logging
from .text_utils import (
    DEFAULT_TOKENIZER,
    ENGLISH_STOPWORDS,
    TokenizerConfig,
    count_words,
    tokenize,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "DEFAULT_TOKENIZER",
    "ENGLISH_STOPWORDS",
    "TokenizerConfig",
    "count_words",
    "tokenize",
]
