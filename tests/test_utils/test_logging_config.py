"""
Tests for logging helpers.
"""

import logging

import numpy as np

from vector_topics.algorithms.dimensionality_reduction import reduce
from vector_topics.utils.logging_config import ROOT_LOGGER_NAME, get_logger, setup_logging


def test_get_logger_namespaced():
    """Loggers are nested under the package logger."""
    assert get_logger("vector_topics.algorithms").name == "vector_topics.algorithms"
    assert get_logger("scripts.plot").name == "vector_topics.scripts.plot"


def test_setup_logging_is_idempotent():
    """Repeated setup does not stack handlers."""
    root = setup_logging("INFO")
    n_handlers = len(root.handlers)
    root = setup_logging("DEBUG")
    assert len(root.handlers) == n_handlers
    assert root.level == logging.DEBUG
    setup_logging(logging.WARNING)


def test_setup_logging_unknown_level_falls_back():
    """An unknown level name means WARNING."""
    root = setup_logging("chatty")
    assert root.level == logging.WARNING


def test_fallback_path_is_logged(caplog):
    """The slicing fallback leaves a debug record."""
    caplog.set_level(logging.DEBUG, logger=ROOT_LOGGER_NAME)
    reduce(np.zeros((2, 5)), 3)
    assert any("slicing instead of decomposing" in r.getMessage() for r in caplog.records)
