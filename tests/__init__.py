"""
Test suite for vector_topics.

This package contains all tests organized by component:
- test_algorithms/: Tests for projection, clustering, labeling and the pipeline
- test_utils/: Tests for tokenization and logging helpers
"""
