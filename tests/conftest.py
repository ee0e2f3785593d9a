"""
Pytest Configuration and Shared Fixtures
=========================================

This module configures pytest for the ConceptQA test suite.
It provides:
- Path setup for importing conceptqa modules
- Custom markers for test categorization
- Shared fixtures available to all tests

Test Categories (markers):
- @pytest.mark.unit: Fast, isolated unit tests
- @pytest.mark.integration: Component interaction tests
- @pytest.mark.smoke: Quick sanity checks
- @pytest.mark.slow: Tests that take > 5 seconds

Usage:
    # Run only unit tests
    pytest -m unit

    # Run everything except slow tests
    pytest -m "not slow"
"""

import os
import sys
from datetime import datetime

import pytest


# =============================================================================
# PATH SETUP
# =============================================================================

# Ensure the conceptqa package is importable from any test directory
_repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)


# =============================================================================
# PYTEST MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Fast, isolated unit tests (< 1s each)"
    )
    config.addinivalue_line(
        "markers", "integration: Component interaction tests"
    )
    config.addinivalue_line(
        "markers", "smoke: Quick sanity checks (< 10s total)"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take > 5 seconds"
    )


# =============================================================================
# SHARED FIXTURES
# =============================================================================

CAT_PASSAGE = "The cat sat on the mat. The dog ran fast."

# Fixed "now" so relative expressions resolve the same way in every run
REFERENCE_TIME = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def lexicon():
    """Lexical toolkit with a fixed reference time."""
    from conceptqa import LexicalToolkit
    return LexicalToolkit(reference_time=REFERENCE_TIME)


@pytest.fixture
def config():
    from conceptqa import ReasonerConfig
    return ReasonerConfig()


@pytest.fixture
def network(lexicon, config):
    """Empty semantic network."""
    from conceptqa import SemanticNetwork
    return SemanticNetwork(lexicon, config)


@pytest.fixture
def cat_network(network):
    """Network built from the cat/dog passage."""
    network.build(CAT_PASSAGE)
    return network


@pytest.fixture
def fresh_engine(lexicon):
    """
    Function-scoped fixture providing a fresh engine.

    Use when tests need to modify engine state.
    """
    from conceptqa import QAEngine
    return QAEngine(lexicon=lexicon)


@pytest.fixture
def cat_passage():
    return CAT_PASSAGE


# =============================================================================
# TEST COLLECTION HOOKS
# =============================================================================

def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    Tests in tests/unit/ get @pytest.mark.unit, etc.
    """
    for item in items:
        # Get the test file path relative to tests/
        test_path = str(item.fspath)

        if '/unit/' in test_path or '\\unit\\' in test_path:
            item.add_marker(pytest.mark.unit)
        elif '/integration/' in test_path or '\\integration\\' in test_path:
            item.add_marker(pytest.mark.integration)
        elif '/smoke/' in test_path or '\\smoke\\' in test_path:
            item.add_marker(pytest.mark.smoke)
