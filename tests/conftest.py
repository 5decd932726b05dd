"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Keeps HASHTREE_* environment variables out of every test
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_tree = importlib.import_module("fixtures.tree_fixtures")

ABCD = _tree.ABCD
make_tree_config = _tree.make_tree_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

_HASHTREE_ENV_VARS = [
    "HASHTREE_ALGORITHM",
    "HASHTREE_PAD_STRATEGY",
    "HASHTREE_COMBINE_METHOD",
    "HASHTREE_COMMUTATIVE",
    "HASHTREE_LOG_LEVEL",
    "HASHTREE_LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_hashtree_env(monkeypatch):
    """Tests start without HASHTREE_* overrides from the outer shell."""
    for name in _HASHTREE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def abcd_leaves():
    """Four leaves, already a power of two."""
    return list(ABCD)


@pytest.fixture
def sha256_config():
    """sha256 / copy / concat / non-commutative."""
    return make_tree_config()

