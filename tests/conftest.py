"""
Pytest configuration and shared fixtures for allowlist tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates tests from ALLOWLIST_* environment variables
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

WHITELIST_ADDRESSES = _common.WHITELIST_ADDRESSES
make_identity = _common.make_identity
make_entries = _common.make_entries
make_encoder = _common.make_encoder
make_whitelist_entries = _common.make_whitelist_entries
make_tree = _common.make_tree

from merkle_allowlist.config.runtime import set_default_config
from merkle_allowlist.crypto.hashing import SHA256

_ENV_VARS = [
    "ALLOWLIST_HASH_ALGORITHM",
    "ALLOWLIST_IDENTITY_WIDTH",
    "ALLOWLIST_INDEX_WIDTH",
    "ALLOWLIST_MAX_WORKERS",
    "ALLOWLIST_PARALLEL_THRESHOLD",
]


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Clear ALLOWLIST_* env vars and the cached default config."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def encoder():
    """Default keccak256 / address + uint256 encoder."""
    return make_encoder()


@pytest.fixture
def sha256_encoder():
    return make_encoder(SHA256)


@pytest.fixture
def whitelist_entries():
    """The eight whitelist entries, including one duplicated address."""
    return make_whitelist_entries()


@pytest.fixture
def whitelist_tree(whitelist_entries, encoder):
    from merkle_allowlist.merkle.merkle_tree import build_tree
    return build_tree(whitelist_entries, encoder=encoder)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
