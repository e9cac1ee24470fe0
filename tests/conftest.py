# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# STATUS: Tests - Environment isolation
# PURPOSE: Keep configuration defaults independent of the host environment
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================

import pytest

from core.config import reset_defaults

_ENV_VARS = [
    "PGDDLX_DEFAULT_SCHEMA",
    "PGDDLX_STRUCTURED_CONSTRAINTS",
    "PGDDLX_STATEMENT_TIMEOUT_MS",
    "PGDDLX_INCLUDE_OWNER",
    "PGDDLX_INCLUDE_COMMENTS",
    "PGDDLX_POOL_MIN",
    "PGDDLX_POOL_MAX",
    "PGDDLX_POOL_TIMEOUT",
    "LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_defaults(monkeypatch):
    """Fresh get_defaults() per test, built from an empty PGDDLX_* environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_defaults()
    yield
    reset_defaults()
