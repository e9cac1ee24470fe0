# ============================================================================
# DIALECT RESOLVER TESTS
# ============================================================================
# STATUS: Tests - Capability resolution from server versions
# PURPOSE: Verify threshold table, fallback set and version parsing
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Dialect Resolver Tests

Run with:
    pytest tests/test_dialect.py -v
"""

import pytest

from core.schema.dialect import (
    CAPABILITY_THRESHOLDS,
    DialectCapabilities,
    OLDEST_DIALECT,
    parse_server_version,
    resolve_dialect,
)


# ============================================================================
# RESOLUTION
# ============================================================================

class TestResolveDialect:
    def test_modern_server_supports_everything(self):
        d = resolve_dialect(120005)
        assert d.server_version == 120005
        assert d.supports_identity_columns
        assert d.supports_native_partitioning
        assert d.supports_owner_to_syntax
        assert not d.is_fallback

    def test_96_has_owner_syntax_only(self):
        d = resolve_dialect(90615)
        assert not d.supports_identity_columns
        assert not d.supports_native_partitioning
        assert d.supports_owner_to_syntax

    def test_95_has_nothing(self):
        d = resolve_dialect(90500)
        assert not d.supports_identity_columns
        assert not d.supports_native_partitioning
        assert not d.supports_owner_to_syntax
        assert d.server_version == 90500

    @pytest.mark.parametrize("capability,threshold", sorted(CAPABILITY_THRESHOLDS.items()))
    def test_thresholds_are_inclusive(self, capability, threshold):
        assert getattr(resolve_dialect(threshold), capability) is True
        assert getattr(resolve_dialect(threshold - 1), capability) is False

    def test_none_resolves_to_oldest(self):
        assert resolve_dialect(None) is OLDEST_DIALECT
        assert OLDEST_DIALECT.is_fallback

    @pytest.mark.parametrize("version", [0, -1])
    def test_non_positive_resolves_to_oldest(self, version):
        assert resolve_dialect(version) is OLDEST_DIALECT

    def test_pure_function(self):
        assert resolve_dialect(100002) == resolve_dialect(100002)

    def test_describe_lists_every_flag(self):
        described = resolve_dialect(100000).describe()
        assert described["server_version"] == 100000
        for capability in CAPABILITY_THRESHOLDS:
            assert described[capability] is True

    def test_capabilities_are_immutable(self):
        d = DialectCapabilities()
        with pytest.raises(Exception):
            d.supports_identity_columns = True


# ============================================================================
# VERSION PARSING
# ============================================================================

class TestParseServerVersion:
    @pytest.mark.parametrize("text,expected", [
        ("120005", 120005),
        (" 90615 ", 90615),
        (100002, 100002),
        ("12.5", 120005),
        ("10.2", 100002),
        ("9.6.15", 90615),
        ("9.5.0", 90500),
        ("16.1 (Debian 16.1-1.pgdg120+1)", 160001),
    ])
    def test_parses(self, text, expected):
        assert parse_server_version(text) == expected

    @pytest.mark.parametrize("text", [None, "", "unknown"])
    def test_unparseable_returns_none(self, text):
        assert parse_server_version(text) is None
