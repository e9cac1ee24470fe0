# ============================================================================
# DIALECT RESOLVER
# ============================================================================
# STATUS: Core - Server version to DDL capability mapping
# PURPOSE: Version-gated syntax decisions expressed as a threshold table
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: DialectCapabilities, CAPABILITY_THRESHOLDS, resolve_dialect,
#          parse_server_version, OLDEST_DIALECT
# DEPENDENCIES: (none)
# ============================================================================
"""
Dialect Resolver.

Maps the integer server version (SHOW server_version_num, e.g.
90615 = 9.6.15, 100002 = 10.2, 120005 = 12.5) to a capability set.

Adding a capability means adding one entry to CAPABILITY_THRESHOLDS and
one field to DialectCapabilities; nothing else changes.
"""

import re
from dataclasses import dataclass, fields
from typing import Dict, Optional, Union


# ============================================================================
# THRESHOLD TABLE
# ============================================================================

CAPABILITY_THRESHOLDS: Dict[str, int] = {
    "supports_identity_columns": 100000,      # GENERATED ... AS IDENTITY
    "supports_native_partitioning": 100000,   # PARTITION BY, relkind 'p'
    "supports_owner_to_syntax": 90600,        # modern ALTER TABLE ... OWNER TO form
}


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Capability flags for one server version.

    Derived, never stored: always built by resolve_dialect().
    server_version is None for the conservative fallback set.
    """
    server_version: Optional[int] = None
    supports_identity_columns: bool = False
    supports_native_partitioning: bool = False
    supports_owner_to_syntax: bool = False

    @property
    def is_fallback(self) -> bool:
        return self.server_version is None

    def describe(self) -> Dict[str, Union[int, bool, None]]:
        """Flags as a plain dict (for logging)."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


OLDEST_DIALECT = DialectCapabilities()


def resolve_dialect(version: Optional[int]) -> DialectCapabilities:
    """
    Resolve the capability set for a server version.

    Pure function of the version integer. A missing or non-positive
    version resolves to the oldest (all-false) capability set.

    Args:
        version: server_version_num, or None if it could not be fetched

    Returns:
        DialectCapabilities
    """
    if version is None or version <= 0:
        return OLDEST_DIALECT

    flags = {name: version >= threshold for name, threshold in CAPABILITY_THRESHOLDS.items()}
    return DialectCapabilities(server_version=version, **flags)


_HUMAN_VERSION = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_server_version(text: Union[str, int, None]) -> Optional[int]:
    """
    Parse server_version_num ('120005') or a human version ('12.5', '9.6.15').

    Returns:
        Version integer, or None if the text is not a version
    """
    if text is None:
        return None
    if isinstance(text, int):
        return text

    text = text.strip()
    if text.isdigit():
        return int(text)

    match = _HUMAN_VERSION.match(text)
    if not match:
        return None

    major = int(match.group(1))
    minor = int(match.group(2) or 0)
    patch = int(match.group(3) or 0)
    if major >= 10:
        # 10+ uses two-part versions: 12.5 -> 120005
        return major * 10000 + minor
    return major * 10000 + minor * 100 + patch


__all__ = [
    "CAPABILITY_THRESHOLDS",
    "DialectCapabilities",
    "OLDEST_DIALECT",
    "resolve_dialect",
    "parse_server_version",
]
