# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for catalog access, rendering, pooling
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for catalog introspection and DDL rendering.
These can be overridden via environment variables, CLI flags or query
parameters.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class CatalogDefaults:
    """
    Defaults for catalog introspection.

    Controls which constraint shape is fetched and how long queries may run.
    """
    default_schema: str = "public"

    # Tablespaces that mean "no explicit TABLESPACE clause"
    default_tablespaces: Tuple[str, ...] = ("pg_default",)

    # Fetch key constraints as structured rows instead of pg_get_constraintdef
    structured_constraints: bool = False

    statement_timeout_ms: int = 30000
    application_name: str = "pgddlx"

    def is_default_tablespace(self, name: Optional[str]) -> bool:
        return not name or name in self.default_tablespaces

    @classmethod
    def from_env(cls) -> "CatalogDefaults":
        """Create from environment variables."""
        return cls(
            default_schema=os.getenv("PGDDLX_DEFAULT_SCHEMA", "public"),
            structured_constraints=_env_bool("PGDDLX_STRUCTURED_CONSTRAINTS", False),
            statement_timeout_ms=int(os.getenv("PGDDLX_STATEMENT_TIMEOUT_MS", 30000)),
        )


@dataclass(frozen=True)
class RenderDefaults:
    """
    Defaults for DDL rendering.

    Controls optional statement groups and script layout.
    """
    include_owner: bool = True
    include_comments: bool = True
    statement_separator: str = "\n"

    def with_overrides(
        self,
        include_owner: Optional[bool] = None,
        include_comments: Optional[bool] = None,
    ) -> "RenderDefaults":
        """Copy with per-request overrides (None keeps the current value)."""
        changes = {}
        if include_owner is not None:
            changes["include_owner"] = include_owner
        if include_comments is not None:
            changes["include_comments"] = include_comments
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> "RenderDefaults":
        """Create from environment variables."""
        return cls(
            include_owner=_env_bool("PGDDLX_INCLUDE_OWNER", True),
            include_comments=_env_bool("PGDDLX_INCLUDE_COMMENTS", True),
        )


@dataclass(frozen=True)
class PoolDefaults:
    """
    Defaults for the HTTP service connection pool.
    """
    min_size: int = 1
    max_size: int = 5
    timeout_seconds: float = 30.0

    @classmethod
    def from_env(cls) -> "PoolDefaults":
        """Create from environment variables."""
        return cls(
            min_size=int(os.getenv("PGDDLX_POOL_MIN", 1)),
            max_size=int(os.getenv("PGDDLX_POOL_MAX", 5)),
            timeout_seconds=float(os.getenv("PGDDLX_POOL_TIMEOUT", 30.0)),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    catalog: CatalogDefaults = field(default_factory=CatalogDefaults)
    render: RenderDefaults = field(default_factory=RenderDefaults)
    pool: PoolDefaults = field(default_factory=PoolDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            catalog=CatalogDefaults.from_env(),
            render=RenderDefaults.from_env(),
            pool=PoolDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CatalogDefaults",
    "RenderDefaults",
    "PoolDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
