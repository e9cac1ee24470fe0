# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for DDL reconstruction.
"""

from core.config.defaults import (
    CatalogDefaults,
    RenderDefaults,
    PoolDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "CatalogDefaults",
    "RenderDefaults",
    "PoolDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
