# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - Database connectivity
# PURPOSE: PostgreSQL connections and pooling for catalog access
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Infrastructure module for pgddlx.

Provides:
- PostgreSQLRepository: One-shot connections (CLI)
- init_pool / get_pool / close_pool: Shared pool (HTTP service)

Usage:
    from infrastructure import PostgreSQLRepository

    with PostgreSQLRepository(dsn).get_connection() as conn:
        catalog = PostgresCatalogRepository(conn)
"""

from infrastructure.postgresql import (
    PostgreSQLRepository,
    get_connection_string,
    mask_conninfo,
    init_pool,
    get_pool,
    close_pool,
    session_kwargs,
)

__all__ = [
    'PostgreSQLRepository',
    'get_connection_string',
    'mask_conninfo',
    'init_pool',
    'get_pool',
    'close_pool',
    'session_kwargs',
]
