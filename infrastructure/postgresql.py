# ============================================================================
# POSTGRESQL CONNECTION INFRASTRUCTURE
# ============================================================================
# STATUS: Infrastructure - PostgreSQL connection handling
# PURPOSE: Connections and pooling for catalog introspection
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: PostgreSQLRepository, get_connection_string, init_pool, get_pool, close_pool
# DEPENDENCIES: psycopg, psycopg_pool
# ============================================================================
"""
PostgreSQL Connection Infrastructure

Provides database connectivity for the CLI and the HTTP service:
- Single connections for one-shot reconstruction (CLI)
- A shared connection pool for the HTTP service
- Session options (statement_timeout, application_name) from config

Connection string priority:
1. Explicit connection string (CLI --connection)
2. DATABASE_URL environment variable
3. Individual POSTGRES_* components
"""

import os
import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from core.config import CatalogDefaults, PoolDefaults, get_defaults

logger = logging.getLogger(__name__)


def get_connection_string() -> str:
    """
    Get database connection string from environment.

    Returns:
        PostgreSQL connection string
    """
    if url := os.environ.get("DATABASE_URL"):
        return url

    host = os.environ.get("POSTGRES_HOST", "localhost")
    port = os.environ.get("POSTGRES_PORT", "5432")
    name = os.environ.get("POSTGRES_DB", "postgres")
    user = os.environ.get("POSTGRES_USER", "postgres")
    password = os.environ.get("POSTGRES_PASSWORD", "")
    sslmode = os.environ.get("POSTGRES_SSLMODE", "prefer")

    return f"postgresql://{user}:{password}@{host}:{port}/{name}?sslmode={sslmode}"


def mask_conninfo(conninfo: str) -> str:
    """Strip credentials from a connection string for logging."""
    if "@" in conninfo:
        return conninfo.split("@")[-1]
    if "password=" in conninfo:
        return conninfo.split("password=")[0] + "password=***"
    return conninfo


def session_kwargs(catalog: Optional[CatalogDefaults] = None) -> Dict[str, Any]:
    """
    Connection keyword arguments applying catalog session settings.

    Autocommit: each catalog query runs in its own implicit transaction,
    so one failed query leaves the session usable for the next.
    """
    catalog = catalog or get_defaults().catalog
    return {
        "autocommit": True,
        "application_name": catalog.application_name,
        "options": f"-c statement_timeout={catalog.statement_timeout_ms}",
        "row_factory": dict_row,
    }


# ============================================================================
# SINGLE CONNECTIONS
# ============================================================================

class PostgreSQLRepository:
    """
    Connection factory for one-shot catalog access.

    Usage:
        repo = PostgreSQLRepository()
        with repo.get_connection() as conn:
            catalog = PostgresCatalogRepository(conn)
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        catalog_defaults: Optional[CatalogDefaults] = None,
    ):
        """
        Initialize PostgreSQL repository.

        Args:
            connection_string: Optional explicit connection string
            catalog_defaults: Session settings (defaults to get_defaults().catalog)
        """
        self._conn_string = connection_string
        self._conn_string_lock = threading.Lock()
        self.catalog_defaults = catalog_defaults or get_defaults().catalog

    @property
    def conn_string(self) -> str:
        """Get or build connection string (lazy, thread-safe)."""
        if self._conn_string is None:
            with self._conn_string_lock:
                if self._conn_string is None:
                    self._conn_string = get_connection_string()
        return self._conn_string

    @contextmanager
    def get_connection(self):
        """
        Context manager for PostgreSQL connections.

        Yields:
            psycopg connection with dict_row factory
        """
        conn = None
        try:
            logger.debug(f"Connecting to PostgreSQL: {mask_conninfo(self.conn_string)}")
            conn = psycopg.connect(self.conn_string, **session_kwargs(self.catalog_defaults))
            logger.debug("PostgreSQL connection established")
            yield conn

        except psycopg.Error as e:
            logger.error(f"PostgreSQL connection error: {e}")
            if conn:
                conn.rollback()
            raise

        finally:
            if conn:
                conn.close()


# ============================================================================
# CONNECTION POOL
# ============================================================================

_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def init_pool(
    connection_string: Optional[str] = None,
    pool_defaults: Optional[PoolDefaults] = None,
    catalog_defaults: Optional[CatalogDefaults] = None,
) -> ConnectionPool:
    """
    Initialize the global connection pool.

    Args:
        connection_string: Override connection string (defaults to env)
        pool_defaults: Pool sizing (defaults to get_defaults().pool)
        catalog_defaults: Session settings (defaults to get_defaults().catalog)

    Returns:
        ConnectionPool instance
    """
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.warning("Pool already initialized, returning existing pool")
            return _pool

        conninfo = connection_string or get_connection_string()
        sizing = pool_defaults or get_defaults().pool

        logger.info(f"Initializing connection pool: {mask_conninfo(conninfo)}")

        _pool = ConnectionPool(
            conninfo=conninfo,
            min_size=sizing.min_size,
            max_size=sizing.max_size,
            timeout=sizing.timeout_seconds,
            kwargs=session_kwargs(catalog_defaults),
            open=False,
        )
        _pool.open()
        logger.info(f"Connection pool opened (min={sizing.min_size}, max={sizing.max_size})")

    return _pool


def get_pool() -> ConnectionPool:
    """Get the global connection pool, initializing if needed."""
    if _pool is None:
        return init_pool()
    return _pool


def close_pool() -> None:
    """Close the global connection pool."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            _pool.close()
            _pool = None
            logger.info("Connection pool closed")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PostgreSQLRepository",
    "get_connection_string",
    "mask_conninfo",
    "session_kwargs",
    "init_pool",
    "get_pool",
    "close_pool",
]
