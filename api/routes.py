# ============================================================================
# API ROUTES
# ============================================================================
# STATUS: Core - FastAPI route definitions
# PURPOSE: HTTP endpoints for table DDL reconstruction
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
API Routes

FastAPI routes for reconstructing table DDL from a live catalog.

Endpoints (mounted under /api/v1):
    GET /tables/{schema}/{table}/ddl      JSON statements + script
    GET /tables/{schema}/{table}/ddl.sql  text/plain script

Error mapping:
    TableNotFound       -> 404
    AmbiguousConstraint -> 409
    CatalogError        -> 503
    pool exhausted      -> 503
"""

import logging
import uuid
from contextlib import contextmanager
from dataclasses import replace
from typing import Callable, ContextManager, Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import PlainTextResponse
from psycopg_pool import PoolTimeout

from core.config import Defaults, get_defaults
from core.contracts import AmbiguousConstraint, CatalogError, TableNotFound
from core.logging import ComponentType, log_context
from core.models import TableDDL
from core.schema import TableDDLGenerator
from repositories import CatalogRepository, PostgresCatalogRepository
from .schemas import DDLResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

CatalogProvider = Callable[[], ContextManager[CatalogRepository]]


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================
# These will be set by the main app at startup

_pool = None
_catalog_provider: Optional[CatalogProvider] = None


def set_ddl_services(pool=None, catalog_provider: Optional[CatalogProvider] = None):
    """
    Set the catalog source for dependency injection.

    Args:
        pool: psycopg_pool.ConnectionPool, one pooled connection per request
        catalog_provider: Callable returning a context manager that yields a
            CatalogRepository (takes precedence over pool)
    """
    global _pool, _catalog_provider
    _pool = pool
    _catalog_provider = catalog_provider


@contextmanager
def _pooled_catalog():
    defaults = get_defaults()
    with _pool.connection() as conn:
        yield PostgresCatalogRepository(
            conn,
            structured_constraints=defaults.catalog.structured_constraints,
        )


def get_catalog_provider() -> CatalogProvider:
    if _catalog_provider is not None:
        return _catalog_provider
    if _pool is not None:
        return _pooled_catalog
    raise HTTPException(503, "Catalog not initialized")


# ============================================================================
# HELPERS
# ============================================================================

_ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Table not found"},
    409: {"model": ErrorResponse, "description": "Inconsistent constraint facts"},
    503: {"model": ErrorResponse, "description": "Catalog unavailable"},
}


def _request_defaults(include_owner: Optional[bool], include_comments: Optional[bool]) -> Defaults:
    defaults = get_defaults()
    return replace(
        defaults,
        render=defaults.render.with_overrides(
            include_owner=include_owner,
            include_comments=include_comments,
        ),
    )


def _reconstruct(
    schema: str,
    table: str,
    include_owner: Optional[bool],
    include_comments: Optional[bool],
) -> TableDDL:
    """Run one reconstruction and map domain errors to HTTP errors."""
    provider = get_catalog_provider()
    defaults = _request_defaults(include_owner, include_comments)

    with log_context(correlation_id=str(uuid.uuid4())[:8], component=ComponentType.API.value):
        try:
            with provider() as catalog:
                return TableDDLGenerator(catalog, defaults).generate(schema, table)

        except TableNotFound as e:
            raise HTTPException(404, str(e))
        except AmbiguousConstraint as e:
            raise HTTPException(409, str(e))
        except CatalogError as e:
            raise HTTPException(503, str(e))
        except PoolTimeout as e:
            logger.error(f"No database connection available: {e}")
            raise HTTPException(503, "No database connection available")


# ============================================================================
# DDL
# ============================================================================

@router.get(
    "/tables/{schema}/{table}/ddl",
    response_model=DDLResponse,
    tags=["DDL"],
    responses=_ERROR_RESPONSES,
)
def get_table_ddl(
    schema: str,
    table: str,
    include_owner: Optional[bool] = Query(None, description="Emit OWNER TO (default from config)"),
    include_comments: Optional[bool] = Query(None, description="Emit COMMENT ON (default from config)"),
):
    """
    Reconstruct the DDL for one table.

    Statements are returned in replay order: CREATE TABLE, constraints,
    column defaults, owner, comments.
    """
    ddl = _reconstruct(schema, table, include_owner, include_comments)
    return DDLResponse.from_ddl(ddl, get_defaults().render.statement_separator)


@router.get(
    "/tables/{schema}/{table}/ddl.sql",
    response_class=PlainTextResponse,
    tags=["DDL"],
    responses=_ERROR_RESPONSES,
)
def get_table_ddl_script(
    schema: str,
    table: str,
    include_owner: Optional[bool] = Query(None),
    include_comments: Optional[bool] = Query(None),
):
    """Reconstruct the DDL for one table as a plain SQL script."""
    ddl = _reconstruct(schema, table, include_owner, include_comments)
    return PlainTextResponse(ddl.to_script(get_defaults().render.statement_separator))
