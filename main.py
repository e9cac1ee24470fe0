# ============================================================================
# PGDDLX - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: HTTP service reconstructing table DDL from a live catalog
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
pgddlx Main Application

FastAPI application that:
1. Provides HTTP API for table DDL reconstruction
2. Manages the shared database connection pool

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from __version__ import __version__, BUILD_DATE
from infrastructure.postgresql import init_pool, close_pool
from api.routes import router, set_ddl_services

# Configure logging using our structured logging system
from core.logging import configure_logging, get_logger

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)
logger = get_logger(__name__)

_pool = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Opens the connection pool on startup, closes it on shutdown.
    """
    global _pool

    logger.info(f"Starting pgddlx v{__version__} (Build {BUILD_DATE})")

    _pool = init_pool()
    set_ddl_services(pool=_pool)
    logger.info("Database pool initialized")

    yield

    logger.info("Shutting down pgddlx...")
    set_ddl_services(pool=None)
    close_pool()
    _pool = None
    logger.info("pgddlx stopped")


# Create FastAPI app
app = FastAPI(
    title="pgddlx",
    description="PostgreSQL table DDL reconstruction from catalog metadata",
    version=__version__,
    lifespan=lifespan,
)

# Include API routes
app.include_router(router, prefix="/api/v1")


# ============================================================================
# HEALTH
# ============================================================================

@app.get("/livez", tags=["Health"])
async def livez():
    """Liveness probe (process is up, no dependencies checked)."""
    return {"status": "ok", "version": __version__}


@app.get("/readyz", tags=["Health"])
def readyz():
    """Readiness probe (pool can hand out a working connection)."""
    if _pool is None:
        raise HTTPException(503, "Database pool not initialized")
    try:
        _pool.check()
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        raise HTTPException(503, "Database unavailable")
    return {"status": "ready", "version": __version__}


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "pgddlx",
        "version": __version__,
        "build_date": BUILD_DATE,
        "status": "running",
        "docs": "/docs",
    }


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.environ.get("RELOAD", "false").lower() == "true",
    )
