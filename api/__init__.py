# ============================================================================
# API MODULE
# ============================================================================
# STATUS: Core - FastAPI routes
# PURPOSE: HTTP API for table DDL reconstruction
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
API Module

FastAPI routes for pgddlx.
"""

from .routes import router, set_ddl_services
from .schemas import (
    DDLResponse,
    StatementResponse,
    ErrorResponse,
)

__all__ = [
    "router",
    "set_ddl_services",
    "DDLResponse",
    "StatementResponse",
    "ErrorResponse",
]
