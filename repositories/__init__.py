# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# STATUS: Core - Catalog access layer
# PURPOSE: Read-only catalog collaborators for DDL reconstruction
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Repositories Module

Provides the catalog collaborator contract and its implementations.

Usage:
    from repositories import PostgresCatalogRepository

    with PostgreSQLRepository().get_connection() as conn:
        catalog = PostgresCatalogRepository(conn)
        ddl = TableDDLGenerator(catalog).generate("public", "orders")
"""

from .catalog_repo import CatalogRepository, StaticCatalogRepository
from .postgres_catalog_repo import PostgresCatalogRepository

__all__ = [
    "CatalogRepository",
    "StaticCatalogRepository",
    "PostgresCatalogRepository",
]
