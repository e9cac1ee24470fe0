# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for catalog fact and output models
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models for the catalog facts consumed by the DDL generator and
the statements it produces. All fact models are frozen snapshots.
"""

from core.models.table import QualifiedName, TableFacts
from core.models.column import ColumnFacts
from core.models.constraint import ConstraintFacts
from core.models.statement import DDLStatement, TableDDL

__all__ = [
    # Relation
    "QualifiedName",
    "TableFacts",
    # Column
    "ColumnFacts",
    # Constraint
    "ConstraintFacts",
    # Output
    "DDLStatement",
    "TableDDL",
]
