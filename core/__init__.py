# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export contracts, models, and the DDL reconstruction engine
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================

from core.contracts import (
    RelationKind,
    Persistence,
    IdentityGeneration,
    AutoIncrement,
    ConstraintKind,
    StatementKind,
    ReconstructionError,
    TableNotFound,
    AmbiguousConstraint,
    CatalogError,
)
from core.models import (
    QualifiedName,
    TableFacts,
    ColumnFacts,
    ConstraintFacts,
    DDLStatement,
    TableDDL,
)
from core.schema import TableDDLGenerator, resolve_dialect, reconstruct_type, quote_ident

__all__ = [
    # Enums
    "RelationKind",
    "Persistence",
    "IdentityGeneration",
    "AutoIncrement",
    "ConstraintKind",
    "StatementKind",
    # Errors
    "ReconstructionError",
    "TableNotFound",
    "AmbiguousConstraint",
    "CatalogError",
    # Models
    "QualifiedName",
    "TableFacts",
    "ColumnFacts",
    "ConstraintFacts",
    "DDLStatement",
    "TableDDL",
    # Schema
    "TableDDLGenerator",
    "resolve_dialect",
    "reconstruct_type",
    "quote_ident",
]
