# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - DDL reconstruction engine
# PURPOSE: Rebuild PostgreSQL table DDL from catalog facts
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================

from core.schema.quoting import ident, qualified, quote_ident, unquote_ident
from core.schema.dialect import (
    CAPABILITY_THRESHOLDS,
    DialectCapabilities,
    OLDEST_DIALECT,
    resolve_dialect,
    parse_server_version,
)
from core.schema.ddl_utils import (
    AlterTableBuilder,
    CommentBuilder,
    SERIAL_TYPE_MAP,
    reconstruct_type,
    serial_equivalent,
    render,
)
from core.schema.columns import ColumnBuilder, ColumnDefinition, classify_auto_increment
from core.schema.constraints import ConstraintAssembler, MergedConstraint
from core.schema.sql_generator import TableDDLGenerator

__all__ = [
    # Generator
    "TableDDLGenerator",
    # Components
    "ColumnBuilder",
    "ColumnDefinition",
    "classify_auto_increment",
    "ConstraintAssembler",
    "MergedConstraint",
    # Dialect
    "CAPABILITY_THRESHOLDS",
    "DialectCapabilities",
    "OLDEST_DIALECT",
    "resolve_dialect",
    "parse_server_version",
    # Utilities
    "AlterTableBuilder",
    "CommentBuilder",
    "SERIAL_TYPE_MAP",
    "reconstruct_type",
    "serial_equivalent",
    "render",
    # Quoting
    "ident",
    "qualified",
    "quote_ident",
    "unquote_ident",
]
