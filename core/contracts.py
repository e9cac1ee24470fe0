# ============================================================================
# BASE CONTRACTS, ENUMS & ERRORS
# ============================================================================
# STATUS: Foundation - Catalog enums and reconstruction errors
# PURPOSE: Define the vocabulary shared by catalog facts and DDL generation
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: RelationKind, Persistence, IdentityGeneration, AutoIncrement,
#          ConstraintKind, StatementKind, ReconstructionError, TableNotFound,
#          AmbiguousConstraint, CatalogError
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for table DDL reconstruction.

Catalog facts cross three boundaries:
- SQL (pg_catalog / information_schema rows)
- YAML snapshots (offline reconstruction)
- Python (the DDL generator)

The enums below accept the raw catalog codes at the boundary so the
generator only ever sees the logical values.
"""

from enum import Enum
from typing import Optional


# ============================================================================
# RELATION ENUMS
# ============================================================================

class RelationKind(str, Enum):
    """
    Relation kind of the reconstructed table.

    Catalog codes (pg_class.relkind):
        r -> PLAIN
        p -> PARTITIONED
        anything else -> OTHER
    """
    PLAIN = "plain"
    PARTITIONED = "partitioned"
    OTHER = "other"

    @classmethod
    def from_relkind(cls, relkind: Optional[str]) -> "RelationKind":
        """Map a pg_class.relkind code."""
        if relkind == "r":
            return cls.PLAIN
        if relkind == "p":
            return cls.PARTITIONED
        return cls.OTHER


class Persistence(str, Enum):
    """
    Table persistence (pg_class.relpersistence).

    p -> PERMANENT, u -> UNLOGGED, t -> TEMPORARY
    """
    PERMANENT = "permanent"
    UNLOGGED = "unlogged"
    TEMPORARY = "temporary"

    @classmethod
    def from_relpersistence(cls, code: Optional[str]) -> "Persistence":
        """Map a pg_class.relpersistence code (unknown codes are permanent)."""
        if code == "u":
            return cls.UNLOGGED
        if code == "t":
            return cls.TEMPORARY
        return cls.PERMANENT

    def create_prefix(self) -> str:
        """Keyword placed between CREATE and TABLE."""
        if self is Persistence.UNLOGGED:
            return "UNLOGGED "
        if self is Persistence.TEMPORARY:
            return "TEMPORARY "
        return ""


# ============================================================================
# COLUMN ENUMS
# ============================================================================

class IdentityGeneration(str, Enum):
    """information_schema.columns.identity_generation values."""
    ALWAYS = "ALWAYS"
    BY_DEFAULT = "BY DEFAULT"

    def clause(self) -> str:
        """Column clause for this generation mode."""
        return f"GENERATED {self.value} AS IDENTITY"


class AutoIncrement(str, Enum):
    """
    Derived auto-increment classification of a column.

    IDENTITY          - first-class identity column (server 10+)
    SEQUENCE_DEFAULT  - legacy nextval() default (serial family)
    NONE              - ordinary column
    """
    IDENTITY = "identity"
    SEQUENCE_DEFAULT = "sequence_default"
    NONE = "none"

    def generates_values(self) -> bool:
        """True when the column encodes its own value generation."""
        return self is not AutoIncrement.NONE


# ============================================================================
# CONSTRAINT & STATEMENT ENUMS
# ============================================================================

class ConstraintKind(str, Enum):
    """
    Constraint kinds reconstructed as ALTER TABLE ... ADD CONSTRAINT.

    Catalog codes (pg_constraint.contype): p, u, f, c
    information_schema names: PRIMARY KEY, UNIQUE, FOREIGN KEY, CHECK
    """
    PRIMARY_KEY = "primary_key"
    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"

    @classmethod
    def parse(cls, value: str) -> "ConstraintKind":
        """Accept contype codes, information_schema names or enum values."""
        aliases = {
            "p": cls.PRIMARY_KEY,
            "u": cls.UNIQUE,
            "f": cls.FOREIGN_KEY,
            "c": cls.CHECK,
            "primary key": cls.PRIMARY_KEY,
            "foreign key": cls.FOREIGN_KEY,
        }
        key = value.strip().lower()
        if key in aliases:
            return aliases[key]
        return cls(key.replace(" ", "_"))


class StatementKind(str, Enum):
    """Semantic operation represented by one generated statement."""
    CREATE_TABLE = "create_table"
    ADD_CONSTRAINT = "add_constraint"
    SET_DEFAULT = "set_default"
    OWNER = "owner"
    COMMENT = "comment"


# ============================================================================
# ERRORS
# ============================================================================

class ReconstructionError(Exception):
    """Base exception for table reconstruction."""

    def __init__(self, message: str, schema_name: str = None, table_name: str = None):
        self.schema_name = schema_name
        self.table_name = table_name
        super().__init__(message)


class TableNotFound(ReconstructionError):
    """Raised when the target table does not exist in the catalog."""

    def __init__(self, schema_name: str, table_name: str):
        super().__init__(
            f"Table {schema_name}.{table_name} does not exist",
            schema_name=schema_name,
            table_name=table_name,
        )


class AmbiguousConstraint(ReconstructionError):
    """Raised when rows sharing a constraint name disagree with each other."""

    def __init__(self, constraint_name: str, reason: str, schema_name: str = None, table_name: str = None):
        self.constraint_name = constraint_name
        self.reason = reason
        super().__init__(
            f"Constraint {constraint_name} is ambiguous: {reason}",
            schema_name=schema_name,
            table_name=table_name,
        )


class CatalogError(ReconstructionError):
    """Raised when a catalog query fails."""

    def __init__(self, message: str, operation: str = None, schema_name: str = None, table_name: str = None):
        self.operation = operation
        super().__init__(message, schema_name=schema_name, table_name=table_name)


__all__ = [
    "RelationKind",
    "Persistence",
    "IdentityGeneration",
    "AutoIncrement",
    "ConstraintKind",
    "StatementKind",
    "ReconstructionError",
    "TableNotFound",
    "AmbiguousConstraint",
    "CatalogError",
]
