# ============================================================================
# COLUMN BUILDER
# ============================================================================
# STATUS: Core - Column clause construction
# PURPOSE: Combine type, auto-increment disambiguation and nullability
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ColumnBuilder, ColumnDefinition, classify_auto_increment,
#          SEQUENCE_DEFAULT_PATTERN
# DEPENDENCIES: psycopg
# ============================================================================
"""
Column Builder.

Auto-increment is disambiguated in a fixed order:

1. IDENTITY          - dialect supports identity columns AND the column has
                       an identity generation mode. Declared type is kept,
                       GENERATED {ALWAYS|BY DEFAULT} AS IDENTITY is appended.
2. SEQUENCE_DEFAULT  - the raw default calls nextval(). integer/bigint are
                       rewritten to serial/bigserial; other types keep their
                       canonical type.
3. NONE

No DEFAULT clause is ever emitted here. Plain defaults are emitted later as
separate ALTER TABLE ... SET DEFAULT statements.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from psycopg import sql

from core.contracts import AutoIncrement
from core.models import ColumnFacts
from core.schema.dialect import DialectCapabilities
from core.schema.ddl_utils import reconstruct_type, serial_equivalent
from core.schema.quoting import ident

SEQUENCE_DEFAULT_PATTERN = re.compile(r"\bnextval\s*\(", re.IGNORECASE)


def classify_auto_increment(column: ColumnFacts, dialect: DialectCapabilities) -> AutoIncrement:
    """Derive the auto-increment classification of a column."""
    if dialect.supports_identity_columns and column.identity_generation is not None:
        return AutoIncrement.IDENTITY
    if column.column_default and SEQUENCE_DEFAULT_PATTERN.search(column.column_default):
        return AutoIncrement.SEQUENCE_DEFAULT
    return AutoIncrement.NONE


@dataclass(frozen=True)
class ColumnDefinition:
    """One rendered column clause and the facts it came from."""
    column: ColumnFacts
    auto_increment: AutoIncrement
    type_sql: str
    clause: sql.Composed

    @property
    def needs_default_statement(self) -> bool:
        """True when the raw default must be emitted as SET DEFAULT."""
        return self.column.has_default and not self.auto_increment.generates_values()


class ColumnBuilder:
    """
    Build column clauses for one dialect.

    Usage:
        builder = ColumnBuilder(resolve_dialect(120005))
        definitions = builder.build_all(columns)
    """

    def __init__(self, dialect: DialectCapabilities):
        self.dialect = dialect

    def build(self, column: ColumnFacts) -> ColumnDefinition:
        """
        Build the clause for one column.

        Args:
            column: Column facts

        Returns:
            ColumnDefinition with clause '"name" type [identity] [NOT NULL]'
        """
        type_sql = reconstruct_type(
            column.data_type,
            column.character_maximum_length,
            column.numeric_precision,
            column.numeric_scale,
        )
        auto_increment = classify_auto_increment(column, self.dialect)

        identity_clause: Optional[str] = None
        if auto_increment is AutoIncrement.IDENTITY:
            identity_clause = column.identity_generation.clause()
        elif auto_increment is AutoIncrement.SEQUENCE_DEFAULT:
            type_sql = serial_equivalent(column.data_type) or type_sql

        parts = [ident(column.name), sql.SQL(type_sql)]
        if identity_clause:
            parts.append(sql.SQL(identity_clause))
        if not column.is_nullable:
            parts.append(sql.SQL("NOT NULL"))

        return ColumnDefinition(
            column=column,
            auto_increment=auto_increment,
            type_sql=type_sql,
            clause=sql.SQL(" ").join(parts),
        )

    def build_all(self, columns: List[ColumnFacts]) -> List[ColumnDefinition]:
        """
        Build clauses in ordinal order.

        Columns are sorted by ordinal_position only; ties keep input order.
        """
        ordered = sorted(columns, key=lambda c: c.ordinal_position)
        return [self.build(c) for c in ordered]


__all__ = [
    "SEQUENCE_DEFAULT_PATTERN",
    "ColumnBuilder",
    "ColumnDefinition",
    "classify_auto_increment",
]
