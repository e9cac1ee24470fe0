# ============================================================================
# DDL UTILITIES
# ============================================================================
# STATUS: Core - Shared SQL generation patterns for table reconstruction
# PURPOSE: Type reconstruction plus ALTER TABLE / COMMENT builders (psycopg.sql)
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: reconstruct_type, SERIAL_TYPE_MAP, AlterTableBuilder,
#          CommentBuilder, render
# DEPENDENCIES: psycopg
# ============================================================================
"""
DDL Utilities - Shared SQL Generation Patterns.

All builders return psycopg.sql.Composed objects; render() turns one into
a terminated statement string. Identifiers always go through
core.schema.quoting. Catalog fragments (constraint definitions, default
expressions) are wrapped in sql.SQL and emitted verbatim.

Usage:
    from core.schema.ddl_utils import AlterTableBuilder, render

    stmt = AlterTableBuilder.set_default('app', 'users', 'created_at', 'now()')
    render(stmt)
    # 'ALTER TABLE "app"."users" ALTER COLUMN "created_at" SET DEFAULT now();'
"""

from typing import Optional

from psycopg import sql

from core.schema.quoting import ident, qualified


# ============================================================================
# TYPE RECONSTRUCTION
# ============================================================================

VARCHAR_TYPES = frozenset({"character varying", "varchar"})
NUMERIC_TYPES = frozenset({"numeric", "decimal"})

# Base type -> serial-family equivalent used for nextval() defaults
SERIAL_TYPE_MAP = {
    "integer": "serial",
    "int": "serial",
    "int4": "serial",
    "bigint": "bigserial",
    "int8": "bigserial",
}


def _normalize_type_name(data_type: str) -> str:
    return " ".join(data_type.split()).lower()


def reconstruct_type(
    data_type: str,
    length: Optional[int] = None,
    precision: Optional[int] = None,
    scale: Optional[int] = None,
) -> str:
    """
    Map a catalog type descriptor to canonical type syntax.

    Total: every input produces some syntax. Names other than the
    varchar and numeric families are returned unchanged.

    Args:
        data_type: Base type name (case-insensitive), e.g. 'character varying'
        length: character_maximum_length
        precision: numeric_precision
        scale: numeric_scale (only used together with precision)

    Returns:
        Canonical type string, e.g. 'varchar(50)', 'numeric(10,2)', 'text'
    """
    key = _normalize_type_name(data_type)

    if key in VARCHAR_TYPES:
        if length is not None:
            return f"varchar({length})"
        return "varchar"

    if key in NUMERIC_TYPES:
        if precision is not None and scale is not None:
            return f"numeric({precision},{scale})"
        if precision is not None:
            return f"numeric({precision})"
        return "numeric"

    return data_type


def serial_equivalent(data_type: str) -> Optional[str]:
    """serial/bigserial for 32/64-bit integer base types, else None."""
    return SERIAL_TYPE_MAP.get(_normalize_type_name(data_type))


# ============================================================================
# RENDERING
# ============================================================================

def render(stmt: sql.Composable) -> str:
    """
    Render a composed statement as terminated SQL text.

    No connection is needed: identifiers and literals are escaped with
    psycopg's connection-less rules (UTF-8).
    """
    text = stmt.as_string(None).rstrip()
    if not text.endswith(";"):
        text += ";"
    return text


# ============================================================================
# ALTER TABLE BUILDER
# ============================================================================

class AlterTableBuilder:
    """
    Builder for ALTER TABLE statements emitted after CREATE TABLE.

    All methods are static and return sql.Composed objects.
    """

    @staticmethod
    def _target(schema: str, table: str) -> sql.Composed:
        return sql.SQL("ALTER TABLE {}").format(qualified(schema, table))

    @staticmethod
    def add_constraint(schema: str, table: str, name: str, fragment: sql.Composable) -> sql.Composed:
        """
        ADD CONSTRAINT with a definition fragment.

        Args:
            schema: Schema name
            table: Table name
            name: Constraint name
            fragment: sql.SQL (verbatim catalog text) or a composed definition

        Returns:
            sql.Composed ALTER TABLE ... ADD CONSTRAINT statement
        """
        return sql.SQL("{target} ADD CONSTRAINT {name} {fragment}").format(
            target=AlterTableBuilder._target(schema, table),
            name=ident(name),
            fragment=fragment,
        )

    @staticmethod
    def set_default(schema: str, table: str, column: str, expression: str) -> sql.Composed:
        """ALTER COLUMN ... SET DEFAULT with a raw default expression."""
        return sql.SQL("{target} ALTER COLUMN {column} SET DEFAULT {expression}").format(
            target=AlterTableBuilder._target(schema, table),
            column=ident(column),
            expression=sql.SQL(expression.strip()),
        )

    @staticmethod
    def owner_to(schema: str, table: str, owner: str, legacy: bool = False) -> sql.Composed:
        """
        OWNER TO statement.

        The legacy variant (servers before 9.6) carries a marker comment
        line ahead of the same statement.
        """
        stmt = sql.SQL("{target} OWNER TO {owner}").format(
            target=AlterTableBuilder._target(schema, table),
            owner=ident(owner),
        )
        if legacy:
            return sql.SQL("-- legacy owner syntax (server < 9.6)\n{}").format(stmt)
        return stmt


# ============================================================================
# COMMENT BUILDER
# ============================================================================

class CommentBuilder:
    """
    Builder for PostgreSQL COMMENT statements.
    """

    @staticmethod
    def _literal(comment: str) -> sql.SQL:
        # connection-less quoting prefixes E'...' strings with a space
        return sql.SQL(sql.Literal(comment).as_string(None).lstrip())

    @staticmethod
    def table(schema: str, table: str, comment: str) -> sql.Composed:
        """Add comment to table."""
        return sql.SQL("COMMENT ON TABLE {} IS {}").format(
            qualified(schema, table),
            CommentBuilder._literal(comment)
        )

    @staticmethod
    def column(schema: str, table: str, column: str, comment: str) -> sql.Composed:
        """Add comment to column."""
        return sql.SQL("COMMENT ON COLUMN {} IS {}").format(
            qualified(schema, table, column),
            CommentBuilder._literal(comment)
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'SERIAL_TYPE_MAP',
    'reconstruct_type',
    'serial_equivalent',
    'render',
    'AlterTableBuilder',
    'CommentBuilder',
]
