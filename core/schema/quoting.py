# ============================================================================
# IDENTIFIER QUOTING
# ============================================================================
# STATUS: Core - Identifier escaping for generated DDL
# PURPOSE: Quote schema/table/column/constraint/role names via psycopg.sql
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ident, qualified, quote_ident, unquote_ident
# DEPENDENCIES: psycopg
# ============================================================================
"""
Identifier Quoting.

Every name that reaches generated SQL (schema, table, column, constraint,
role, tablespace) is built with ident() or qualified(), which wrap psycopg's
sql.Identifier: wrapped in double quotes, embedded double quotes doubled.
Pre-rendered catalog fragments (constraint definitions, partition keys,
default expressions) are never passed through here.

Usage:
    from core.schema.quoting import quote_ident, qualified

    quote_ident('my "odd" name')      # '"my ""odd"" name"'
    qualified("s", "t")               # sql.Identifier -> "s"."t"
"""

from psycopg import sql


def ident(name: str) -> sql.Identifier:
    """Composable for a single identifier."""
    return sql.Identifier(name)


def qualified(schema: str, *names: str) -> sql.Identifier:
    """Composable for a schema-qualified identifier ("schema"."table"[."column"])."""
    return sql.Identifier(schema, *names)


def quote_ident(name: str) -> str:
    """
    Quote an identifier for reuse as SQL text.

    Args:
        name: Raw identifier (may contain double quotes)

    Returns:
        Double-quoted identifier with embedded quotes doubled
    """
    return ident(name).as_string(None)


def unquote_ident(quoted: str) -> str:
    """
    Reverse quote_ident.

    Raises:
        ValueError: If the text was not produced by quote_ident
    """
    if len(quoted) < 2 or not (quoted.startswith('"') and quoted.endswith('"')):
        raise ValueError(f"Not a quoted identifier: {quoted!r}")
    body = quoted[1:-1]
    if body.replace('""', "").count('"'):
        raise ValueError(f"Unescaped double quote in identifier: {quoted!r}")
    return body.replace('""', '"')


__all__ = ["ident", "qualified", "quote_ident", "unquote_ident"]
