# ============================================================================
# POSTGRESQL CATALOG REPOSITORY
# ============================================================================
# STATUS: Repository - Live catalog introspection
# PURPOSE: Fetch table/column/constraint facts from pg_catalog and
#          information_schema for DDL reconstruction
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: PostgresCatalogRepository
# DEPENDENCIES: psycopg
# ============================================================================
"""
PostgreSQL Catalog Repository

Read-only introspection over a caller-owned psycopg connection.

Design Principles:
- Read-only queries (the repository never writes or commits)
- dict_row factory ALWAYS (never tuple indexing)
- Version-specific SQL chosen once from server_version_num
- psycopg errors are wrapped in CatalogError with the failing operation

Usage:
    with PostgreSQLRepository().get_connection() as conn:
        catalog = PostgresCatalogRepository(conn)
        ddl = TableDDLGenerator(catalog).generate("public", "orders")
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from core.contracts import CatalogError, TableNotFound
from core.models import ColumnFacts, ConstraintFacts, QualifiedName, TableFacts
from core.schema.dialect import CAPABILITY_THRESHOLDS, parse_server_version
from repositories.catalog_repo import CatalogRepository

logger = logging.getLogger(__name__)


# ============================================================================
# QUERIES
# ============================================================================

_RELATION_FILTER = """
    FROM pg_catalog.pg_class c
    JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
    WHERE n.nspname = %(schema)s AND c.relname = %(table)s
"""

TABLE_FACTS_SQL = """
    SELECT c.relkind,
           c.relpersistence,
           pg_catalog.pg_get_userbyid(c.relowner) AS owner,
           pg_catalog.obj_description(c.oid, 'pg_class') AS comment
""" + _RELATION_FILTER

OWNER_SQL = "SELECT pg_catalog.pg_get_userbyid(c.relowner) AS owner" + _RELATION_FILTER

STORAGE_OPTIONS_SQL = "SELECT c.reloptions" + _RELATION_FILTER

PARTITION_KEY_SQL = "SELECT pg_catalog.pg_get_partkeydef(c.oid) AS partition_key" + _RELATION_FILTER

TABLESPACE_SQL = """
    SELECT t.spcname
    FROM pg_catalog.pg_class c
    JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
    JOIN pg_catalog.pg_tablespace t ON t.oid = c.reltablespace
    WHERE n.nspname = %(schema)s AND c.relname = %(table)s
"""

INHERITS_SQL = """
    SELECT pn.nspname AS schema_name, pc.relname AS table_name
    FROM pg_catalog.pg_inherits i
    JOIN pg_catalog.pg_class c ON c.oid = i.inhrelid
    JOIN pg_catalog.pg_namespace cn ON cn.oid = c.relnamespace
    JOIN pg_catalog.pg_class pc ON pc.oid = i.inhparent
    JOIN pg_catalog.pg_namespace pn ON pn.oid = pc.relnamespace
    WHERE cn.nspname = %(schema)s AND c.relname = %(table)s
      {partitions}
    ORDER BY i.inhseqno
"""

# Partitions (server 10+) also appear in pg_inherits, they are not INHERITS parents
EXCLUDE_PARTITIONS = "AND NOT c.relispartition"

# {identity} is replaced with real or NULL identity columns (pre-10 servers)
COLUMNS_SQL = """
    SELECT col.ordinal_position,
           col.column_name AS name,
           CASE WHEN col.data_type IN ('ARRAY', 'USER-DEFINED')
                THEN pg_catalog.format_type(a.atttypid, a.atttypmod)
                ELSE col.data_type
           END AS data_type,
           col.character_maximum_length,
           col.numeric_precision,
           col.numeric_scale,
           col.is_nullable,
           col.column_default,
           {identity},
           pg_catalog.col_description(a.attrelid, a.attnum) AS comment
    FROM information_schema.columns col
    JOIN pg_catalog.pg_namespace n ON n.nspname = col.table_schema
    JOIN pg_catalog.pg_class c ON c.relnamespace = n.oid AND c.relname = col.table_name
    JOIN pg_catalog.pg_attribute a ON a.attrelid = c.oid AND a.attname = col.column_name
    WHERE col.table_schema = %(schema)s AND col.table_name = %(table)s
    ORDER BY col.ordinal_position
"""

IDENTITY_COLUMNS = "col.is_identity, col.identity_generation"
NO_IDENTITY_COLUMNS = "NULL AS is_identity, NULL AS identity_generation"

# Inherited constraints are created by INHERITS itself, only local ones are emitted
CONSTRAINT_FRAGMENTS_SQL = """
    SELECT con.conname AS name,
           con.contype AS kind,
           pg_catalog.pg_get_constraintdef(con.oid, true) AS definition
    FROM pg_catalog.pg_constraint con
    JOIN pg_catalog.pg_class c ON c.oid = con.conrelid
    JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
    WHERE n.nspname = %(schema)s AND c.relname = %(table)s
      AND con.contype IN {kinds}
      AND con.conislocal
    ORDER BY con.conname
"""

CONSTRAINT_COLUMNS_SQL = """
    SELECT tc.constraint_name AS name,
           tc.constraint_type AS kind,
           kcu.column_name,
           kcu.ordinal_position AS position,
           rkcu.table_schema AS referenced_schema,
           rkcu.table_name AS referenced_table,
           rkcu.column_name AS referenced_column
    FROM information_schema.table_constraints tc
    JOIN information_schema.key_column_usage kcu
      ON kcu.constraint_schema = tc.constraint_schema
     AND kcu.constraint_name = tc.constraint_name
     AND kcu.table_schema = tc.table_schema
     AND kcu.table_name = tc.table_name
    LEFT JOIN information_schema.referential_constraints rc
      ON rc.constraint_schema = tc.constraint_schema
     AND rc.constraint_name = tc.constraint_name
    LEFT JOIN information_schema.key_column_usage rkcu
      ON rkcu.constraint_schema = rc.unique_constraint_schema
     AND rkcu.constraint_name = rc.unique_constraint_name
     AND rkcu.ordinal_position = kcu.position_in_unique_constraint
    WHERE tc.table_schema = %(schema)s AND tc.table_name = %(table)s
      AND tc.constraint_type IN ('PRIMARY KEY', 'UNIQUE', 'FOREIGN KEY')
    ORDER BY tc.constraint_name, kcu.ordinal_position
"""


class PostgresCatalogRepository(CatalogRepository):
    """
    Catalog collaborator backed by a live PostgreSQL connection.

    The connection is owned by the caller (pool or CLI); this repository
    only opens cursors on it.
    """

    def __init__(self, conn: psycopg.Connection, structured_constraints: bool = False):
        """
        Initialize repository.

        Args:
            conn: Open psycopg connection
            structured_constraints: Fetch PK/UNIQUE/FK as per-column rows from
                information_schema instead of pg_get_constraintdef fragments
        """
        self.conn = conn
        self.structured_constraints = structured_constraints
        self._server_version: Optional[int] = None

    # =========================================================================
    # QUERY HELPERS
    # =========================================================================

    @contextmanager
    def _error_context(self, operation: str, schema: str = None, table: str = None):
        """
        Wrap psycopg errors in CatalogError with operation context.

        On a connection inside a transaction the failed statement aborts
        it; the transaction is rolled back so later lookups can still run.
        """
        try:
            yield
        except psycopg.Error as e:
            target = f" for {schema}.{table}" if table else ""
            error_msg = f"{operation} failed{target}: {e}"
            logger.error(error_msg)
            if not self.conn.autocommit:
                self._rollback()
            raise CatalogError(error_msg, operation=operation, schema_name=schema, table_name=table) from e

    def _rollback(self) -> None:
        try:
            self.conn.rollback()
        except psycopg.Error as e:
            logger.warning(f"Rollback after catalog error failed: {e}")

    def _fetch_all(self, query, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        with self.conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, params)
            return cur.fetchall()

    def _fetch_one(self, query, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self.conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, params)
            return cur.fetchone()

    @staticmethod
    def _params(schema: str, table: str) -> Dict[str, str]:
        return {"schema": schema, "table": table}

    # =========================================================================
    # SERVER
    # =========================================================================

    def get_server_version(self) -> int:
        """server_version_num of the connected server (cached per repository)."""
        if self._server_version is None:
            with self._error_context("get_server_version"):
                row = self._fetch_one("SHOW server_version_num", {})
            version = parse_server_version(row["server_version_num"]) if row else None
            if version is None:
                raise CatalogError("Server did not report server_version_num", operation="get_server_version")
            self._server_version = version
            logger.debug(f"Server version: {version}")
        return self._server_version

    def _supports(self, capability: str) -> bool:
        """Capability check for query selection; unknown version means no."""
        try:
            version = self.get_server_version()
        except CatalogError:
            return False
        return version >= CAPABILITY_THRESHOLDS[capability]

    # =========================================================================
    # RELATION
    # =========================================================================

    def get_table_facts(self, schema: str, table: str) -> TableFacts:
        with self._error_context("get_table_facts", schema, table):
            row = self._fetch_one(TABLE_FACTS_SQL, self._params(schema, table))

        if row is None:
            raise TableNotFound(schema, table)

        return TableFacts(
            schema_name=schema,
            table_name=table,
            relation_kind=row["relkind"],
            persistence=row["relpersistence"],
            owner=row["owner"],
            comment=row["comment"],
        )

    def get_owner(self, schema: str, table: str) -> Optional[str]:
        with self._error_context("get_owner", schema, table):
            row = self._fetch_one(OWNER_SQL, self._params(schema, table))
        return row["owner"] if row else None

    def get_inherited_parents(self, schema: str, table: str) -> List[QualifiedName]:
        partitions = EXCLUDE_PARTITIONS if self._supports("supports_native_partitioning") else ""
        query = sql.SQL(INHERITS_SQL).format(partitions=sql.SQL(partitions))

        with self._error_context("get_inherited_parents", schema, table):
            rows = self._fetch_all(query, self._params(schema, table))
        return [QualifiedName(**row) for row in rows]

    def get_partition_expression(self, schema: str, table: str) -> Optional[str]:
        if not self._supports("supports_native_partitioning"):
            return None
        with self._error_context("get_partition_expression", schema, table):
            row = self._fetch_one(PARTITION_KEY_SQL, self._params(schema, table))
        return row["partition_key"] if row else None

    def get_storage_options(self, schema: str, table: str) -> List[str]:
        with self._error_context("get_storage_options", schema, table):
            row = self._fetch_one(STORAGE_OPTIONS_SQL, self._params(schema, table))
        if not row or not row["reloptions"]:
            return []
        return list(row["reloptions"])

    def get_tablespace(self, schema: str, table: str) -> Optional[str]:
        with self._error_context("get_tablespace", schema, table):
            row = self._fetch_one(TABLESPACE_SQL, self._params(schema, table))
        return row["spcname"] if row else None

    # =========================================================================
    # COLUMNS
    # =========================================================================

    def get_columns(self, schema: str, table: str) -> List[ColumnFacts]:
        identity = IDENTITY_COLUMNS if self._supports("supports_identity_columns") else NO_IDENTITY_COLUMNS
        query = sql.SQL(COLUMNS_SQL).format(identity=sql.SQL(identity))

        with self._error_context("get_columns", schema, table):
            rows = self._fetch_all(query, self._params(schema, table))

        logger.debug(f"Fetched {len(rows)} columns for {schema}.{table}")
        return [ColumnFacts(**row) for row in rows]

    # =========================================================================
    # CONSTRAINTS
    # =========================================================================

    def get_constraints(self, schema: str, table: str) -> List[ConstraintFacts]:
        params = self._params(schema, table)

        if not self.structured_constraints:
            query = sql.SQL(CONSTRAINT_FRAGMENTS_SQL).format(kinds=sql.SQL("('p', 'u', 'f', 'c')"))
            with self._error_context("get_constraints", schema, table):
                rows = self._fetch_all(query, params)
            return [ConstraintFacts(**row) for row in rows]

        # Check constraints have no structured form, they stay fragments
        check_query = sql.SQL(CONSTRAINT_FRAGMENTS_SQL).format(kinds=sql.SQL("('c')"))
        with self._error_context("get_constraints", schema, table):
            key_rows = self._fetch_all(CONSTRAINT_COLUMNS_SQL, params)
            check_rows = self._fetch_all(check_query, params)

        facts = [
            ConstraintFacts(
                name=row["name"],
                kind=row["kind"],
                columns=[row["column_name"]],
                position=row["position"],
                referenced_schema=row["referenced_schema"],
                referenced_table=row["referenced_table"],
                referenced_columns=[row["referenced_column"]] if row["referenced_column"] else [],
            )
            for row in key_rows
        ]
        facts.extend(ConstraintFacts(**row) for row in check_rows)
        return facts


__all__ = ["PostgresCatalogRepository"]
