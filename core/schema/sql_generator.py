# ============================================================================
# TABLE DDL GENERATOR
# ============================================================================
# STATUS: Core - Statement orchestration for one table
# PURPOSE: Reconstruct CREATE TABLE + ALTER statements from catalog facts
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: TableDDLGenerator
# DEPENDENCIES: psycopg
# ============================================================================
"""
Catalog to PostgreSQL DDL Generator.

Reconstructs one table as an ordered list of self-contained statements:

    1. CREATE [UNLOGGED|TEMPORARY] TABLE "s"."t" (
           <column>,
           <column>
       )
       [PARTITION BY ...]
       [INHERITS (...)]
       [WITH (...)]
       [TABLESPACE ...];
    2. ALTER TABLE ... ADD CONSTRAINT ...;          (name-sorted)
    3. ALTER TABLE ... ALTER COLUMN ... SET DEFAULT ...;
    4. ALTER TABLE ... OWNER TO ...;
    5. COMMENT ON TABLE / COLUMN ...;

The catalog is injected (see repositories.catalog_repo.CatalogRepository)
and only read. Server-version differences are resolved once into a
DialectCapabilities set; nothing below branches on the raw version.

Usage:
    generator = TableDDLGenerator(catalog)
    ddl = generator.generate("public", "orders")
    print(ddl.to_script())
"""

from typing import TYPE_CHECKING, List, Optional

from psycopg import sql

from core.config import Defaults, get_defaults
from core.contracts import RelationKind, StatementKind
from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from core.models import DDLStatement, TableDDL, TableFacts
from core.schema.columns import ColumnBuilder, ColumnDefinition
from core.schema.constraints import ConstraintAssembler
from core.schema.ddl_utils import AlterTableBuilder, CommentBuilder, render
from core.schema.dialect import DialectCapabilities, resolve_dialect
from core.schema.quoting import ident, qualified

if TYPE_CHECKING:
    from repositories.catalog_repo import CatalogRepository

logger = get_logger(__name__)

# Column clauses sit one per line inside CREATE TABLE
COLUMN_INDENT = "    "


class TableDDLGenerator:
    """
    Reconstruct table DDL from an injected catalog collaborator.

    Holds no state between generate() calls; instances may be reused
    for many tables.
    """

    def __init__(self, catalog: "CatalogRepository", defaults: Optional[Defaults] = None):
        """
        Initialize the generator.

        Args:
            catalog: Read-only catalog metadata collaborator
            defaults: Configuration (defaults to get_defaults())
        """
        self.catalog = catalog
        self.defaults = defaults or get_defaults()

    # =========================================================================
    # DIALECT
    # =========================================================================

    def resolve_dialect(self) -> DialectCapabilities:
        """
        Resolve capabilities from the catalog's server version.

        A failed version lookup falls back to the oldest capability set.
        """
        try:
            version = self.catalog.get_server_version()
        except Exception as e:
            logger.warning(f"Server version unavailable, using oldest dialect: {e}")
            version = None

        dialect = resolve_dialect(version)
        logger.debug(f"Resolved dialect: {dialect.describe()}")
        return dialect

    # =========================================================================
    # CREATE TABLE
    # =========================================================================

    def build_create_table(
        self,
        facts: TableFacts,
        columns: List[ColumnDefinition],
        dialect: DialectCapabilities,
    ) -> sql.Composed:
        """
        Build the CREATE TABLE statement with its trailing clauses.

        Args:
            facts: Relation facts (parents, options, tablespace, partition key)
            columns: Column definitions in ordinal order
            dialect: Capability set

        Returns:
            sql.Composed CREATE TABLE statement (unterminated)
        """
        schema, table = facts.schema_name, facts.table_name

        body = sql.SQL("\n")
        if columns:
            body = sql.SQL("\n{}{}\n").format(
                sql.SQL(COLUMN_INDENT),
                sql.SQL(",\n" + COLUMN_INDENT).join(c.clause for c in columns),
            )

        parts = [
            sql.SQL("CREATE {persistence}TABLE {name} ({body})").format(
                persistence=sql.SQL(facts.persistence.create_prefix()),
                name=qualified(schema, table),
                body=body,
            )
        ]

        if facts.relation_kind == RelationKind.PARTITIONED:
            if not dialect.supports_native_partitioning:
                logger.debug("Partitioned relation on pre-10 dialect, PARTITION BY omitted")
            elif facts.partition_expression:
                parts.append(sql.SQL("PARTITION BY {}").format(sql.SQL(facts.partition_expression)))
            else:
                logger.warning(f"No partition key available for {schema}.{table}, PARTITION BY omitted")

        if facts.inherited_parents:
            parts.append(sql.SQL("INHERITS ({})").format(
                sql.SQL(", ").join(
                    qualified(p.schema_name, p.table_name) for p in facts.inherited_parents
                )
            ))

        if facts.storage_options:
            parts.append(sql.SQL("WITH ({})").format(
                sql.SQL(", ").join(sql.SQL(opt) for opt in facts.storage_options)
            ))

        if not self.defaults.catalog.is_default_tablespace(facts.tablespace):
            parts.append(sql.SQL("TABLESPACE {}").format(ident(facts.tablespace)))

        return sql.SQL("\n").join(parts)

    # =========================================================================
    # FOLLOW-UP STATEMENTS
    # =========================================================================

    def build_defaults(self, facts: TableFacts, columns: List[ColumnDefinition]) -> List[DDLStatement]:
        """SET DEFAULT for every column whose default is not auto-increment."""
        return [
            DDLStatement(
                kind=StatementKind.SET_DEFAULT,
                sql=render(AlterTableBuilder.set_default(
                    facts.schema_name, facts.table_name, c.column.name, c.column.column_default
                )),
            )
            for c in columns
            if c.needs_default_statement
        ]

    def build_owner(self, facts: TableFacts, dialect: DialectCapabilities) -> List[DDLStatement]:
        """OWNER TO in the dialect's variant, if an owner is known."""
        if not facts.owner or not self.defaults.render.include_owner:
            return []
        stmt = AlterTableBuilder.owner_to(
            facts.schema_name,
            facts.table_name,
            facts.owner,
            legacy=not dialect.supports_owner_to_syntax,
        )
        return [DDLStatement(kind=StatementKind.OWNER, sql=render(stmt))]

    def build_comments(self, facts: TableFacts, columns: List[ColumnDefinition]) -> List[DDLStatement]:
        """COMMENT ON TABLE / COLUMN statements (table first, then ordinal order)."""
        if not self.defaults.render.include_comments:
            return []

        statements = []
        if facts.comment:
            statements.append(DDLStatement(
                kind=StatementKind.COMMENT,
                sql=render(CommentBuilder.table(facts.schema_name, facts.table_name, facts.comment)),
            ))
        for c in columns:
            if c.column.comment:
                statements.append(DDLStatement(
                    kind=StatementKind.COMMENT,
                    sql=render(CommentBuilder.column(
                        facts.schema_name, facts.table_name, c.column.name, c.column.comment
                    )),
                ))
        return statements

    # =========================================================================
    # FACT COLLECTION
    # =========================================================================

    def collect_facts(self, schema: str, table: str, dialect: DialectCapabilities) -> TableFacts:
        """
        Fetch relation-level facts and fill in the per-feature lookups.

        Raises:
            TableNotFound: propagated from the catalog before any other lookup
        """
        facts = self.catalog.get_table_facts(schema, table)

        partition_expression = facts.partition_expression
        if (
            facts.relation_kind == RelationKind.PARTITIONED
            and dialect.supports_native_partitioning
            and partition_expression is None
        ):
            partition_expression = self.catalog.get_partition_expression(schema, table)

        return TableFacts.model_validate({
            **facts.model_dump(),
            "owner": self.catalog.get_owner(schema, table) or facts.owner,
            "inherited_parents": list(self.catalog.get_inherited_parents(schema, table) or facts.inherited_parents),
            "partition_expression": partition_expression,
            "storage_options": list(self.catalog.get_storage_options(schema, table) or facts.storage_options),
            "tablespace": self.catalog.get_tablespace(schema, table) or facts.tablespace,
        })

    # =========================================================================
    # ENTRY POINT
    # =========================================================================

    def generate(self, schema: str, table: str) -> TableDDL:
        """
        Reconstruct the DDL for one table.

        All-or-nothing: any fatal error raises before a TableDDL exists.

        Args:
            schema: Schema name
            table: Table name

        Returns:
            TableDDL with statements in replay order

        Raises:
            TableNotFound: The table does not exist
            AmbiguousConstraint: Constraint rows are inconsistent
        """
        with log_context(
            schema_name=schema,
            table_name=table,
            component=ComponentType.GENERATOR.value,
            operation="generate_ddl",
        ):
            dialect = self.resolve_dialect()

            with log_context(server_version=dialect.server_version):
                facts = self.collect_facts(schema, table, dialect)
                if facts.relation_kind == RelationKind.OTHER:
                    logger.warning(f"{schema}.{table} is not a plain or partitioned table, emitting plain structure")

                columns = ColumnBuilder(dialect).build_all(self.catalog.get_columns(schema, table))
                if not columns:
                    logger.warning(f"{schema}.{table} has no columns")

                constraint_rows = self.catalog.get_constraints(schema, table)
                constraints = ConstraintAssembler(schema, table).assemble(constraint_rows)

                statements = [
                    DDLStatement(
                        kind=StatementKind.CREATE_TABLE,
                        sql=render(self.build_create_table(facts, columns, dialect)),
                    )
                ]
                statements.extend(constraints)
                statements.extend(self.build_defaults(facts, columns))
                statements.extend(self.build_owner(facts, dialect))
                statements.extend(self.build_comments(facts, columns))

                log_checkpoint("ddl_generated", {
                    "statements": len(statements),
                    "columns": len(columns),
                    "constraints": len(constraints),
                    "fallback_dialect": dialect.is_fallback,
                })

        return TableDDL(
            schema_name=schema,
            table_name=table,
            server_version=dialect.server_version,
            statements=statements,
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ['TableDDLGenerator']
