# ============================================================================
# CONSTRAINT ASSEMBLER
# ============================================================================
# STATUS: Core - Constraint grouping and ADD CONSTRAINT emission
# PURPOSE: Merge constraint rows by name, synthesize missing fragments
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ConstraintAssembler, MergedConstraint
# DEPENDENCIES: psycopg
# ============================================================================
"""
Constraint Assembler.

Catalog rows are grouped by constraint name; each group becomes exactly one
ALTER TABLE ... ADD CONSTRAINT statement, emitted in name-sorted order.

Fragment rows are emitted verbatim. Structured rows are synthesized:
    PRIMARY KEY ("a", "b")
    UNIQUE ("a")
    FOREIGN KEY ("a", "b") REFERENCES "s"."t" ("x", "y")
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from psycopg import sql

from core.contracts import AmbiguousConstraint, ConstraintKind, StatementKind
from core.models import ConstraintFacts, DDLStatement
from core.schema.ddl_utils import AlterTableBuilder, render
from core.schema.quoting import ident, qualified

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergedConstraint:
    """One logical constraint after merging its rows."""
    name: str
    kind: ConstraintKind
    definition: Optional[str]
    columns: List[str]
    referenced_schema: Optional[str] = None
    referenced_table: Optional[str] = None
    referenced_columns: Optional[List[str]] = None


class ConstraintAssembler:
    """
    Build ADD CONSTRAINT statements for one table.

    Usage:
        assembler = ConstraintAssembler("public", "orders")
        statements = assembler.assemble(rows)
    """

    def __init__(self, schema_name: str, table_name: str):
        self.schema_name = schema_name
        self.table_name = table_name

    # =========================================================================
    # MERGING
    # =========================================================================

    def _ambiguous(self, name: str, reason: str) -> AmbiguousConstraint:
        return AmbiguousConstraint(
            name, reason, schema_name=self.schema_name, table_name=self.table_name
        )

    def group(self, rows: List[ConstraintFacts]) -> Dict[str, List[ConstraintFacts]]:
        """Group rows by constraint name, preserving row order."""
        groups: Dict[str, List[ConstraintFacts]] = {}
        for row in rows:
            groups.setdefault(row.name, []).append(row)
        return groups

    def merge(self, name: str, rows: List[ConstraintFacts]) -> MergedConstraint:
        """
        Merge the rows of one constraint name.

        Raises:
            AmbiguousConstraint: rows disagree on kind or referenced table,
                or a foreign key's column lists cannot be aligned
        """
        kinds = {r.kind for r in rows}
        if len(kinds) > 1:
            raise self._ambiguous(name, f"rows disagree on kind: {sorted(k.value for k in kinds)}")
        kind = rows[0].kind

        definition = next((r.definition.strip() for r in rows if r.has_fragment), None)

        ordered = sorted(rows, key=lambda r: r.position)
        columns = [c for r in ordered for c in r.columns]

        if kind != ConstraintKind.FOREIGN_KEY:
            return MergedConstraint(name=name, kind=kind, definition=definition, columns=columns)

        targets = {
            (r.referenced_schema, r.referenced_table)
            for r in rows
            if r.referenced_table is not None
        }
        if len(targets) > 1:
            listed = ", ".join(sorted(f"{s}.{t}" for s, t in targets))
            raise self._ambiguous(name, f"rows reference different tables: {listed}")

        referenced_columns = [c for r in ordered for c in r.referenced_columns]
        referenced_schema, referenced_table = targets.pop() if targets else (None, None)

        if definition is None:
            if referenced_table is None:
                raise self._ambiguous(name, "foreign key has no referenced table")
            if len(columns) != len(referenced_columns):
                raise self._ambiguous(
                    name,
                    f"{len(columns)} local columns vs {len(referenced_columns)} referenced columns",
                )

        return MergedConstraint(
            name=name,
            kind=kind,
            definition=definition,
            columns=columns,
            referenced_schema=referenced_schema or self.schema_name,
            referenced_table=referenced_table,
            referenced_columns=referenced_columns,
        )

    # =========================================================================
    # FRAGMENTS
    # =========================================================================

    @staticmethod
    def _column_list(columns: List[str]) -> sql.Composed:
        return sql.SQL(", ").join(ident(c) for c in columns)

    def fragment(self, constraint: MergedConstraint) -> sql.Composable:
        """Definition fragment: verbatim catalog text or synthesized."""
        if constraint.definition is not None:
            return sql.SQL(constraint.definition)

        if not constraint.columns:
            raise self._ambiguous(constraint.name, "no definition fragment and no columns")

        if constraint.kind == ConstraintKind.PRIMARY_KEY:
            return sql.SQL("PRIMARY KEY ({})").format(self._column_list(constraint.columns))

        if constraint.kind == ConstraintKind.UNIQUE:
            return sql.SQL("UNIQUE ({})").format(self._column_list(constraint.columns))

        if constraint.kind == ConstraintKind.FOREIGN_KEY:
            return sql.SQL("FOREIGN KEY ({}) REFERENCES {} ({})").format(
                self._column_list(constraint.columns),
                qualified(constraint.referenced_schema, constraint.referenced_table),
                self._column_list(constraint.referenced_columns),
            )

        # check constraints always carry a fragment (enforced by ConstraintFacts)
        raise self._ambiguous(constraint.name, f"cannot synthesize {constraint.kind.value} constraint")

    # =========================================================================
    # STATEMENTS
    # =========================================================================

    def assemble(self, rows: List[ConstraintFacts]) -> List[DDLStatement]:
        """
        Build one ADD CONSTRAINT statement per distinct constraint name.

        All groups are merged before anything is rendered, so an ambiguous
        constraint yields no partial output.

        Returns:
            Statements in name-sorted order
        """
        groups = self.group(rows)
        merged = [self.merge(name, groups[name]) for name in sorted(groups)]

        statements = []
        for constraint in merged:
            stmt = AlterTableBuilder.add_constraint(
                self.schema_name, self.table_name, constraint.name, self.fragment(constraint)
            )
            statements.append(DDLStatement(kind=StatementKind.ADD_CONSTRAINT, sql=render(stmt)))

        logger.debug(
            f"Assembled {len(statements)} constraints from {len(rows)} rows "
            f"for {self.schema_name}.{self.table_name}"
        )
        return statements


__all__ = ["ConstraintAssembler", "MergedConstraint"]
