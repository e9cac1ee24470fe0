# ============================================================================
# CATALOG REPOSITORY
# ============================================================================
# STATUS: Repository - Catalog metadata collaborator contract
# PURPOSE: Read-only catalog interface injected into TableDDLGenerator
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: CatalogRepository, StaticCatalogRepository
# DEPENDENCIES: pydantic, yaml
# ============================================================================
"""
Catalog Repository

Defines the read-only operations the DDL generator needs from a catalog,
plus an in-memory implementation serving fact snapshots.

Snapshot format (dict or YAML):

    server_version: 120005
    tables:
      - schema_name: public
        table_name: orders
        relation_kind: r
        owner: alice
        columns:
          - {ordinal_position: 1, name: id, data_type: integer,
             is_nullable: "NO", column_default: "nextval('orders_id_seq'::regclass)"}
        constraints:
          - {name: orders_pkey, kind: p, definition: "PRIMARY KEY (id)"}

Usage:
    catalog = StaticCatalogRepository.from_yaml("snapshot.yaml")
    ddl = TableDDLGenerator(catalog).generate("public", "orders")
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from core.contracts import TableNotFound
from core.models import ColumnFacts, ConstraintFacts, QualifiedName, TableFacts

logger = logging.getLogger(__name__)


# ============================================================================
# CONTRACT
# ============================================================================

class CatalogRepository(ABC):
    """
    Read-only catalog metadata collaborator.

    Implementations must be safe to call from one thread per
    reconstruction; the generator never writes through this interface.
    """

    @abstractmethod
    def get_server_version(self) -> int:
        """Numeric server version (server_version_num)."""

    @abstractmethod
    def get_table_facts(self, schema: str, table: str) -> TableFacts:
        """
        Relation-level facts.

        Raises:
            TableNotFound: The table does not exist
        """

    @abstractmethod
    def get_columns(self, schema: str, table: str) -> List[ColumnFacts]:
        """Column facts in ordinal order."""

    @abstractmethod
    def get_constraints(self, schema: str, table: str) -> List[ConstraintFacts]:
        """Constraint rows (several rows may share one name)."""

    @abstractmethod
    def get_inherited_parents(self, schema: str, table: str) -> List[QualifiedName]:
        """Parents listed in INHERITS, in declaration order."""

    @abstractmethod
    def get_partition_expression(self, schema: str, table: str) -> Optional[str]:
        """Partition key, e.g. 'RANGE (created_at)', or None."""

    @abstractmethod
    def get_storage_options(self, schema: str, table: str) -> List[str]:
        """Storage parameters, e.g. ['fillfactor=70']."""

    @abstractmethod
    def get_tablespace(self, schema: str, table: str) -> Optional[str]:
        """Explicit tablespace name, or None."""

    @abstractmethod
    def get_owner(self, schema: str, table: str) -> Optional[str]:
        """Owning role name, or None."""


# ============================================================================
# IN-MEMORY IMPLEMENTATION
# ============================================================================

class StaticCatalogRepository(CatalogRepository):
    """
    Catalog backed by an in-memory fact snapshot.

    Used for offline reconstruction (YAML snapshots) and tests.
    A server_version of None makes get_server_version() raise, which
    exercises the generator's oldest-dialect fallback.
    """

    def __init__(
        self,
        tables: List[TableFacts],
        columns: Dict[Tuple[str, str], List[ColumnFacts]],
        constraints: Optional[Dict[Tuple[str, str], List[ConstraintFacts]]] = None,
        server_version: Optional[int] = None,
    ):
        self.server_version = server_version
        self._tables = {(t.schema_name, t.table_name): t for t in tables}
        self._columns = columns
        self._constraints = constraints or {}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StaticCatalogRepository":
        """
        Build from a snapshot dict.

        Raises:
            pydantic.ValidationError: If a fact entry is malformed
        """
        tables = []
        columns: Dict[Tuple[str, str], List[ColumnFacts]] = {}
        constraints: Dict[Tuple[str, str], List[ConstraintFacts]] = {}

        for entry in data.get("tables", []):
            entry = dict(entry)
            column_entries = entry.pop("columns", [])
            constraint_entries = entry.pop("constraints", [])

            facts = TableFacts(**entry)
            key = (facts.schema_name, facts.table_name)
            tables.append(facts)
            columns[key] = [ColumnFacts(**c) for c in column_entries]
            constraints[key] = [ConstraintFacts(**c) for c in constraint_entries]

        logger.debug(f"Loaded snapshot with {len(tables)} tables")
        return cls(
            tables=tables,
            columns=columns,
            constraints=constraints,
            server_version=data.get("server_version"),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "StaticCatalogRepository":
        """Load a snapshot from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    def _table(self, schema: str, table: str) -> TableFacts:
        facts = self._tables.get((schema, table))
        if facts is None:
            raise TableNotFound(schema, table)
        return facts

    def get_server_version(self) -> int:
        if self.server_version is None:
            raise LookupError("Snapshot does not record a server version")
        return self.server_version

    def get_table_facts(self, schema: str, table: str) -> TableFacts:
        return self._table(schema, table)

    def get_columns(self, schema: str, table: str) -> List[ColumnFacts]:
        self._table(schema, table)
        return sorted(self._columns.get((schema, table), []), key=lambda c: c.ordinal_position)

    def get_constraints(self, schema: str, table: str) -> List[ConstraintFacts]:
        self._table(schema, table)
        return list(self._constraints.get((schema, table), []))

    def get_inherited_parents(self, schema: str, table: str) -> List[QualifiedName]:
        return list(self._table(schema, table).inherited_parents)

    def get_partition_expression(self, schema: str, table: str) -> Optional[str]:
        return self._table(schema, table).partition_expression

    def get_storage_options(self, schema: str, table: str) -> List[str]:
        return list(self._table(schema, table).storage_options)

    def get_tablespace(self, schema: str, table: str) -> Optional[str]:
        return self._table(schema, table).tablespace

    def get_owner(self, schema: str, table: str) -> Optional[str]:
        return self._table(schema, table).owner


__all__ = ["CatalogRepository", "StaticCatalogRepository"]
