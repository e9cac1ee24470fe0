# ============================================================================
# TABLE FACTS MODEL
# ============================================================================
# STATUS: Core model - Relation-level catalog snapshot
# PURPOSE: Immutable facts describing one table (kind, persistence, placement)
# CREATED: 18 OCT 2026
# EXPORTS: QualifiedName, TableFacts
# DEPENDENCIES: pydantic
# ============================================================================
"""
Table Facts Model

Relation-level facts fetched once per reconstruction. Catalog codes
(pg_class.relkind, pg_class.relpersistence) are accepted as input and
normalized to RelationKind / Persistence.

Maps from: pg_class + pg_namespace (+ pg_inherits, pg_tablespace, reloptions)
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from core.contracts import Persistence, RelationKind


class QualifiedName(BaseModel):
    """Schema-qualified relation name (e.g. an inherited parent)."""

    schema_name: str = Field(..., description="Schema (namespace) name")
    table_name: str = Field(..., description="Relation name")

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, value: str, default_schema: str = "public") -> "QualifiedName":
        """Split 'schema.table'; a bare name uses default_schema."""
        if "." in value:
            schema_name, table_name = value.split(".", 1)
            return cls(schema_name=schema_name, table_name=table_name)
        return cls(schema_name=default_schema, table_name=value)

    def __str__(self) -> str:
        return f"{self.schema_name}.{self.table_name}"


class TableFacts(BaseModel):
    """
    Immutable snapshot of one table's relation-level facts.

    Only schema_name and table_name are required; every other field
    describes an optional feature that is emitted when present.
    """

    schema_name: str = Field(..., description="Schema of the table")
    table_name: str = Field(..., description="Table name")
    relation_kind: RelationKind = Field(default=RelationKind.PLAIN)
    persistence: Persistence = Field(default=Persistence.PERMANENT)

    owner: Optional[str] = Field(default=None, description="Owning role name")
    inherited_parents: List[QualifiedName] = Field(default_factory=list)
    partition_expression: Optional[str] = Field(
        default=None,
        description="Pre-rendered partition key, e.g. 'RANGE (created_at)'"
    )
    storage_options: List[str] = Field(
        default_factory=list,
        description="reloptions entries, e.g. 'fillfactor=70'"
    )
    tablespace: Optional[str] = Field(default=None)
    comment: Optional[str] = Field(default=None)

    model_config = {"frozen": True}

    @field_validator("relation_kind", mode="before")
    @classmethod
    def accept_relkind(cls, v):
        """Accept single-letter relkind codes."""
        if isinstance(v, str) and len(v) == 1:
            return RelationKind.from_relkind(v)
        return v

    @field_validator("persistence", mode="before")
    @classmethod
    def accept_relpersistence(cls, v):
        """Accept single-letter relpersistence codes."""
        if isinstance(v, str) and len(v) == 1:
            return Persistence.from_relpersistence(v)
        return v

    @field_validator("inherited_parents", mode="before")
    @classmethod
    def accept_parent_shorthand(cls, v):
        """Allow 'schema.table' strings and (schema, table) pairs."""
        if not isinstance(v, (list, tuple)):
            return v
        parents = []
        for p in v:
            if isinstance(p, str):
                p = QualifiedName.parse(p)
            elif isinstance(p, (list, tuple)) and len(p) == 2:
                p = QualifiedName(schema_name=p[0], table_name=p[1])
            parents.append(p)
        return parents

    @property
    def qualified_name(self) -> QualifiedName:
        return QualifiedName(schema_name=self.schema_name, table_name=self.table_name)


__all__ = ["QualifiedName", "TableFacts"]
