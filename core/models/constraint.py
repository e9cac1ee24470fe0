# ============================================================================
# CONSTRAINT FACTS MODEL
# ============================================================================
# STATUS: Core model - Constraint rows as returned by the catalog
# PURPOSE: One row of constraint facts; rows sharing a name are merged
# CREATED: 18 OCT 2026
# EXPORTS: ConstraintFacts
# DEPENDENCIES: pydantic
# ============================================================================
"""
Constraint Facts Model

Two shapes are supported:

1. Fragment rows (pg_constraint + pg_get_constraintdef):
       name="t_pkey", kind="p", definition="PRIMARY KEY (id)"

2. Structured rows (information_schema key usage), one row per key column:
       name="t_fk", kind="FOREIGN KEY", columns=["parent_id"], position=1,
       referenced_schema="s", referenced_table="parent",
       referenced_columns=["id"]

Rows sharing a name describe ONE logical constraint.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from core.contracts import ConstraintKind


class ConstraintFacts(BaseModel):
    """One catalog row describing (part of) a table constraint."""

    name: str = Field(..., description="Constraint name (grouping key)")
    kind: ConstraintKind
    definition: Optional[str] = Field(
        default=None,
        description="Opaque pre-rendered fragment, used verbatim when present"
    )

    columns: List[str] = Field(default_factory=list)
    position: int = Field(default=0, description="Key ordinal of this row's columns")
    referenced_schema: Optional[str] = Field(default=None)
    referenced_table: Optional[str] = Field(default=None)
    referenced_columns: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("kind", mode="before")
    @classmethod
    def accept_catalog_kind(cls, v):
        if isinstance(v, str):
            return ConstraintKind.parse(v)
        return v

    @field_validator("columns", "referenced_columns", mode="before")
    @classmethod
    def handle_string_input(cls, v):
        """Allow single string as shorthand for single-item list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @model_validator(mode="after")
    def check_has_fragment(self):
        if self.kind == ConstraintKind.CHECK and not self.definition:
            raise ValueError(f"check constraint {self.name} requires a definition fragment")
        return self

    @property
    def has_fragment(self) -> bool:
        return bool(self.definition and self.definition.strip())


__all__ = ["ConstraintFacts"]
