# ============================================================================
# GENERATED STATEMENT MODELS
# ============================================================================
# STATUS: Core model - Reconstruction output
# PURPOSE: Ordered, self-contained DDL statements for one table
# CREATED: 18 OCT 2026
# EXPORTS: DDLStatement, TableDDL
# DEPENDENCIES: pydantic
# ============================================================================
"""
Generated Statement Models

A TableDDL is produced fresh per reconstruction. Each DDLStatement is one
semantic operation and its text always ends with ';'.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from core.contracts import StatementKind


class DDLStatement(BaseModel):
    """One terminated SQL statement."""

    kind: StatementKind
    sql: str

    model_config = {"frozen": True}

    @field_validator("sql")
    @classmethod
    def ensure_terminated(cls, v: str) -> str:
        v = v.rstrip()
        if not v.endswith(";"):
            v += ";"
        return v

    def __str__(self) -> str:
        return self.sql


class TableDDL(BaseModel):
    """Ordered DDL statements reproducing one table."""

    schema_name: str
    table_name: str
    server_version: Optional[int] = Field(
        default=None,
        description="Version the dialect was resolved from (None = fallback)"
    )
    statements: List[DDLStatement] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def texts(self) -> List[str]:
        return [s.sql for s in self.statements]

    def of_kind(self, kind: StatementKind) -> List[DDLStatement]:
        return [s for s in self.statements if s.kind == kind]

    def to_script(self, separator: str = "\n") -> str:
        """Join statements into one executable script."""
        if not self.statements:
            return ""
        return separator.join(self.texts) + "\n"


__all__ = ["DDLStatement", "TableDDL"]
