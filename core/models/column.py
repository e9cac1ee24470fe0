# ============================================================================
# COLUMN FACTS MODEL
# ============================================================================
# STATUS: Core model - Column-level catalog facts
# PURPOSE: Raw column descriptor consumed by the column builder
# CREATED: 18 OCT 2026
# EXPORTS: ColumnFacts
# DEPENDENCIES: pydantic
# ============================================================================
"""
Column Facts Model

One row of information_schema.columns, normalized:
- is_nullable accepts the catalog 'YES'/'NO' strings
- identity_generation is None unless the column is an identity column
- is_identity ('YES'/'NO') may be supplied instead of, or together with,
  identity_generation; 'NO' clears the generation mode

The auto-increment classification is NOT stored here: it depends on the
server dialect and is derived by ColumnBuilder.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from core.contracts import IdentityGeneration


def _yes_no(value: Any) -> Any:
    if isinstance(value, str):
        flag = value.strip().upper()
        if flag in ("YES", "Y", "TRUE", "T"):
            return True
        if flag in ("NO", "N", "FALSE", "F"):
            return False
    return value


class ColumnFacts(BaseModel):
    """Catalog facts for one column."""

    ordinal_position: int = Field(..., ge=1, description="1-based emission order")
    name: str = Field(..., description="Column name")
    data_type: str = Field(..., description="Base type name, e.g. 'character varying'")

    character_maximum_length: Optional[int] = Field(default=None, ge=0)
    numeric_precision: Optional[int] = Field(default=None, ge=0)
    numeric_scale: Optional[int] = Field(default=None, ge=0)

    is_nullable: bool = Field(default=True)
    column_default: Optional[str] = Field(
        default=None,
        description="Raw default expression text, e.g. \"nextval('t_id_seq'::regclass)\""
    )
    identity_generation: Optional[IdentityGeneration] = Field(default=None)
    comment: Optional[str] = Field(default=None)

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def apply_is_identity(cls, data):
        """Fold information_schema's is_identity flag into identity_generation."""
        if isinstance(data, dict) and "is_identity" in data:
            data = dict(data)
            is_identity = _yes_no(data.pop("is_identity"))
            if is_identity is True and not data.get("identity_generation"):
                data["identity_generation"] = IdentityGeneration.BY_DEFAULT
            elif is_identity is not True:
                data["identity_generation"] = None
        return data

    @field_validator("is_nullable", mode="before")
    @classmethod
    def accept_yes_no(cls, v):
        return _yes_no(v)

    @field_validator("identity_generation", mode="before")
    @classmethod
    def normalize_generation(cls, v):
        """Accept case variants and treat empty strings as absent."""
        if isinstance(v, str):
            v = " ".join(v.split()).upper()
            if not v:
                return None
        return v

    @property
    def has_default(self) -> bool:
        return self.column_default is not None and self.column_default.strip() != ""


__all__ = ["ColumnFacts"]
