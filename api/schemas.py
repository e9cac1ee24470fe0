# ============================================================================
# API SCHEMAS
# ============================================================================
# STATUS: Core - Response schemas
# PURPOSE: Pydantic models for DDL API responses
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
API Schemas

Response models for the DDL reconstruction API.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from core.contracts import StatementKind
from core.models import TableDDL


class StatementResponse(BaseModel):
    """One reconstructed statement."""
    kind: StatementKind
    sql: str


class DDLResponse(BaseModel):
    """Reconstructed DDL for one table."""
    schema_name: str
    table_name: str
    server_version: Optional[int] = Field(
        None,
        description="server_version_num used for dialect resolution (null = oldest dialect fallback)"
    )
    statements: List[StatementResponse]
    script: str = Field(..., description="Statements joined in replay order")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "schema_name": "public",
                    "table_name": "users",
                    "server_version": 120005,
                    "statements": [
                        {
                            "kind": "create_table",
                            "sql": 'CREATE TABLE "public"."users" (\n    "id" serial NOT NULL\n);'
                        },
                        {
                            "kind": "owner",
                            "sql": 'ALTER TABLE "public"."users" OWNER TO "alice";'
                        },
                    ],
                    "script": 'CREATE TABLE "public"."users" (\n    "id" serial NOT NULL\n);\n'
                              'ALTER TABLE "public"."users" OWNER TO "alice";\n',
                }
            ]
        }
    }

    @classmethod
    def from_ddl(cls, ddl: TableDDL, separator: str = "\n") -> "DDLResponse":
        return cls(
            schema_name=ddl.schema_name,
            table_name=ddl.table_name,
            server_version=ddl.server_version,
            statements=[StatementResponse(kind=s.kind, sql=s.sql) for s in ddl.statements],
            script=ddl.to_script(separator),
        )


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None
    schema_name: Optional[str] = None
    table_name: Optional[str] = None
