# ============================================================================
# FACT MODEL TESTS
# ============================================================================
# STATUS: Tests - Pydantic fact and statement models
# PURPOSE: Verify catalog-code normalization at the model boundary
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Fact Model Tests

Tests TableFacts, ColumnFacts, ConstraintFacts, DDLStatement and TableDDL,
plus the enums in core/contracts.py.

Run with:
    pytest tests/test_models.py -v
"""

import pytest
from pydantic import ValidationError

from core.contracts import (
    AmbiguousConstraint,
    AutoIncrement,
    ConstraintKind,
    IdentityGeneration,
    Persistence,
    ReconstructionError,
    RelationKind,
    StatementKind,
    TableNotFound,
)
from core.models import (
    ColumnFacts,
    ConstraintFacts,
    DDLStatement,
    QualifiedName,
    TableDDL,
    TableFacts,
)


# ============================================================================
# ENUM TESTS
# ============================================================================

class TestRelationKind:
    @pytest.mark.parametrize("code,expected", [
        ("r", RelationKind.PLAIN),
        ("p", RelationKind.PARTITIONED),
        ("v", RelationKind.OTHER),
        ("f", RelationKind.OTHER),
        (None, RelationKind.OTHER),
    ])
    def test_from_relkind(self, code, expected):
        assert RelationKind.from_relkind(code) == expected


class TestPersistence:
    def test_from_relpersistence(self):
        assert Persistence.from_relpersistence("p") == Persistence.PERMANENT
        assert Persistence.from_relpersistence("u") == Persistence.UNLOGGED
        assert Persistence.from_relpersistence("t") == Persistence.TEMPORARY

    def test_create_prefix(self):
        assert Persistence.PERMANENT.create_prefix() == ""
        assert Persistence.UNLOGGED.create_prefix() == "UNLOGGED "
        assert Persistence.TEMPORARY.create_prefix() == "TEMPORARY "


class TestConstraintKind:
    @pytest.mark.parametrize("value,expected", [
        ("p", ConstraintKind.PRIMARY_KEY),
        ("u", ConstraintKind.UNIQUE),
        ("f", ConstraintKind.FOREIGN_KEY),
        ("c", ConstraintKind.CHECK),
        ("PRIMARY KEY", ConstraintKind.PRIMARY_KEY),
        ("FOREIGN KEY", ConstraintKind.FOREIGN_KEY),
        ("UNIQUE", ConstraintKind.UNIQUE),
        ("CHECK", ConstraintKind.CHECK),
        ("primary_key", ConstraintKind.PRIMARY_KEY),
    ])
    def test_parse(self, value, expected):
        assert ConstraintKind.parse(value) == expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            ConstraintKind.parse("x")


class TestAutoIncrement:
    def test_generates_values(self):
        assert AutoIncrement.IDENTITY.generates_values()
        assert AutoIncrement.SEQUENCE_DEFAULT.generates_values()
        assert not AutoIncrement.NONE.generates_values()


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(TableNotFound, ReconstructionError)
        assert issubclass(AmbiguousConstraint, ReconstructionError)

    def test_table_not_found_context(self):
        e = TableNotFound("s", "t")
        assert e.schema_name == "s"
        assert e.table_name == "t"
        assert "s.t" in str(e)

    def test_ambiguous_constraint_context(self):
        e = AmbiguousConstraint("t_fk", "mismatch", schema_name="s", table_name="t")
        assert e.constraint_name == "t_fk"
        assert "t_fk" in str(e)


# ============================================================================
# TABLE FACTS TESTS
# ============================================================================

class TestTableFacts:
    def test_defaults(self):
        facts = TableFacts(schema_name="s", table_name="t")
        assert facts.relation_kind == RelationKind.PLAIN
        assert facts.persistence == Persistence.PERMANENT
        assert facts.owner is None
        assert facts.inherited_parents == []
        assert facts.storage_options == []

    def test_catalog_codes_accepted(self):
        facts = TableFacts(schema_name="s", table_name="t", relation_kind="p", persistence="u")
        assert facts.relation_kind == RelationKind.PARTITIONED
        assert facts.persistence == Persistence.UNLOGGED

    def test_enum_values_accepted(self):
        facts = TableFacts(schema_name="s", table_name="t", relation_kind="partitioned")
        assert facts.relation_kind == RelationKind.PARTITIONED

    def test_parent_shorthand(self):
        facts = TableFacts(
            schema_name="s",
            table_name="t",
            inherited_parents=["base.parent", ("other", "p2"), {"schema_name": "x", "table_name": "y"}],
        )
        assert facts.inherited_parents == [
            QualifiedName(schema_name="base", table_name="parent"),
            QualifiedName(schema_name="other", table_name="p2"),
            QualifiedName(schema_name="x", table_name="y"),
        ]

    def test_frozen(self):
        facts = TableFacts(schema_name="s", table_name="t")
        with pytest.raises(ValidationError):
            facts.owner = "bob"

    def test_qualified_name(self):
        assert str(TableFacts(schema_name="s", table_name="t").qualified_name) == "s.t"


class TestQualifiedName:
    def test_parse_qualified(self):
        q = QualifiedName.parse("sales.orders")
        assert (q.schema_name, q.table_name) == ("sales", "orders")

    def test_parse_bare_uses_default(self):
        q = QualifiedName.parse("orders", default_schema="app")
        assert (q.schema_name, q.table_name) == ("app", "orders")


# ============================================================================
# COLUMN FACTS TESTS
# ============================================================================

class TestColumnFacts:
    def test_yes_no_nullable(self):
        assert ColumnFacts(ordinal_position=1, name="a", data_type="text", is_nullable="NO").is_nullable is False
        assert ColumnFacts(ordinal_position=1, name="a", data_type="text", is_nullable="YES").is_nullable is True

    def test_ordinal_must_be_positive(self):
        with pytest.raises(ValidationError):
            ColumnFacts(ordinal_position=0, name="a", data_type="text")

    def test_identity_generation_normalized(self):
        c = ColumnFacts(ordinal_position=1, name="id", data_type="integer", identity_generation="by  default")
        assert c.identity_generation == IdentityGeneration.BY_DEFAULT

    def test_is_identity_yes_without_generation(self):
        c = ColumnFacts(ordinal_position=1, name="id", data_type="integer", is_identity="YES")
        assert c.identity_generation == IdentityGeneration.BY_DEFAULT

    def test_is_identity_no_clears_generation(self):
        c = ColumnFacts(
            ordinal_position=1, name="id", data_type="integer",
            is_identity="NO", identity_generation="ALWAYS",
        )
        assert c.identity_generation is None

    def test_is_identity_null_as_on_old_servers(self):
        c = ColumnFacts(
            ordinal_position=1, name="id", data_type="integer",
            is_identity=None, identity_generation=None,
        )
        assert c.identity_generation is None

    def test_empty_generation_is_absent(self):
        c = ColumnFacts(ordinal_position=1, name="id", data_type="integer", identity_generation="")
        assert c.identity_generation is None

    def test_has_default(self):
        base = dict(ordinal_position=1, name="a", data_type="text")
        assert ColumnFacts(**base, column_default="'x'::text").has_default
        assert not ColumnFacts(**base, column_default="  ").has_default
        assert not ColumnFacts(**base).has_default


# ============================================================================
# CONSTRAINT FACTS TESTS
# ============================================================================

class TestConstraintFacts:
    def test_fragment_row(self):
        c = ConstraintFacts(name="t_pkey", kind="p", definition="PRIMARY KEY (id)")
        assert c.kind == ConstraintKind.PRIMARY_KEY
        assert c.has_fragment

    def test_structured_row_string_columns(self):
        c = ConstraintFacts(name="t_fk", kind="FOREIGN KEY", columns="parent_id", referenced_columns="id")
        assert c.columns == ["parent_id"]
        assert c.referenced_columns == ["id"]
        assert not c.has_fragment

    def test_check_requires_definition(self):
        with pytest.raises(ValidationError):
            ConstraintFacts(name="t_check", kind="c")


# ============================================================================
# STATEMENT TESTS
# ============================================================================

class TestDDLStatement:
    def test_terminated(self):
        assert DDLStatement(kind=StatementKind.OWNER, sql="SELECT 1").sql == "SELECT 1;"

    def test_already_terminated(self):
        assert DDLStatement(kind=StatementKind.OWNER, sql="SELECT 1; ").sql == "SELECT 1;"


class TestTableDDL:
    def test_empty_script(self):
        assert TableDDL(schema_name="s", table_name="t").to_script() == ""

    def test_script_and_kinds(self):
        ddl = TableDDL(
            schema_name="s",
            table_name="t",
            statements=[
                DDLStatement(kind=StatementKind.CREATE_TABLE, sql='CREATE TABLE "s"."t" ()'),
                DDLStatement(kind=StatementKind.OWNER, sql='ALTER TABLE "s"."t" OWNER TO "a"'),
            ],
        )
        assert ddl.to_script() == 'CREATE TABLE "s"."t" ();\nALTER TABLE "s"."t" OWNER TO "a";\n'
        assert ddl.to_script("\n\n").count("\n\n") == 1
        assert len(ddl.of_kind(StatementKind.OWNER)) == 1
