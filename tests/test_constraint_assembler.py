# ============================================================================
# CONSTRAINT ASSEMBLER TESTS
# ============================================================================
# STATUS: Tests - Grouping, merging and rendering of constraint rows
# PURPOSE: Verify one statement per name, sorted order, ambiguity errors
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Constraint Assembler Tests

Run with:
    pytest tests/test_constraint_assembler.py -v
"""

import pytest

from core.contracts import AmbiguousConstraint, StatementKind
from core.models import ConstraintFacts
from core.schema.constraints import ConstraintAssembler


# ============================================================================
# HELPERS
# ============================================================================

def _assemble(rows, schema="s", table="t"):
    return [s.sql for s in ConstraintAssembler(schema, table).assemble(rows)]


def _fk_row(column, position, ref_column, name="t_parent_fk", ref_table="parent", ref_schema="s"):
    return ConstraintFacts(
        name=name,
        kind="FOREIGN KEY",
        columns=[column],
        position=position,
        referenced_schema=ref_schema,
        referenced_table=ref_table,
        referenced_columns=[ref_column],
    )


# ============================================================================
# FRAGMENT ROWS
# ============================================================================

class TestFragmentRows:
    def test_verbatim_fragment(self):
        rows = [ConstraintFacts(name="t_pkey", kind="p", definition="PRIMARY KEY (id)")]
        assert _assemble(rows) == ['ALTER TABLE "s"."t" ADD CONSTRAINT "t_pkey" PRIMARY KEY (id);']

    def test_check_fragment(self):
        rows = [ConstraintFacts(name="t_qty_check", kind="c", definition="CHECK ((qty > 0))")]
        assert _assemble(rows) == ['ALTER TABLE "s"."t" ADD CONSTRAINT "t_qty_check" CHECK ((qty > 0));']

    def test_name_sorted(self):
        rows = [
            ConstraintFacts(name="z_check", kind="c", definition="CHECK (true)"),
            ConstraintFacts(name="a_pkey", kind="p", definition="PRIMARY KEY (id)"),
            ConstraintFacts(name="m_key", kind="u", definition="UNIQUE (code)"),
        ]
        texts = _assemble(rows)
        assert ['"a_pkey"' in texts[0], '"m_key"' in texts[1], '"z_check"' in texts[2]] == [True] * 3

    def test_statement_kind(self):
        rows = [ConstraintFacts(name="t_pkey", kind="p", definition="PRIMARY KEY (id)")]
        statements = ConstraintAssembler("s", "t").assemble(rows)
        assert statements[0].kind == StatementKind.ADD_CONSTRAINT

    def test_duplicate_fragment_rows_collapse(self):
        rows = [
            ConstraintFacts(name="t_pkey", kind="p", definition="PRIMARY KEY (a, b)"),
            ConstraintFacts(name="t_pkey", kind="p", definition="PRIMARY KEY (a, b)"),
        ]
        assert len(_assemble(rows)) == 1

    def test_empty(self):
        assert _assemble([]) == []


# ============================================================================
# STRUCTURED ROWS
# ============================================================================

class TestStructuredRows:
    def test_composite_primary_key_ordered_by_position(self):
        rows = [
            ConstraintFacts(name="t_pkey", kind="PRIMARY KEY", columns=["b"], position=2),
            ConstraintFacts(name="t_pkey", kind="PRIMARY KEY", columns=["a"], position=1),
        ]
        assert _assemble(rows) == ['ALTER TABLE "s"."t" ADD CONSTRAINT "t_pkey" PRIMARY KEY ("a", "b");']

    def test_unique(self):
        rows = [ConstraintFacts(name="t_code_key", kind="UNIQUE", columns=["code"], position=1)]
        assert _assemble(rows) == ['ALTER TABLE "s"."t" ADD CONSTRAINT "t_code_key" UNIQUE ("code");']

    def test_composite_foreign_key(self):
        rows = [_fk_row("p_b", 2, "b"), _fk_row("p_a", 1, "a")]
        assert _assemble(rows) == [
            'ALTER TABLE "s"."t" ADD CONSTRAINT "t_parent_fk" '
            'FOREIGN KEY ("p_a", "p_b") REFERENCES "s"."parent" ("a", "b");'
        ]

    def test_foreign_key_defaults_to_table_schema(self):
        rows = [_fk_row("parent_id", 1, "id", ref_schema=None)]
        assert 'REFERENCES "s"."parent" ("id")' in _assemble(rows)[0]

    def test_count_equals_distinct_names(self):
        rows = [
            ConstraintFacts(name="t_pkey", kind="PRIMARY KEY", columns=["a"], position=1),
            ConstraintFacts(name="t_pkey", kind="PRIMARY KEY", columns=["b"], position=2),
            _fk_row("p_a", 1, "a"),
            _fk_row("p_b", 2, "b"),
            ConstraintFacts(name="t_check", kind="c", definition="CHECK (a > 0)"),
        ]
        assert len(_assemble(rows)) == 3


# ============================================================================
# AMBIGUITY
# ============================================================================

class TestAmbiguity:
    def test_kind_mismatch(self):
        rows = [
            ConstraintFacts(name="t_x", kind="p", definition="PRIMARY KEY (id)"),
            ConstraintFacts(name="t_x", kind="u", definition="UNIQUE (id)"),
        ]
        with pytest.raises(AmbiguousConstraint) as exc_info:
            _assemble(rows)
        assert exc_info.value.constraint_name == "t_x"
        assert exc_info.value.table_name == "t"

    def test_different_referenced_tables(self):
        rows = [_fk_row("a", 1, "x", ref_table="p1"), _fk_row("b", 2, "y", ref_table="p2")]
        with pytest.raises(AmbiguousConstraint, match="different tables"):
            _assemble(rows)

    def test_column_count_mismatch(self):
        rows = [
            ConstraintFacts(
                name="t_fk", kind="f", columns=["a", "b"], position=1,
                referenced_schema="s", referenced_table="p", referenced_columns=["x"],
            )
        ]
        with pytest.raises(AmbiguousConstraint):
            _assemble(rows)

    def test_foreign_key_without_target(self):
        rows = [ConstraintFacts(name="t_fk", kind="f", columns=["a"], position=1)]
        with pytest.raises(AmbiguousConstraint):
            _assemble(rows)

    def test_no_definition_and_no_columns(self):
        rows = [ConstraintFacts(name="t_pkey", kind="p")]
        with pytest.raises(AmbiguousConstraint):
            _assemble(rows)

    def test_no_partial_output(self):
        """A bad group after good ones still yields nothing."""
        rows = [
            ConstraintFacts(name="a_pkey", kind="p", definition="PRIMARY KEY (id)"),
            ConstraintFacts(name="z_x", kind="p", definition="PRIMARY KEY (id)"),
            ConstraintFacts(name="z_x", kind="c", definition="CHECK (true)"),
        ]
        assembler = ConstraintAssembler("s", "t")
        with pytest.raises(AmbiguousConstraint):
            assembler.assemble(rows)
