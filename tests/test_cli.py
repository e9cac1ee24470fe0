# ============================================================================
# DUMP CLI TESTS
# ============================================================================
# STATUS: Tests - pgddlx-dump entry point
# PURPOSE: Verify output, flags and exit codes
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Dump CLI Tests

Run with:
    pytest tests/test_cli.py -v
"""

import psycopg
import pytest
from unittest.mock import MagicMock, patch

from repositories import StaticCatalogRepository
from scripts.dump_table_ddl import (
    EXIT_AMBIGUOUS_CONSTRAINT,
    EXIT_CATALOG_ERROR,
    EXIT_OK,
    EXIT_TABLE_NOT_FOUND,
    main,
)

SNAPSHOT_YAML = """\
server_version: 120005
tables:
  - schema_name: sales
    table_name: orders
    owner: alice
    comment: Customer orders
    columns:
      - {ordinal_position: 1, name: id, data_type: integer, is_nullable: 'NO',
         column_default: "nextval('orders_id_seq'::regclass)"}
      - {ordinal_position: 2, name: status, data_type: text, column_default: "'new'::text"}
    constraints:
      - {name: orders_pkey, kind: p, definition: 'PRIMARY KEY (id)'}
  - schema_name: sales
    table_name: broken
    constraints:
      - {name: broken_x, kind: p, definition: 'PRIMARY KEY (id)'}
      - {name: broken_x, kind: c, definition: 'CHECK (true)'}
"""


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def snapshot(tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text(SNAPSHOT_YAML)
    return str(path)


# ============================================================================
# SNAPSHOT MODE
# ============================================================================

class TestSnapshotMode:
    def test_prints_script(self, snapshot, capsys):
        code = main(["sales.orders", "--snapshot", snapshot])
        out = capsys.readouterr().out

        assert code == EXIT_OK
        assert out.splitlines() == [
            'CREATE TABLE "sales"."orders" (',
            '    "id" serial NOT NULL,',
            '    "status" text',
            ');',
            'ALTER TABLE "sales"."orders" ADD CONSTRAINT "orders_pkey" PRIMARY KEY (id);',
            'ALTER TABLE "sales"."orders" ALTER COLUMN "status" SET DEFAULT \'new\'::text;',
            'ALTER TABLE "sales"."orders" OWNER TO "alice";',
            "COMMENT ON TABLE \"sales\".\"orders\" IS 'Customer orders';",
        ]

    def test_schema_flag(self, snapshot, capsys):
        code = main(["orders", "--schema", "sales", "--snapshot", snapshot])
        assert code == EXIT_OK
        assert '"sales"."orders"' in capsys.readouterr().out

    def test_no_owner_no_comments(self, snapshot, capsys):
        code = main(["sales.orders", "--snapshot", snapshot, "--no-owner", "--no-comments"])
        out = capsys.readouterr().out

        assert code == EXIT_OK
        assert "OWNER TO" not in out
        assert "COMMENT ON" not in out

    def test_table_not_found(self, snapshot, capsys):
        code = main(["sales.missing", "--snapshot", snapshot])
        captured = capsys.readouterr()

        assert code == EXIT_TABLE_NOT_FOUND
        assert captured.out == ""
        assert "sales.missing" in captured.err

    def test_ambiguous_constraint(self, snapshot, capsys):
        code = main(["sales.broken", "--snapshot", snapshot])
        captured = capsys.readouterr()

        assert code == EXIT_AMBIGUOUS_CONSTRAINT
        assert captured.out == ""

    def test_missing_snapshot_file(self, tmp_path, capsys):
        code = main(["sales.orders", "--snapshot", str(tmp_path / "nope.yaml")])
        assert code == EXIT_CATALOG_ERROR
        assert "cannot load snapshot" in capsys.readouterr().err

    def test_source_flags_exclusive(self, snapshot):
        with pytest.raises(SystemExit):
            main(["orders", "--snapshot", snapshot, "--connection", "postgresql://x"])


# ============================================================================
# LIVE MODE
# ============================================================================

class TestLiveMode:
    def test_connection_error(self, capsys):
        with patch("scripts.dump_table_ddl.PostgreSQLRepository") as repo_cls:
            repo_cls.return_value.get_connection.side_effect = psycopg.OperationalError("connection refused")
            code = main(["public.users", "--connection", "postgresql://localhost/db"])

        assert code == EXIT_CATALOG_ERROR
        assert "connection refused" in capsys.readouterr().err
        assert repo_cls.call_args[0][0] == "postgresql://localhost/db"

    def test_structured_constraints_flag(self, snapshot, capsys):
        static = StaticCatalogRepository.from_yaml(snapshot)
        with patch("scripts.dump_table_ddl.PostgreSQLRepository") as repo_cls, \
                patch("scripts.dump_table_ddl.PostgresCatalogRepository", return_value=static) as catalog_cls:
            conn = MagicMock()
            repo_cls.return_value.get_connection.return_value.__enter__.return_value = conn

            code = main(["sales.orders", "--structured-constraints"])

        assert code == EXIT_OK
        catalog_cls.assert_called_once_with(conn, structured_constraints=True)
        assert capsys.readouterr().out.startswith('CREATE TABLE "sales"."orders"')
