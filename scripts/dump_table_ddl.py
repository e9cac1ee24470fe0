#!/usr/bin/env python
# ============================================================================
# TABLE DDL DUMP SCRIPT
# ============================================================================
# PURPOSE: Print the reconstructed DDL of one table to stdout
# USAGE:
#   pgddlx-dump public.orders                      # Live catalog (env connection)
#   pgddlx-dump orders --connection postgresql://...
#   pgddlx-dump orders --snapshot catalog.yaml     # Offline snapshot
# EXIT CODES:
#   0 ok, 1 catalog/connection error, 2 table not found, 3 ambiguous constraint
# ============================================================================

import sys
import os
import argparse
from dataclasses import replace

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import psycopg
import yaml
from pydantic import ValidationError

from core.config import Defaults, get_defaults
from core.contracts import AmbiguousConstraint, CatalogError, TableNotFound
from core.logging import ComponentType, configure_logging, get_logger, log_context
from core.models import QualifiedName
from core.schema import TableDDLGenerator
from infrastructure.postgresql import PostgreSQLRepository
from repositories import PostgresCatalogRepository, StaticCatalogRepository

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_CATALOG_ERROR = 1
EXIT_TABLE_NOT_FOUND = 2
EXIT_AMBIGUOUS_CONSTRAINT = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pgddlx-dump",
        description="Reconstruct the DDL of one PostgreSQL table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pgddlx-dump public.orders                          # Live catalog from environment
  pgddlx-dump orders --schema sales --no-owner       # Skip OWNER TO
  pgddlx-dump orders --snapshot catalog.yaml         # Offline fact snapshot

Environment Variables:
  DATABASE_URL                   Full PostgreSQL connection string
  POSTGRES_HOST                  Database host (default: localhost)
  POSTGRES_DB                    Database name (default: postgres)
  POSTGRES_USER                  Database user (default: postgres)
  POSTGRES_PASSWORD              Database password
  POSTGRES_PORT                  Database port (default: 5432)
  POSTGRES_SSLMODE               SSL mode (default: prefer)
  PGDDLX_STRUCTURED_CONSTRAINTS  Fetch key constraints as structured rows
  PGDDLX_INCLUDE_OWNER           Emit OWNER TO (default: true)
  PGDDLX_INCLUDE_COMMENTS        Emit COMMENT ON (default: true)
        """
    )
    parser.add_argument(
        "table",
        help="Table name, optionally schema-qualified (schema.table)"
    )
    parser.add_argument(
        "--schema",
        type=str,
        help="Schema for an unqualified table name (default: PGDDLX_DEFAULT_SCHEMA or public)"
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--connection",
        type=str,
        help="PostgreSQL connection string (overrides environment)"
    )
    source.add_argument(
        "--snapshot",
        type=str,
        help="YAML fact snapshot to reconstruct from instead of a live database"
    )

    parser.add_argument(
        "--no-owner",
        action="store_true",
        help="Do not emit OWNER TO"
    )
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Do not emit COMMENT ON statements"
    )
    parser.add_argument(
        "--structured-constraints",
        action="store_true",
        help="Fetch PK/UNIQUE/FK from information_schema instead of pg_get_constraintdef"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines on stderr"
    )
    return parser


def resolve_defaults(args: argparse.Namespace) -> Defaults:
    """Apply CLI flags on top of environment defaults."""
    defaults = get_defaults()
    catalog = defaults.catalog
    if args.structured_constraints:
        catalog = replace(catalog, structured_constraints=True)

    render = defaults.render.with_overrides(
        include_owner=False if args.no_owner else None,
        include_comments=False if args.no_comments else None,
    )
    return replace(defaults, catalog=catalog, render=render)


def reconstruct(args: argparse.Namespace, target: QualifiedName, defaults: Defaults) -> str:
    """Generate the script from a snapshot or a live connection."""
    if args.snapshot:
        catalog = StaticCatalogRepository.from_yaml(args.snapshot)
        ddl = TableDDLGenerator(catalog, defaults).generate(target.schema_name, target.table_name)
        return ddl.to_script(defaults.render.statement_separator)

    repo = PostgreSQLRepository(args.connection, catalog_defaults=defaults.catalog)
    with repo.get_connection() as conn:
        catalog = PostgresCatalogRepository(
            conn,
            structured_constraints=defaults.catalog.structured_constraints,
        )
        ddl = TableDDLGenerator(catalog, defaults).generate(target.schema_name, target.table_name)
    return ddl.to_script(defaults.render.statement_separator)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(level="DEBUG" if args.verbose else "WARNING", json_output=args.json_logs)

    defaults = resolve_defaults(args)
    target = QualifiedName.parse(args.table, default_schema=args.schema or defaults.catalog.default_schema)

    with log_context(component=ComponentType.CLI.value):
        try:
            script = reconstruct(args, target, defaults)

        except TableNotFound as e:
            print(f"error: {e}", file=sys.stderr)
            return EXIT_TABLE_NOT_FOUND
        except AmbiguousConstraint as e:
            print(f"error: {e}", file=sys.stderr)
            return EXIT_AMBIGUOUS_CONSTRAINT
        except (CatalogError, psycopg.Error) as e:
            print(f"error: {e}", file=sys.stderr)
            return EXIT_CATALOG_ERROR
        except (OSError, yaml.YAMLError, ValidationError) as e:
            print(f"error: cannot load snapshot {args.snapshot}: {e}", file=sys.stderr)
            return EXIT_CATALOG_ERROR

    sys.stdout.write(script)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
