"""Command-line interface for schemadrop."""

import argparse
import logging
import sys
from pathlib import Path

from schemadrop.catalog.loader import load_catalog
from schemadrop.config import Config
from schemadrop.databricks.utils import build_database_target
from schemadrop.dialects import available_dialects, get_dialect
from schemadrop.drop import FileTarget, SchemaDropper, StdoutTarget, Target
from schemadrop.exceptions import ConfigError
from schemadrop.types import DialectResolution


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemadrop",
        description="Generate dependency-ordered DROP scripts for a catalog",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    drop_parser = subparsers.add_parser("drop", help="Generate or run the drop script")
    drop_parser.add_argument(
        "--catalog-path",
        type=Path,
        help="Catalog YAML file or directory (default: SCHEMADROP_CATALOG or catalog.yaml)",
    )
    drop_parser.add_argument(
        "--dialect",
        help="Dialect to render with (default: the catalog's dialect)",
    )
    drop_parser.add_argument(
        "--drop-schemas",
        action="store_true",
        default=None,
        help="Also drop every schema-qualified namespace",
    )
    drop_parser.add_argument(
        "--delimiter",
        help="Statement delimiter for script output (default: ';')",
    )
    drop_parser.add_argument(
        "--output",
        type=Path,
        help="Write the script to this file",
    )
    drop_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the script even when --output or --execute is given",
    )
    drop_parser.add_argument(
        "--execute",
        action="store_true",
        help="Execute the statements against Databricks (requires DB connection)",
    )
    drop_parser.add_argument(
        "--dialect-resolution",
        choices=[r.value for r in DialectResolution],
        help="Dialect used for constraint and post-table auxiliary drops",
    )
    drop_parser.add_argument("--profile", help="Databricks config profile")

    validate_parser = subparsers.add_parser("validate", help="Validate catalog files")
    validate_parser.add_argument("--catalog-path", type=Path)

    subparsers.add_parser("dialects", help="List built-in dialects")

    return parser


def main() -> int:
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    args = build_parser().parse_args()

    if args.command == "drop":
        return cmd_drop(args)
    elif args.command == "validate":
        return cmd_validate(args)
    elif args.command == "dialects":
        return cmd_dialects(args)
    else:
        print(f"Command '{args.command}' not yet implemented", file=sys.stderr)
        return 1


def cmd_drop(args: argparse.Namespace) -> int:
    """Generate the drop script and deliver it to every requested output."""
    try:
        config = Config.from_env(
            catalog_path=str(args.catalog_path) if args.catalog_path else None,
            dialect=args.dialect,
            drop_schemas=args.drop_schemas,
            delimiter=args.delimiter,
            dialect_resolution=args.dialect_resolution,
            profile=args.profile,
        )
        database = load_catalog(Path(config.catalog_path))
        dialect = get_dialect(config.dialect) if config.dialect else database.dialect

        targets: list[Target] = []
        if args.output:
            targets.append(FileTarget(args.output, delimiter=config.delimiter))

        if args.execute:
            try:
                from databricks.connect import DatabricksSession  # noqa: F401
            except ImportError:
                print(
                    "Error: databricks-connect not installed. "
                    "Run: pip install 'schemadrop[databricks]'",
                    file=sys.stderr,
                )
                return 1
            targets.append(build_database_target(config))

        to_stdout = args.stdout or not targets
        if to_stdout:
            targets.append(StdoutTarget(delimiter=config.delimiter))

        dropper = SchemaDropper(dialect_resolution=config.dialect_resolution)
        dropper.do_drop(database, config.drop_schemas, targets, dialect=dialect)

        if not to_stdout:
            if args.output:
                print(f"Wrote drop script to {args.output}")
            if args.execute:
                print("Executed drop script against Databricks")
        return 0
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        print(f"Drop error: {e}", file=sys.stderr)
        return 1


def cmd_validate(args: argparse.Namespace) -> int:
    """Load the catalog and summarize it."""
    try:
        config = Config.from_env(
            catalog_path=str(args.catalog_path) if args.catalog_path else None
        )
        database = load_catalog(Path(config.catalog_path))
        namespaces = database.namespaces
        print(f"Validated {len(namespaces)} namespaces ({database.dialect.name}):")
        for namespace in namespaces:
            tables = namespace.tables
            physical = sum(1 for t in tables if t.is_physical_table)
            foreign_keys = sum(len(t.foreign_keys) for t in tables)
            print(
                f"  - {namespace.name}: {len(tables)} tables ({physical} physical), "
                f"{len(namespace.sequences)} sequences, {foreign_keys} foreign keys"
            )
        physical_total = sum(1 for _ in database.physical_tables())
        sequence_total = sum(1 for _ in database.sequences())
        print(f"  Total: {physical_total} physical tables, {sequence_total} sequences")
        aux_count = len(database.auxiliary_objects)
        if aux_count:
            print(f"  {aux_count} auxiliary objects")
        return 0
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        print(f"Validation error: {e}", file=sys.stderr)
        return 1


def cmd_dialects(args: argparse.Namespace) -> int:
    """List built-in dialect names."""
    for name in available_dialects():
        print(name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
