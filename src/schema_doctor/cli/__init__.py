"""CLI entry point for schema-doctor.

Usage:
    schema-doctor --database-url postgresql://localhost/app --models app.models:Base
    schema-doctor --config .schema-doctor.toml incorrect_length_validation
    schema-doctor --list

Problems are printed to stdout, one per line. Diagnostics go to stderr.
Exit status is 0 when every selected detector succeeded and 1 otherwise.
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from schema_doctor.config.loader import DEFAULT_CONFIG_FILE, ConfigurationError, load_config
from schema_doctor.detectors import DETECTORS
from schema_doctor.factory import (
    DatabaseUrlNotFoundError,
    ModelsNotFoundError,
    create_provider,
    load_model_provider,
    resolve_database_url,
)
from schema_doctor.runner import run_detectors, select_detectors
from schema_doctor.schema.inspector import CachingSchemaInspector

console = Console(stderr=True)


def _config_path(value: str | None) -> Path | None:
    """Explicit --config, else the default file if it exists in the working directory."""
    if value:
        return Path(value)
    default = Path(DEFAULT_CONFIG_FILE)
    return default if default.exists() else None


def cmd_list(args: argparse.Namespace) -> int:
    """Print every registered detector with its options."""
    table = Table(title="Detectors", show_header=True, header_style="bold")
    table.add_column("Detector", style="cyan")
    table.add_column("Description")
    table.add_column("Options")

    for identifier, detector in DETECTORS.items():
        options = "\n".join(
            f"{name}{' (global)' if spec.is_global else ''}: {spec.description}"
            for name, spec in detector.config_schema().items()
        )
        table.add_row(identifier, detector.description, options)

    console.print(table)
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    """Run the selected detectors against the configured database and models.

    Returns:
        0 if no problems were found, 1 on problems or setup errors.
    """
    only = args.detectors or None

    try:
        config = load_config(_config_path(args.config))
        database_url = resolve_database_url(args.database_url, config)
        models = load_model_provider(args.models, config)
        select_detectors(only)
    except (
        FileNotFoundError,
        ConfigurationError,
        DatabaseUrlNotFoundError,
        ModelsNotFoundError,
        ImportError,
        AttributeError,
        ValueError,
        KeyError,
    ) as e:
        console.print(f"[bold red]x[/bold red] {escape(str(e))}")
        return 1

    try:
        inspector = CachingSchemaInspector(create_provider(database_url))
        success = run_detectors(config, inspector, models, sys.stdout, only=only)
    except SQLAlchemyError as e:
        console.print(f"[bold red]x[/bold red] Database error: {escape(str(e))}")
        return 1

    return 0 if success else 1


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for problems or errors).
    """
    parser = argparse.ArgumentParser(
        prog="schema-doctor",
        description="Report mismatches between database constraints and model validations",
    )
    parser.add_argument(
        "--config",
        "-c",
        help=f"Path to the configuration file (default: {DEFAULT_CONFIG_FILE} if present)",
    )
    parser.add_argument(
        "--database-url",
        help="Database to inspect (overrides the config file and environment)",
    )
    parser.add_argument(
        "--models",
        help="Model source: module:Base for a SQLAlchemy declarative base, or a .toml file",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available detectors and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log introspection details to stderr",
    )
    parser.add_argument(
        "detectors",
        nargs="*",
        help="Detectors to run (default: all)",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    if args.list:
        return cmd_list(args)
    return cmd_inspect(args)


if __name__ == "__main__":
    sys.exit(main())
