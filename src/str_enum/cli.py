"""
str-enum command line.

Commands:
- generate: Render a schema file into a Python module
- check: Validate and lint a schema file
- show: Display enums, variants and their baked tables
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from str_enum._version import get_version
from str_enum.core import ir
from str_enum.core.errors import StrEnumError
from str_enum.core.loader import load_schema_data, read_toml
from str_enum.core.tables import build_tables
from str_enum.core.validator import lint_schema_file

console = Console()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"str-enum {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def _load(schema_path: Path) -> tuple[ir.SchemaFile, dict]:
    """Load a schema file, exiting with code 1 on failure."""
    try:
        data = read_toml(schema_path)
        return load_schema_data(data, schema_path), data
    except StrEnumError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


app = typer.Typer(
    help="Generate closed string enumerations from TOML schemas.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """str-enum CLI main callback for global options."""
    pass


@app.command()
def generate(
    schema_file: Path = typer.Argument(  # noqa: B008
        Path("strenum.toml"),
        help="TOML schema file",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output module path (overrides [generate] output)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Print the generated module instead of writing it",
    ),
    verify: bool | None = typer.Option(
        None,
        "--verify/--no-verify",
        help="Verify the generated module (default from [generate] verify)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """
    Generate a Python module from a schema file.

    Examples:
        str-enum generate                       # strenum.toml -> generated/enums.py
        str-enum generate colors.toml -o colors.py
        str-enum generate --dry-run             # Print to stdout
    """
    from str_enum.codegen import GenerationRunner
    from str_enum.codegen.config import generation_config_from_data

    setup_logging(verbose)
    schema_path = schema_file.resolve()
    schema, data = _load(schema_path)

    try:
        config = generation_config_from_data(data, schema_path)
    except StrEnumError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    runner = GenerationRunner(
        schema,
        project_root=schema_path.parent,
        config=config,
        output_path=output.resolve() if output else None,
    )
    result = runner.run(dry_run=dry_run, verify=verify)

    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)

    if not result.success:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    if dry_run:
        for content in result.files.values():
            typer.echo(content, nl=False)
        return

    typer.echo(result.summary())
    typer.echo(f"Wrote {runner.output_path}")


@app.command()
def check(
    schema_file: Path = typer.Argument(  # noqa: B008
        Path("strenum.toml"),
        help="TOML schema file",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Treat warnings as errors",
    ),
) -> None:
    """
    Validate a schema file and report lint findings.

    Exits with code 1 on validation or lint errors, or on warnings with --strict.
    """
    schema, _ = _load(schema_file)
    errors, warnings = lint_schema_file(schema)

    for error in errors:
        typer.echo(f"Error: {error}", err=True)
    for warning in warnings:
        typer.echo(f"Warning: {warning}", err=True)

    if errors or (strict and warnings):
        raise typer.Exit(code=1)

    names = ", ".join(s.name for s in schema.enums)
    typer.echo(f"OK: {len(schema.enums)} enum(s) ({names})")


@app.command()
def show(
    schema_file: Path = typer.Argument(  # noqa: B008
        Path("strenum.toml"),
        help="TOML schema file",
    ),
) -> None:
    """Display enums, variants and their baked tables."""
    schema, _ = _load(schema_file)

    for spec in schema.enums:
        tables = build_tables(spec)
        discriminants = spec.discriminants()

        table = Table(title=spec.name)
        table.add_column("Variant", style="bold")
        table.add_column("Value")
        table.add_column("Aliases")
        if discriminants is not None:
            table.add_column(f"Discriminant ({spec.repr_type.value})", justify="right")

        for index, variant in enumerate(spec.variants):
            row = [variant.name, repr(variant.canonical), ", ".join(map(repr, variant.aliases))]
            if discriminants is not None:
                row.append(str(discriminants[index]))
            table.add_row(*(Text(cell) for cell in row))

        console.print(table)

        features = [c.value for c in sorted(spec.capabilities, key=lambda c: c.value)]
        if spec.error_type_name:
            features.append(f"error={spec.error_type_name}")
        if spec.reflection:
            features.append("reflection")
        if spec.serialization:
            features.append("serialization")
        console.print(f"Features: {', '.join(features) or 'none'}", markup=False)
        console.print(f"Value table: {tables.value_table!r}", markup=False)
        console.print(f"Parse diagnostic: {tables.parse_diagnostic!r}", markup=False)
        console.print(f"Serde diagnostic: {tables.serde_diagnostic!r}", markup=False)
        console.print()


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
