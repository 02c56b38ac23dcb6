"""Command line interface for SpannerSpy."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from json import dumps
from pathlib import Path
from typing import Annotated, Literal, TypeAlias

from cyclopts import App, Parameter
from diagram import DiagramStats, build_diagram, summarize_diagram
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from schema import SchemaError, SpannerSchema
from sqlalchemy.exc import SQLAlchemyError

from spannerspy.pipeline import (
    SchemaSource,
    UsageError,
    format_diagram,
    resolve_schema,
)

app = App(
    name="spannerspy",
    help="Generate ER diagrams from Cloud Spanner schemas",
)

Format: TypeAlias = Literal["mermaid", "mmd", "json", "html"]
StatsFormat: TypeAlias = Literal["table", "json"]

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[bold red]Error:[/] {message}", highlight=False)


def print_success(message: str) -> None:
    """Print success message to stderr."""
    err_console.print(f"[bold green]✓[/] {message}", highlight=False)


def print_info(message: str) -> None:
    """Print info message to stderr."""
    err_console.print(f"[bold blue]i[/] {message}", highlight=False)


def configure_logging(*, verbose: bool) -> None:
    """Send library logging to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def validate_output_path(output: Path) -> None:
    """Validate output path is writable."""
    output_dir = output.parent
    if not output_dir.exists():
        print_error(f"Output directory does not exist: {output_dir}")
        sys.exit(1)
    if not output_dir.is_dir():
        print_error(f"Output path parent is not a directory: {output_dir}")
        sys.exit(1)


def build_source(
    paths: list[Path] | None,
    *,
    sample: bool,
    inputs: list[Path] | None,
    ddl: list[Path] | None,
    database: str | None,
) -> SchemaSource:
    """Combine CLI options into one schema source, checking exclusivity."""
    source = SchemaSource(
        sample=sample,
        schema_paths=tuple([*(paths or ()), *(inputs or ())]),
        ddl_paths=tuple(ddl or ()),
        database=database,
    )
    try:
        source.validate()
    except UsageError as e:
        print_error(str(e))
        sys.exit(1)
    return source


@contextmanager
def pipeline_errors() -> Iterator[None]:
    """Report pipeline failures and exit non-zero."""
    try:
        yield
    except (SchemaError, UsageError) as e:
        print_error(str(e))
        sys.exit(1)
    except SQLAlchemyError as e:
        print_error(f"Failed to reflect database: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print_error("Interrupted by user")
        sys.exit(1)


def load_schema(source: SchemaSource) -> SpannerSchema:
    """Resolve the schema behind a spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True,
    ) as progress:
        progress.add_task("Loading schema...", total=None)
        return resolve_schema(source)


def format_stats_table(stats: DiagramStats) -> None:
    """Format diagram statistics as a rich table."""
    table = Table(title="Diagram Summary", show_header=False)
    table.add_column("Metric", style="bold blue")
    table.add_column("Count", justify="right")
    for key, value in stats.items():
        table.add_row(key.capitalize(), str(value))
    console.print(table)


@app.command
def render(
    paths: list[Path] | None = None,
    *,
    sample: bool = False,
    inputs: Annotated[list[Path] | None, Parameter(name=["--input", "-i"])] = None,
    ddl: Annotated[list[Path] | None, Parameter(name=["--ddl", "-d"])] = None,
    database: str | None = None,
    fmt: Annotated[Format, Parameter(name=["--format", "-f"])] = "mermaid",
    output: Annotated[Path | None, Parameter(name=["--output", "-o"])] = None,
    title: str = "ER Diagram",
    verbose: bool = False,
) -> None:
    """Render an ER diagram as Mermaid, JSON or HTML.

    Parameters
    ----------
    paths
        JSON schema files or directories.
    sample
        Use the built-in sample schema.
    inputs
        JSON schema file or directory; may be repeated.
    ddl
        Cloud Spanner DDL file or directory; may be repeated.
    database
        SQLAlchemy URL of a database to reflect.
    fmt
        Output format.
    output
        Write the diagram to this file instead of stdout.
    title
        Page title for HTML output.
    verbose
        Log pipeline details to stderr.
    """
    configure_logging(verbose=verbose)
    source = build_source(
        paths,
        sample=sample,
        inputs=inputs,
        ddl=ddl,
        database=database,
    )
    if output:
        validate_output_path(output)

    with pipeline_errors():
        schema = load_schema(source)
        text = format_diagram(build_diagram(schema), fmt, title)

    if output:
        try:
            output.write_text(text + "\n", encoding="utf-8")
        except (PermissionError, OSError) as e:
            print_error(f"Failed to write output file: {e}")
            sys.exit(1)
        print_success(f"Diagram written to {output}")
    else:
        sys.stdout.write(text + "\n")


@app.command
def stats(
    paths: list[Path] | None = None,
    *,
    sample: bool = False,
    inputs: Annotated[list[Path] | None, Parameter(name=["--input", "-i"])] = None,
    ddl: Annotated[list[Path] | None, Parameter(name=["--ddl", "-d"])] = None,
    database: str | None = None,
    fmt: Annotated[StatsFormat, Parameter(name=["--format", "-f"])] = "table",
    verbose: bool = False,
) -> None:
    """Summarize tables, columns and relationships of a schema."""
    configure_logging(verbose=verbose)
    source = build_source(
        paths,
        sample=sample,
        inputs=inputs,
        ddl=ddl,
        database=database,
    )

    with pipeline_errors():
        summary = summarize_diagram(build_diagram(load_schema(source)))

    if fmt == "json":
        sys.stdout.write(dumps(summary) + "\n")
    else:
        format_stats_table(summary)


@app.command
def serve(*, verbose: bool = False) -> None:
    """Run the MCP server over stdio."""
    from spannerspy.server import run_server

    configure_logging(verbose=verbose)
    print_info("Starting SpannerSpy MCP server on stdio")
    run_server()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
