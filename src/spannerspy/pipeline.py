"""Schema source selection and the load-build-render pipeline."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import Literal, TypeAlias

from ddl import (
    DdlParser,
    default_parser,
    load_schema_from_ddl,
    load_schema_from_ddl_paths,
)
from diagram import (
    DiagramModel,
    build_diagram,
    diagram_to_html,
    diagram_to_json,
    diagram_to_mermaid,
)
from schema import (
    SAMPLE_SCHEMA,
    SpannerSchema,
    database_engine,
    database_to_schema,
    load_schema_from_json,
    load_schema_from_json_strings,
    load_schema_from_paths,
    normalize_schema,
)

logger = getLogger(__name__)

Format: TypeAlias = Literal["mermaid", "json", "html"]

FORMAT_ALIASES: dict[str, Format] = {
    "mermaid": "mermaid",
    "mmd": "mermaid",
    "json": "json",
    "html": "html",
}


class UsageError(ValueError):
    """Invalid combination of options."""


class NoSourceSelectedError(UsageError):
    """No schema source was given."""


class MultipleSourcesSelectedError(UsageError):
    """More than one schema source was given."""


@dataclass(frozen=True)
class SchemaSource:
    """Where to read the schema from; exactly one field may be set."""

    sample: bool = False
    schema_json: str | None = None
    schema_jsons: Sequence[str] = field(default_factory=tuple)
    schema_paths: Sequence[Path] = field(default_factory=tuple)
    ddl: str | None = None
    ddl_paths: Sequence[Path] = field(default_factory=tuple)
    database: str | None = None

    def selected(self) -> list[str]:
        """Names of the sources that are set."""
        return [
            name
            for name, value in (
                ("sample", self.sample),
                ("schema_json", self.schema_json),
                ("schema_jsons", self.schema_jsons),
                ("schema_paths", self.schema_paths),
                ("ddl", self.ddl),
                ("ddl_paths", self.ddl_paths),
                ("database", self.database),
            )
            if value
        ]

    def validate(self) -> str:
        """Return the single selected source name or raise a usage error."""
        selected = self.selected()
        if not selected:
            msg = (
                "No schema input provided. Use --sample, --input path/to/schema.json, "
                "--ddl path/to/schema.sql, or --database URL."
            )
            raise NoSourceSelectedError(msg)
        if len(selected) > 1:
            msg = f"Use only one schema source at a time, got: {', '.join(selected)}"
            raise MultipleSourcesSelectedError(msg)
        return selected[0]


def resolve_schema(
    source: SchemaSource,
    parser: DdlParser | None = None,
) -> SpannerSchema:
    """Load the schema named by ``source``.

    The DDL parser is only created when a DDL source is selected.
    """
    kind = source.validate()
    logger.debug("Resolving schema from %s", kind)

    match kind:
        case "sample":
            return normalize_schema(SAMPLE_SCHEMA)
        case "schema_json":
            return load_schema_from_json(source.schema_json or "")
        case "schema_jsons":
            return load_schema_from_json_strings(source.schema_jsons)
        case "schema_paths":
            return load_schema_from_paths(source.schema_paths)
        case "ddl":
            return load_schema_from_ddl(source.ddl or "", parser or default_parser())
        case "ddl_paths":
            return load_schema_from_ddl_paths(
                source.ddl_paths,
                parser or default_parser(),
            )
        case _:
            return database_to_schema(database_engine(source.database or ""))


def normalize_format(fmt: str) -> Format:
    """Resolve format aliases such as ``mmd``."""
    try:
        return FORMAT_ALIASES[fmt.lower()]
    except KeyError as err:
        msg = f"Unsupported format: {fmt}"
        raise UsageError(msg) from err


def format_diagram(model: DiagramModel, fmt: str, title: str = "ER Diagram") -> str:
    """Render the diagram model in the requested format."""
    match normalize_format(fmt):
        case "json":
            return diagram_to_json(model)
        case "html":
            return diagram_to_html(model, title)
        case _:
            return diagram_to_mermaid(model)


def generate_diagram(
    source: SchemaSource,
    fmt: str = "mermaid",
    *,
    parser: DdlParser | None = None,
    title: str = "ER Diagram",
) -> str:
    """Run the whole pipeline from schema source to rendered text."""
    normalize_format(fmt)
    schema = resolve_schema(source, parser)
    return format_diagram(build_diagram(schema), fmt, title)
