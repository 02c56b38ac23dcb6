"""Load schemas from Cloud Spanner DDL."""

from collections.abc import Iterable
from logging import getLogger
from pathlib import Path
from tempfile import TemporaryDirectory

from schema import (
    InputReadError,
    SpannerSchema,
    collect_files,
    normalize_schema,
    read_input,
)

from ddl.parser import DdlParser
from ddl.statements import DdlSource, order_ddl

logger = getLogger(__name__)

DDL_EXTENSIONS = frozenset({".sql", ".ddl"})


def _read_ddl(path: Path) -> str:
    """Read one DDL file as UTF-8 text."""
    try:
        return read_input(path).decode("utf-8")
    except UnicodeDecodeError as err:
        raise InputReadError(path, f"not valid UTF-8 ({err})") from err


def read_ddl_sources(paths: Iterable[Path | str]) -> list[DdlSource]:
    """Read every DDL file below the given files and directories."""
    files = collect_files(paths, DDL_EXTENSIONS, "DDL")
    logger.info("Reading %d DDL files", len(files))
    return [DdlSource(str(file), _read_ddl(file)) for file in files]


def parse_ordered_ddl(sources: Iterable[DdlSource], parser: DdlParser) -> SpannerSchema:
    """Order the statements of all sources and parse them as one script."""
    script = order_ddl(sources)
    with TemporaryDirectory(prefix="spannerspy-") as workdir:
        script_path = Path(workdir) / "schema.sql"
        script_path.write_text(script + "\n", encoding="utf-8")
        schema = parser.parse(script_path)
    return normalize_schema(schema)


def load_schema_from_ddl_paths(
    paths: Iterable[Path | str],
    parser: DdlParser,
) -> SpannerSchema:
    """Load a schema from DDL files and directories."""
    return parse_ordered_ddl(read_ddl_sources(paths), parser)


def load_schema_from_ddl(ddl: str, parser: DdlParser) -> SpannerSchema:
    """Load a schema from inline DDL text."""
    return parse_ordered_ddl([DdlSource("<inline>", ddl)], parser)
