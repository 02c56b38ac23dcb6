"""Load schema fragments from JSON text, files and directories."""

import json
from collections.abc import Iterable
from logging import getLogger
from pathlib import Path
from typing import Any

from schema.errors import (
    EmptyInputError,
    InputNotFoundError,
    InputReadError,
    MalformedSchemaError,
)
from schema.merge import merge_schemas
from schema.normalize import normalize_schema
from schema.types import SpannerSchema

logger = getLogger(__name__)

JSON_EXTENSIONS = frozenset({".json"})


def _walk_files(directory: Path) -> Iterable[Path]:
    """Yield every file below a directory, following symlinks."""
    for root, _dirs, files in directory.walk(follow_symlinks=True):
        for name in files:
            yield root / name


def collect_files(
    paths: Iterable[Path | str],
    extensions: Iterable[str],
    kind: str = "schema",
) -> list[Path]:
    """Expand files and directories into an ordered list of input files.

    Files are taken as given. Directories are searched recursively for files
    with a matching extension and sorted by full path.
    """
    suffixes = {extension.lower() for extension in extensions}
    collected: list[Path] = []

    for raw_path in paths:
        path = Path(raw_path)
        if not path.exists():
            raise InputNotFoundError(path)

        if not path.is_dir():
            collected.append(path)
            continue

        matches = sorted(
            (
                file
                for file in _walk_files(path)
                if file.suffix.lower() in suffixes and file.is_file()
            ),
            key=str,
        )
        if not matches:
            msg = (
                f"No {kind} files ({', '.join(sorted(suffixes))}) "
                f"found in directory: {path}"
            )
            raise EmptyInputError(msg)

        logger.debug("Collected %d %s files from %s", len(matches), kind, path)
        collected.extend(matches)

    return collected


def read_input(path: Path) -> bytes:
    """Read an input file, reporting OS failures as schema errors."""
    try:
        return path.read_bytes()
    except OSError as err:
        raise InputReadError(path, err.strerror or err) from err


def parse_schema_json(payload: str | bytes, source: str = "<input>") -> SpannerSchema:
    """Decode one schema fragment without normalizing it.

    Bytes are decoded as UTF-8; undecodable bytes make the fragment malformed.
    """
    try:
        data: Any = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        msg = f"Invalid schema JSON in {source}: {err}"
        raise MalformedSchemaError(msg) from err

    if not isinstance(data, dict):
        msg = f"Schema JSON in {source} must be an object, got {type(data).__name__}"
        raise MalformedSchemaError(msg)

    schema: SpannerSchema = data  # pyright: ignore[reportAssignmentType]
    return schema


def load_schema_from_json(payload: str) -> SpannerSchema:
    """Load a single schema from JSON text."""
    return normalize_schema(parse_schema_json(payload))


def load_schema_from_json_strings(payloads: Iterable[str]) -> SpannerSchema:
    """Load and merge several schema fragments given as JSON text."""
    return merge_schemas(
        parse_schema_json(payload, f"<fragment {position}>")
        for position, payload in enumerate(payloads, start=1)
    )


def load_schema_from_paths(paths: Iterable[Path | str]) -> SpannerSchema:
    """Load and merge schema fragments from JSON files and directories."""
    files = collect_files(paths, JSON_EXTENSIONS, "schema")
    if not files:
        msg = "No schema files provided"
        raise EmptyInputError(msg)

    logger.info("Loading %d schema files", len(files))
    return merge_schemas(
        parse_schema_json(read_input(file), str(file))
        for file in files
    )
