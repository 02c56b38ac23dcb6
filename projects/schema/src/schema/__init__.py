"""Cloud Spanner schema model, normalization and loading."""

from schema.errors import (
    EmptyInputError,
    InputNotFoundError,
    InputReadError,
    MalformedSchemaError,
    SchemaError,
)
from schema.loader import (
    JSON_EXTENSIONS,
    collect_files,
    load_schema_from_json,
    load_schema_from_json_strings,
    load_schema_from_paths,
    read_input,
)
from schema.merge import merge_schemas
from schema.normalize import normalize_schema
from schema.reflection import database_engine, database_to_schema
from schema.sample import SAMPLE_SCHEMA
from schema.types import (
    ColumnSchema,
    ForeignKeySchema,
    IndexSchema,
    SpannerSchema,
    TableSchema,
)

__all__ = [
    "JSON_EXTENSIONS",
    "SAMPLE_SCHEMA",
    "ColumnSchema",
    "EmptyInputError",
    "ForeignKeySchema",
    "IndexSchema",
    "InputNotFoundError",
    "InputReadError",
    "MalformedSchemaError",
    "SchemaError",
    "SpannerSchema",
    "TableSchema",
    "collect_files",
    "database_engine",
    "database_to_schema",
    "load_schema_from_json",
    "load_schema_from_json_strings",
    "load_schema_from_paths",
    "merge_schemas",
    "normalize_schema",
    "read_input",
]
