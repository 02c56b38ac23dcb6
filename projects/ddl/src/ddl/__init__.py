"""Cloud Spanner DDL ordering and parsing."""

from ddl.errors import (
    NoStatementsFoundError,
    ParserConfigurationError,
    ParserFailureError,
    ParserOutputError,
    ParserTimeoutError,
    ToolchainMissingError,
)
from ddl.loader import (
    DDL_EXTENSIONS,
    load_schema_from_ddl,
    load_schema_from_ddl_paths,
    read_ddl_sources,
)
from ddl.parser import DdlParser, ParserBinary, SubprocessDdlParser, default_parser
from ddl.statements import (
    DdlSource,
    Statement,
    StatementKind,
    classify_statement,
    order_ddl,
    order_statements,
    split_statements,
)

__all__ = [
    "DDL_EXTENSIONS",
    "DdlParser",
    "DdlSource",
    "NoStatementsFoundError",
    "ParserConfigurationError",
    "ParserBinary",
    "ParserFailureError",
    "ParserOutputError",
    "ParserTimeoutError",
    "Statement",
    "StatementKind",
    "SubprocessDdlParser",
    "ToolchainMissingError",
    "classify_statement",
    "default_parser",
    "load_schema_from_ddl",
    "load_schema_from_ddl_paths",
    "order_ddl",
    "order_statements",
    "read_ddl_sources",
    "split_statements",
]
