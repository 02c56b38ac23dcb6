"""Failures specific to DDL input and the external parser."""

from schema.errors import EmptyInputError, SchemaError


class NoStatementsFoundError(EmptyInputError):
    """DDL sources contained no statements."""


class ParserFailureError(SchemaError):
    """The DDL parser, or its build, exited with a non-zero status."""


class ParserOutputError(SchemaError):
    """The DDL parser succeeded but printed something that is not JSON."""


class ParserTimeoutError(SchemaError):
    """The DDL parser did not finish in time."""


class ToolchainMissingError(SchemaError):
    """No parser binary is available and it cannot be built."""


class ParserConfigurationError(SchemaError):
    """A SPANNERSPY_* parser setting has an invalid value."""
