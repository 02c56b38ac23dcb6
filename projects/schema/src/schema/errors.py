"""Error taxonomy for schema loading."""

from pathlib import Path


class SchemaError(Exception):
    """Base class for failures while producing a schema."""


class InputNotFoundError(SchemaError):
    """A supplied file or directory does not exist."""

    def __init__(self, path: Path | str) -> None:
        """Record the missing path."""
        self.path = Path(path)
        super().__init__(f"Input path not found: {path}")


class EmptyInputError(SchemaError):
    """Inputs contributed nothing usable."""


class MalformedSchemaError(SchemaError):
    """A schema payload is not valid JSON or not a schema object."""


class InputReadError(SchemaError):
    """A supplied file exists but cannot be read as text."""

    def __init__(self, path: Path | str, reason: object) -> None:
        """Record the unreadable path and the underlying failure."""
        self.path = Path(path)
        super().__init__(f"Cannot read input {path}: {reason}")
