"""External DDL parser collaborator.

The DDL grammar lives in a separate executable that reads a DDL file and
prints schema JSON on stdout. This module locates or builds that executable
and turns its exit status and output into a schema or a typed error.
"""

import json
import os
import shutil
import subprocess
from collections.abc import Sequence
from concurrent.futures import Future
from logging import getLogger
from pathlib import Path
from threading import Lock
from typing import Protocol

from schema import SpannerSchema

from ddl.errors import (
    ParserConfigurationError,
    ParserFailureError,
    ParserOutputError,
    ParserTimeoutError,
    ToolchainMissingError,
)

logger = getLogger(__name__)

BINARY_ENV = "SPANNERSPY_DDLPARSER"
SOURCE_ENV = "SPANNERSPY_DDLPARSER_SOURCE"
CACHE_ENV = "SPANNERSPY_CACHE_DIR"
TIMEOUT_ENV = "SPANNERSPY_DDLPARSER_TIMEOUT"

DEFAULT_SOURCE_DIR = Path("tools") / "ddlparser"  # Relative to the working directory
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "spannerspy"
DEFAULT_TIMEOUT = 60.0
BINARY_NAME = "ddlparser.exe" if os.name == "nt" else "ddlparser"


class DdlParser(Protocol):
    """Anything that turns a DDL file into a schema."""

    def parse(self, path: Path) -> SpannerSchema:
        """Parse the DDL file at ``path``."""
        ...


class ParserBinary:
    """Locate the parser executable, building it at most once.

    A prebuilt binary given as ``override`` is used as is. Otherwise the
    binary is compiled with ``go build`` from ``source_dir`` into
    ``cache_dir``. Concurrent callers share a single build.
    """

    def __init__(
        self,
        *,
        override: Path | str | None = None,
        source_dir: Path | str = DEFAULT_SOURCE_DIR,
        cache_dir: Path | str = DEFAULT_CACHE_DIR,
    ) -> None:
        """Configure where the binary comes from."""
        self.override = Path(override) if override else None
        self.source_dir = Path(source_dir)
        self.cache_dir = Path(cache_dir)
        self._lock = Lock()
        self._future: Future[Path] | None = None

    @classmethod
    def from_environment(cls) -> "ParserBinary":
        """Configure the resolver from SPANNERSPY_* environment variables."""
        return cls(
            override=os.environ.get(BINARY_ENV) or None,
            source_dir=os.environ.get(SOURCE_ENV) or DEFAULT_SOURCE_DIR,
            cache_dir=os.environ.get(CACHE_ENV) or DEFAULT_CACHE_DIR,
        )

    @property
    def target(self) -> Path:
        """Path of the compiled binary inside the cache directory."""
        return self.cache_dir / BINARY_NAME

    def path(self) -> Path:
        """Return the binary path, resolving or building it on first use."""
        with self._lock:
            future = self._future
            owner = future is None
            if future is None:
                future = self._future = Future()

        if owner:
            try:
                future.set_result(self._resolve())
            except BaseException as err:
                future.set_exception(err)

        return future.result()

    def _resolve(self) -> Path:
        """Find an existing binary or build a new one."""
        if self.override is not None:
            if not self.override.is_file():
                msg = f"{BINARY_ENV} points to a missing file: {self.override}"
                raise ToolchainMissingError(msg)
            logger.debug("Using DDL parser override %s", self.override)
            return self.override

        if self.target.is_file():
            logger.debug("Using cached DDL parser %s", self.target)
            return self.target

        return self._build()

    def _build(self) -> Path:
        """Compile the parser with the Go toolchain."""
        go = shutil.which("go")
        if go is None:
            msg = (
                "The Go toolchain is required to build the DDL parser. "
                f"Install Go or set {BINARY_ENV} to a prebuilt parser binary."
            )
            raise ToolchainMissingError(msg)

        if not self.source_dir.is_dir():
            msg = (
                f"DDL parser source not found at {self.source_dir}. "
                f"Set {SOURCE_ENV} to the parser source or {BINARY_ENV} to a "
                "prebuilt parser binary."
            )
            raise ToolchainMissingError(msg)

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Building DDL parser from %s", self.source_dir)
        result = subprocess.run(  # noqa: S603
            [go, "build", "-o", str(self.target.resolve()), "."],
            cwd=self.source_dir,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            detail = result.stderr.strip() or result.stdout.strip()
            msg = f"Failed to build the DDL parser: {detail}"
            raise ParserFailureError(msg)

        return self.target


def parser_timeout() -> float:
    """Read the parser timeout from the environment."""
    raw = os.environ.get(TIMEOUT_ENV)
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as err:
        msg = f"{TIMEOUT_ENV} must be a number of seconds, got {raw!r}"
        raise ParserConfigurationError(msg) from err
    if not timeout > 0:
        msg = f"{TIMEOUT_ENV} must be a positive number of seconds, got {raw!r}"
        raise ParserConfigurationError(msg)
    return timeout


class SubprocessDdlParser:
    """Run the external parser executable on a DDL file."""

    def __init__(
        self,
        command: ParserBinary | Sequence[str],
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        """Use a resolver for the binary or an explicit command prefix."""
        self._command = command
        self.timeout = timeout

    def command(self) -> list[str]:
        """Command prefix; the input path is appended on each call."""
        if isinstance(self._command, ParserBinary):
            return [str(self._command.path())]
        return list(self._command)

    def parse(self, path: Path) -> SpannerSchema:
        """Parse a DDL file into a schema fragment."""
        args = [*self.command(), "-input", str(path)]
        logger.debug("Running DDL parser: %s", " ".join(args))
        try:
            result = subprocess.run(  # noqa: S603
                args,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as err:
            msg = f"DDL parser timed out after {self.timeout} seconds"
            raise ParserTimeoutError(msg) from err

        if result.returncode != 0:
            detail = result.stderr.strip() or result.stdout.strip()
            msg = f"DDL parser failed with exit code {result.returncode}: {detail}"
            raise ParserFailureError(msg)

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as err:
            msg = f"DDL parser returned invalid output: {err}"
            raise ParserOutputError(msg) from err

        if not isinstance(data, dict):
            msg = "DDL parser returned invalid output: expected a JSON object"
            raise ParserOutputError(msg)

        schema: SpannerSchema = data  # pyright: ignore[reportAssignmentType]
        return schema


def default_parser() -> SubprocessDdlParser:
    """Create the parser configured by the environment."""
    return SubprocessDdlParser(ParserBinary.from_environment(), parser_timeout())
