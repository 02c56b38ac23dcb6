"""Split DDL scripts into statements and order them for replay.

DDL spread over several files carries no guarantee that a table is created
before it is altered or indexed. Statements are classified by their leading
keywords and stably sorted so that every ``CREATE TABLE`` comes first, then
statements of unknown kind, then ``ALTER TABLE``, then ``CREATE INDEX``.
"""

import re
from collections import Counter
from collections.abc import Iterable, Iterator
from enum import Enum, auto
from logging import getLogger
from typing import NamedTuple

from ddl.errors import NoStatementsFoundError

logger = getLogger(__name__)


class LexMode(Enum):
    """Lexical context of a character in DDL text."""

    CODE = auto()
    SINGLE_QUOTED = auto()
    DOUBLE_QUOTED = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()


class StatementKind(Enum):
    """Statement class, valued by replay priority."""

    CREATE_TABLE = 0
    OTHER = 1
    ALTER_TABLE = 2
    CREATE_INDEX = 3


class DdlSource(NamedTuple):
    """Raw DDL text and where it came from."""

    path: str
    content: str


class Statement(NamedTuple):
    """One statement, without its terminator."""

    text: str
    kind: StatementKind
    sequence: int  # Position across all sources, file order then in-file order
    path: str


QUOTES = {"'": LexMode.SINGLE_QUOTED, '"': LexMode.DOUBLE_QUOTED}

KIND_PATTERNS = (
    (StatementKind.CREATE_TABLE, re.compile(r"CREATE\s+TABLE\b", re.IGNORECASE)),
    (StatementKind.ALTER_TABLE, re.compile(r"ALTER\s+TABLE\b", re.IGNORECASE)),
    (
        StatementKind.CREATE_INDEX,
        re.compile(
            r"CREATE\s+(?:UNIQUE\s+)?(?:NULL(?:_|\s+)FILTERED\s+)?INDEX\b",
            re.IGNORECASE,
        ),
    ),
)


def lex(text: str) -> Iterator[tuple[int, LexMode]]:
    """Yield the offset of every character with the lexical mode it belongs to.

    Delimiters belong to the construct they open or close. A doubled quote
    inside a string of the same kind is an escape, not a terminator.
    """
    mode = LexMode.CODE
    position = 0
    length = len(text)

    while position < length:
        char = text[position]
        pair = text[position : position + 2]

        if mode is LexMode.CODE:
            if pair == "--":
                mode = LexMode.LINE_COMMENT
            elif pair == "/*":
                mode = LexMode.BLOCK_COMMENT
            elif char in QUOTES:
                mode = QUOTES[char]
                yield position, mode
                position += 1
                continue
            else:
                yield position, mode
                position += 1
                continue
            yield position, mode
            yield position + 1, mode
            position += 2
            continue

        if mode is LexMode.LINE_COMMENT:
            yield position, mode
            if char == "\n":
                mode = LexMode.CODE
            position += 1
            continue

        if mode is LexMode.BLOCK_COMMENT:
            yield position, mode
            if pair == "*/":
                yield position + 1, mode
                mode = LexMode.CODE
                position += 2
            else:
                position += 1
            continue

        quote = "'" if mode is LexMode.SINGLE_QUOTED else '"'
        yield position, mode
        if pair == quote * 2:
            yield position + 1, mode
            position += 2
            continue
        if char == quote:
            mode = LexMode.CODE
        position += 1


def first_token_offset(text: str) -> int | None:
    """Return the offset of the first character outside whitespace and comments."""
    for position, mode in lex(text):
        if mode is not LexMode.LINE_COMMENT and mode is not LexMode.BLOCK_COMMENT:
            if not text[position].isspace():
                return position
    return None


def split_statements(text: str) -> list[str]:
    """Split DDL text on semicolons that are outside strings and comments.

    A trailing statement without a terminator is kept. Chunks holding only
    whitespace and comments are dropped.
    """
    statements: list[str] = []
    start = 0

    def flush(end: int) -> None:
        chunk = text[start:end].strip()
        if chunk and first_token_offset(chunk) is not None:
            statements.append(chunk)

    for position, mode in lex(text):
        if mode is LexMode.CODE and text[position] == ";":
            flush(position)
            start = position + 1
    flush(len(text))

    return statements


def classify_statement(text: str) -> StatementKind:
    """Classify a statement by its first keywords, ignoring leading comments."""
    offset = first_token_offset(text)
    if offset is None:
        return StatementKind.OTHER

    head = text[offset:]
    for kind, pattern in KIND_PATTERNS:
        if pattern.match(head):
            return kind
    return StatementKind.OTHER


def collect_statements(sources: Iterable[DdlSource]) -> list[Statement]:
    """Split and classify every source, numbering statements in input order."""
    statements: list[Statement] = []
    for source in sources:
        chunks = split_statements(source.content)
        if not chunks:
            logger.debug("No statements in %s", source.path)
        first = len(statements)
        statements.extend(
            Statement(chunk, classify_statement(chunk), first + offset, source.path)
            for offset, chunk in enumerate(chunks)
        )
    return statements


def terminate(statement: str) -> str:
    """Append a semicolon, moving it off a trailing line comment."""
    modes = [mode for _position, mode in lex(statement)]
    if modes and modes[-1] is LexMode.LINE_COMMENT:
        return f"{statement}\n;"
    return f"{statement};"


def order_statements(sources: Iterable[DdlSource]) -> list[Statement]:
    """Return statements sorted by kind priority, stable within each kind."""
    statements = collect_statements(sources)
    if not statements:
        msg = "No DDL statements found in the provided inputs"
        raise NoStatementsFoundError(msg)

    ordered = sorted(statements, key=lambda s: (s.kind.value, s.sequence))
    counts = Counter(statement.kind.name for statement in ordered)
    logger.debug("Ordered %d statements: %s", len(ordered), dict(counts))
    return ordered


def order_ddl(sources: Iterable[DdlSource]) -> str:
    """Combine DDL sources into one dependency-ordered script."""
    return "\n\n".join(
        terminate(statement.text) for statement in order_statements(sources)
    )
