"""Tests for DDL statement splitting, classification and ordering."""

import pytest

from ddl import (
    DdlSource,
    NoStatementsFoundError,
    StatementKind,
    classify_statement,
    order_ddl,
    order_statements,
    split_statements,
)

CREATE_ORDERS = "CREATE TABLE Orders (OrderId INT64 NOT NULL) PRIMARY KEY (OrderId)"
ALTER_ORDERS = (
    "ALTER TABLE Orders ADD CONSTRAINT fk_orders_customers "
    "FOREIGN KEY (CustomerId) REFERENCES Customers (CustomerId)"
)
INDEX_ORDERS = "CREATE INDEX OrdersByCustomer ON Orders (CustomerId)"


def test_split_on_semicolons() -> None:
    """Each terminated statement becomes one entry, trimmed."""
    text = f"{CREATE_ORDERS};\n\n  {INDEX_ORDERS};\n"

    assert split_statements(text) == [CREATE_ORDERS, INDEX_ORDERS]


def test_semicolon_in_single_quoted_string_not_split() -> None:
    """Semicolons inside string literals do not terminate statements."""
    text = "INSERT INTO T (C) VALUES ('a;b'); SELECT 1"

    assert split_statements(text) == ["INSERT INTO T (C) VALUES ('a;b')", "SELECT 1"]


def test_semicolon_in_double_quoted_string_not_split() -> None:
    """Double-quoted strings are opaque too."""
    text = 'SELECT "x;y"; SELECT 2'

    assert split_statements(text) == ['SELECT "x;y"', "SELECT 2"]


def test_doubled_quote_does_not_close_string() -> None:
    """A doubled quote is an escape inside a string of the same kind."""
    text = "SELECT 'it''s; fine'; SELECT 3"

    assert split_statements(text) == ["SELECT 'it''s; fine'", "SELECT 3"]


def test_semicolons_in_comments_ignored() -> None:
    """Line and block comments are not scanned for terminators."""
    text = (
        "-- first; comment\n"
        "CREATE TABLE A (Id INT64) PRIMARY KEY (Id) /* still; A */;\n"
        "/* leading; */ CREATE TABLE B (Id INT64) PRIMARY KEY (Id)"
    )

    statements = split_statements(text)

    assert len(statements) == 2
    assert statements[0].endswith("/* still; A */")
    assert statements[1].startswith("/* leading; */ CREATE TABLE B")


def test_trailing_statement_without_terminator_kept() -> None:
    """Text after the last semicolon is kept when non-blank."""
    assert split_statements(f"{CREATE_ORDERS};{INDEX_ORDERS}") == [
        CREATE_ORDERS,
        INDEX_ORDERS,
    ]


@pytest.mark.parametrize(
    "text",
    ["", "   \n\t", "-- only a comment\n", "/* block */ ;; -- trailing"],
)
def test_blank_and_comment_only_text_has_no_statements(text: str) -> None:
    """Whitespace and comments alone contribute nothing."""
    assert split_statements(text) == []


@pytest.mark.parametrize(
    ("statement", "kind"),
    [
        (CREATE_ORDERS, StatementKind.CREATE_TABLE),
        ("create   table lower (Id INT64) PRIMARY KEY (Id)", StatementKind.CREATE_TABLE),
        (ALTER_ORDERS, StatementKind.ALTER_TABLE),
        ("alter\ntable Orders DROP COLUMN Note", StatementKind.ALTER_TABLE),
        (INDEX_ORDERS, StatementKind.CREATE_INDEX),
        ("CREATE UNIQUE INDEX U ON Orders (Id)", StatementKind.CREATE_INDEX),
        ("CREATE NULL_FILTERED INDEX N ON Orders (Id)", StatementKind.CREATE_INDEX),
        (
            "CREATE UNIQUE NULL FILTERED INDEX UN ON Orders (Id)",
            StatementKind.CREATE_INDEX,
        ),
        ("CREATE VIEW V SQL SECURITY INVOKER AS SELECT 1", StatementKind.OTHER),
        ("CREATE TABLESPACE X", StatementKind.OTHER),
        ("DROP TABLE Orders", StatementKind.OTHER),
    ],
)
def test_classify_statement(statement: str, kind: StatementKind) -> None:
    """Statements are classified by their leading keywords."""
    assert classify_statement(statement) is kind


def test_classify_skips_leading_comments() -> None:
    """Comments before the first keyword are ignored."""
    statement = f"-- orders\n/* v2 */\n  {ALTER_ORDERS}"

    assert classify_statement(statement) is StatementKind.ALTER_TABLE


def test_reverse_order_across_files_is_fixed() -> None:
    """Index, alter and create in separate files come out create, alter, index."""
    sources = [
        DdlSource("1_index.sql", f"{INDEX_ORDERS};"),
        DdlSource("2_alter.sql", f"{ALTER_ORDERS};"),
        DdlSource("3_create.sql", f"{CREATE_ORDERS};"),
    ]

    assert [statement.text for statement in order_statements(sources)] == [
        CREATE_ORDERS,
        ALTER_ORDERS,
        INDEX_ORDERS,
    ]


def test_other_statements_between_create_and_alter() -> None:
    """Unknown statements sit after table creation and before alterations."""
    view = "CREATE VIEW V SQL SECURITY INVOKER AS SELECT 1"
    sources = [DdlSource("all.sql", f"{ALTER_ORDERS}; {view}; {CREATE_ORDERS};")]

    kinds = [statement.kind for statement in order_statements(sources)]

    assert kinds == [
        StatementKind.CREATE_TABLE,
        StatementKind.OTHER,
        StatementKind.ALTER_TABLE,
    ]


def test_order_is_stable_within_kind() -> None:
    """Statements of the same kind keep file order, then in-file order."""
    sources = [
        DdlSource(
            "b.sql",
            "ALTER TABLE T ADD COLUMN B INT64; ALTER TABLE T ADD COLUMN C INT64",
        ),
        DdlSource("a.sql", "ALTER TABLE T ADD COLUMN A INT64"),
    ]

    statements = order_statements(sources)

    assert [statement.text[-7:] for statement in statements] == [
        "B INT64",
        "C INT64",
        "A INT64",
    ]
    assert [statement.sequence for statement in statements] == [0, 1, 2]
    assert [statement.path for statement in statements] == ["b.sql", "b.sql", "a.sql"]


def test_order_ddl_terminates_and_joins() -> None:
    """Statements are re-terminated and separated by a blank line."""
    script = order_ddl([DdlSource("x.sql", f"{INDEX_ORDERS}\n;{CREATE_ORDERS}")])

    assert script == f"{CREATE_ORDERS};\n\n{INDEX_ORDERS};"


def test_terminator_moved_off_trailing_line_comment() -> None:
    """A statement ending in a line comment gets its semicolon on a new line."""
    script = order_ddl([DdlSource("x.sql", f"{CREATE_ORDERS} -- orders table\n")])

    assert script == f"{CREATE_ORDERS} -- orders table\n;"


def test_empty_files_do_not_fail_alone() -> None:
    """Empty and comment-only files are fine when another file has statements."""
    sources = [
        DdlSource("empty.sql", ""),
        DdlSource("comments.sql", "-- nothing here\n/* or here */"),
        DdlSource("orders.sql", CREATE_ORDERS),
    ]

    assert len(order_statements(sources)) == 1


def test_no_statements_at_all_raises() -> None:
    """Zero statements across every file is an error."""
    sources = [DdlSource("empty.sql", ""), DdlSource("comments.sql", "-- nothing")]

    with pytest.raises(NoStatementsFoundError):
        order_ddl(sources)
