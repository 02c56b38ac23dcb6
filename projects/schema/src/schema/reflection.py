"""Reflect a live database into a schema fragment."""

from logging import getLogger

from sqlalchemy import Engine, Inspector, create_engine, inspect
from sqlalchemy.engine.interfaces import (
    ReflectedColumn,
    ReflectedForeignKeyConstraint,
    ReflectedIndex,
)

from schema.normalize import normalize_schema
from schema.types import (
    ColumnSchema,
    ForeignKeySchema,
    IndexSchema,
    SpannerSchema,
    TableSchema,
)

logger = getLogger(__name__)


def database_engine(url: str) -> Engine:
    """Create a SQLAlchemy engine for a database URL.

    Cloud Spanner URLs (``spanner+spanner:///projects/...``) need the
    ``sqlalchemy-spanner`` dialect installed.
    """
    return create_engine(url)


def _build_column(col_info: ReflectedColumn) -> ColumnSchema:
    """Build a column schema from SQLAlchemy column info."""
    column: ColumnSchema = {
        "name": col_info["name"],
        "type": str(col_info["type"]),
        "isNullable": col_info["nullable"],
    }
    if comment := col_info.get("comment"):
        column["comment"] = comment
    return column


def _build_foreign_key(
    table_name: str,
    fk: ReflectedForeignKeyConstraint,
) -> ForeignKeySchema:
    """Build a foreign key schema from SQLAlchemy foreign key info."""
    return {
        "name": fk.get("name") or "",
        "referencingTable": table_name,
        "referencingColumns": list(fk["constrained_columns"]),
        "referencedTable": fk["referred_table"],
        "referencedColumns": list(fk["referred_columns"]),
    }


def _build_index(table_name: str, index: ReflectedIndex) -> IndexSchema:
    """Build an index schema from SQLAlchemy index info."""
    sorting = index.get("column_sorting") or {}
    return {
        "name": index["name"] or "",
        "table": table_name,
        "columns": [
            {
                "name": name,
                "direction": "DESC" if "desc" in sorting.get(name, ()) else "ASC",
            }
            for name in index["column_names"]
            if name is not None
        ],
        "isUnique": bool(index["unique"]),
    }


def _build_table(inspector: Inspector, table_name: str) -> TableSchema:
    """Build a table schema from database introspection."""
    pk_constraint = inspector.get_pk_constraint(table_name)
    table: TableSchema = {
        "name": table_name,
        "columns": [_build_column(col) for col in inspector.get_columns(table_name)],
        "primaryKey": list(pk_constraint["constrained_columns"]),
    }
    # SQLite and some other dialects cannot reflect table comments
    if inspector.dialect.supports_comments:
        if comment := inspector.get_table_comment(table_name).get("text"):
            table["comment"] = comment
    return table


def database_to_schema(database: Engine) -> SpannerSchema:
    """Generate a normalized schema from a database through reflection."""
    inspector = inspect(database)

    tables: list[TableSchema] = []
    foreign_keys: list[ForeignKeySchema] = []
    indexes: list[IndexSchema] = []

    for table_name in inspector.get_table_names():
        tables.append(_build_table(inspector, table_name))
        foreign_keys.extend(
            _build_foreign_key(table_name, fk)
            for fk in inspector.get_foreign_keys(table_name)
        )
        indexes.extend(
            _build_index(table_name, index)
            for index in inspector.get_indexes(table_name)
        )

    logger.info("Reflected %d tables from %s", len(tables), database.url.database)

    schema: SpannerSchema = {"tables": tables}
    if foreign_keys:
        schema["foreignKeys"] = foreign_keys
    if indexes:
        schema["indexes"] = indexes
    return normalize_schema(schema)
