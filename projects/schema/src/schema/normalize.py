"""Fill in schema defaults and derived names."""

from schema.types import (
    ColumnSchema,
    ForeignKeySchema,
    IndexSchema,
    SpannerSchema,
    TableSchema,
)

COLUMN_DEFAULTS = {"isNullable": True, "isArray": False}


def _normalize_column(column: ColumnSchema) -> ColumnSchema:
    """Apply column defaults, keeping explicit values."""
    # JSON null counts as absent
    explicit = {key: value for key, value in column.items() if value is not None}
    normalized: ColumnSchema = {**COLUMN_DEFAULTS, **explicit}  # type: ignore[typeddict-item]
    return normalized


def _normalize_table(table: TableSchema) -> TableSchema:
    """Apply table defaults and normalize its columns."""
    normalized: TableSchema = {
        **table,
        "primaryKey": list(table.get("primaryKey") or []),
        "columns": [
            _normalize_column(column) for column in table.get("columns") or []
        ],
    }
    if policy := table.get("rowDeletionPolicy"):
        normalized["rowDeletionPolicy"] = {**policy}
    return normalized


def foreign_key_name(foreign_key: ForeignKeySchema) -> str:
    """Return the foreign key name, synthesizing one when missing."""
    if name := foreign_key.get("name"):
        return name
    return f"{foreign_key['referencingTable']}_{foreign_key['referencedTable']}"


def _normalize_foreign_key(foreign_key: ForeignKeySchema) -> ForeignKeySchema:
    return {
        **foreign_key,
        "name": foreign_key_name(foreign_key),
        "referencingColumns": list(foreign_key.get("referencingColumns") or []),
        "referencedColumns": list(foreign_key.get("referencedColumns") or []),
    }


def _copy_index(index: IndexSchema) -> IndexSchema:
    copied: IndexSchema = {
        **index,
        "columns": [{**key} for key in index.get("columns") or []],
    }
    if (storing := index.get("storing")) is not None:
        copied["storing"] = list(storing)
    return copied


def normalize_schema(schema: SpannerSchema) -> SpannerSchema:
    """Return a new schema with defaults applied to every table and foreign key.

    Nothing in the result is shared with the input, so either can be changed
    without affecting the other. Collections given as JSON null are empty.
    """
    normalized: SpannerSchema = {
        "tables": [_normalize_table(table) for table in schema.get("tables") or []],
    }

    if (foreign_keys := schema.get("foreignKeys")) is not None:
        normalized["foreignKeys"] = [_normalize_foreign_key(fk) for fk in foreign_keys]

    if (indexes := schema.get("indexes")) is not None:
        normalized["indexes"] = [_copy_index(index) for index in indexes]

    return normalized
