"""TypedDict schemas for Cloud Spanner schema metadata.

Keys follow the camelCase JSON emitted by the DDL parser and accepted as
schema input, so values can be loaded and dumped without translation.
"""

from typing import Literal, NotRequired, TypeAlias, TypedDict

# Opaque scalar type text such as "INT64" or "STRING(64)"
SpannerType: TypeAlias = str


class RowDeletionPolicy(TypedDict):
    """Time-to-live policy attached to a table."""

    columnName: str
    numDays: str


class ColumnSchema(TypedDict):
    """Schema for a table column."""

    name: str
    type: SpannerType
    isArray: NotRequired[bool]
    isNullable: NotRequired[bool]
    comment: NotRequired[str]


class TableSchema(TypedDict):
    """Schema for a table."""

    name: str
    columns: list[ColumnSchema]
    primaryKey: list[str]  # Ordered, may be composite
    interleavedIn: NotRequired[str]  # Parent table for storage co-location
    comment: NotRequired[str]
    rowDeletionPolicy: NotRequired[RowDeletionPolicy]


class ForeignKeySchema(TypedDict):
    """Foreign key constraint between two tables."""

    name: str
    referencingTable: str
    referencingColumns: list[str]
    referencedTable: str
    referencedColumns: list[str]  # Positional match with referencingColumns


class IndexKey(TypedDict):
    """Key part of a secondary index."""

    name: str
    direction: NotRequired[Literal["ASC", "DESC"]]


class IndexSchema(TypedDict):
    """Secondary index definition."""

    name: str
    table: str
    columns: list[IndexKey]
    storing: NotRequired[list[str]]
    interleavedIn: NotRequired[str]
    isUnique: NotRequired[bool]
    isNullFiltered: NotRequired[bool]


class SpannerSchema(TypedDict):
    """Root schema, possibly the union of several fragments."""

    tables: list[TableSchema]
    foreignKeys: NotRequired[list[ForeignKeySchema]]
    indexes: NotRequired[list[IndexSchema]]
