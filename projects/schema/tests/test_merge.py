"""Tests for merging schema fragments."""

import pytest

from schema import EmptyInputError, SpannerSchema, merge_schemas


def _table(name: str) -> dict[str, object]:
    return {"name": name, "columns": [{"name": "Id", "type": "INT64"}]}


@pytest.fixture(name="fragments")
def schema_fragments() -> list[SpannerSchema]:
    """Three fragments, one of them carrying a foreign key."""
    return [
        {"tables": [_table("A1"), _table("A2")]},  # type: ignore[list-item]
        {
            "tables": [_table("B1")],  # type: ignore[list-item]
            "foreignKeys": [
                {
                    "name": "",
                    "referencingTable": "B1",
                    "referencingColumns": ["Id"],
                    "referencedTable": "A1",
                    "referencedColumns": ["Id"],
                },
            ],
        },
        {
            "tables": [_table("C1")],  # type: ignore[list-item]
            "indexes": [{"name": "C1ById", "table": "C1", "columns": [{"name": "Id"}]}],
        },
    ]


def test_tables_concatenated_in_order(fragments: list[SpannerSchema]) -> None:
    """Tables keep fragment order and in-fragment order."""
    merged = merge_schemas(fragments)

    assert [table["name"] for table in merged["tables"]] == ["A1", "A2", "B1", "C1"]


def test_merged_result_is_normalized(fragments: list[SpannerSchema]) -> None:
    """The union goes through normalization."""
    merged = merge_schemas(fragments)

    assert merged["tables"][0]["primaryKey"] == []
    assert merged["tables"][0]["columns"][0]["isNullable"] is True
    assert merged["foreignKeys"][0]["name"] == "B1_A1"


def test_empty_collections_omitted(fragments: list[SpannerSchema]) -> None:
    """Foreign keys and indexes are left out when no fragment has any."""
    merged = merge_schemas(fragments[:1])

    assert "foreignKeys" not in merged
    assert "indexes" not in merged


def test_indexes_concatenated(fragments: list[SpannerSchema]) -> None:
    """Indexes from every fragment are kept."""
    merged = merge_schemas(fragments)

    assert [index["name"] for index in merged["indexes"]] == ["C1ById"]


def test_merge_is_associative(fragments: list[SpannerSchema]) -> None:
    """Merging in steps gives the same tables as merging at once."""
    first, second, third = fragments

    stepwise = merge_schemas([merge_schemas([first, second]), third])
    direct = merge_schemas([first, second, third])

    assert stepwise["tables"] == direct["tables"]
    assert stepwise["foreignKeys"] == direct["foreignKeys"]


def test_duplicate_table_names_kept() -> None:
    """Tables with the same name in different fragments are not deduplicated."""
    merged = merge_schemas(
        [{"tables": [_table("Users")]}, {"tables": [_table("Users")]}],  # type: ignore[list-item]
    )

    assert [table["name"] for table in merged["tables"]] == ["Users", "Users"]


@pytest.mark.parametrize("empty_fragments", [[], [{"tables": []}, {"tables": []}]])
def test_no_tables_raises(empty_fragments: list[SpannerSchema]) -> None:
    """Merging fragments without any table fails."""
    with pytest.raises(EmptyInputError):
        merge_schemas(empty_fragments)


def test_null_tables_in_fragment_skipped() -> None:
    """A fragment whose tables are JSON null contributes nothing."""
    merged = merge_schemas(
        [{"tables": None}, {"tables": [_table("Users")]}],  # type: ignore[list-item]
    )

    assert [table["name"] for table in merged["tables"]] == ["Users"]
