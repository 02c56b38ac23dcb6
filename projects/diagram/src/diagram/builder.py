"""Build the diagram model from a normalized schema."""

from schema import ColumnSchema, SpannerSchema, TableSchema

from diagram.types import DiagramEdge, DiagramModel, DiagramNode, DiagramStats

INTERLEAVED_LABEL = "INTERLEAVED IN"


def format_field(column: ColumnSchema, *, primary_key: bool) -> str:
    """Format a column as ``{*}{name}: {type}{[]}{?|!}``.

    The nullability suffix does not depend on primary key membership.
    """
    prefix = "*" if primary_key else ""
    array_suffix = "[]" if column.get("isArray") is True else ""
    null_suffix = "?" if column.get("isNullable") is not False else "!"
    return f"{prefix}{column['name']}: {column['type']}{array_suffix}{null_suffix}"


def _build_node(table: TableSchema) -> DiagramNode:
    """Build a diagram node for one table."""
    primary_key = set(table["primaryKey"])
    return {
        "id": table["name"],
        "label": table["name"],
        "fields": [
            format_field(column, primary_key=column["name"] in primary_key)
            for column in table["columns"]
        ],
    }


def build_diagram(schema: SpannerSchema) -> DiagramModel:
    """Generate the diagram model for a normalized schema.

    Foreign key edges come first, then interleaving edges, each in source
    order. Edge endpoints are not checked against the node set.
    """
    edges: list[DiagramEdge] = [
        {
            "from": fk["referencingTable"],
            "to": fk["referencedTable"],
            "label": fk["name"],
        }
        for fk in schema.get("foreignKeys", [])
    ]
    edges.extend(
        {"from": table["name"], "to": parent, "label": INTERLEAVED_LABEL}
        for table in schema["tables"]
        if (parent := table.get("interleavedIn"))
    )

    return {
        "nodes": [_build_node(table) for table in schema["tables"]],
        "edges": edges,
    }


def summarize_diagram(model: DiagramModel) -> DiagramStats:
    """Count tables, columns and relationships in a diagram."""
    return {
        "tables": len(model["nodes"]),
        "columns": sum(len(node["fields"]) for node in model["nodes"]),
        "relationships": len(model["edges"]),
        "interleaves": sum(
            edge.get("label") == INTERLEAVED_LABEL for edge in model["edges"]
        ),
    }
