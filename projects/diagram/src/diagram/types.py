"""TypedDict schemas for the renderer-agnostic diagram model."""

from typing import NotRequired, TypedDict


class DiagramNode(TypedDict):
    """One table in the diagram."""

    id: str
    label: str
    fields: list[str]  # Pre-formatted column labels


# "from" is a keyword, so the edge uses the functional syntax
DiagramEdge = TypedDict(
    "DiagramEdge",
    {
        "from": str,
        "to": str,
        "label": NotRequired[str],
    },
)


class DiagramModel(TypedDict):
    """Nodes and edges derived from a schema."""

    nodes: list[DiagramNode]
    edges: list[DiagramEdge]


class DiagramStats(TypedDict):
    """Summary counts for a diagram."""

    tables: int
    columns: int
    relationships: int
    interleaves: int
