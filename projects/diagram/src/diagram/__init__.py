"""ER diagram model generation and rendering."""

from diagram.builder import (
    INTERLEAVED_LABEL,
    build_diagram,
    format_field,
    summarize_diagram,
)
from diagram.html_export import diagram_to_html
from diagram.mermaid import diagram_to_json, diagram_to_mermaid, format_id
from diagram.types import DiagramEdge, DiagramModel, DiagramNode, DiagramStats

__all__ = [
    "INTERLEAVED_LABEL",
    "DiagramEdge",
    "DiagramModel",
    "DiagramNode",
    "DiagramStats",
    "build_diagram",
    "diagram_to_html",
    "diagram_to_json",
    "diagram_to_mermaid",
    "format_field",
    "format_id",
    "summarize_diagram",
]
