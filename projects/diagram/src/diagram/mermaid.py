"""Text renderings of the diagram model."""

import json
import re

from diagram.types import DiagramModel

RELATIONSHIP = "}o--||"

_INVALID_ID_CHARS = re.compile(r"[^A-Za-z0-9_]")


def format_id(value: str) -> str:
    """Replace characters Mermaid does not accept in entity names."""
    return _INVALID_ID_CHARS.sub("_", value)


def diagram_to_mermaid(model: DiagramModel) -> str:
    """Render a Mermaid ``erDiagram`` block."""
    lines = ["erDiagram"]

    for node in model["nodes"]:
        lines.append(f"  {format_id(node['id'])} {{")
        lines.extend(f"    {field}" for field in node["fields"])
        lines.append("  }")

    for edge in model["edges"]:
        label = f" : {edge['label']}" if edge.get("label") else ""
        lines.append(
            f"  {format_id(edge['from'])} {RELATIONSHIP} {format_id(edge['to'])}{label}",
        )

    return "\n".join(lines)


def diagram_to_json(model: DiagramModel) -> str:
    """Serialize the diagram model with two-space indentation."""
    return json.dumps(model, indent=2, ensure_ascii=False)
