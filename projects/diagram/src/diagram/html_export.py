"""HTML export functionality for ER diagrams."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from diagram.builder import summarize_diagram
from diagram.mermaid import diagram_to_mermaid
from diagram.types import DiagramModel

TEMPLATE_DIR = Path(__file__).parent / "templates"


def diagram_to_html(model: DiagramModel, title: str = "ER Diagram") -> str:
    """Create a standalone HTML page that renders the diagram with Mermaid."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template("diagram.html")

    return template.render(
        title=title,
        mermaid=diagram_to_mermaid(model),
        model=model,
        stats=summarize_diagram(model),
        nodes=model["nodes"],
    )
