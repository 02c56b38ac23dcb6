"""MCP server exposing diagram generation as a tool."""

import json
from logging import getLogger
from pathlib import Path
from typing import Any

import anyio
from anyio import to_thread
from ddl import DdlParser
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from schema import SchemaError

from spannerspy import __version__
from spannerspy.pipeline import SchemaSource, UsageError, generate_diagram

logger = getLogger(__name__)

SERVER_NAME = "spannerspy"
TOOL_NAME = "spannerspy.renderDiagram"

TOOL_SPEC = {
    "name": TOOL_NAME,
    "title": "Generate ER diagram",
    "description": (
        "Convert Cloud Spanner schemas (JSON or DDL) into Mermaid ER diagrams "
        "or JSON diagram models. Provide exactly one schema source."
    ),
    "inputSchema": {
        "type": "object",
        "properties": {
            "format": {
                "type": "string",
                "enum": ["mermaid", "json"],
                "default": "mermaid",
            },
            "sample": {"type": "boolean"},
            "schemaJson": {"type": "string"},
            "schemaJsons": {"type": "array", "items": {"type": "string"}},
            "schemaPaths": {"type": "array", "items": {"type": "string"}},
            "ddl": {"type": "string"},
            "ddlPaths": {"type": "array", "items": {"type": "string"}},
        },
        "additionalProperties": False,
    },
}


def source_from_arguments(arguments: dict[str, Any]) -> SchemaSource:
    """Translate tool arguments into a schema source."""
    return SchemaSource(
        sample=bool(arguments.get("sample")),
        schema_json=arguments.get("schemaJson") or None,
        schema_jsons=tuple(arguments.get("schemaJsons") or ()),
        schema_paths=tuple(Path(p) for p in arguments.get("schemaPaths") or ()),
        ddl=arguments.get("ddl") or None,
        ddl_paths=tuple(Path(p) for p in arguments.get("ddlPaths") or ()),
    )


def render_diagram_tool(
    arguments: dict[str, Any],
    parser: DdlParser | None = None,
) -> str:
    """Run the diagram pipeline for one tool call."""
    fmt = arguments.get("format") or "mermaid"
    if fmt not in ("mermaid", "json"):
        msg = f"Unsupported format: {fmt}"
        raise UsageError(msg)
    return generate_diagram(source_from_arguments(arguments), fmt, parser=parser)


def error_content(message: str) -> list[TextContent]:
    """Wrap an error message as tool output."""
    return [
        TextContent(
            type="text",
            text=json.dumps({"error": message, "tool": TOOL_NAME}, indent=2),
        ),
    ]


def create_server(parser: DdlParser | None = None) -> Server:
    """Create and configure the MCP server instance."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List all available tools."""
        return [Tool(**TOOL_SPEC)]

    @server.call_tool()
    async def call_tool(name: str, arguments: Any) -> list[TextContent]:
        """Handle tool invocation."""
        if name != TOOL_NAME:
            return error_content(f"Unknown tool: {name}")

        logger.debug("Tool called: %s", name)
        try:
            # Blocking: file reads and the parser subprocess
            text = await to_thread.run_sync(
                render_diagram_tool,
                arguments or {},
                parser,
            )
        except (SchemaError, UsageError) as e:
            logger.warning("Tool %s failed: %s", name, e)
            return error_content(str(e))

        return [TextContent(type="text", text=text)]

    return server


async def serve(server: Server) -> None:
    """Serve MCP requests over stdin/stdout until the client disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def run_server() -> None:
    """Run the MCP server over stdio."""
    anyio.run(serve, create_server())
