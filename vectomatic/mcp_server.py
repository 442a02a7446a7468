"""MCP (Model Context Protocol) server for Vect-O-Matic.

This server exposes drawing editing, the source view and drag planning to AI
agents via the Model Context Protocol. It uses the mcp library for JSON-RPC
2.0 communication over stdio.
"""

import asyncio
import logging

from mcp import McpError
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import ErrorData, TextContent, Tool

from vectomatic import __version__
from vectomatic.logging_config import configure_logging
from vectomatic.mcp.tool_handlers import call_tool_handler
from vectomatic.mcp.tool_schemas import get_tool_schemas
from vectomatic.storage.database import get_db

logger = logging.getLogger(__name__)

SERVER_NAME = "vect-o-matic"

app = Server(SERVER_NAME, version=__version__)


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List all available MCP tools."""
    return [Tool(**schema) for schema in get_tool_schemas().values()]


@app.call_tool()
async def call_tool(name: str, arguments: dict | None) -> list[TextContent]:
    """Handle tool calls."""
    if arguments is None:
        arguments = {}

    db = get_db()

    try:
        # Handlers manage their own database sessions
        return await call_tool_handler(name, arguments, db)
    except McpError:
        raise
    except Exception as e:
        logger.exception("Unexpected error handling tool %s", name)
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Internal error: {str(e)}",
            )
        ) from e


async def run() -> None:
    """Serve MCP over stdio until the client disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def main() -> None:
    """Main entry point for MCP server."""
    configure_logging()
    logger.info("Starting %s MCP server", SERVER_NAME)
    asyncio.run(run())


if __name__ == "__main__":
    main()
