"""HTTP API for Vect-O-Matic: the MCP tools as JSON-RPC 2.0 over plain HTTP."""

import logging
from typing import Any, Dict

import uvicorn
from fastapi import Body, FastAPI
from mcp import McpError

from vectomatic import __version__
from vectomatic.config import get_settings
from vectomatic.logging_config import configure_logging
from vectomatic.mcp.tool_handlers import call_tool_handler
from vectomatic.mcp.tool_schemas import get_tool_schemas
from vectomatic.storage.database import get_db

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"

app = FastAPI(
    title="Vect-O-Matic MCP Service",
    description="Vector drawing editor with a drag-and-drop source view",
    version=__version__,
)


def _result(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _error(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}


def list_tool_definitions() -> list[Dict[str, Any]]:
    return [
        {
            "name": tool_def["name"],
            "description": tool_def["description"],
            "inputSchema": tool_def["inputSchema"],
        }
        for tool_def in get_tool_schemas().values()
    ]


async def handle_jsonrpc_request(request: Dict[str, Any]) -> Dict[str, Any]:
    """Handle JSON-RPC 2.0 request."""
    request_id = request.get("id")
    method = request.get("method")
    params = request.get("params") or {}

    if method == "initialize":
        return _result(request_id, {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": "vect-o-matic", "version": __version__},
        })
    elif method == "tools/list":
        return _result(request_id, {"tools": list_tool_definitions()})
    elif method == "tools/call":
        tool_name = params.get("name")
        arguments = params.get("arguments") or {}
        try:
            content = await call_tool_handler(tool_name, arguments, get_db())
        except McpError as e:
            logger.warning("Tool %s failed: %s", tool_name, e.error.message)
            return _error(request_id, e.error.code, e.error.message)
        return _result(request_id, {
            "content": [{"type": "text", "text": item.text} for item in content],
        })
    elif method in ("prompts/list", "resources/list"):
        # No prompts or resources are exposed
        return _result(request_id, {method.split("/")[0]: []})
    else:
        return _error(request_id, -32601, f"Method not found: {method}")


@app.post("/mcp")
async def mcp_endpoint(request: dict = Body(...)):
    """JSON-RPC 2.0 endpoint for MCP clients."""
    return await handle_jsonrpc_request(request)


@app.get("/tools")
async def tools():
    """List available tools."""
    return {"tools": list_tool_definitions()}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "vect-o-matic"}


def main() -> None:
    """Serve the HTTP API with uvicorn."""
    configure_logging()
    settings = get_settings()
    uvicorn.run(app, host=settings.http_host, port=settings.http_port)


if __name__ == "__main__":
    main()
