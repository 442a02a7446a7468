"""MCP module with tool schemas, handlers, and serializers."""

from vectomatic.mcp.tool_handlers import call_tool_handler, TOOL_HANDLERS
from vectomatic.mcp.tool_schemas import get_tool_schemas
from vectomatic.mcp.serializers import serialize_entry, serialize_model, serialize_node

__all__ = [
    "call_tool_handler",
    "TOOL_HANDLERS",
    "get_tool_schemas",
    "serialize_entry",
    "serialize_model",
    "serialize_node",
]
