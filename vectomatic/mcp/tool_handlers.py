"""MCP tool handlers for executing tool operations."""

import json
import logging
from typing import Any

from mcp import McpError
from mcp.types import ErrorData, TextContent

from vectomatic.exceptions import (
    DatabaseError,
    DuplicateError,
    NotFoundError,
    StructureError,
    ValidationError,
)
from vectomatic.services.drawing_service import DrawingService
from vectomatic.services.editor_session import EditorSession
from vectomatic.services.export_service import ExportConfig, ExportFormat, ExportService
from vectomatic.services.shape_service import ShapeService
from vectomatic.services.source_view.entries import ROOT
from vectomatic.mcp.serializers import (
    serialize_entry,
    serialize_model,
    serialize_node,
    serialize_plan,
)
from vectomatic.mcp.tool_schemas import get_tool_schemas

logger = logging.getLogger(__name__)

POSITION_FIELDS = ("pos", "handle", "handle1", "handle2")


def _text(result: Any) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(result, indent=2))]


# Drawing handlers
async def handle_create_drawing(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle create_drawing tool."""
    with db.session() as session:
        drawing_service = DrawingService(session)
        drawing = drawing_service.create_drawing(
            title=arguments["title"],
            metadata=arguments.get("metadata"),
            drawing_id=arguments.get("drawing_id"),
        )
        return _text(serialize_model(drawing))


async def handle_get_drawing(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle get_drawing tool."""
    with db.session() as session:
        drawing_service = DrawingService(session)
        drawing = drawing_service.get_drawing(arguments["drawing_id"])
        result = serialize_model(drawing)
        if arguments.get("include_shapes", True):
            tree = drawing_service.get_tree(drawing.id)
            result["shapes"] = [serialize_node(node) for node in tree.children]
        return _text(result)


async def handle_list_drawings(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle list_drawings tool."""
    with db.session() as session:
        drawing_service = DrawingService(session)
        drawings = drawing_service.list_drawings(
            title_pattern=arguments.get("title_pattern"),
            limit=arguments.get("limit", 100),
            offset=arguments.get("offset", 0),
        )
        return _text({"drawings": [serialize_model(d) for d in drawings]})


async def handle_update_drawing(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle update_drawing tool."""
    with db.session() as session:
        drawing_service = DrawingService(session)
        drawing = drawing_service.update_drawing(
            drawing_id=arguments["drawing_id"],
            title=arguments.get("title"),
            metadata=arguments.get("metadata"),
        )
        return _text(serialize_model(drawing))


async def handle_delete_drawing(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle delete_drawing tool."""
    with db.session() as session:
        drawing_service = DrawingService(session)
        deleted = drawing_service.delete_drawing(arguments["drawing_id"])
        return _text({"deleted": deleted})


# Shape handlers
async def handle_add_shape(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle add_shape tool."""
    with db.session() as session:
        shape_service = ShapeService(session)
        shape = shape_service.add_leaf(
            drawing_id=arguments["drawing_id"],
            kind=arguments["kind"],
            parent_group_id=arguments.get("parent_group_id"),
            attributes=arguments.get("attributes"),
            shape_id=arguments.get("shape_id"),
        )
        return _text(serialize_model(shape))


async def handle_add_group(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle add_group tool."""
    with db.session() as session:
        shape_service = ShapeService(session)
        group = shape_service.add_group(
            drawing_id=arguments["drawing_id"],
            parent_group_id=arguments.get("parent_group_id"),
            attributes=arguments.get("attributes"),
            shape_id=arguments.get("shape_id"),
        )
        return _text(serialize_model(group))


async def handle_update_shape(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle update_shape tool."""
    with db.session() as session:
        shape_service = ShapeService(session)
        shape = shape_service.update_shape(
            shape_id=arguments["shape_id"],
            attributes=arguments["attributes"],
        )
        return _text(serialize_model(shape))


async def handle_remove_shape(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle remove_shape tool."""
    with db.session() as session:
        shape_service = ShapeService(session)
        deleted = shape_service.remove_shape(arguments["shape_id"])
        return _text({"deleted": deleted})


async def handle_add_path_point(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle add_path_point tool."""
    with db.session() as session:
        shape_service = ShapeService(session)
        point = shape_service.add_path_point(
            path_id=arguments["path_id"],
            command=arguments["command"],
            pos=arguments.get("pos"),
            point_id=arguments.get("point_id"),
        )
        return _text(point)


async def handle_update_path_point(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle update_path_point tool."""
    positions = {name: arguments[name] for name in POSITION_FIELDS if name in arguments}
    with db.session() as session:
        shape_service = ShapeService(session)
        point = shape_service.update_path_point(
            arguments["path_id"],
            arguments["point_id"],
            command=arguments.get("command"),
            **positions,
        )
        return _text(point)


async def handle_remove_path_point(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle remove_path_point tool."""
    with db.session() as session:
        shape_service = ShapeService(session)
        removed = shape_service.remove_path_point(arguments["path_id"], arguments["point_id"])
        return _text({"deleted": removed})


async def handle_move_shape(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle move_shape tool."""
    group_id = arguments.get("group_id")
    with db.session() as session:
        shape_service = ShapeService(session)
        if group_id is None or group_id == ROOT:
            shape = shape_service.move_to_root(arguments["shape_id"], arguments.get("index"))
        else:
            shape = shape_service.move_to_group(
                arguments["shape_id"], group_id, arguments.get("index")
            )
        return _text(serialize_model(shape))


# Source view handlers
async def handle_get_source_view(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle get_source_view tool."""
    with db.session() as session:
        editor = EditorSession(session, arguments["drawing_id"])
        result: dict[str, Any] = {
            "drawing_id": editor.drawing_id,
            "entries": [serialize_entry(entry) for entry in editor.sequence],
        }
        if arguments.get("include_lines", True):
            result["lines"] = editor.source_lines()
        return _text(result)


async def handle_plan_move(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle plan_move tool."""
    with db.session() as session:
        editor = EditorSession(session, arguments["drawing_id"])
        plan = editor.plan(arguments["active_id"], arguments["over_id"])
        return _text({"plan": serialize_plan(plan)})


async def handle_drag_shape(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle drag_shape tool."""
    with db.session() as session:
        editor = EditorSession(session, arguments["drawing_id"])
        plan = editor.drag_end(arguments["active_id"], arguments["over_id"])
        return _text({
            "moved": plan is not None,
            "plan": serialize_plan(plan),
            "entries": [serialize_entry(entry) for entry in editor.sequence],
        })


# Export and persistence handlers
async def handle_export_drawing(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle export_drawing tool."""
    try:
        export_format = ExportFormat(arguments.get("format", ExportFormat.SVG.value))
    except ValueError:
        raise ValidationError(f"Unknown export format: {arguments.get('format')!r}", "format") from None

    config = ExportConfig(
        format=export_format,
        include_ids=arguments.get("include_ids", True),
        width=arguments.get("width"),
        height=arguments.get("height"),
    )
    with db.session() as session:
        export_service = ExportService(session)
        return _text(export_service.export_drawing(arguments["drawing_id"], config))


async def handle_dump_snapshot(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle dump_snapshot tool."""
    with db.session() as session:
        drawing_service = DrawingService(session)
        snapshot = drawing_service.dump_snapshot(arguments["drawing_id"])
        return _text({"drawing_id": arguments["drawing_id"], "snapshot": snapshot})


async def handle_load_snapshot(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle load_snapshot tool."""
    with db.session() as session:
        drawing_service = DrawingService(session)
        tree = drawing_service.load_snapshot(arguments["drawing_id"], arguments["snapshot"])
        return _text({
            "drawing_id": arguments["drawing_id"],
            "shapes": [serialize_node(node) for node in tree.children],
        })


# Tool handler mapping
TOOL_HANDLERS = {
    "create_drawing": handle_create_drawing,
    "get_drawing": handle_get_drawing,
    "list_drawings": handle_list_drawings,
    "update_drawing": handle_update_drawing,
    "delete_drawing": handle_delete_drawing,
    "add_shape": handle_add_shape,
    "add_group": handle_add_group,
    "update_shape": handle_update_shape,
    "remove_shape": handle_remove_shape,
    "add_path_point": handle_add_path_point,
    "update_path_point": handle_update_path_point,
    "remove_path_point": handle_remove_path_point,
    "move_shape": handle_move_shape,
    "get_source_view": handle_get_source_view,
    "plan_move": handle_plan_move,
    "drag_shape": handle_drag_shape,
    "export_drawing": handle_export_drawing,
    "dump_snapshot": handle_dump_snapshot,
    "load_snapshot": handle_load_snapshot,
}


async def call_tool_handler(tool_name: str, arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """
    Call the appropriate tool handler.

    Args:
        tool_name: Name of the tool to call
        arguments: Tool arguments
        db: Database instance

    Returns:
        List of TextContent with tool execution result

    Raises:
        McpError: If tool name is unknown or handler raises an error
    """
    if tool_name not in TOOL_HANDLERS:
        raise McpError(
            ErrorData(
                code=-32601,  # Method not found
                message=f"Unknown tool: {tool_name}",
            )
        )

    required = get_tool_schemas()[tool_name]["inputSchema"].get("required", [])
    missing = [name for name in required if arguments.get(name) is None]
    if missing:
        raise McpError(
            ErrorData(
                code=-32602,  # Invalid params
                message=f"Missing required arguments: {', '.join(missing)}",
            )
        )

    handler = TOOL_HANDLERS[tool_name]

    try:
        return await handler(arguments, db)
    except McpError:
        raise
    except ValidationError as e:
        raise McpError(
            ErrorData(
                code=-32602,  # Invalid params
                message=f"Validation error: {str(e)}",
            )
        ) from e
    except NotFoundError as e:
        raise McpError(
            ErrorData(
                code=-32001,  # Custom error: not found
                message=str(e),
            )
        ) from e
    except DuplicateError as e:
        raise McpError(
            ErrorData(
                code=-32002,  # Custom error: duplicate
                message=str(e),
            )
        ) from e
    except StructureError as e:
        logger.error("Malformed source view in tool %s: %s", tool_name, e)
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Structure error: {str(e)}",
            )
        ) from e
    except DatabaseError as e:
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Database error: {str(e)}",
            )
        ) from e
    except Exception as e:
        logger.exception("Unexpected error in tool %s", tool_name)
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Internal error: {str(e)}",
            )
        ) from e
