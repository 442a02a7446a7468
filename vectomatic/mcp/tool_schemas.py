"""MCP tool schema definitions."""

from typing import Any

from vectomatic.services.shape.attributes import PathCommand

PATH_COMMANDS = [command.value for command in PathCommand]

_VEC2 = {
    "type": "object",
    "properties": {"x": {"type": "integer"}, "y": {"type": "integer"}},
    "required": ["x", "y"],
}


def get_tool_schemas() -> dict[str, dict[str, Any]]:
    """Get all MCP tool schemas."""
    return {
        "create_drawing": {
            "name": "create_drawing",
            "description": "Create a new, empty drawing",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Drawing title"},
                    "metadata": {
                        "type": "object",
                        "description": "Optional drawing metadata",
                    },
                    "drawing_id": {
                        "type": "string",
                        "description": "Optional drawing ID (generates UUID if not provided)",
                    },
                },
                "required": ["title"],
            },
        },
        "get_drawing": {
            "name": "get_drawing",
            "description": "Get a drawing by ID, optionally with its shape tree",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "drawing_id": {"type": "string", "description": "Drawing ID"},
                    "include_shapes": {
                        "type": "boolean",
                        "description": "Include the shape tree in response (default: true)",
                    },
                },
                "required": ["drawing_id"],
            },
        },
        "list_drawings": {
            "name": "list_drawings",
            "description": "List drawings, optionally filtered by title",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "title_pattern": {
                        "type": "string",
                        "description": "Case-insensitive title substring",
                    },
                    "limit": {
                        "type": "integer",
                        "description": "Maximum number of results (default: 100)",
                    },
                    "offset": {
                        "type": "integer",
                        "description": "Number of results to skip (default: 0)",
                    },
                },
            },
        },
        "update_drawing": {
            "name": "update_drawing",
            "description": "Update drawing title or metadata",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "drawing_id": {"type": "string", "description": "Drawing ID"},
                    "title": {"type": "string", "description": "New title"},
                    "metadata": {
                        "type": "object",
                        "description": "New metadata (replaces existing)",
                    },
                },
                "required": ["drawing_id"],
            },
        },
        "delete_drawing": {
            "name": "delete_drawing",
            "description": "Delete a drawing and all of its shapes",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "drawing_id": {"type": "string", "description": "Drawing ID"},
                },
                "required": ["drawing_id"],
            },
        },
        "add_shape": {
            "name": "add_shape",
            "description": "Append a circle, rectangle or path to the drawing or a group",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "drawing_id": {"type": "string", "description": "Drawing ID"},
                    "kind": {
                        "type": "string",
                        "enum": ["CIRCLE", "RECTANGLE", "PATH"],
                        "description": "Shape kind",
                    },
                    "parent_group_id": {
                        "type": "string",
                        "description": "Optional group to append to (top level if omitted)",
                    },
                    "attributes": {
                        "type": "object",
                        "description": "Attributes overriding the kind's defaults",
                    },
                    "shape_id": {
                        "type": "string",
                        "description": "Optional shape ID (generates UUID if not provided)",
                    },
                },
                "required": ["drawing_id", "kind"],
            },
        },
        "add_group": {
            "name": "add_group",
            "description": "Append an empty group to the drawing or a group",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "drawing_id": {"type": "string", "description": "Drawing ID"},
                    "parent_group_id": {
                        "type": "string",
                        "description": "Optional group to append to (top level if omitted)",
                    },
                    "attributes": {
                        "type": "object",
                        "description": "Group style attributes (values may be null)",
                    },
                    "shape_id": {
                        "type": "string",
                        "description": "Optional group ID (generates UUID if not provided)",
                    },
                },
                "required": ["drawing_id"],
            },
        },
        "update_shape": {
            "name": "update_shape",
            "description": "Change some attributes of a shape",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "shape_id": {"type": "string", "description": "Shape ID"},
                    "attributes": {
                        "type": "object",
                        "description": "Attributes to change; others are kept",
                    },
                },
                "required": ["shape_id", "attributes"],
            },
        },
        "remove_shape": {
            "name": "remove_shape",
            "description": "Delete a shape (a group is deleted with its contents)",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "shape_id": {"type": "string", "description": "Shape ID"},
                },
                "required": ["shape_id"],
            },
        },
        "add_path_point": {
            "name": "add_path_point",
            "description": "Append a point to a path",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "path_id": {"type": "string", "description": "Path shape ID"},
                    "command": {
                        "type": "string",
                        "enum": PATH_COMMANDS,
                        "description": "Path command",
                    },
                    "pos": {**_VEC2, "description": "Point position"},
                    "point_id": {
                        "type": "string",
                        "description": "Optional point ID (generates UUID if not provided)",
                    },
                },
                "required": ["path_id", "command"],
            },
        },
        "update_path_point": {
            "name": "update_path_point",
            "description": "Change a path point's command or positions",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "path_id": {"type": "string", "description": "Path shape ID"},
                    "point_id": {"type": "string", "description": "Point ID"},
                    "command": {
                        "type": "string",
                        "enum": PATH_COMMANDS,
                        "description": "New command (resets handles)",
                    },
                    "pos": {**_VEC2, "description": "New position"},
                    "handle": {**_VEC2, "description": "New handle (S, Q)"},
                    "handle1": {**_VEC2, "description": "New first handle (C)"},
                    "handle2": {**_VEC2, "description": "New second handle (C)"},
                },
                "required": ["path_id", "point_id"],
            },
        },
        "remove_path_point": {
            "name": "remove_path_point",
            "description": "Remove a point from a path",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "path_id": {"type": "string", "description": "Path shape ID"},
                    "point_id": {"type": "string", "description": "Point ID"},
                },
                "required": ["path_id", "point_id"],
            },
        },
        "move_shape": {
            "name": "move_shape",
            "description": "Move a shape to the top level or into a group at an index",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "shape_id": {"type": "string", "description": "Shape ID"},
                    "group_id": {
                        "type": "string",
                        "description": "Destination group ID (top level if omitted or 'root')",
                    },
                    "index": {
                        "type": "integer",
                        "description": "Position among the destination's children (appends if omitted)",
                    },
                },
                "required": ["shape_id"],
            },
        },
        "get_source_view": {
            "name": "get_source_view",
            "description": "Get the linearized source view of a drawing",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "drawing_id": {"type": "string", "description": "Drawing ID"},
                    "include_lines": {
                        "type": "boolean",
                        "description": "Include rendered markup lines (default: true)",
                    },
                },
                "required": ["drawing_id"],
            },
        },
        "plan_move": {
            "name": "plan_move",
            "description": "Compute where dropping one source-view entry on another would move it, without moving",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "drawing_id": {"type": "string", "description": "Drawing ID"},
                    "active_id": {"type": "string", "description": "Dragged entry ID"},
                    "over_id": {"type": "string", "description": "Drop target entry ID"},
                },
                "required": ["drawing_id", "active_id", "over_id"],
            },
        },
        "drag_shape": {
            "name": "drag_shape",
            "description": "Drop one source-view entry on another and apply the resulting move",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "drawing_id": {"type": "string", "description": "Drawing ID"},
                    "active_id": {"type": "string", "description": "Dragged entry ID"},
                    "over_id": {"type": "string", "description": "Drop target entry ID"},
                },
                "required": ["drawing_id", "active_id", "over_id"],
            },
        },
        "export_drawing": {
            "name": "export_drawing",
            "description": "Render a drawing as SVG markup or as its source-view listing",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "drawing_id": {"type": "string", "description": "Drawing ID"},
                    "format": {
                        "type": "string",
                        "enum": ["svg", "source"],
                        "description": "Export format (default: svg)",
                    },
                    "include_ids": {
                        "type": "boolean",
                        "description": "Write shape IDs as id attributes (default: true)",
                    },
                    "width": {"type": "integer", "description": "Optional SVG width"},
                    "height": {"type": "integer", "description": "Optional SVG height"},
                },
                "required": ["drawing_id"],
            },
        },
        "dump_snapshot": {
            "name": "dump_snapshot",
            "description": "Serialize a drawing to a JSON snapshot",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "drawing_id": {"type": "string", "description": "Drawing ID"},
                },
                "required": ["drawing_id"],
            },
        },
        "load_snapshot": {
            "name": "load_snapshot",
            "description": "Replace a drawing's shapes with those of a JSON snapshot",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "drawing_id": {"type": "string", "description": "Drawing ID"},
                    "snapshot": {"type": "string", "description": "Snapshot JSON text"},
                },
                "required": ["drawing_id", "snapshot"],
            },
        },
    }
