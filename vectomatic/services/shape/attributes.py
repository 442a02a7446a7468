"""Default attributes per shape kind and path point construction."""

import copy
import uuid
from enum import Enum
from typing import Any

from vectomatic.models.shape import ShapeKind

WHITE = [255, 255, 255, 1.0]
BLACK = [0, 0, 0, 1.0]

# Offset applied to a point's position to seed bezier handles.
HANDLE_OFFSET = 20

DEFAULT_ATTRIBUTES: dict[ShapeKind, dict[str, Any]] = {
    ShapeKind.CIRCLE: {
        "pos": {"x": 0, "y": 0},
        "radius": 10,
        "fill": WHITE,
        "stroke": BLACK,
        "stroke_width": 2,
        "opacity": 1.0,
    },
    ShapeKind.RECTANGLE: {
        "pos": {"x": 0, "y": 0},
        "width": 10,
        "height": 5,
        "fill": WHITE,
        "stroke": BLACK,
        "stroke_width": 2,
        "opacity": 1.0,
    },
    ShapeKind.PATH: {
        "points": [],
        "fill": WHITE,
        "stroke": BLACK,
        "stroke_width": 2,
        "opacity": 1.0,
    },
    ShapeKind.GROUP: {
        "fill": None,
        "stroke": None,
        "stroke_width": None,
    },
}


class PathCommand(str, Enum):
    """SVG path commands a path point can hold."""

    START = "START"  # M
    LINE = "LINE"  # L
    CLOSE = "CLOSE"  # Z
    BEZIER = "BEZIER"  # C
    BEZIER_REFLECT = "BEZIER_REFLECT"  # S
    BEZIER_QUAD = "BEZIER_QUAD"  # Q
    BEZIER_QUAD_REFLECT = "BEZIER_QUAD_REFLECT"  # T


# Which point fields each command carries besides id and type.
POINT_FIELDS: dict[PathCommand, tuple[str, ...]] = {
    PathCommand.START: ("pos",),
    PathCommand.LINE: ("pos",),
    PathCommand.CLOSE: (),
    PathCommand.BEZIER: ("handle1", "handle2", "pos"),
    PathCommand.BEZIER_REFLECT: ("handle", "pos"),
    PathCommand.BEZIER_QUAD: ("handle", "pos"),
    PathCommand.BEZIER_QUAD_REFLECT: ("pos",),
}


def default_attributes(kind: ShapeKind) -> dict[str, Any]:
    """Fresh copy of the default attributes for kind."""
    return copy.deepcopy(DEFAULT_ATTRIBUTES[kind])


def make_path_point(
    command: PathCommand, pos: dict[str, int] | None = None, point_id: str | None = None
) -> dict[str, Any]:
    """
    Build a path point, seeding handles from pos.

    Args:
        command: Path command
        pos: Point position (default origin)
        point_id: Optional point ID. If not provided, generates a UUID.

    Returns:
        Point dictionary with id, type and the command's fields
    """
    pos = dict(pos or {"x": 0, "y": 0})
    point: dict[str, Any] = {"id": point_id or str(uuid.uuid4()), "type": command.value}
    fields = POINT_FIELDS[command]
    if "handle1" in fields:
        point["handle1"] = {"x": pos["x"] + HANDLE_OFFSET, "y": pos["y"] + HANDLE_OFFSET}
        point["handle2"] = {"x": pos["x"] + HANDLE_OFFSET, "y": pos["y"] - HANDLE_OFFSET}
    if "handle" in fields:
        point["handle"] = {"x": pos["x"], "y": pos["y"] + HANDLE_OFFSET}
    if "pos" in fields:
        point["pos"] = pos
    return point
