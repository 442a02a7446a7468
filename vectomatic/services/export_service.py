"""Export service for rendering drawings as SVG markup or as the source-view listing."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from sqlalchemy.orm import Session

from vectomatic.models.shape import ShapeKind
from vectomatic.services.drawing_service import DrawingService
from vectomatic.services.shape.attributes import PathCommand
from vectomatic.services.source_view.entries import EntryKind, FlatEntry
from vectomatic.services.source_view.flattener import flatten
from vectomatic.services.source_view.tree import DocumentTree, Node

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


class ExportFormat(str, Enum):
    """Export format options."""

    SVG = "svg"
    SOURCE = "source"


@dataclass
class ExportConfig:
    """Configuration for drawing export."""

    format: ExportFormat = ExportFormat.SVG
    indent: str = "  "
    include_ids: bool = True
    width: Optional[int] = None
    height: Optional[int] = None


class ExportService:
    """Service for exporting drawings as markup text."""

    def __init__(self, session: Session):
        """
        Initialize export service.

        Args:
            session: Database session
        """
        self.session = session
        self.drawing_service = DrawingService(session)

    def export_drawing(self, drawing_id: str, config: Optional[ExportConfig] = None) -> dict[str, Any]:
        """
        Render a drawing.

        Args:
            drawing_id: Drawing ID to export
            config: Optional export configuration

        Returns:
            Dictionary with format, content (markup text) and shape_count

        Raises:
            ValidationError: If drawing_id is invalid
            NotFoundError: If drawing is not found
        """
        config = config or ExportConfig()
        tree = self.drawing_service.get_tree(drawing_id)
        lines = render_source_lines(tree, indent=config.indent, include_ids=config.include_ids)

        if config.format == ExportFormat.SVG:
            size = ""
            if config.width is not None:
                size += f' width="{config.width}"'
            if config.height is not None:
                size += f' height="{config.height}"'
            header = f'<svg xmlns="{SVG_NAMESPACE}"{size}>'
        else:
            header = "<svg>"
        content = "\n".join([header, *lines, "</svg>"])

        return {
            "format": ExportFormat(config.format).value,
            "content": content,
            "shape_count": tree.count_leaves() + tree.count_groups(),
        }


def render_source_lines(tree: DocumentTree, indent: str = "  ", include_ids: bool = False) -> list[str]:
    """One markup line per flat entry, indented by depth."""
    nodes = {node.id: node for node, _ in tree.walk()}
    lines = []
    for entry in flatten(tree):
        node = nodes[entry.object_id]
        lines.append(f"{indent * entry.depth}{render_entry(entry, node, include_ids)}")
    return lines


def render_entry(entry: FlatEntry, node: Node, include_ids: bool = False) -> str:
    """Markup for a single flat entry."""
    if entry.kind is EntryKind.GROUP_END:
        return "</g>"

    attrs = node.attributes
    parts: list[str] = []
    if include_ids:
        parts.append(f'id="{node.id}"')

    if entry.kind is EntryKind.GROUP_START:
        parts.extend(_style_parts(attrs))
        return "<g" + "".join(f" {p}" for p in parts) + ">"

    if node.kind is ShapeKind.CIRCLE:
        pos = attrs.get("pos", {"x": 0, "y": 0})
        parts += [f'cx="{pos["x"]}"', f'cy="{pos["y"]}"', f'r="{attrs.get("radius")}"']
        tag = "circle"
    elif node.kind is ShapeKind.RECTANGLE:
        pos = attrs.get("pos", {"x": 0, "y": 0})
        parts += [
            f'x="{pos["x"]}"',
            f'y="{pos["y"]}"',
            f'width="{attrs.get("width")}"',
            f'height="{attrs.get("height")}"',
        ]
        tag = "rect"
    else:
        parts.append(f'd="{path_data(attrs.get("points", []))}"')
        tag = "path"
    parts.extend(_style_parts(attrs))
    return f"<{tag} " + " ".join(parts) + "/>"


def path_data(points: list[dict[str, Any]]) -> str:
    """SVG path data for a list of path points."""
    return " ".join(_point_data(point) for point in points)


def rgba(color: list[Any]) -> str:
    red, green, blue, opacity = color
    return f"rgba({red}, {green}, {blue}, {opacity})"


def _style_parts(attrs: dict[str, Any]) -> list[str]:
    parts = []
    if attrs.get("fill") is not None:
        parts.append(f'fill="{rgba(attrs["fill"])}"')
    if attrs.get("stroke") is not None:
        parts.append(f'stroke="{rgba(attrs["stroke"])}"')
    if attrs.get("stroke_width") is not None:
        parts.append(f'stroke-width="{attrs["stroke_width"]}"')
    if attrs.get("opacity") is not None:
        parts.append(f'opacity="{attrs["opacity"]}"')
    return parts


def _xy(vec: dict[str, Any]) -> str:
    return f"{vec['x']} {vec['y']}"


def _point_data(point: dict[str, Any]) -> str:
    command = PathCommand(point["type"])
    if command is PathCommand.START:
        return f"M {_xy(point['pos'])}"
    if command is PathCommand.LINE:
        return f"L {_xy(point['pos'])}"
    if command is PathCommand.CLOSE:
        return "Z"
    if command is PathCommand.BEZIER:
        return f"C {_xy(point['handle1'])} {_xy(point['handle2'])} {_xy(point['pos'])}"
    if command is PathCommand.BEZIER_REFLECT:
        return f"S {_xy(point['handle'])} {_xy(point['pos'])}"
    if command is PathCommand.BEZIER_QUAD:
        return f"Q {_xy(point['handle'])} {_xy(point['pos'])}"
    return f"T {_xy(point['pos'])}"
