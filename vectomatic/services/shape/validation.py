"""Shape validation logic."""

from typing import Any

from vectomatic.exceptions import ValidationError
from vectomatic.models.shape import ShapeKind
from vectomatic.services.shape.attributes import DEFAULT_ATTRIBUTES, POINT_FIELDS, PathCommand
from vectomatic.services.source_view.entries import END_PREFIX, RESERVED_IDS


class ShapeValidator:
    """Validates shape data according to business rules."""

    ID_MAX_LENGTH = 255
    COLOR_CHANNEL_MAX = 255

    @staticmethod
    def validate_id(shape_id: str, field: str = "id") -> None:
        """
        Validate a drawing or shape ID.

        Raises:
            ValidationError: If the ID is empty, too long or reserved
        """
        if not isinstance(shape_id, str):
            raise ValidationError("ID must be a string", field)
        if not shape_id or not shape_id.strip():
            raise ValidationError("ID cannot be empty", field)
        if len(shape_id) > ShapeValidator.ID_MAX_LENGTH:
            raise ValidationError(
                f"ID must be at most {ShapeValidator.ID_MAX_LENGTH} characters", field
            )

    @staticmethod
    def validate_new_shape_id(shape_id: str) -> None:
        """Validate an ID for a shape about to be created (reserved IDs are refused)."""
        ShapeValidator.validate_id(shape_id, "shape_id")
        if shape_id.startswith(END_PREFIX) or shape_id in RESERVED_IDS:
            raise ValidationError(f"Shape ID '{shape_id}' is reserved", "shape_id")

    @staticmethod
    def validate_kind(kind: Any) -> ShapeKind:
        """
        Parse a shape kind.

        Returns:
            The ShapeKind

        Raises:
            ValidationError: If kind is not a known shape kind
        """
        try:
            return ShapeKind(kind.upper() if isinstance(kind, str) else kind)
        except ValueError:
            raise ValidationError(f"Unknown shape kind: {kind!r}", "kind") from None

    @staticmethod
    def validate_attributes(kind: ShapeKind, attributes: dict[str, Any]) -> None:
        """
        Validate a (partial) attribute dictionary for kind.

        Raises:
            ValidationError: If a name is not an attribute of kind or a value is malformed
        """
        if not isinstance(attributes, dict):
            raise ValidationError("Attributes must be a dictionary", "attributes")

        allowed = DEFAULT_ATTRIBUTES[kind]
        for name, value in attributes.items():
            if name not in allowed:
                raise ValidationError(
                    f"'{name}' is not an attribute of {kind.value.lower()}", name
                )
            nullable = kind is ShapeKind.GROUP
            if name in ("fill", "stroke"):
                ShapeValidator.validate_color(value, name, nullable=nullable)
            elif name == "pos":
                ShapeValidator.validate_vec2(value, name)
            elif name in ("radius", "width", "height", "stroke_width"):
                if value is None and nullable:
                    continue
                ShapeValidator.validate_non_negative(value, name)
            elif name == "opacity":
                ShapeValidator.validate_opacity(value, name)
            elif name == "points":
                if not isinstance(value, list):
                    raise ValidationError("points must be a list", name)
                for point in value:
                    ShapeValidator.validate_point(point)

    @staticmethod
    def validate_color(value: Any, field: str, nullable: bool = False) -> None:
        if value is None and nullable:
            return
        if not isinstance(value, (list, tuple)) or len(value) != 4:
            raise ValidationError(f"{field} must be [red, green, blue, opacity]", field)
        red, green, blue, opacity = value
        for channel in (red, green, blue):
            if not _is_number(channel) or not 0 <= channel <= ShapeValidator.COLOR_CHANNEL_MAX:
                raise ValidationError(f"{field} channels must be between 0 and 255", field)
        ShapeValidator.validate_opacity(opacity, field)

    @staticmethod
    def validate_vec2(value: Any, field: str) -> None:
        if not isinstance(value, dict) or set(value) != {"x", "y"}:
            raise ValidationError(f"{field} must be an object with x and y", field)
        if not _is_number(value["x"]) or not _is_number(value["y"]):
            raise ValidationError(f"{field} coordinates must be numbers", field)

    @staticmethod
    def validate_non_negative(value: Any, field: str) -> None:
        if not _is_number(value) or value < 0:
            raise ValidationError(f"{field} must be a non-negative number", field)

    @staticmethod
    def validate_opacity(value: Any, field: str) -> None:
        if not _is_number(value) or not 0 <= value <= 1:
            raise ValidationError(f"{field} opacity must be between 0 and 1", field)

    @staticmethod
    def validate_point(point: Any) -> None:
        """Validate one path point dictionary."""
        if not isinstance(point, dict) or "id" not in point or "type" not in point:
            raise ValidationError("Path points need an id and a type", "points")
        command = ShapeValidator.validate_command(point["type"])
        for name in POINT_FIELDS[command]:
            if name not in point:
                raise ValidationError(f"{command.value} point is missing {name}", "points")
            ShapeValidator.validate_vec2(point[name], name)

    @staticmethod
    def validate_command(command: Any) -> PathCommand:
        try:
            return PathCommand(command.upper() if isinstance(command, str) else command)
        except ValueError:
            raise ValidationError(f"Unknown path command: {command!r}", "command") from None

    @staticmethod
    def validate_index(index: Any) -> None:
        if index is None:
            return
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise ValidationError("index must be a non-negative integer", "index")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
