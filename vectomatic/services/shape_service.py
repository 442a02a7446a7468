"""Shape service layer: the document engine's object operations."""

import uuid
from typing import Any

from sqlalchemy.orm import Session

from vectomatic.exceptions import (
    DatabaseError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from vectomatic.models.shape import Shape, ShapeKind
from vectomatic.services.shape.attributes import POINT_FIELDS, default_attributes, make_path_point
from vectomatic.services.shape.reordering import ShapeReorderer
from vectomatic.services.shape.tree_operations import ShapeTreeBuilder
from vectomatic.services.shape.validation import ShapeValidator
from vectomatic.storage.repositories import DrawingRepository, ShapeRepository


class ShapeService:
    """Service layer for shape CRUD and hierarchical moves with validation and error handling."""

    def __init__(self, session: Session):
        """
        Initialize shape service with database session.

        Args:
            session: SQLAlchemy database session
        """
        self.session = session
        self.drawing_repo = DrawingRepository(session)
        self.shape_repo = ShapeRepository(session)
        self.validator = ShapeValidator()
        self.tree_builder = ShapeTreeBuilder(self.shape_repo)
        self.reorderer = ShapeReorderer(self.session, self.shape_repo)

    def add_leaf(
        self,
        drawing_id: str,
        kind: ShapeKind | str,
        parent_group_id: str | None = None,
        attributes: dict[str, Any] | None = None,
        shape_id: str | None = None,
    ) -> Shape:
        """
        Append a circle, rectangle or path to a container.

        Args:
            drawing_id: Drawing ID
            kind: CIRCLE, RECTANGLE or PATH
            parent_group_id: Optional group to append to (top level if None)
            attributes: Optional attributes overriding the kind's defaults
            shape_id: Optional shape ID. If not provided, generates a UUID.

        Returns:
            Created shape

        Raises:
            ValidationError: If kind, attributes or IDs are invalid
            NotFoundError: If the drawing or parent group is not found
            DuplicateError: If a shape with the same ID already exists
            DatabaseError: If database operation fails
        """
        kind = self.validator.validate_kind(kind)
        if kind is ShapeKind.GROUP:
            raise ValidationError("Use add_group to create groups", "kind")
        return self._add(drawing_id, kind, parent_group_id, attributes, shape_id)

    def add_group(
        self,
        drawing_id: str,
        parent_group_id: str | None = None,
        attributes: dict[str, Any] | None = None,
        shape_id: str | None = None,
    ) -> Shape:
        """
        Append an empty group to a container.

        Raises:
            ValidationError: If attributes or IDs are invalid
            NotFoundError: If the drawing or parent group is not found
            DuplicateError: If a shape with the same ID already exists
            DatabaseError: If database operation fails
        """
        return self._add(drawing_id, ShapeKind.GROUP, parent_group_id, attributes, shape_id)

    def _add(
        self,
        drawing_id: str,
        kind: ShapeKind,
        parent_group_id: str | None,
        attributes: dict[str, Any] | None,
        shape_id: str | None,
    ) -> Shape:
        self.validator.validate_id(drawing_id, "drawing_id")
        if attributes is not None:
            self.validator.validate_attributes(kind, attributes)

        if self.drawing_repo.get_by_id(drawing_id) is None:
            raise NotFoundError("Drawing", drawing_id)

        if parent_group_id is not None:
            self.validator.validate_id(parent_group_id, "parent_group_id")
            parent = self.shape_repo.get_by_id(parent_group_id)
            if parent is None:
                raise NotFoundError("Shape", parent_group_id)
            if not parent.is_group:
                raise ValidationError(
                    f"Shape '{parent_group_id}' is not a group", "parent_group_id"
                )
            if parent.drawing_id != drawing_id:
                raise ValidationError(
                    "Parent group must belong to the same drawing", "parent_group_id"
                )

        if shape_id is None:
            shape_id = str(uuid.uuid4())
        else:
            self.validator.validate_new_shape_id(shape_id)
        if self.shape_repo.get_by_id(shape_id) is not None:
            raise DuplicateError("Shape", "id", shape_id)

        merged = default_attributes(kind)
        merged.update(attributes or {})

        try:
            shape = Shape(
                id=shape_id,
                drawing_id=drawing_id,
                parent_group_id=parent_group_id,
                kind=kind.value,
                order_index=self.reorderer.next_index(drawing_id, parent_group_id),
                attributes=merged,
            )
            self.shape_repo.create(shape)
            self.session.commit()
            return shape

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to add shape: {str(e)}", e) from e

    def get_shape(self, shape_id: str) -> Shape:
        """
        Get shape by ID.

        Raises:
            ValidationError: If shape_id is invalid
            NotFoundError: If shape is not found
        """
        self.validator.validate_id(shape_id, "shape_id")
        shape = self.shape_repo.get_by_id(shape_id)
        if shape is None:
            raise NotFoundError("Shape", shape_id)
        return shape

    def update_shape(self, shape_id: str, attributes: dict[str, Any]) -> Shape:
        """
        Apply a partial attribute edit.

        Only the given attributes change; names that are not attributes of
        the shape's kind are rejected.

        Raises:
            ValidationError: If shape_id or attributes are invalid
            NotFoundError: If shape is not found
            DatabaseError: If database operation fails
        """
        shape = self.get_shape(shape_id)
        self.validator.validate_attributes(ShapeKind(shape.kind), attributes)

        try:
            updated = dict(shape.attributes or {})
            updated.update(attributes)
            shape.attributes = updated
            self.shape_repo.update(shape)
            self.session.commit()
            return shape

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to update shape: {str(e)}", e) from e

    def remove_shape(self, shape_id: str) -> bool:
        """
        Delete a shape; a group takes its whole subtree with it.

        Returns:
            True if the shape was deleted, False if not found

        Raises:
            ValidationError: If shape_id is invalid
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(shape_id, "shape_id")

        try:
            shape = self.shape_repo.get_by_id(shape_id)
            if shape is None:
                return False
            drawing_id, parent_group_id = shape.drawing_id, shape.parent_group_id
            self.shape_repo.delete(shape_id)
            self.reorderer.compact(drawing_id, parent_group_id)
            self.session.commit()
            return True

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to remove shape: {str(e)}", e) from e

    def move_to_root(self, shape_id: str, index: int | None = None) -> Shape:
        """
        Move a shape to the drawing's top level.

        Args:
            shape_id: Shape ID
            index: Position among top-level shapes (appends if None or past the end)

        Raises:
            ValidationError: If shape_id or index is invalid
            NotFoundError: If shape is not found
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(shape_id, "shape_id")
        self.validator.validate_index(index)
        return self.reorderer.move(shape_id, None, index)

    def move_to_group(self, shape_id: str, group_id: str, index: int | None = None) -> Shape:
        """
        Move a shape into a group.

        Args:
            shape_id: Shape ID
            group_id: Destination group ID
            index: Position among the group's children (appends if None or past the end)

        Raises:
            ValidationError: If IDs or index are invalid, or the group is the shape
                             itself or inside its subtree
            NotFoundError: If the shape or group is not found
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(shape_id, "shape_id")
        self.validator.validate_id(group_id, "group_id")
        self.validator.validate_index(index)
        if self.tree_builder.would_create_cycle(shape_id, group_id):
            raise ValidationError(
                "Cannot move a shape into its own subtree (would create cycle)", "group_id"
            )
        return self.reorderer.move(shape_id, group_id, index)

    def get_shape_path(self, shape_id: str) -> list[Shape]:
        """
        Get the chain of groups from the top level down to the shape (inclusive).

        Raises:
            ValidationError: If shape_id is invalid
            NotFoundError: If shape is not found
        """
        self.validator.validate_id(shape_id, "shape_id")
        path = self.shape_repo.get_path_to_root(shape_id)
        if not path:
            raise NotFoundError("Shape", shape_id)
        return path

    # Path points

    def add_path_point(
        self,
        path_id: str,
        command: str,
        pos: dict[str, int] | None = None,
        point_id: str | None = None,
    ) -> dict[str, Any]:
        """
        Append a point to a path. Bezier handles are seeded from pos.

        Returns:
            The new point

        Raises:
            ValidationError: If the shape is not a path or the command/pos is invalid
            NotFoundError: If the path is not found
            DatabaseError: If database operation fails
        """
        path = self._get_path(path_id)
        command = self.validator.validate_command(command)
        if pos is not None:
            self.validator.validate_vec2(pos, "pos")

        point = make_path_point(command, pos, point_id)
        attributes = dict(path.attributes or {})
        points = list(attributes.get("points", []))
        if any(p["id"] == point["id"] for p in points):
            raise DuplicateError("Path point", "id", point["id"])
        points.append(point)
        attributes["points"] = points
        self._save_attributes(path, attributes)
        return point

    def update_path_point(
        self,
        path_id: str,
        point_id: str,
        command: str | None = None,
        **positions: dict[str, int],
    ) -> dict[str, Any]:
        """
        Edit one point of a path.

        Changing the command rebuilds the point at its current position
        with fresh default handles. Position keywords (pos, handle, handle1,
        handle2) that the command does not carry are rejected.

        Raises:
            ValidationError: If the edit does not fit the point's command
            NotFoundError: If the path or point is not found
            DatabaseError: If database operation fails
        """
        path = self._get_path(path_id)
        attributes = dict(path.attributes or {})
        points = [dict(p) for p in attributes.get("points", [])]
        for position, point in enumerate(points):
            if point["id"] == point_id:
                break
        else:
            raise NotFoundError("Path point", point_id)

        if command is not None:
            new_command = self.validator.validate_command(command)
            point = make_path_point(new_command, point.get("pos"), point_id=point_id)

        fields = POINT_FIELDS[self.validator.validate_command(point["type"])]
        for name, value in positions.items():
            if name not in fields:
                raise ValidationError(f"{point['type']} points have no {name}", name)
            self.validator.validate_vec2(value, name)
            point[name] = dict(value)

        points[position] = point
        attributes["points"] = points
        self._save_attributes(path, attributes)
        return point

    def remove_path_point(self, path_id: str, point_id: str) -> bool:
        """
        Remove a point from a path.

        Returns:
            True if the point was removed, False if the path has no such point
        """
        path = self._get_path(path_id)
        attributes = dict(path.attributes or {})
        points = list(attributes.get("points", []))
        remaining = [p for p in points if p["id"] != point_id]
        if len(remaining) == len(points):
            return False
        attributes["points"] = remaining
        self._save_attributes(path, attributes)
        return True

    def _get_path(self, path_id: str) -> Shape:
        shape = self.get_shape(path_id)
        if shape.kind != ShapeKind.PATH.value:
            raise ValidationError(f"Shape '{path_id}' is not a path", "path_id")
        return shape

    def _save_attributes(self, shape: Shape, attributes: dict[str, Any]) -> None:
        try:
            shape.attributes = attributes
            self.shape_repo.update(shape)
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to update path: {str(e)}", e) from e
