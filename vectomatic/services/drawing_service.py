"""Drawing service layer: drawing CRUD, tree snapshots and persistence blobs."""

import json
import uuid
from typing import Any

from sqlalchemy.orm import Session

from vectomatic.exceptions import (
    DatabaseError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from vectomatic.models.drawing import Drawing
from vectomatic.models.shape import Shape, ShapeKind
from vectomatic.services.shape.attributes import default_attributes
from vectomatic.services.shape.tree_operations import ShapeTreeBuilder
from vectomatic.services.shape.validation import ShapeValidator
from vectomatic.services.source_view.tree import DocumentTree, GroupNode, Node
from vectomatic.storage.repositories import DrawingRepository, ShapeRepository

SNAPSHOT_VERSION = 1


class DrawingService:
    """Service layer for drawing CRUD operations with validation and error handling."""

    TITLE_MAX_LENGTH = 500

    def __init__(self, session: Session):
        """
        Initialize drawing service with database session.

        Args:
            session: SQLAlchemy database session
        """
        self.session = session
        self.drawing_repo = DrawingRepository(session)
        self.shape_repo = ShapeRepository(session)
        self.validator = ShapeValidator()
        self.tree_builder = ShapeTreeBuilder(self.shape_repo)

    def create_drawing(
        self,
        title: str,
        metadata: dict[str, Any] | None = None,
        drawing_id: str | None = None,
    ) -> Drawing:
        """
        Create a new, empty drawing.

        Args:
            title: Drawing title (required, non-empty)
            metadata: Optional drawing metadata (JSON structure)
            drawing_id: Optional drawing ID. If not provided, generates a UUID.

        Returns:
            Created drawing

        Raises:
            ValidationError: If title, metadata or ID is invalid
            DuplicateError: If a drawing with the same ID already exists
            DatabaseError: If database operation fails
        """
        self._validate_title(title)
        if metadata is not None:
            self._validate_metadata(metadata)

        if drawing_id is None:
            drawing_id = str(uuid.uuid4())
        else:
            self.validator.validate_id(drawing_id, "drawing_id")

        if self.drawing_repo.get_by_id(drawing_id) is not None:
            raise DuplicateError("Drawing", "id", drawing_id)

        try:
            drawing = Drawing(id=drawing_id, title=title, meta=metadata or {})
            self.drawing_repo.create(drawing)
            self.session.commit()
            return drawing

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to create drawing: {str(e)}", e) from e

    def get_drawing(self, drawing_id: str) -> Drawing:
        """
        Get drawing by ID.

        Raises:
            ValidationError: If drawing_id is invalid
            NotFoundError: If drawing is not found
        """
        self.validator.validate_id(drawing_id, "drawing_id")
        drawing = self.drawing_repo.get_by_id(drawing_id)
        if drawing is None:
            raise NotFoundError("Drawing", drawing_id)
        return drawing

    def list_drawings(
        self,
        title_pattern: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Drawing]:
        """
        List drawings, optionally filtered by a case-insensitive title substring.

        Raises:
            ValidationError: If limit or offset is negative
            DatabaseError: If database operation fails
        """
        if limit < 0:
            raise ValidationError("limit must be non-negative", "limit")
        if offset < 0:
            raise ValidationError("offset must be non-negative", "offset")

        try:
            if title_pattern:
                return self.drawing_repo.search_by_title(title_pattern, limit=limit, offset=offset)
            return self.drawing_repo.list(limit=limit, offset=offset)
        except Exception as e:
            raise DatabaseError(f"Failed to list drawings: {str(e)}", e) from e

    def update_drawing(
        self,
        drawing_id: str,
        title: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Drawing:
        """
        Update drawing title and/or metadata (metadata replaces the existing value).

        Raises:
            ValidationError: If drawing_id, title or metadata is invalid
            NotFoundError: If drawing is not found
            DatabaseError: If database operation fails
        """
        if title is not None:
            self._validate_title(title)
        if metadata is not None:
            self._validate_metadata(metadata)
        drawing = self.get_drawing(drawing_id)

        try:
            if title is not None:
                drawing.title = title
            if metadata is not None:
                drawing.meta = metadata
            self.drawing_repo.update(drawing)
            self.session.commit()
            return drawing

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to update drawing: {str(e)}", e) from e

    def delete_drawing(self, drawing_id: str) -> bool:
        """
        Delete a drawing and all its shapes.

        Returns:
            True if drawing was deleted, False if not found
        """
        self.validator.validate_id(drawing_id, "drawing_id")

        try:
            deleted = self.drawing_repo.delete(drawing_id)
            if deleted:
                self.session.commit()
            return deleted

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to delete drawing: {str(e)}", e) from e

    def get_tree(self, drawing_id: str) -> DocumentTree:
        """
        Snapshot a drawing's shape tree.

        Raises:
            ValidationError: If drawing_id is invalid
            NotFoundError: If drawing is not found
            DatabaseError: If database operation fails
        """
        self.get_drawing(drawing_id)
        try:
            return self.tree_builder.build_tree(drawing_id)
        except Exception as e:
            raise DatabaseError(f"Failed to read drawing tree: {str(e)}", e) from e

    def dump_snapshot(self, drawing_id: str) -> str:
        """
        Serialize a drawing to a JSON blob for local persistence.

        Returns:
            JSON string with the title, metadata and nested shapes
        """
        drawing = self.get_drawing(drawing_id)
        tree = self.get_tree(drawing_id)
        header = json.dumps({
            "version": SNAPSHOT_VERSION,
            "title": drawing.title,
            "metadata": drawing.meta or {},
        })
        return header[:-1] + ', "children": ' + _encode_children(tree.children) + "}"

    def load_snapshot(self, drawing_id: str, blob: str) -> DocumentTree:
        """
        Replace a drawing's content with the shapes of a JSON blob.

        Shape IDs are kept, so a blob can only be loaded into a drawing
        when its IDs are not used by other drawings.

        Returns:
            The new tree

        Raises:
            ValidationError: If the blob is malformed
            NotFoundError: If drawing is not found
            DuplicateError: If a shape ID is used elsewhere
            DatabaseError: If database operation fails
        """
        drawing = self.get_drawing(drawing_id)
        try:
            data = json.loads(blob)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Snapshot is not valid JSON: {e}", "snapshot") from e
        if not isinstance(data, dict) or not isinstance(data.get("children"), list):
            raise ValidationError("Snapshot must be an object with a children list", "snapshot")
        if data.get("version", SNAPSHOT_VERSION) != SNAPSHOT_VERSION:
            raise ValidationError(f"Unsupported snapshot version: {data['version']}", "snapshot")

        rows = self._rows_from_snapshot(drawing_id, data["children"])

        try:
            self.shape_repo.delete_by_drawing_id(drawing_id)
            for row in rows:
                self.shape_repo.create(row)
            if "title" in data:
                self._validate_title(data["title"])
                drawing.title = data["title"]
            if isinstance(data.get("metadata"), dict):
                drawing.meta = data["metadata"]
            self.session.commit()

        except ValidationError:
            self.session.rollback()
            raise
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to load snapshot: {str(e)}", e) from e

        return self.get_tree(drawing_id)

    def _rows_from_snapshot(self, drawing_id: str, children: list[Any]) -> list[Shape]:
        rows: list[Shape] = []
        seen: set[str] = set()
        # (nodes, parent group id) pairs still to convert
        pending: list[tuple[list[Any], str | None]] = [(children, None)]
        while pending:
            nodes, parent_id = pending.pop()
            for order_index, node in enumerate(nodes):
                if not isinstance(node, dict):
                    raise ValidationError("Snapshot shapes must be objects", "snapshot")
                kind = self.validator.validate_kind(node.get("type"))
                shape_id = node.get("id")
                self.validator.validate_new_shape_id(shape_id)
                if shape_id in seen:
                    raise DuplicateError("Shape", "id", shape_id)
                existing = self.shape_repo.get_by_id(shape_id)
                if existing is not None and existing.drawing_id != drawing_id:
                    raise DuplicateError("Shape", "id", shape_id)
                seen.add(shape_id)

                attributes = {
                    k: v for k, v in node.items() if k not in ("id", "type", "children")
                }
                self.validator.validate_attributes(kind, attributes)
                merged = default_attributes(kind)
                merged.update(attributes)
                rows.append(
                    Shape(
                        id=shape_id,
                        drawing_id=drawing_id,
                        parent_group_id=parent_id,
                        kind=kind.value,
                        order_index=order_index,
                        attributes=merged,
                    )
                )
                if kind is ShapeKind.GROUP:
                    pending.append((node.get("children") or [], shape_id))
        return rows

    def _validate_title(self, title: str) -> None:
        """Validate drawing title."""
        if not isinstance(title, str):
            raise ValidationError("Title must be a string", "title")
        if not title or not title.strip():
            raise ValidationError("Title is required and cannot be empty", "title")
        if len(title) > self.TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Title must be at most {self.TITLE_MAX_LENGTH} characters", "title"
            )

    def _validate_metadata(self, metadata: dict[str, Any]) -> None:
        """Validate metadata structure."""
        if not isinstance(metadata, dict):
            raise ValidationError("Metadata must be a dictionary", "metadata")


def _encode_children(children: tuple[Node, ...]) -> str:
    """
    JSON text for a nested children list.

    Written piece by piece from an explicit stack: json.dumps recurses once
    per nesting level and would stop short of the depth groups can reach.
    """
    parts: list[str] = []
    # Nodes still to encode, or literal text to emit as is
    pending: list[Node | str] = []

    def open_list(nodes: tuple[Node, ...]) -> None:
        parts.append("[")
        pending.append("]")
        for position, node in enumerate(reversed(nodes)):
            if position:
                pending.append(", ")
            pending.append(node)

    open_list(children)
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        head = json.dumps({"type": item.kind.value, "id": item.id, **item.attributes})
        if isinstance(item, GroupNode):
            parts.append(head[:-1] + ', "children": ')
            pending.append("}")
            open_list(item.children)
        else:
            parts.append(head)
    return "".join(parts)
