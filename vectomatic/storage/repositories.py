"""Repository pattern implementation for data access layer."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from vectomatic.models.drawing import Drawing
from vectomatic.models.shape import Shape


class DrawingRepository:
    """Repository for drawing operations."""

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def create(self, drawing: Drawing) -> Drawing:
        """Create a new drawing."""
        self.session.add(drawing)
        self.session.flush()
        return drawing

    def get_by_id(self, drawing_id: str) -> Optional[Drawing]:
        """Get drawing by ID."""
        return self.session.get(Drawing, drawing_id)

    def list(self, limit: int = 100, offset: int = 0) -> list[Drawing]:
        """List drawings, newest first."""
        stmt = (
            select(Drawing)
            .order_by(Drawing.created_at.desc(), Drawing.id)
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(stmt))

    def search_by_title(self, title_pattern: str, limit: int = 100, offset: int = 0) -> list[Drawing]:
        """Search drawings by title pattern (case-insensitive substring)."""
        stmt = (
            select(Drawing)
            .where(Drawing.title.ilike(f"%{title_pattern}%"))
            .order_by(Drawing.created_at.desc(), Drawing.id)
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(stmt))

    def update(self, drawing: Drawing) -> Drawing:
        """Flush pending changes to an existing drawing."""
        self.session.flush()
        return drawing

    def delete(self, drawing_id: str) -> bool:
        """Delete a drawing by ID."""
        drawing = self.get_by_id(drawing_id)
        if drawing:
            self.session.delete(drawing)
            self.session.flush()
            return True
        return False


class ShapeRepository:
    """Repository for shape operations with hierarchical query support."""

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def create(self, shape: Shape) -> Shape:
        """Create a new shape."""
        self.session.add(shape)
        self.session.flush()
        return shape

    def get_by_id(self, shape_id: str) -> Optional[Shape]:
        """Get shape by ID."""
        return self.session.get(Shape, shape_id)

    def get_by_drawing_id(self, drawing_id: str) -> list[Shape]:
        """Get every shape of a drawing, ordered by sibling position."""
        stmt = (
            select(Shape)
            .where(Shape.drawing_id == drawing_id)
            .order_by(Shape.order_index, Shape.id)
        )
        return list(self.session.scalars(stmt))

    def get_children(self, drawing_id: str, parent_group_id: str | None) -> list[Shape]:
        """
        Get the direct children of a container in sibling order.

        Args:
            drawing_id: Drawing ID
            parent_group_id: Group ID, or None for the drawing's top level
        """
        if parent_group_id is None:
            condition = and_(Shape.drawing_id == drawing_id, Shape.parent_group_id.is_(None))
        else:
            condition = Shape.parent_group_id == parent_group_id
        stmt = select(Shape).where(condition).order_by(Shape.order_index, Shape.id)
        return list(self.session.scalars(stmt))

    def count_children(self, drawing_id: str, parent_group_id: str | None) -> int:
        if parent_group_id is None:
            condition = and_(Shape.drawing_id == drawing_id, Shape.parent_group_id.is_(None))
        else:
            condition = Shape.parent_group_id == parent_group_id
        return self.session.scalar(select(func.count(Shape.id)).where(condition)) or 0

    def get_path_to_root(self, shape_id: str) -> list[Shape]:
        """Get the chain of shapes from the top level down to shape_id (inclusive)."""
        path: list[Shape] = []
        seen: set[str] = set()
        current = self.get_by_id(shape_id)
        while current is not None and current.id not in seen:
            seen.add(current.id)
            path.append(current)
            if current.parent_group_id is None:
                break
            current = self.get_by_id(current.parent_group_id)
        path.reverse()
        return path

    def update(self, shape: Shape) -> Shape:
        """Flush pending changes to an existing shape."""
        self.session.flush()
        return shape

    def delete(self, shape_id: str) -> bool:
        """Delete a shape and its subtree."""
        shape = self.get_by_id(shape_id)
        if shape:
            self.session.delete(shape)
            self.session.flush()
            return True
        return False

    def delete_by_drawing_id(self, drawing_id: str) -> int:
        """Delete every shape of a drawing, returning how many top-level shapes went."""
        top_level = self.get_children(drawing_id, None)
        for shape in top_level:
            self.session.delete(shape)
        self.session.flush()
        return len(top_level)
