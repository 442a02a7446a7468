"""Shape reordering and re-parenting operations."""

from sqlalchemy.orm import Session

from vectomatic.exceptions import (
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from vectomatic.models.shape import Shape
from vectomatic.storage.repositories import ShapeRepository


class ShapeReorderer:
    """Handles shape moves between containers and sibling renumbering."""

    def __init__(self, session: Session, shape_repo: ShapeRepository):
        """
        Initialize reorderer with session and repository.

        Args:
            session: SQLAlchemy database session
            shape_repo: Shape repository for data access
        """
        self.session = session
        self.shape_repo = shape_repo

    def move(
        self,
        shape_id: str,
        new_parent_group_id: str | None,
        index: int | None = None,
    ) -> Shape:
        """
        Move a shape into a group (or to the top level) at a sibling index.

        The index counts the destination's children without the moved shape;
        None or an index past the end appends.

        Args:
            shape_id: Shape ID to move
            new_parent_group_id: Destination group ID (None for top level)
            index: Position among the destination's children

        Returns:
            The moved shape

        Raises:
            NotFoundError: If the shape or destination group is not found
            ValidationError: If the destination is not a group of the same drawing
            DatabaseError: If database operation fails
        """
        try:
            shape = self.shape_repo.get_by_id(shape_id)
            if shape is None:
                raise NotFoundError("Shape", shape_id)

            if new_parent_group_id is not None:
                new_parent = self.shape_repo.get_by_id(new_parent_group_id)
                if new_parent is None:
                    raise NotFoundError("Shape", new_parent_group_id)
                if not new_parent.is_group:
                    raise ValidationError(
                        f"Shape '{new_parent_group_id}' is not a group", "group_id"
                    )
                if new_parent.drawing_id != shape.drawing_id:
                    raise ValidationError(
                        "Destination group must belong to the same drawing", "group_id"
                    )

            old_parent_group_id = shape.parent_group_id
            siblings = [
                s for s in self.shape_repo.get_children(shape.drawing_id, new_parent_group_id)
                if s.id != shape.id
            ]
            if index is None or index > len(siblings):
                index = len(siblings)
            siblings.insert(index, shape)

            if old_parent_group_id != new_parent_group_id:
                left_behind = [
                    s for s in self.shape_repo.get_children(shape.drawing_id, old_parent_group_id)
                    if s.id != shape.id
                ]
                self._renumber(left_behind)

            shape.parent_group_id = new_parent_group_id
            self._renumber(siblings)
            self.shape_repo.update(shape)
            self.session.commit()
            return shape

        except (NotFoundError, ValidationError):
            raise
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to move shape: {str(e)}", e) from e

    def compact(self, drawing_id: str, parent_group_id: str | None) -> None:
        """Renumber a container's children to 0..n-1 keeping their order."""
        self._renumber(self.shape_repo.get_children(drawing_id, parent_group_id))
        self.session.flush()

    def next_index(self, drawing_id: str, parent_group_id: str | None) -> int:
        """Order index for a shape appended to a container."""
        return self.shape_repo.count_children(drawing_id, parent_group_id)

    @staticmethod
    def _renumber(shapes: list[Shape]) -> None:
        for order_index, shape in enumerate(shapes):
            if shape.order_index != order_index:
                shape.order_index = order_index
