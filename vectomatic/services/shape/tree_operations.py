"""Shape tree operations."""

from collections import defaultdict

from vectomatic.models.shape import Shape, ShapeKind
from vectomatic.services.source_view.tree import DocumentTree, GroupNode, LeafNode, Node
from vectomatic.storage.repositories import ShapeRepository


class ShapeTreeBuilder:
    """Builds document tree snapshots and answers ancestry questions."""

    def __init__(self, shape_repo: ShapeRepository):
        """
        Initialize tree builder with repository.

        Args:
            shape_repo: Shape repository for data access
        """
        self.shape_repo = shape_repo

    def build_tree(self, drawing_id: str) -> DocumentTree:
        """
        Build an immutable snapshot of a drawing's shape tree.

        Args:
            drawing_id: Drawing ID

        Returns:
            DocumentTree with children in sibling order
        """
        shapes = self.shape_repo.get_by_drawing_id(drawing_id)
        children_of: dict[str | None, list[Shape]] = defaultdict(list)
        for shape in shapes:
            children_of[shape.parent_group_id].append(shape)

        # Pre-order with an explicit stack; reversed, every group comes after its descendants.
        order: list[Shape] = []
        stack = list(children_of[None])
        while stack:
            shape = stack.pop()
            order.append(shape)
            if shape.is_group:
                stack.extend(children_of[shape.id])

        built: dict[str, Node] = {}
        for shape in reversed(order):
            attributes = dict(shape.attributes or {})
            if shape.is_group:
                children = tuple(built[child.id] for child in children_of[shape.id])
                built[shape.id] = GroupNode(id=shape.id, children=children, attributes=attributes)
            else:
                built[shape.id] = LeafNode(
                    id=shape.id, kind=ShapeKind(shape.kind), attributes=attributes
                )

        return DocumentTree(children=tuple(built[shape.id] for shape in children_of[None]))

    def would_create_cycle(self, shape_id: str, new_parent_id: str | None) -> bool:
        """
        Check if moving shape_id under new_parent_id would create a cycle.

        Args:
            shape_id: Shape ID to move
            new_parent_id: Potential new parent group ID (None for top level)

        Returns:
            True if new_parent_id is the shape itself or one of its descendants
        """
        if new_parent_id is None:
            return False
        if shape_id == new_parent_id:
            return True
        ancestry = self.shape_repo.get_path_to_root(new_parent_id)
        return any(ancestor.id == shape_id for ancestor in ancestry)
