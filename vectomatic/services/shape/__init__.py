"""Shape service components: validation, tree operations and reordering."""

from vectomatic.services.shape.reordering import ShapeReorderer
from vectomatic.services.shape.tree_operations import ShapeTreeBuilder
from vectomatic.services.shape.validation import ShapeValidator

__all__ = ["ShapeValidator", "ShapeTreeBuilder", "ShapeReorderer"]
