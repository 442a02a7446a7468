"""Immutable document tree snapshots handed out by the document engine."""

from dataclasses import dataclass, field
from typing import Any, Iterator, Union

from vectomatic.models.shape import ShapeKind


@dataclass(frozen=True)
class LeafNode:
    """A circle, rectangle or path."""

    id: str
    kind: ShapeKind
    attributes: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class GroupNode:
    """A group owning an ordered tuple of child nodes."""

    id: str
    children: tuple["Node", ...] = ()
    attributes: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def kind(self) -> ShapeKind:
        return ShapeKind.GROUP


Node = Union[LeafNode, GroupNode]


@dataclass(frozen=True)
class DocumentTree:
    """Snapshot of a drawing: the ordered top-level nodes."""

    children: tuple[Node, ...] = ()

    def walk(self) -> Iterator[tuple[Node, str | None]]:
        """Yield (node, parent group id) pairs in pre-order."""
        stack: list[tuple[Node, str | None]] = [(child, None) for child in reversed(self.children)]
        while stack:
            node, parent_id = stack.pop()
            yield node, parent_id
            if isinstance(node, GroupNode):
                stack.extend((child, node.id) for child in reversed(node.children))

    def count_leaves(self) -> int:
        return sum(1 for node, _ in self.walk() if isinstance(node, LeafNode))

    def count_groups(self) -> int:
        return sum(1 for node, _ in self.walk() if isinstance(node, GroupNode))
