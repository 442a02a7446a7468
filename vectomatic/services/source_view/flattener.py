"""Linearize a document tree into the flat source view."""

from vectomatic.services.source_view.entries import EntryKind, FlatEntry, FlatSequence, end_id
from vectomatic.services.source_view.tree import DocumentTree, GroupNode


def flatten(tree: DocumentTree) -> FlatSequence:
    """
    Flatten a document tree into an ordered tuple of entries.

    Leaves produce one LEAF entry; groups produce a GROUP_START entry, the
    entries of their children one level deeper, and a GROUP_END entry whose
    id is the group id with the END_ prefix. Top-level nodes sit at depth 1.

    Args:
        tree: Document snapshot

    Returns:
        Flat sequence with leaves + 2 * groups entries, in tree order
    """
    result: list[FlatEntry] = []
    # Explicit stack so nesting depth is not bounded by the recursion limit.
    # Items are either a node to visit or a ready-made closing entry.
    stack: list[tuple[object, int]] = [(child, 1) for child in reversed(tree.children)]
    while stack:
        item, depth = stack.pop()
        if isinstance(item, FlatEntry):
            result.append(item)
        elif isinstance(item, GroupNode):
            result.append(FlatEntry(EntryKind.GROUP_START, item.id, depth, item.kind))
            stack.append((FlatEntry(EntryKind.GROUP_END, end_id(item.id), depth, item.kind), depth))
            stack.extend((child, depth + 1) for child in reversed(item.children))
        else:
            result.append(FlatEntry(EntryKind.LEAF, item.id, depth, item.kind))
    return tuple(result)
