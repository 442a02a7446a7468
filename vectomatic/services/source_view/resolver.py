"""Answer "which container holds this entry, and at which sibling index?" from the flat view.

Both queries are pure functions over an immutable flat sequence. They are
used on the sequence the user sees and, unchanged, on the simulated
sequence built by the drag planner.
"""

import logging

from vectomatic.exceptions import StructureError
from vectomatic.services.source_view.entries import (
    ROOT,
    EntryKind,
    FlatSequence,
    end_id,
    strip_end_prefix,
)

logger = logging.getLogger(__name__)


def find_entry(seq: FlatSequence, entry_id: str) -> int | None:
    """Position of the first entry with entry_id, or None."""
    for position, entry in enumerate(seq):
        if entry.id == entry_id:
            return position
    return None


def find_group_end(seq: FlatSequence, start: int, strict: bool = False) -> int | None:
    """
    Position of the GROUP_END matching the GROUP_START at start.

    Raises:
        StructureError: If the group is never closed and strict is set
    """
    closing_id = end_id(seq[start].id)
    for position in range(start + 1, len(seq)):
        entry = seq[position]
        if entry.kind is EntryKind.GROUP_END and entry.id == closing_id:
            return position
    return _structure_violation(f"Group '{seq[start].id}' has no closing entry", seq[start].id, strict)


def resolve_container(target_id: str, seq: FlatSequence, strict: bool = False) -> str | None:
    """
    Find the container that directly holds target_id.

    Scans forward from the target: the target's own closing entry is
    skipped, nested groups are jumped over whole, and the first other
    GROUP_END closes the enclosing group.

    Args:
        target_id: Entry id to locate
        seq: Flat sequence
        strict: Raise StructureError on malformed nesting instead of returning None

    Returns:
        ROOT, the enclosing group id, or None if target_id is not in seq
    """
    position = find_entry(seq, target_id)
    if position is None:
        return None

    own_end = end_id(target_id)
    i = position + 1
    while i < len(seq):
        entry = seq[i]
        if entry.kind is EntryKind.GROUP_END:
            if entry.id == own_end:
                i += 1
                continue
            return strip_end_prefix(entry.id)
        if entry.kind is EntryKind.GROUP_START:
            close = find_group_end(seq, i, strict)
            if close is None:
                return None
            i = close + 1
            continue
        i += 1
    return ROOT


def resolve_index(
    container: str, target_id: str, seq: FlatSequence, strict: bool = False
) -> int | None:
    """
    Position of target_id among the direct children of container.

    A nested group counts as one child no matter how many entries it spans.

    Args:
        container: ROOT or a group id
        target_id: Entry id; an END_ prefix is ignored
        seq: Flat sequence
        strict: Raise StructureError on malformed nesting instead of returning None

    Returns:
        0-based sibling index, or None if the container or target is missing
    """
    if container == ROOT:
        lower, upper = -1, len(seq)
    else:
        lower = _find_group_start(seq, container)
        if lower is None:
            return None
        upper = find_group_end(seq, lower, strict)
        if upper is None:
            return None

    target = strip_end_prefix(target_id)
    count = 0
    i = lower + 1
    while i < upper:
        entry = seq[i]
        if entry.id == target:
            return count
        if entry.kind is EntryKind.GROUP_START:
            close = find_group_end(seq, i, strict)
            if close is None:
                return None
            i = close + 1
        else:
            i += 1
        count += 1
    return None


def _find_group_start(seq: FlatSequence, group_id: str) -> int | None:
    for position, entry in enumerate(seq):
        if entry.kind is EntryKind.GROUP_START and entry.id == group_id:
            return position
    return None


def _structure_violation(message: str, entry_id: str, strict: bool) -> None:
    if strict:
        raise StructureError(message, entry_id)
    logger.warning("Malformed flat sequence: %s", message)
    return None
