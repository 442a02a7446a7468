"""Translate a drag gesture on the flat source view into a hierarchical move."""

import logging
from dataclasses import dataclass

from vectomatic.services.source_view.entries import (
    DRAG_FILLER_ID,
    DRAG_MARKER_ID,
    ROOT,
    EntryKind,
    FlatEntry,
    FlatSequence,
)
from vectomatic.services.source_view.resolver import (
    find_entry,
    find_group_end,
    resolve_container,
    resolve_index,
)

logger = logging.getLogger(__name__)

_MARKER = FlatEntry(EntryKind.LEAF, DRAG_MARKER_ID, 0)
_FILLER = FlatEntry(EntryKind.LEAF, DRAG_FILLER_ID, 0)


@dataclass(frozen=True)
class DragPlan:
    """
    Where a dragged object lands: a container and a sibling index.

    container is "root" or a group id; index is a 0-based position among
    the container's direct children and is never negative.
    """

    container: str
    index: int

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"DragPlan index must be >= 0, got {self.index}")

    @property
    def is_root(self) -> bool:
        return self.container == ROOT


def plan_move(
    active_id: str, over_id: str, seq: FlatSequence, strict: bool = False
) -> DragPlan | None:
    """
    Plan the move for a drag that ended with active_id over over_id.

    The dragged span (a leaf, or a group with its whole subtree) is cut out
    of the sequence and a single marker entry is put in its new slot,
    followed by fillers so the sequence keeps its length. The resolver then
    reads the marker's container and index off the simulated sequence.

    The slot is chosen the way a sortable list behaves: moving down within
    the same container lands after over_id, every other drop takes
    over_id's place. Dropping onto a group's closing entry from outside the
    group therefore appends to that group.

    Args:
        active_id: Id of the dragged entry
        over_id: Id of the entry it was dropped on
        seq: Flat sequence the drag was performed on
        strict: Raise StructureError on malformed nesting instead of returning None

    Returns:
        DragPlan, or None when the drop must be ignored (unknown ids, the
        active entry is a closing entry, or over_id lies inside the
        dragged group's own subtree)
    """
    active_start = find_entry(seq, active_id)
    over_position = find_entry(seq, over_id)
    if active_start is None or over_position is None:
        logger.debug("Drag ignored: unknown entry (active=%s, over=%s)", active_id, over_id)
        return None

    active = seq[active_start]
    if active.kind is EntryKind.GROUP_END:
        logger.debug("Drag ignored: closing entry %s is not movable", active_id)
        return None
    if active.kind is EntryKind.GROUP_START:
        active_end = find_group_end(seq, active_start, strict)
        if active_end is None:
            return None
    else:
        active_end = active_start

    if active_start < over_position <= active_end:
        logger.debug("Drag ignored: %s dropped inside its own subtree", active_id)
        return None

    slot = over_position
    if over_position > active_end:
        active_container = resolve_container(active_id, seq, strict)
        over_container = _container_of_drop_target(seq, over_position, strict)
        if active_container is None or over_container is None:
            return None
        if active_container == over_container:
            slot = over_position + 1

    simulated = _simulate_drop(seq, active_start, active_end, slot)
    container = resolve_container(DRAG_MARKER_ID, simulated, strict)
    if container is None:
        return None
    index = resolve_index(container, DRAG_MARKER_ID, simulated, strict)
    if index is None:
        return None
    return DragPlan(container=container, index=index)


def _container_of_drop_target(seq: FlatSequence, position: int, strict: bool) -> str | None:
    # A closing entry stands for the inside of the group it closes.
    entry = seq[position]
    if entry.kind is EntryKind.GROUP_END:
        return entry.object_id
    return resolve_container(entry.id, seq, strict)


def _simulate_drop(seq: FlatSequence, active_start: int, active_end: int, slot: int) -> FlatSequence:
    fillers = [_FILLER] * (active_end - active_start)
    simulated: list[FlatEntry] = []
    for position, entry in enumerate(seq):
        if position == slot:
            simulated.append(_MARKER)
            simulated.extend(fillers)
        if active_start <= position <= active_end:
            continue
        simulated.append(entry)
    if slot >= len(seq):
        simulated.append(_MARKER)
        simulated.extend(fillers)
    return tuple(simulated)
