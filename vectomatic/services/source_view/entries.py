"""Flat source-view entries and the identifiers they carry."""

from dataclasses import dataclass
from enum import Enum

from vectomatic.models.shape import ShapeKind

ROOT = "root"

# A GROUP_END entry's id is the group id with this prefix.
END_PREFIX = "END_"

# Transient ids used while simulating a drop; never valid shape ids.
DRAG_MARKER_ID = "__drag_marker__"
DRAG_FILLER_ID = "__drag_filler__"
RESERVED_IDS = frozenset({ROOT, DRAG_MARKER_ID, DRAG_FILLER_ID})


class EntryKind(str, Enum):
    """Tags of a flat entry."""

    LEAF = "LEAF"
    GROUP_START = "GROUP_START"
    GROUP_END = "GROUP_END"


@dataclass(frozen=True)
class FlatEntry:
    """One row of the linearized source view."""

    kind: EntryKind
    id: str
    depth: int
    shape: ShapeKind | None = None

    @property
    def object_id(self) -> str:
        """The id of the shape this entry belongs to."""
        return strip_end_prefix(self.id) if self.kind is EntryKind.GROUP_END else self.id


FlatSequence = tuple[FlatEntry, ...]


def end_id(group_id: str) -> str:
    """Id of the GROUP_END entry closing group_id."""
    return f"{END_PREFIX}{group_id}"


def strip_end_prefix(entry_id: str) -> str:
    """Recover a group id from its GROUP_END id; other ids pass through."""
    if entry_id.startswith(END_PREFIX):
        return entry_id[len(END_PREFIX):]
    return entry_id
