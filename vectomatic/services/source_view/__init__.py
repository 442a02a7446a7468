"""Linearized source view: flattening, container/index resolution and drag planning."""

from vectomatic.services.source_view.entries import (
    END_PREFIX,
    ROOT,
    EntryKind,
    FlatEntry,
    FlatSequence,
    end_id,
    strip_end_prefix,
)
from vectomatic.services.source_view.flattener import flatten
from vectomatic.services.source_view.planner import DragPlan, plan_move
from vectomatic.services.source_view.resolver import resolve_container, resolve_index
from vectomatic.services.source_view.tree import DocumentTree, GroupNode, LeafNode

__all__ = [
    "END_PREFIX",
    "ROOT",
    "EntryKind",
    "FlatEntry",
    "FlatSequence",
    "end_id",
    "strip_end_prefix",
    "flatten",
    "DragPlan",
    "plan_move",
    "resolve_container",
    "resolve_index",
    "DocumentTree",
    "GroupNode",
    "LeafNode",
]
