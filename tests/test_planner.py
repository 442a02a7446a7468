"""Tests for planning hierarchical moves from drags on the flat source view."""

import pytest

pytestmark = pytest.mark.unit

from vectomatic.exceptions import StructureError
from vectomatic.models.shape import ShapeKind
from vectomatic.services.source_view.entries import ROOT, EntryKind, FlatEntry
from vectomatic.services.source_view.flattener import flatten
from vectomatic.services.source_view.planner import DragPlan, plan_move
from vectomatic.services.source_view.resolver import resolve_container, resolve_index
from vectomatic.services.source_view.tree import DocumentTree, GroupNode, LeafNode


@pytest.fixture
def seq(sample_tree):
    return flatten(sample_tree)


class TestPlanMoveExamples:
    """Drops on the drawing root[c1, g1[r1, c2], p1]."""

    def test_leaf_onto_leaf_in_group(self, seq):
        """c1 dropped on c2 takes c2's slot inside g1."""
        assert plan_move("c1", "c2", seq) == DragPlan("g1", 1)

    def test_group_after_last_leaf(self, seq):
        """The whole group moves to the end of the top level."""
        assert plan_move("g1", "p1", seq) == DragPlan(ROOT, 2)

    def test_drop_on_group_end_appends_to_group(self, seq):
        """Dropping on a closing entry lands at the group's child count."""
        assert plan_move("p1", "END_g1", seq) == DragPlan("g1", 2)

    def test_leaf_out_of_group_upwards(self, seq):
        assert plan_move("c2", "c1", seq) == DragPlan(ROOT, 0)

    def test_leaf_down_within_top_level(self, seq):
        assert plan_move("c1", "p1", seq) == DragPlan(ROOT, 2)

    def test_leaf_down_within_group(self, seq):
        assert plan_move("r1", "c2", seq) == DragPlan("g1", 1)

    def test_leaf_up_within_group(self, seq):
        assert plan_move("c2", "r1", seq) == DragPlan("g1", 0)

    def test_group_up_to_front(self, seq):
        assert plan_move("g1", "c1", seq) == DragPlan(ROOT, 0)

    def test_leaf_down_onto_group_start_enters_group(self, seq):
        """Moving down onto a group header lands after it, as first child."""
        assert plan_move("c1", "g1", seq) == DragPlan("g1", 0)

    def test_leaf_up_onto_group_start_stays_outside(self, seq):
        assert plan_move("p1", "g1", seq) == DragPlan(ROOT, 1)

    def test_plan_is_root(self, seq):
        assert plan_move("g1", "p1", seq).is_root
        assert not plan_move("c1", "c2", seq).is_root

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            DragPlan(ROOT, -1)

    def test_random_drags_give_non_negative_indices(self, random_trees):
        for tree in random_trees[:10]:
            seq = flatten(tree)
            ids = [entry.id for entry in seq]
            for active_id in ids:
                for over_id in ids:
                    plan = plan_move(active_id, over_id, seq)
                    if plan is not None:
                        assert plan.index >= 0


class TestPlanMoveIdempotence:
    """Dropping an entry on itself keeps its container and index."""

    @pytest.mark.parametrize("entry_id", ["c1", "g1", "r1", "c2", "p1"])
    def test_drop_on_own_slot(self, seq, entry_id):
        container = resolve_container(entry_id, seq)
        index = resolve_index(container, entry_id, seq)

        assert plan_move(entry_id, entry_id, seq) == DragPlan(container, index)


class TestPlanMoveRejected:
    """Drops that must be ignored."""

    def test_unknown_active(self, seq):
        assert plan_move("missing", "c1", seq) is None

    def test_unknown_over(self, seq):
        assert plan_move("c1", "missing", seq) is None

    def test_closing_entry_is_not_draggable(self, seq):
        assert plan_move("END_g1", "c1", seq) is None

    @pytest.mark.parametrize("over_id", ["r1", "c2", "END_g1"])
    def test_group_into_own_subtree(self, seq, over_id):
        assert plan_move("g1", over_id, seq) is None

    def test_group_into_nested_descendant(self):
        tree = DocumentTree(children=(
            GroupNode("outer", children=(
                GroupNode("inner", children=(LeafNode("x", ShapeKind.CIRCLE),)),
            )),
        ))

        assert plan_move("outer", "x", flatten(tree)) is None

    def test_malformed_sequence_returns_none(self):
        seq = (
            FlatEntry(EntryKind.GROUP_START, "g1", 1, ShapeKind.GROUP),
            FlatEntry(EntryKind.LEAF, "r1", 2, ShapeKind.RECTANGLE),
        )

        assert plan_move("g1", "r1", seq) is None

    def test_malformed_sequence_raises_when_strict(self):
        seq = (
            FlatEntry(EntryKind.GROUP_START, "g1", 1, ShapeKind.GROUP),
            FlatEntry(EntryKind.LEAF, "r1", 2, ShapeKind.RECTANGLE),
        )

        with pytest.raises(StructureError):
            plan_move("g1", "r1", seq, strict=True)


class TestPlanMoveShapes:
    """Empty groups, sibling groups and deep nesting."""

    def test_into_empty_group(self):
        seq = flatten(DocumentTree(children=(
            GroupNode("g0"),
            LeafNode("c1", ShapeKind.CIRCLE),
        )))

        assert plan_move("c1", "END_g0", seq) == DragPlan("g0", 0)

    def test_group_into_sibling_group(self):
        seq = flatten(DocumentTree(children=(
            GroupNode("a", children=(LeafNode("x", ShapeKind.CIRCLE),)),
            GroupNode("b", children=(LeafNode("y", ShapeKind.CIRCLE),)),
        )))

        assert plan_move("a", "END_b", seq) == DragPlan("b", 1)
        assert plan_move("b", "x", seq) == DragPlan("a", 0)

    def test_deeply_nested_target(self):
        depth = 300
        node = LeafNode("deep", ShapeKind.CIRCLE)
        for level in range(depth):
            node = GroupNode(f"g{level}", children=(node,))
        seq = flatten(DocumentTree(children=(LeafNode("top", ShapeKind.CIRCLE), node)))

        assert plan_move("top", "deep", seq) == DragPlan("g0", 0)
        assert plan_move("deep", "top", seq) == DragPlan(ROOT, 0)

    def test_input_sequence_is_untouched(self, seq):
        before = tuple(seq)
        plan_move("g1", "p1", seq)

        assert seq == before
