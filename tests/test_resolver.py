"""Tests for container and sibling-index resolution over flat sequences."""

import pytest

pytestmark = pytest.mark.unit

from vectomatic.exceptions import StructureError
from vectomatic.models.shape import ShapeKind
from vectomatic.services.source_view.entries import ROOT, EntryKind, FlatEntry
from vectomatic.services.source_view.flattener import flatten
from vectomatic.services.source_view.resolver import (
    find_group_end,
    resolve_container,
    resolve_index,
)
from vectomatic.services.source_view.tree import DocumentTree, GroupNode, LeafNode


@pytest.fixture
def seq(sample_tree):
    return flatten(sample_tree)


@pytest.fixture
def unclosed_seq():
    """c1 followed by a group g1 that is never closed."""
    return (
        FlatEntry(EntryKind.LEAF, "c1", 1, ShapeKind.CIRCLE),
        FlatEntry(EntryKind.GROUP_START, "g1", 1, ShapeKind.GROUP),
        FlatEntry(EntryKind.LEAF, "r1", 2, ShapeKind.RECTANGLE),
    )


class TestResolveContainer:
    """Tests for resolve_container."""

    @pytest.mark.parametrize("target, expected", [
        ("c1", ROOT),
        ("g1", ROOT),
        ("r1", "g1"),
        ("c2", "g1"),
        ("p1", ROOT),
    ])
    def test_sample_containers(self, seq, target, expected):
        assert resolve_container(target, seq) == expected

    def test_closing_entry_belongs_to_parent(self):
        """The END entry of a nested group resolves to the outer group."""
        tree = DocumentTree(children=(
            GroupNode("outer", children=(GroupNode("inner"),)),
        ))
        seq = flatten(tree)

        assert resolve_container("END_inner", seq) == "outer"
        assert resolve_container("END_outer", seq) == ROOT

    def test_skips_nested_groups(self):
        """A leaf after a sibling group is not attributed to that group."""
        tree = DocumentTree(children=(
            GroupNode("outer", children=(
                GroupNode("inner", children=(LeafNode("x", ShapeKind.CIRCLE),)),
                LeafNode("y", ShapeKind.CIRCLE),
            )),
        ))
        seq = flatten(tree)

        assert resolve_container("inner", seq) == "outer"
        assert resolve_container("x", seq) == "inner"
        assert resolve_container("y", seq) == "outer"

    def test_unknown_id(self, seq):
        assert resolve_container("missing", seq) is None

    def test_empty_sequence(self):
        assert resolve_container("c1", ()) is None

    def test_malformed_returns_none(self, unclosed_seq):
        assert resolve_container("c1", unclosed_seq) is None

    def test_malformed_raises_when_strict(self, unclosed_seq):
        with pytest.raises(StructureError) as exc_info:
            resolve_container("c1", unclosed_seq, strict=True)
        assert exc_info.value.entry_id == "g1"


class TestResolveIndex:
    """Tests for resolve_index."""

    @pytest.mark.parametrize("container, target, expected", [
        (ROOT, "c1", 0),
        (ROOT, "g1", 1),
        (ROOT, "p1", 2),
        ("g1", "r1", 0),
        ("g1", "c2", 1),
    ])
    def test_sample_indices(self, seq, container, target, expected):
        assert resolve_index(container, target, seq) == expected

    def test_group_counts_once(self):
        """A group spanning many entries is a single sibling."""
        tree = DocumentTree(children=(
            GroupNode("g", children=tuple(
                LeafNode(f"x{i}", ShapeKind.CIRCLE) for i in range(5)
            )),
            LeafNode("after", ShapeKind.CIRCLE),
        ))

        assert resolve_index(ROOT, "after", flatten(tree)) == 1

    def test_end_prefix_is_ignored(self, seq):
        assert resolve_index(ROOT, "END_g1", seq) == 1

    def test_target_not_in_container(self, seq):
        assert resolve_index("g1", "p1", seq) is None

    def test_unknown_container(self, seq):
        assert resolve_index("nope", "c1", seq) is None

    def test_malformed_raises_when_strict(self, unclosed_seq):
        with pytest.raises(StructureError):
            resolve_index("g1", "r1", unclosed_seq, strict=True)

    def test_malformed_returns_none(self, unclosed_seq):
        assert resolve_index("g1", "r1", unclosed_seq) is None

    def test_every_child_of_random_trees(self, random_trees):
        """Container and index resolve back to the tree for every child of every container."""
        for tree in random_trees:
            seq = flatten(tree)
            siblings = {ROOT: tree.children}
            siblings.update(
                (node.id, node.children) for node, _ in tree.walk() if isinstance(node, GroupNode)
            )
            for container, children in siblings.items():
                for index, child in enumerate(children):
                    assert resolve_container(child.id, seq) == container
                    assert resolve_index(container, child.id, seq) == index


class TestFindGroupEnd:
    """Tests for find_group_end."""

    def test_matching_end(self, seq):
        assert find_group_end(seq, 1) == 4

    def test_nested_end_with_similar_id(self):
        """Only the END with the exact group id closes the group."""
        tree = DocumentTree(children=(
            GroupNode("g", children=(GroupNode("g2"),)),
        ))
        seq = flatten(tree)

        assert seq[find_group_end(seq, 0)].id == "END_g"
