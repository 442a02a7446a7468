"""Shared pytest fixtures and test utilities for Vect-O-Matic tests."""

import itertools
import os
import random
import tempfile
from typing import Generator

import pytest

from vectomatic.models.shape import ShapeKind
from vectomatic.services.drawing_service import DrawingService
from vectomatic.services.shape_service import ShapeService
from vectomatic.services.source_view.tree import DocumentTree, GroupNode, LeafNode
from vectomatic.storage.database import Database, reset_db


@pytest.fixture(scope="function")
def temp_db() -> Generator[Database, None, None]:
    """
    Create a temporary SQLite database for testing.

    Yields:
        Database instance with tables created
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    reset_db()

    database = Database(f"sqlite:///{db_path}")
    database.create_tables()

    yield database

    database.dispose()
    reset_db()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def db_session(temp_db):
    """Get a database session from temp_db."""
    with temp_db.session() as session:
        yield session


@pytest.fixture
def drawing_service(db_session):
    """Create a drawing service instance."""
    return DrawingService(db_session)


@pytest.fixture
def shape_service(db_session):
    """Create a shape service instance."""
    return ShapeService(db_session)


@pytest.fixture
def sample_drawing(db_session) -> str:
    """
    Create the drawing root[c1, g1[r1, c2], p1].

    Returns:
        The drawing ID
    """
    drawings = DrawingService(db_session)
    shapes = ShapeService(db_session)
    drawing = drawings.create_drawing(title="Sample Drawing", drawing_id="d1")
    shapes.add_leaf(drawing.id, ShapeKind.CIRCLE, shape_id="c1")
    shapes.add_group(drawing.id, shape_id="g1")
    shapes.add_leaf(drawing.id, ShapeKind.RECTANGLE, parent_group_id="g1", shape_id="r1")
    shapes.add_leaf(drawing.id, ShapeKind.CIRCLE, parent_group_id="g1", shape_id="c2")
    shapes.add_leaf(drawing.id, ShapeKind.PATH, shape_id="p1")
    return drawing.id


@pytest.fixture
def sample_tree() -> DocumentTree:
    """The tree root[c1, g1[r1, c2], p1] without a database."""
    return DocumentTree(children=(
        LeafNode("c1", ShapeKind.CIRCLE),
        GroupNode("g1", children=(
            LeafNode("r1", ShapeKind.RECTANGLE),
            LeafNode("c2", ShapeKind.CIRCLE),
        )),
        LeafNode("p1", ShapeKind.PATH),
    ))


def _outline(tree: DocumentTree) -> list:
    def describe(node):
        if isinstance(node, GroupNode):
            return (node.id, [describe(child) for child in node.children])
        return node.id
    return [describe(node) for node in tree.children]


@pytest.fixture
def outline():
    """Nested ids of a tree, e.g. ["c1", ("g1", ["r1"])], for compact assertions."""
    return _outline


LEAF_KINDS = (ShapeKind.CIRCLE, ShapeKind.RECTANGLE, ShapeKind.PATH)


def _random_tree(rng: random.Random, max_depth: int = 4) -> DocumentTree:
    counter = itertools.count()

    def children(depth):
        nodes = []
        for _ in range(rng.randint(0, 4)):
            n = next(counter)
            if depth < max_depth and rng.random() < 0.35:
                nodes.append(GroupNode(f"g{n}", children=tuple(children(depth + 1))))
            else:
                nodes.append(LeafNode(f"s{n}", rng.choice(LEAF_KINDS)))
        return nodes

    return DocumentTree(children=tuple(children(1)))


@pytest.fixture
def random_trees() -> list[DocumentTree]:
    """Fifty seeded random trees, empty groups and empty drawings included."""
    rng = random.Random(20261019)
    return [_random_tree(rng) for _ in range(50)]
