"""End-to-end integration tests for Vect-O-Matic editing workflows."""

import json

import pytest

pytestmark = pytest.mark.integration

from vectomatic.models.shape import ShapeKind
from vectomatic.services.drawing_service import DrawingService
from vectomatic.services.editor_session import EditorSession
from vectomatic.services.export_service import ExportConfig, ExportFormat, ExportService
from vectomatic.services.shape_service import ShapeService
from vectomatic.services.source_view.flattener import flatten
from vectomatic.services.source_view.planner import DragPlan


class TestEditingWorkflow:
    """Drawing, editing, dragging and exporting in one session."""

    def test_build_drag_and_export(self, temp_db, outline):
        """Test building a drawing, reorganizing it by drags, and exporting it."""
        with temp_db.session() as session:
            drawing_service = DrawingService(session)
            shape_service = ShapeService(session)

            drawing = drawing_service.create_drawing(title="Badge")
            shape_service.add_leaf(drawing.id, ShapeKind.CIRCLE, shape_id="ring", attributes={"radius": 40})
            shape_service.add_group(drawing.id, shape_id="label")
            shape_service.add_leaf(drawing.id, ShapeKind.RECTANGLE, parent_group_id="label", shape_id="plate")
            shape_service.add_leaf(drawing.id, ShapeKind.PATH, shape_id="star")
            shape_service.add_path_point("star", "START", {"x": 0, "y": -10})
            shape_service.add_path_point("star", "LINE", {"x": 6, "y": 8})
            shape_service.add_path_point("star", "CLOSE")

            editor = EditorSession(session, drawing.id)
            assert editor.drag_end("star", "plate") == DragPlan("label", 0)
            assert editor.drag_end("ring", "END_label") == DragPlan("label", 2)
            assert outline(editor.tree) == [("label", ["star", "plate", "ring"])]

            # The view and the engine agree after every drag
            assert editor.sequence == flatten(drawing_service.get_tree(drawing.id))

            content = ExportService(session).export_drawing(drawing.id)["content"]
            assert 'd="M 0 -10 L 6 8 Z"' in content
            assert content.index('id="star"') < content.index('id="plate"') < content.index('id="ring"')

    def test_drag_group_between_groups(self, temp_db, outline):
        """Test moving a whole group, subtree included, into another group."""
        with temp_db.session() as session:
            drawing_service = DrawingService(session)
            shape_service = ShapeService(session)

            drawing = drawing_service.create_drawing(title="Layers")
            for group_id in ("a", "b"):
                shape_service.add_group(drawing.id, shape_id=group_id)
                for n in range(2):
                    shape_service.add_leaf(
                        drawing.id, ShapeKind.CIRCLE, parent_group_id=group_id, shape_id=f"{group_id}{n}"
                    )

            editor = EditorSession(session, drawing.id)
            assert editor.drag_end("a", "END_b") == DragPlan("b", 2)
            assert outline(editor.tree) == [("b", ["b0", "b1", ("a", ["a0", "a1"])])]

            # Dragging b into a would nest b inside itself
            assert editor.drag_end("b", "a0") is None
            assert outline(editor.tree) == [("b", ["b0", "b1", ("a", ["a0", "a1"])])]

    def test_sessions_see_each_others_changes(self, temp_db, outline):
        """Test that a drag made against a stale view is re-validated."""
        with temp_db.session() as session:
            drawing = DrawingService(session).create_drawing(title="Shared")
            drawing_id = drawing.id
            shapes = ShapeService(session)
            shapes.add_leaf(drawing_id, ShapeKind.CIRCLE, shape_id="x")
            shapes.add_leaf(drawing_id, ShapeKind.CIRCLE, shape_id="y")

        with temp_db.session() as first, temp_db.session() as second:
            viewer = EditorSession(first, drawing_id)
            ShapeService(second).remove_shape("y")

            assert viewer.drag_end("x", "y") is None
            assert outline(viewer.tree) == ["x"]


class TestPersistenceWorkflow:
    """Snapshots and exports across drawings."""

    def test_snapshot_into_new_drawing_after_delete(self, temp_db, outline):
        with temp_db.session() as session:
            drawing_service = DrawingService(session)
            shape_service = ShapeService(session)

            original = drawing_service.create_drawing(title="Original", metadata={"v": 1})
            shape_service.add_group(original.id, shape_id="g")
            shape_service.add_leaf(original.id, ShapeKind.RECTANGLE, parent_group_id="g", shape_id="r")
            snapshot = drawing_service.dump_snapshot(original.id)
            drawing_service.delete_drawing(original.id)

            copy = drawing_service.create_drawing(title="Copy")
            tree = drawing_service.load_snapshot(copy.id, snapshot)

            assert outline(tree) == [("g", ["r"])]
            assert drawing_service.get_drawing(copy.id).title == "Original"
            assert drawing_service.get_drawing(copy.id).meta == {"v": 1}
            assert json.loads(drawing_service.dump_snapshot(copy.id))["children"] == json.loads(snapshot)["children"]

    def test_source_export_matches_editor_lines(self, temp_db):
        with temp_db.session() as session:
            drawing_service = DrawingService(session)
            shape_service = ShapeService(session)
            drawing = drawing_service.create_drawing(title="Listing")
            shape_service.add_leaf(drawing.id, ShapeKind.CIRCLE, shape_id="c1")
            shape_service.add_group(drawing.id, shape_id="g1")
            shape_service.add_leaf(drawing.id, ShapeKind.RECTANGLE, parent_group_id="g1", shape_id="r1")

            config = ExportConfig(format=ExportFormat.SOURCE, include_ids=False)
            content = ExportService(session).export_drawing(drawing.id, config)["content"]
            editor = EditorSession(session, drawing.id)

            assert content.splitlines()[1:-1] == editor.source_lines()
