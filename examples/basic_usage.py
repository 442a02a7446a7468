"""Basic usage example for Vect-O-Matic: build a drawing, drag shapes around, export it."""

from vectomatic.logging_config import configure_logging
from vectomatic.models.shape import ShapeKind
from vectomatic.services import DrawingService, EditorSession, ExportService, ShapeService
from vectomatic.storage import Database


def main():
    """Demonstrate the editing workflow."""
    configure_logging(log_format="text")

    # Initialize database (uses DATABASE_URL, SQLite by default)
    db = Database()
    db.create_tables()

    with db.session() as session:
        drawings = DrawingService(session)
        shapes = ShapeService(session)

        drawing = drawings.create_drawing(title="Getting Started", metadata={"author": "Vect-O-Matic"})
        print(f"Created drawing: {drawing.title} (ID: {drawing.id})")

        circle = shapes.add_leaf(drawing.id, ShapeKind.CIRCLE, attributes={"radius": 30})
        group = shapes.add_group(drawing.id, attributes={"stroke": [200, 0, 0, 1.0]})
        rect = shapes.add_leaf(drawing.id, ShapeKind.RECTANGLE, parent_group_id=group.id)
        path = shapes.add_leaf(drawing.id, ShapeKind.PATH)
        shapes.add_path_point(path.id, "START", {"x": 0, "y": 0})
        shapes.add_path_point(path.id, "BEZIER", {"x": 50, "y": 50})
        shapes.add_path_point(path.id, "CLOSE")

        editor = EditorSession(session, drawing.id)
        print("\nSource view:")
        for line in editor.source_lines():
            print(line)

        # Drop the circle onto the rectangle: it moves into the group
        plan = editor.drag_end(circle.id, rect.id)
        print(f"\nDragged circle -> {plan.container} at index {plan.index}")

        # Drop the path onto the group's closing entry: it is appended to the group
        plan = editor.drag_end(path.id, f"END_{group.id}")
        print(f"Dragged path -> {plan.container} at index {plan.index}")

        export = ExportService(session).export_drawing(drawing.id)
        print(f"\nSVG ({export['shape_count']} shapes):")
        print(export["content"])

        snapshot = drawings.dump_snapshot(drawing.id)
        print(f"\nSnapshot is {len(snapshot)} characters of JSON")


if __name__ == "__main__":
    main()
