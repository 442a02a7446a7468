"""Tests for rendering drawings as SVG markup and source listings."""

import pytest

pytestmark = pytest.mark.unit

from vectomatic.exceptions import NotFoundError
from vectomatic.services.export_service import (
    ExportConfig,
    ExportFormat,
    ExportService,
    path_data,
    rgba,
)


@pytest.fixture
def export_service(db_session):
    return ExportService(db_session)


class TestExportDrawing:
    """Tests for export_drawing."""

    def test_svg(self, sample_drawing, export_service):
        result = export_service.export_drawing(sample_drawing)
        lines = result["content"].splitlines()

        assert result["format"] == "svg"
        assert result["shape_count"] == 5
        assert lines[0] == '<svg xmlns="http://www.w3.org/2000/svg">'
        assert lines[-1] == "</svg>"
        assert lines[1] == (
            '  <circle id="c1" cx="0" cy="0" r="10" fill="rgba(255, 255, 255, 1.0)"'
            ' stroke="rgba(0, 0, 0, 1.0)" stroke-width="2" opacity="1.0"/>'
        )
        assert lines[2] == '  <g id="g1">'
        assert lines[5] == "  </g>"

    def test_svg_size(self, sample_drawing, export_service):
        config = ExportConfig(width=640, height=480)
        content = export_service.export_drawing(sample_drawing, config)["content"]

        assert content.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="640" height="480">')

    def test_source_listing(self, sample_drawing, export_service):
        config = ExportConfig(format=ExportFormat.SOURCE, include_ids=False)
        result = export_service.export_drawing(sample_drawing, config)
        lines = result["content"].splitlines()

        assert result["format"] == "source"
        assert lines[0] == "<svg>"
        assert lines[3].startswith("    <rect x=\"0\" y=\"0\" width=\"10\" height=\"5\"")
        assert "id=" not in result["content"]

    def test_group_style(self, sample_drawing, shape_service, export_service):
        shape_service.update_shape("g1", {"fill": [10, 20, 30, 0.5], "stroke_width": 4})
        content = export_service.export_drawing(sample_drawing)["content"]

        assert '<g id="g1" fill="rgba(10, 20, 30, 0.5)" stroke-width="4">' in content

    def test_empty_drawing(self, drawing_service, export_service):
        drawing = drawing_service.create_drawing(title="Empty")
        result = export_service.export_drawing(drawing.id)

        assert result["shape_count"] == 0
        assert result["content"].splitlines()[-1] == "</svg>"

    def test_missing_drawing(self, export_service):
        with pytest.raises(NotFoundError):
            export_service.export_drawing("missing")


class TestPathData:
    """Tests for path command rendering."""

    def test_all_commands(self):
        points = [
            {"id": "1", "type": "START", "pos": {"x": 0, "y": 0}},
            {"id": "2", "type": "LINE", "pos": {"x": 10, "y": 0}},
            {
                "id": "3",
                "type": "BEZIER",
                "handle1": {"x": 1, "y": 2},
                "handle2": {"x": 3, "y": 4},
                "pos": {"x": 5, "y": 6},
            },
            {"id": "4", "type": "BEZIER_REFLECT", "handle": {"x": 7, "y": 8}, "pos": {"x": 9, "y": 9}},
            {"id": "5", "type": "BEZIER_QUAD", "handle": {"x": 1, "y": 1}, "pos": {"x": 2, "y": 2}},
            {"id": "6", "type": "BEZIER_QUAD_REFLECT", "pos": {"x": 3, "y": 3}},
            {"id": "7", "type": "CLOSE"},
        ]

        assert path_data(points) == "M 0 0 L 10 0 C 1 2 3 4 5 6 S 7 8 9 9 Q 1 1 2 2 T 3 3 Z"

    def test_empty_path(self):
        assert path_data([]) == ""

    def test_path_points_in_export(self, sample_drawing, shape_service, export_service):
        shape_service.add_path_point("p1", "START", {"x": 10, "y": 20})
        shape_service.add_path_point("p1", "BEZIER", {"x": 10, "y": 20})
        shape_service.add_path_point("p1", "CLOSE")
        content = export_service.export_drawing(sample_drawing)["content"]

        assert 'd="M 10 20 C 30 40 30 0 10 20 Z"' in content


def test_rgba():
    assert rgba([1, 2, 3, 0.5]) == "rgba(1, 2, 3, 0.5)"
