"""Service layer for business logic and validation."""

from vectomatic.services.drawing_service import DrawingService
from vectomatic.services.editor_session import EditorSession, Selection
from vectomatic.services.export_service import ExportService
from vectomatic.services.shape_service import ShapeService

__all__ = ["DrawingService", "ShapeService", "ExportService", "EditorSession", "Selection"]
