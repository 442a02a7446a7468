"""Editor session: one drawing's source view, selection and drag handling."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from vectomatic.config import get_settings
from vectomatic.exceptions import NotFoundError
from vectomatic.models.shape import ShapeKind
from vectomatic.services.drawing_service import DrawingService
from vectomatic.services.export_service import render_source_lines
from vectomatic.services.shape_service import ShapeService
from vectomatic.services.source_view.entries import ROOT, EntryKind, FlatSequence
from vectomatic.services.source_view.flattener import flatten
from vectomatic.services.source_view.planner import DragPlan, plan_move
from vectomatic.services.source_view.resolver import find_entry
from vectomatic.services.source_view.tree import DocumentTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """The selected object, or the drawing root when id is None."""

    id: str | None = None
    kind: ShapeKind | None = None

    @property
    def is_root(self) -> bool:
        return self.id is None


ROOT_SELECTION = Selection()


class EditorSession:
    """
    Explicit editing context for one drawing.

    Owns the drawing's current flat sequence, rebuilt from a fresh tree
    snapshot after every change, and the current selection. Callers create
    one session per open drawing instead of sharing module-level state.
    """

    def __init__(self, session: Session, drawing_id: str, strict: bool | None = None):
        """
        Initialize the editor and load the drawing.

        Args:
            session: SQLAlchemy database session
            drawing_id: Drawing to edit
            strict: Raise on malformed flat sequences (defaults to the DEBUG setting)

        Raises:
            NotFoundError: If the drawing is not found
        """
        self.drawing_service = DrawingService(session)
        self.shape_service = ShapeService(session)
        self.drawing_id = drawing_id
        self.strict = get_settings().debug if strict is None else strict
        self.selection = ROOT_SELECTION
        self.tree = DocumentTree()
        self.sequence: FlatSequence = ()
        self.refresh()

    def refresh(self) -> FlatSequence:
        """Re-fetch the drawing and rebuild the flat sequence."""
        self.tree = self.drawing_service.get_tree(self.drawing_id)
        self.sequence = flatten(self.tree)
        if not self.selection.is_root and find_entry(self.sequence, self.selection.id) is None:
            self.selection = ROOT_SELECTION
        return self.sequence

    def select(self, shape_id: str) -> Selection:
        """
        Select a shape by id ("root" selects the drawing itself).

        Raises:
            NotFoundError: If no shape with shape_id is in the current view
        """
        if shape_id == ROOT:
            return self.select_root()
        position = find_entry(self.sequence, shape_id)
        if position is None or self.sequence[position].kind is EntryKind.GROUP_END:
            raise NotFoundError("Shape", shape_id)
        self.selection = Selection(id=shape_id, kind=self.sequence[position].shape)
        return self.selection

    def select_root(self) -> Selection:
        self.selection = ROOT_SELECTION
        return self.selection

    def plan(self, active_id: str, over_id: str) -> DragPlan | None:
        """Plan a drop against the current flat sequence without applying it."""
        return plan_move(active_id, over_id, self.sequence, strict=self.strict)

    def drag_end(self, active_id: str, over_id: str) -> DragPlan | None:
        """
        Handle the end of a drag on the source view.

        The drawing is re-read first so that a change made since the view
        was rendered cannot be planned against; if either id is gone the
        drop is ignored. Otherwise exactly one move is issued and the view
        refreshed.

        Args:
            active_id: Id of the dragged entry
            over_id: Id of the entry it was dropped on

        Returns:
            The applied plan, or None if the drop was ignored
        """
        fresh = self.refresh()
        if find_entry(fresh, active_id) is None or find_entry(fresh, over_id) is None:
            logger.debug(
                "Drop on drawing %s ignored: %s or %s no longer exists",
                self.drawing_id, active_id, over_id,
            )
            return None

        plan = plan_move(active_id, over_id, fresh, strict=self.strict)
        if plan is None:
            return None

        if plan.is_root:
            self.shape_service.move_to_root(active_id, plan.index)
        else:
            self.shape_service.move_to_group(active_id, plan.container, plan.index)
        logger.info(
            "Moved %s to %s at index %d in drawing %s",
            active_id, plan.container, plan.index, self.drawing_id,
        )
        self.refresh()
        return plan

    def source_lines(self, indent: str = "  ") -> list[str]:
        """The linearized source view, one markup line per flat entry."""
        return render_source_lines(self.tree, indent=indent)
