"""Shape model for circles, rectangles, paths and groups."""

from enum import Enum
from typing import Any, Optional

from sqlalchemy import ForeignKey, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vectomatic.models.base import Base, TimestampMixin


class ShapeKind(str, Enum):
    """Kinds of drawable objects."""

    CIRCLE = "CIRCLE"
    RECTANGLE = "RECTANGLE"
    PATH = "PATH"
    GROUP = "GROUP"


class Shape(Base, TimestampMixin):
    """A node of a drawing's shape tree.

    Top-level shapes have no parent group. Siblings are ordered by
    order_index, which is kept compact (0..n-1) within each container.
    """

    __tablename__ = "shapes"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    drawing_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("drawings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_group_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        ForeignKey("shapes.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    attributes: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON, nullable=True, default=dict
    )

    drawing: Mapped["Drawing"] = relationship("Drawing", back_populates="shapes")
    parent_group: Mapped[Optional["Shape"]] = relationship(
        "Shape", remote_side=[id], back_populates="children"
    )
    children: Mapped[list["Shape"]] = relationship(
        "Shape", back_populates="parent_group", cascade="all"
    )

    @property
    def is_group(self) -> bool:
        return self.kind == ShapeKind.GROUP.value

    def __repr__(self) -> str:
        return f"<Shape(id={self.id!r}, kind={self.kind!r}, drawing_id={self.drawing_id!r})>"
