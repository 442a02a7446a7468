"""Drawing model for storing vector documents."""

from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vectomatic.models.base import Base, TimestampMixin


class Drawing(Base, TimestampMixin):
    """Drawing model: the root container of a shape tree."""

    __tablename__ = "drawings"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    # 'metadata' is reserved by SQLAlchemy, so the attribute is 'meta'
    meta: Mapped[Optional[dict[str, Any]]] = mapped_column(
        "metadata", JSON, nullable=True, default=dict
    )

    shapes: Mapped[list["Shape"]] = relationship(
        "Shape", back_populates="drawing", cascade="all"
    )

    def __repr__(self) -> str:
        return f"<Drawing(id={self.id!r}, title={self.title!r})>"
