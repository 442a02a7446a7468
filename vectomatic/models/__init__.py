"""Database models for Vect-O-Matic."""

from vectomatic.models.drawing import Drawing
from vectomatic.models.shape import Shape, ShapeKind

__all__ = ["Drawing", "Shape", "ShapeKind"]
