"""Storage layer for Vect-O-Matic."""

from vectomatic.storage.database import Database, get_db
from vectomatic.storage.repositories import DrawingRepository, ShapeRepository

__all__ = [
    "Database",
    "get_db",
    "DrawingRepository",
    "ShapeRepository",
]
