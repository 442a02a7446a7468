"""Vect-O-Matic: vector drawings with a drag-and-drop source view."""

__version__ = "0.1.0"
