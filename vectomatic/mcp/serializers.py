"""Model serialization for MCP responses."""

from typing import Any

from sqlalchemy import inspect

from vectomatic.services.source_view.entries import FlatEntry
from vectomatic.services.source_view.planner import DragPlan
from vectomatic.services.source_view.tree import GroupNode, Node


def serialize_model(obj: Any) -> dict[str, Any]:
    """
    Serialize a SQLAlchemy model's column attributes to a dictionary.

    Args:
        obj: SQLAlchemy model instance

    Returns:
        Dictionary representation of the model
    """
    result = {}
    for attr in inspect(obj).mapper.column_attrs:
        value = getattr(obj, attr.key)
        # SQLAlchemy reserves 'metadata', so models keep it as 'meta'
        output_key = "metadata" if attr.key == "meta" else attr.key
        if hasattr(value, "isoformat"):  # datetime
            value = value.isoformat()
        result[output_key] = value
    return result


def serialize_node(node: Node) -> dict[str, Any]:
    """Serialize a tree node with its children recursively."""
    result: dict[str, Any] = {
        "id": node.id,
        "kind": node.kind.value,
        "attributes": dict(node.attributes),
    }
    if isinstance(node, GroupNode):
        result["children"] = [serialize_node(child) for child in node.children]
    return result


def serialize_entry(entry: FlatEntry) -> dict[str, Any]:
    """Serialize one flat sequence entry."""
    return {
        "kind": entry.kind.value,
        "id": entry.id,
        "depth": entry.depth,
        "shape": entry.shape.value if entry.shape is not None else None,
    }


def serialize_plan(plan: DragPlan | None) -> dict[str, Any] | None:
    if plan is None:
        return None
    return {"container": plan.container, "index": plan.index}
