"""Conceptmap data models."""

from conceptmap.models.concept import ConceptNode, Connection, ConnectionType, NodeType
from conceptmap.models.layout import LayoutEdge, LayoutNode, LayoutResult, Orientation, Point

__all__ = [
    "ConceptNode",
    "Connection",
    "ConnectionType",
    "NodeType",
    "LayoutNode",
    "LayoutEdge",
    "LayoutResult",
    "Orientation",
    "Point",
]
