"""Graph model module.

Provides:
- Snapshot validation and adjacency building (build_graph)
- Typed input-data errors
- In-process snapshot store with structural edit operations
"""

from conceptmap.graph.adapter import Graph, build_graph
from conceptmap.graph.errors import (
    DanglingEdgeError,
    DuplicateConnectionError,
    DuplicateNodeError,
    GraphDataError,
)
from conceptmap.graph.store import GraphStore, connection_id_for

__all__ = [
    # Adapter
    "Graph",
    "build_graph",
    # Errors
    "GraphDataError",
    "DuplicateNodeError",
    "DuplicateConnectionError",
    "DanglingEdgeError",
    # Store
    "GraphStore",
    "connection_id_for",
]
