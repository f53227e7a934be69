"""Typed input-data errors raised before any layout is attempted."""


class GraphDataError(ValueError):
    """Base class for malformed graph snapshots."""

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "message": str(self)}


class DuplicateNodeError(GraphDataError):
    """Two concept nodes share the same id."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Duplicate node id: {node_id!r}")
        self.node_id = node_id

    def to_dict(self) -> dict:
        return {**super().to_dict(), "node_id": self.node_id}


class DuplicateConnectionError(GraphDataError):
    """Two connections share the same id."""

    def __init__(self, connection_id: str) -> None:
        super().__init__(f"Duplicate connection id: {connection_id!r}")
        self.connection_id = connection_id

    def to_dict(self) -> dict:
        return {**super().to_dict(), "connection_id": self.connection_id}


class DanglingEdgeError(GraphDataError):
    """A connection references a node that is not in the snapshot."""

    def __init__(self, connection_id: str, missing_node_id: str) -> None:
        super().__init__(
            f"Connection {connection_id!r} references unknown node {missing_node_id!r}"
        )
        self.connection_id = connection_id
        self.missing_node_id = missing_node_id

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            "connection_id": self.connection_id,
            "missing_node_id": self.missing_node_id,
        }
