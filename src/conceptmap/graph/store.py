"""In-process graph model holding the current snapshot.

Stands in for the external data service: every edit produces a full new
snapshot that is validated through build_graph before it replaces the old
one, then listeners are notified so views can re-layout.
"""

import logging
import uuid
from collections.abc import Callable, Sequence

from conceptmap.graph.adapter import Graph, build_graph
from conceptmap.models import ConceptNode, Connection, ConnectionType, NodeType

logger = logging.getLogger(__name__)

GraphListener = Callable[[Graph], None]


def generate_node_id() -> str:
    """Generate a unique node id."""
    return f"node-{uuid.uuid4().hex[:12]}"


def connection_id_for(
    from_node_id: str,
    to_node_id: str,
    graph: Graph | None = None,
) -> str:
    """
    Deterministic id for a connection drawn between two nodes.

    Ids are `e-{from}-{to}`. Node ids may contain dashes, so different pairs
    can map to the same id; when `graph` already holds it a numeric suffix
    is added.
    """
    base = f"e-{from_node_id}-{to_node_id}"
    if graph is None or not graph.has_connection(base):
        return base
    suffix = 2
    while graph.has_connection(f"{base}-{suffix}"):
        suffix += 1
    return f"{base}-{suffix}"


class GraphStore:
    """Current graph snapshot plus structural edit operations."""

    def __init__(
        self,
        nodes: Sequence[ConceptNode] = (),
        connections: Sequence[Connection] = (),
    ) -> None:
        self._graph = build_graph(nodes, connections)
        self._listeners: list[GraphListener] = []

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def nodes(self) -> tuple[ConceptNode, ...]:
        return self._graph.nodes

    @property
    def connections(self) -> tuple[Connection, ...]:
        return self._graph.connections

    def subscribe(self, listener: GraphListener) -> Callable[[], None]:
        """Register a change listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace(
        self,
        nodes: Sequence[ConceptNode],
        connections: Sequence[Connection],
    ) -> Graph:
        """Swap in a full snapshot. Invalid snapshots leave the store untouched."""
        graph = build_graph(nodes, connections)
        self._graph = graph
        logger.info(
            f"Graph snapshot replaced: {len(graph.nodes)} nodes, "
            f"{len(graph.connections)} connections"
        )
        for listener in list(self._listeners):
            listener(graph)
        return graph

    # ------------------------------------------------------------------
    # Node operations
    # ------------------------------------------------------------------

    def add_node(self, node: ConceptNode) -> Graph:
        return self.replace([*self.nodes, node], self.connections)

    def remove_node(self, node_id: str) -> Graph:
        """Remove a node together with every connection touching it."""
        if node_id not in self._graph:
            raise KeyError(f"Node not found: {node_id}")
        return self.replace(
            [n for n in self.nodes if n.id != node_id],
            [
                c for c in self.connections
                if c.from_node_id != node_id and c.to_node_id != node_id
            ],
        )

    def add_child_node(
        self,
        parent_id: str,
        title: str,
        node_type: NodeType = NodeType.CONCEPT,
        node_id: str | None = None,
    ) -> ConceptNode:
        """Add a node plus a prerequisite connection from its parent."""
        if parent_id not in self._graph:
            raise KeyError(f"Node not found: {parent_id}")

        child = ConceptNode(id=node_id or generate_node_id(), title=title, type=node_type)
        edge = Connection(
            id=connection_id_for(parent_id, child.id, self._graph),
            from_node_id=parent_id,
            to_node_id=child.id,
            type=ConnectionType.PREREQUISITE,
        )
        self.replace([*self.nodes, child], [*self.connections, edge])
        return child

    # ------------------------------------------------------------------
    # Connection operations
    # ------------------------------------------------------------------

    def find_connection(self, from_node_id: str, to_node_id: str) -> Connection | None:
        for conn in self.connections:
            if conn.from_node_id == from_node_id and conn.to_node_id == to_node_id:
                return conn
        return None

    def add_connection(self, connection: Connection) -> Connection:
        """
        Add a connection.

        A connection between an already connected (from, to) pair is
        not added again; the existing one is returned instead.
        """
        existing = self.find_connection(connection.from_node_id, connection.to_node_id)
        if existing is not None:
            logger.debug(f"Connection {existing.id} already links this pair, skipping")
            return existing
        self.replace(self.nodes, [*self.connections, connection])
        return connection

    def remove_connection(self, connection_id: str) -> Graph:
        if not self._graph.has_connection(connection_id):
            raise KeyError(f"Connection not found: {connection_id}")
        return self.replace(
            self.nodes,
            [c for c in self.connections if c.id != connection_id],
        )
