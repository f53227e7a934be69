"""Graph model adapter.

Converts the concept/connection snapshot supplied by the data service into
the adjacency structure the layout engine works on. Validation is strict:
duplicate ids and dangling connections raise, nothing is dropped silently.
"""

import logging
from collections import deque
from collections.abc import Iterable, Sequence

from conceptmap.graph.errors import DanglingEdgeError, DuplicateConnectionError, DuplicateNodeError
from conceptmap.models import ConceptNode, Connection

logger = logging.getLogger(__name__)


class Graph:
    """
    Immutable adjacency view of one graph snapshot.

    Node order is the input order and serves as the deterministic
    tie-break for every later phase.
    """

    def __init__(
        self,
        nodes: Sequence[ConceptNode],
        connections: Sequence[Connection],
    ) -> None:
        self.nodes: tuple[ConceptNode, ...] = tuple(nodes)
        self.connections: tuple[Connection, ...] = tuple(connections)
        self.index: dict[str, int] = {n.id: i for i, n in enumerate(self.nodes)}
        self._nodes_by_id = {n.id: n for n in self.nodes}
        self._connections_by_id = {c.id: c for c in self.connections}

        # Adjacency lists hold connections, preserving input order
        self.forward: dict[str, list[Connection]] = {n.id: [] for n in self.nodes}
        self.reverse: dict[str, list[Connection]] = {n.id: [] for n in self.nodes}
        for conn in self.connections:
            self.forward[conn.from_node_id].append(conn)
            self.reverse[conn.to_node_id].append(conn)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes_by_id

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node(self, node_id: str) -> ConceptNode:
        return self._nodes_by_id[node_id]

    def connection(self, connection_id: str) -> Connection | None:
        return self._connections_by_id.get(connection_id)

    def has_connection(self, connection_id: str) -> bool:
        return connection_id in self._connections_by_id

    def node_ids(self) -> list[str]:
        """Node ids in input order."""
        return [n.id for n in self.nodes]

    def endpoints(self) -> list[tuple[str, str]]:
        """(from, to) pairs of every connection, in input order."""
        return [(c.from_node_id, c.to_node_id) for c in self.connections]

    def successors(self, node_id: str) -> list[str]:
        return [c.to_node_id for c in self.forward[node_id]]

    def predecessors(self, node_id: str) -> list[str]:
        return [c.from_node_id for c in self.reverse[node_id]]

    def descendants(self, node_id: str) -> set[str]:
        """All nodes reachable from node_id, excluding node_id itself."""
        seen: set[str] = set()
        queue = deque(self.successors(node_id))
        while queue:
            current = queue.popleft()
            if current in seen or current == node_id:
                continue
            seen.add(current)
            queue.extend(self.successors(current))
        return seen

    def subgraph(self, node_ids: Iterable[str]) -> "Graph":
        """Restrict to a node set, keeping connections between surviving nodes."""
        keep = set(node_ids)
        return Graph(
            [n for n in self.nodes if n.id in keep],
            [
                c for c in self.connections
                if c.from_node_id in keep and c.to_node_id in keep
            ],
        )

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, connections={len(self.connections)})"


def build_graph(
    nodes: Sequence[ConceptNode],
    connections: Sequence[Connection],
) -> Graph:
    """
    Validate a snapshot and build its adjacency structure.

    Args:
        nodes: Concept nodes in display-priority order
        connections: Directed connections between those nodes

    Returns:
        Graph with forward/reverse adjacency and input-order index

    Raises:
        DuplicateNodeError: two nodes share an id
        DuplicateConnectionError: two connections share an id
        DanglingEdgeError: a connection endpoint is not among the nodes
    """
    node_ids: set[str] = set()
    for node in nodes:
        if node.id in node_ids:
            raise DuplicateNodeError(node.id)
        node_ids.add(node.id)

    connection_ids: set[str] = set()
    for conn in connections:
        if conn.id in connection_ids:
            raise DuplicateConnectionError(conn.id)
        connection_ids.add(conn.id)
        for endpoint in (conn.from_node_id, conn.to_node_id):
            if endpoint not in node_ids:
                raise DanglingEdgeError(conn.id, endpoint)

    graph = Graph(nodes, connections)
    logger.debug(f"Built {graph!r}")
    return graph
