"""Cycle handling: find DFS back-edges and reverse them for ranking only."""

import logging
from dataclasses import dataclass, field

from conceptmap.graph.adapter import Graph

logger = logging.getLogger(__name__)

_WHITE, _GRAY, _BLACK = 0, 1, 2


@dataclass
class CycleRemovalResult:
    """Acyclic edge set used for ranking plus the edges that were flipped."""

    edges: list[tuple[str, str]] = field(default_factory=list)  # (upper, lower) pairs
    reversed_ids: set[str] = field(default_factory=set)  # Connection ids reversed
    self_loop_ids: set[str] = field(default_factory=set)  # Connection ids ignored


def remove_cycles(graph: Graph) -> CycleRemovalResult:
    """
    Depth-first search over the graph, reversing every back-edge.

    Roots are visited in input order and out-edges in input order, so the
    choice of reversed edges is deterministic. Self-loops never constrain
    ranks and are left out of the acyclic edge set.
    """
    result = CycleRemovalResult()
    color: dict[str, int] = {node_id: _WHITE for node_id in graph.node_ids()}

    for root in graph.node_ids():
        if color[root] != _WHITE:
            continue

        color[root] = _GRAY
        stack = [(root, iter(graph.forward[root]))]
        while stack:
            node_id, pending = stack[-1]
            conn = next(pending, None)
            if conn is None:
                color[node_id] = _BLACK
                stack.pop()
                continue

            target = conn.to_node_id
            if target == node_id:
                result.self_loop_ids.add(conn.id)
            elif color[target] == _GRAY:
                # Target is an ancestor on the current path: back-edge
                result.reversed_ids.add(conn.id)
            elif color[target] == _WHITE:
                color[target] = _GRAY
                stack.append((target, iter(graph.forward[target])))

    for conn in graph.connections:
        if conn.id in result.self_loop_ids:
            continue
        if conn.id in result.reversed_ids:
            result.edges.append((conn.to_node_id, conn.from_node_id))
        else:
            result.edges.append((conn.from_node_id, conn.to_node_id))

    if result.reversed_ids:
        logger.debug(f"Reversed {len(result.reversed_ids)} back-edges: {sorted(result.reversed_ids)}")

    return result
