"""Rank assignment by longest path from the sources."""

from collections import deque

from conceptmap.graph.adapter import Graph


def assign_ranks(graph: Graph, edges: list[tuple[str, str]]) -> dict[str, int]:
    """
    Rank every node by the length of the longest path reaching it.

    Prerequisite chains therefore always render strictly before their
    dependents. Nodes without incoming edges get rank 0.

    Args:
        graph: Graph whose nodes are ranked (input order breaks ties)
        edges: Acyclic (upper, lower) pairs from cycle removal

    Returns:
        node_id -> rank
    """
    ranks: dict[str, int] = {node_id: 0 for node_id in graph.node_ids()}
    successors: dict[str, list[str]] = {node_id: [] for node_id in ranks}
    in_degree: dict[str, int] = {node_id: 0 for node_id in ranks}

    for upper, lower in edges:
        successors[upper].append(lower)
        in_degree[lower] += 1

    queue = deque(node_id for node_id in ranks if in_degree[node_id] == 0)
    processed = 0
    while queue:
        node_id = queue.popleft()
        processed += 1
        for succ in successors[node_id]:
            if ranks[succ] < ranks[node_id] + 1:
                ranks[succ] = ranks[node_id] + 1
            in_degree[succ] -= 1
            if in_degree[succ] == 0:
                queue.append(succ)

    # A leftover node means the edge set still had a cycle
    assert processed == len(ranks), (
        f"Rank assignment stalled: {len(ranks) - processed} nodes left on a cycle"
    )
    return ranks


def group_by_rank(graph: Graph, ranks: dict[str, int]) -> list[list[str]]:
    """Bucket node ids per rank, each bucket in input order."""
    if not ranks:
        return []
    layers: list[list[str]] = [[] for _ in range(max(ranks.values()) + 1)]
    for node_id in graph.node_ids():
        layers[ranks[node_id]].append(node_id)
    return layers
