"""Crossing reduction within ranks (median/barycenter sweeps)."""

import logging

from conceptmap.graph.adapter import Graph

logger = logging.getLogger(__name__)


def _median(values: list[float]) -> float:
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def _adjacent_neighbors(
    edges: list[tuple[str, str]],
    ranks: dict[str, int],
) -> tuple[dict[str, list[str]], dict[str, list[str]]]:
    """Neighbours one rank above and one rank below each node."""
    above: dict[str, list[str]] = {node_id: [] for node_id in ranks}
    below: dict[str, list[str]] = {node_id: [] for node_id in ranks}
    for upper, lower in edges:
        if ranks[lower] - ranks[upper] == 1:
            above[lower].append(upper)
            below[upper].append(lower)
    return above, below


def _sort_counting_inversions(values: list[int]) -> tuple[list[int], int]:
    """Merge sort that also counts pairs i < j with values[i] > values[j]."""
    if len(values) < 2:
        return values, 0
    mid = len(values) // 2
    left, left_inv = _sort_counting_inversions(values[:mid])
    right, right_inv = _sort_counting_inversions(values[mid:])

    merged: list[int] = []
    inversions = left_inv + right_inv
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i] <= right[j]:
            merged.append(left[i])
            i += 1
        else:
            # Every remaining left value is greater than right[j]
            merged.append(right[j])
            inversions += len(left) - i
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged, inversions


def count_crossings(
    layers: list[list[str]],
    below: dict[str, list[str]],
) -> int:
    """
    Count pairwise crossings between every pair of adjacent ranks.

    Two segments cross when their upper ends and lower ends are in opposite
    order, so with segments sorted by (upper, lower) the crossings are the
    inversions of the lower positions.
    """
    total = 0
    for idx in range(len(layers) - 1):
        lower_pos = {node_id: i for i, node_id in enumerate(layers[idx + 1])}
        segments: list[tuple[int, int]] = []
        for upper_pos, node_id in enumerate(layers[idx]):
            for neighbor in below[node_id]:
                segments.append((upper_pos, lower_pos[neighbor]))
        segments.sort()
        total += _sort_counting_inversions([lower for _, lower in segments])[1]
    return total


def _sort_layer(
    layer: list[str],
    reference: list[str],
    neighbors: dict[str, list[str]],
    index: dict[str, int],
) -> list[str]:
    ref_pos = {node_id: float(i) for i, node_id in enumerate(reference)}

    def key(item: tuple[int, str]) -> tuple[float, int]:
        current, node_id = item
        positions = [ref_pos[n] for n in neighbors[node_id]]
        # Nodes without neighbours in the reference rank hold their place
        value = _median(positions) if positions else float(current)
        return (value, index[node_id])

    return [node_id for _, node_id in sorted(enumerate(layer), key=key)]


def order_ranks(
    graph: Graph,
    layers: list[list[str]],
    ranks: dict[str, int],
    edges: list[tuple[str, str]],
    passes: int = 4,
) -> list[list[str]]:
    """
    Reorder nodes within their ranks to reduce edge crossings.

    Each pass sweeps down (keys from the rank above) then up (keys from
    the rank below). A node's key is the median position of its neighbours
    in the reference rank; exact ties fall back to input order, so the
    result is deterministic. The best ordering seen is returned.

    Args:
        graph: Source graph (provides the input-order index)
        layers: Initial node ids per rank
        ranks: node_id -> rank
        edges: Acyclic (upper, lower) pairs
        passes: Number of down/up sweep pairs

    Returns:
        Node ids per rank in their final order
    """
    above, below = _adjacent_neighbors(edges, ranks)
    current = [list(layer) for layer in layers]
    best = [list(layer) for layer in current]
    best_crossings = count_crossings(best, below)

    for pass_idx in range(passes):
        if best_crossings == 0:
            break

        for idx in range(1, len(current)):
            current[idx] = _sort_layer(current[idx], current[idx - 1], above, graph.index)
        for idx in range(len(current) - 2, -1, -1):
            current[idx] = _sort_layer(current[idx], current[idx + 1], below, graph.index)

        crossings = count_crossings(current, below)
        logger.debug(f"Ordering pass {pass_idx + 1}: {crossings} crossings")
        if crossings < best_crossings:
            best = [list(layer) for layer in current]
            best_crossings = crossings

    return best
