"""Layered (Sugiyama-style) layout of a concept graph.

Phases:
  1. Cycle handling (DFS back-edge reversal, ranking only)
  2. Rank assignment (longest path)
  3. Ordering within ranks (median sweeps, input-order tie-break)
  4. Coordinate assignment (fixed node size and gaps)
  5. Edge routing (straight, one bend for long edges)

The function is pure: identical (graph, orientation, config) input always
produces an identical LayoutResult.
"""

import logging

from conceptmap.config import LayoutConfig
from conceptmap.graph.adapter import Graph
from conceptmap.layout.coordinates import RankGeometry, assign_coordinates
from conceptmap.layout.cycles import CycleRemovalResult, remove_cycles
from conceptmap.layout.ordering import order_ranks
from conceptmap.layout.ranking import assign_ranks, group_by_rank
from conceptmap.layout.routing import route_edges
from conceptmap.models import LayoutNode, LayoutResult, Orientation

logger = logging.getLogger(__name__)


def layout(
    graph: Graph,
    orientation: Orientation | str = Orientation.TB,
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """
    Compute a deterministic layered drawing of the graph.

    Args:
        graph: Validated graph from build_graph
        orientation: "TB" (ranks top to bottom) or "LR" (left to right)
        config: Geometry and heuristic parameters (defaults from settings)

    Returns:
        LayoutResult with one LayoutNode per node and one LayoutEdge per
        connection, both in input order
    """
    orientation = Orientation(orientation)
    config = config or LayoutConfig.from_settings()

    if graph.is_empty:
        return LayoutResult(orientation=orientation)

    cycles = remove_cycles(graph)
    ranks = assign_ranks(graph, cycles.edges)
    layers = order_ranks(
        graph,
        group_by_rank(graph, ranks),
        ranks,
        cycles.edges,
        passes=config.ordering_passes,
    )

    geometry = RankGeometry(layers, orientation, config)
    placements = assign_coordinates(geometry, layers)

    nodes_by_id: dict[str, LayoutNode] = {}
    for node in graph.nodes:
        placement = placements[node.id]
        nodes_by_id[node.id] = LayoutNode(
            node=node,
            rank=placement.rank,
            order=placement.order,
            x=placement.x,
            y=placement.y,
            width=config.node_width,
            height=config.node_height,
        )

    edges = route_edges(graph.connections, nodes_by_id, layers, geometry, cycles)
    width, height = geometry.drawing_size()

    result = LayoutResult(
        nodes=tuple(nodes_by_id[node_id] for node_id in graph.node_ids()),
        edges=edges,
        orientation=orientation,
        width=width,
        height=height,
    )
    _check_invariants(result, cycles)

    logger.debug(
        f"Layout {orientation.value}: {len(result.nodes)} nodes in {len(layers)} ranks, "
        f"{len(result.edges)} edges ({len(cycles.reversed_ids)} reversed)"
    )
    return result


def _check_invariants(result: LayoutResult, cycles: CycleRemovalResult) -> None:
    """Fail loudly on a corrupt layout instead of returning it."""
    seen: set[tuple[int, int]] = set()
    for node in result.nodes:
        slot = (node.rank, node.order)
        assert slot not in seen, f"Two nodes share rank {node.rank} order {node.order}"
        seen.add(slot)

    for edge in result.edges:
        if edge.id in cycles.reversed_ids or edge.id in cycles.self_loop_ids:
            continue
        source, target = result.node(edge.source_id), result.node(edge.target_id)
        assert target.rank >= source.rank + 1, (
            f"Edge {edge.id} is not rank-monotone ({source.rank} -> {target.rank})"
        )
