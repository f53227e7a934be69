"""Edge routing between connection ports."""

from conceptmap.layout.coordinates import RankGeometry
from conceptmap.layout.cycles import CycleRemovalResult
from conceptmap.models import Connection, LayoutEdge, LayoutNode, Orientation, Point


def exit_port(node: LayoutNode, orientation: Orientation) -> Point:
    """Outgoing connection point: bottom-centre (TB) or right-centre (LR)."""
    if orientation.is_horizontal:
        return Point(node.x + node.width, node.y + node.height / 2)
    return Point(node.x + node.width / 2, node.y + node.height)


def entry_port(node: LayoutNode, orientation: Orientation) -> Point:
    """Incoming connection point: top-centre (TB) or left-centre (LR)."""
    if orientation.is_horizontal:
        return Point(node.x, node.y + node.height / 2)
    return Point(node.x + node.width / 2, node.y)


def _cross(point: Point, orientation: Orientation) -> float:
    return point.y if orientation.is_horizontal else point.x


def _free_cross_position(
    desired: float,
    occupied: list[tuple[float, float]],
    gap: float,
) -> float:
    """Nearest cross-axis position to `desired` that is not inside a node."""
    for start, end in occupied:
        if start <= desired <= end:
            before, after = start - gap / 2, end + gap / 2
            # Closer side wins; exact ties go to the lower side
            return before if desired - before <= after - desired else after
    return desired


def _self_loop(node: LayoutNode, orientation: Orientation, gap: float) -> tuple[Point, ...]:
    center = node.center
    if orientation.is_horizontal:
        bend = Point(center.x, node.y + node.height + gap / 2)
    else:
        bend = Point(node.x + node.width + gap / 2, center.y)
    return (exit_port(node, orientation), bend, entry_port(node, orientation))


def route_edge(
    conn: Connection,
    nodes: dict[str, LayoutNode],
    layers: list[list[str]],
    geometry: RankGeometry,
    cycles: CycleRemovalResult,
) -> LayoutEdge:
    """
    Route one connection.

    Edges between adjacent ranks are straight. Edges spanning several
    ranks get one bend point on the centre line of the midpoint rank,
    pushed into the nearest gap if a node of that rank sits in the way.
    """
    orientation = geometry.orientation
    gap = geometry.config.node_gap
    source, target = nodes[conn.from_node_id], nodes[conn.to_node_id]

    if conn.id in cycles.self_loop_ids:
        return LayoutEdge(
            connection=conn,
            points=_self_loop(source, orientation, gap),
            direction=orientation,
        )

    assert source.rank != target.rank, f"Connection {conn.id} joins two nodes of rank {source.rank}"

    if source.rank < target.rank:
        start, end = exit_port(source, orientation), entry_port(target, orientation)
    else:
        # Drawn against the flow: leave through the entry side, arrive at the exit side
        start, end = entry_port(source, orientation), exit_port(target, orientation)

    points: tuple[Point, ...] = (start, end)
    span = abs(source.rank - target.rank)
    if span > 1:
        mid_rank = min(source.rank, target.rank) + span // 2
        flow = geometry.flow_start(mid_rank) + geometry.flow_size / 2
        desired = (_cross(start, orientation) + _cross(end, orientation)) / 2
        occupied = []
        for order in range(len(layers[mid_rank])):
            cross_start = geometry.cross_start(mid_rank, order)
            occupied.append((cross_start, cross_start + geometry.cross_size))
        cross = _free_cross_position(desired, occupied, gap)
        bend = Point(*geometry.to_xy(flow, cross))
        points = (start, bend, end)

    return LayoutEdge(
        connection=conn,
        points=points,
        direction=orientation,
        reversed=conn.id in cycles.reversed_ids,
    )


def route_edges(
    connections: tuple[Connection, ...],
    nodes: dict[str, LayoutNode],
    layers: list[list[str]],
    geometry: RankGeometry,
    cycles: CycleRemovalResult,
) -> tuple[LayoutEdge, ...]:
    """Route every connection, preserving input order."""
    return tuple(route_edge(conn, nodes, layers, geometry, cycles) for conn in connections)
