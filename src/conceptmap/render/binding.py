"""Render binding: one-way projection of layout + interaction state.

Produces the flat primitives a host UI draws (positions, sizes, highlight
flags). No decisions are made here; displaced nodes simply carry their
edge endpoints along.
"""

from dataclasses import asdict, dataclass, replace

from conceptmap.interaction.state import Connecting, Dragging, InteractionState
from conceptmap.interaction.viewport import Viewport
from conceptmap.layout.routing import exit_port
from conceptmap.models import LayoutEdge, LayoutNode, LayoutResult, Point


@dataclass(frozen=True)
class RenderNode:
    id: str
    title: str
    type: str
    rank: int
    order: int
    x: float
    y: float
    width: float
    height: float
    selected: bool = False
    dragging: bool = False
    connecting_source: bool = False
    collapsed: bool = False
    pinned: bool = False  # Position comes from a user override

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RenderEdge:
    id: str
    source: str
    target: str
    type: str
    points: tuple[Point, ...]
    selected: bool = False
    reversed: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "points": [p.to_dict() for p in self.points],
            "selected": self.selected,
            "reversed": self.reversed,
        }


@dataclass(frozen=True)
class ConnectionPreview:
    """Transient edge from a node's exit port to the cursor."""

    from_node_id: str
    start: Point
    end: Point


@dataclass(frozen=True)
class RenderFrame:
    nodes: tuple[RenderNode, ...]
    edges: tuple[RenderEdge, ...]
    viewport: Viewport
    selected_node_id: str | None = None
    selected_edge_id: str | None = None
    drag_preview: tuple[str, Point] | None = None
    connection_preview: ConnectionPreview | None = None
    width: float = 0.0
    height: float = 0.0

    def node(self, node_id: str) -> RenderNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def edge(self, edge_id: str) -> RenderEdge | None:
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None


def displayed_position(
    node: LayoutNode,
    state: InteractionState,
    overrides: dict[str, Point],
) -> Point:
    """Drag preview, else user override, else the committed layout position."""
    mode = state.mode
    if isinstance(mode, Dragging) and mode.node_id == node.id:
        return mode.position
    if node.id in overrides:
        return overrides[node.id]
    return Point(node.x, node.y)


def _project_edge(
    edge: LayoutEdge,
    shifts: dict[str, tuple[float, float]],
    selected: bool,
) -> RenderEdge:
    points = list(edge.points)
    sdx, sdy = shifts.get(edge.source_id, (0.0, 0.0))
    tdx, tdy = shifts.get(edge.target_id, (0.0, 0.0))
    if edge.source_id == edge.target_id:
        # Self-loops move rigidly with their node
        points = [p.translate(sdx, sdy) for p in points]
    else:
        points[0] = points[0].translate(sdx, sdy)
        points[-1] = points[-1].translate(tdx, tdy)
    return RenderEdge(
        id=edge.id,
        source=edge.source_id,
        target=edge.target_id,
        type=edge.connection.type.value,
        points=tuple(points),
        selected=selected,
        reversed=edge.reversed,
    )


def project(
    result: LayoutResult,
    state: InteractionState,
    overrides: dict[str, Point] | None = None,
    collapsed: frozenset[str] | set[str] = frozenset(),
) -> RenderFrame:
    """Project a layout and the live interaction state into render primitives."""
    overrides = overrides or {}
    mode = state.mode
    dragging_id = mode.node_id if isinstance(mode, Dragging) else None
    connecting_id = mode.from_node_id if isinstance(mode, Connecting) else None

    nodes: list[RenderNode] = []
    shifts: dict[str, tuple[float, float]] = {}
    for node in result.nodes:
        position = displayed_position(node, state, overrides)
        if (position.x, position.y) != (node.x, node.y):
            shifts[node.id] = (position.x - node.x, position.y - node.y)
        nodes.append(
            RenderNode(
                id=node.id,
                title=node.node.title,
                type=node.node.type.value,
                rank=node.rank,
                order=node.order,
                x=position.x,
                y=position.y,
                width=node.width,
                height=node.height,
                selected=node.id == state.selected_node_id,
                dragging=node.id == dragging_id,
                connecting_source=node.id == connecting_id,
                collapsed=node.id in collapsed,
                pinned=node.id in overrides,
            )
        )

    edges = tuple(
        _project_edge(edge, shifts, edge.id == state.selected_edge_id)
        for edge in result.edges
    )

    drag_preview = None
    if isinstance(mode, Dragging):
        drag_preview = (mode.node_id, mode.position)

    connection_preview = None
    if isinstance(mode, Connecting):
        source = result.node(mode.from_node_id)
        if source is not None:
            position = displayed_position(source, state, overrides)
            moved = replace(source, x=position.x, y=position.y)
            connection_preview = ConnectionPreview(
                from_node_id=source.id,
                start=exit_port(moved, result.orientation),
                end=mode.cursor,
            )

    return RenderFrame(
        nodes=tuple(nodes),
        edges=edges,
        viewport=state.viewport,
        selected_node_id=state.selected_node_id,
        selected_edge_id=state.selected_edge_id,
        drag_preview=drag_preview,
        connection_preview=connection_preview,
        width=result.width,
        height=result.height,
    )
