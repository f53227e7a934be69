"""Layout output models - engine-owned, recomputed wholesale on every pass."""

from dataclasses import dataclass, field
from enum import Enum

from conceptmap.models.concept import ConceptNode, Connection


class Orientation(str, Enum):
    """Flow direction of the layered drawing."""

    TB = "TB"  # ranks stack top to bottom
    LR = "LR"  # ranks stack left to right

    @property
    def is_horizontal(self) -> bool:
        return self is Orientation.LR


@dataclass(frozen=True)
class Point:
    """A 2D point in graph coordinates."""

    x: float
    y: float

    def translate(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class LayoutNode:
    """A concept with its assigned rank, order and top-left coordinate."""

    node: ConceptNode
    rank: int
    order: int
    x: float
    y: float
    width: float
    height: float

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def to_dict(self) -> dict:
        """Convert to dictionary for the rendering layer."""
        return {
            "id": self.id,
            "rank": self.rank,
            "order": self.order,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class LayoutEdge:
    """
    A connection with its routed polyline.

    Points run from the declared source to the declared target, even when
    the edge was reversed internally to break a cycle.
    """

    connection: Connection
    points: tuple[Point, ...]
    direction: Orientation
    reversed: bool = False

    @property
    def id(self) -> str:
        return self.connection.id

    @property
    def source_id(self) -> str:
        return self.connection.from_node_id

    @property
    def target_id(self) -> str:
        return self.connection.to_node_id

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    @property
    def bend_points(self) -> tuple[Point, ...]:
        return self.points[1:-1]

    def to_dict(self) -> dict:
        """Convert to dictionary for the rendering layer."""
        return {
            "id": self.id,
            "source": self.source_id,
            "target": self.target_id,
            "points": [p.to_dict() for p in self.points],
            "direction": self.direction.value,
            "reversed": self.reversed,
        }


@dataclass(frozen=True)
class LayoutResult:
    """Result of one layout pass."""

    nodes: tuple[LayoutNode, ...] = ()
    edges: tuple[LayoutEdge, ...] = ()
    orientation: Orientation = Orientation.TB
    width: float = 0.0  # Bounding box of the drawing, margins included
    height: float = 0.0
    _by_id: dict[str, LayoutNode] = field(
        default_factory=dict, init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        self._by_id.update({n.id: n for n in self.nodes})

    def node(self, node_id: str) -> LayoutNode | None:
        """Look up a laid-out node by id."""
        return self._by_id.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._by_id

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def to_dict(self) -> dict:
        return {
            "orientation": self.orientation.value,
            "width": self.width,
            "height": self.height,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
