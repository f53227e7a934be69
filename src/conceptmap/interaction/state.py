"""Interaction modes and the per-view interaction state."""

from dataclasses import dataclass, field

from conceptmap.interaction.viewport import Viewport
from conceptmap.models import Point


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    """A node follows the pointer; `position` is its previewed top-left corner."""

    node_id: str
    offset: Point  # Pointer minus node corner at grab time (graph units)
    position: Point
    moved: bool = False


@dataclass(frozen=True)
class Connecting:
    """A connection draft follows the pointer from a node's port."""

    from_node_id: str
    cursor: Point  # Graph coordinates


@dataclass(frozen=True)
class PanningViewport:
    origin: Point  # Screen position at pointer-down
    start_pan: Point


Mode = Idle | Dragging | Connecting | PanningViewport


@dataclass
class InteractionState:
    """Live view state; one instance per mounted graph view."""

    mode: Mode = field(default_factory=Idle)
    selected_node_id: str | None = None
    selected_edge_id: str | None = None
    viewport: Viewport = field(default_factory=Viewport)

    @property
    def is_idle(self) -> bool:
        return isinstance(self.mode, Idle)

    def select_node(self, node_id: str | None) -> None:
        self.selected_node_id = node_id
        self.selected_edge_id = None

    def select_edge(self, edge_id: str | None) -> None:
        self.selected_edge_id = edge_id
        self.selected_node_id = None

    def clear_selection(self) -> None:
        self.selected_node_id = None
        self.selected_edge_id = None

    def referenced_node_id(self) -> str | None:
        """Node the active gesture depends on, if any."""
        if isinstance(self.mode, Dragging):
            return self.mode.node_id
        if isinstance(self.mode, Connecting):
            return self.mode.from_node_id
        return None
