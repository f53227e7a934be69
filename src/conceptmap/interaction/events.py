"""Discrete input events driving the interaction state machine.

Positions are screen coordinates. Hit-testing is done by the host UI,
which classifies every pointer target as node, port, edge or background.
"""

from dataclasses import dataclass, field
from enum import Enum

from conceptmap.models import Point


class TargetKind(str, Enum):
    """Coarse pointer-target classification supplied by the host."""

    NODE = "node"
    PORT = "port"
    EDGE = "edge"
    BACKGROUND = "background"


@dataclass(frozen=True)
class PointerTarget:
    """What lies under the pointer."""

    kind: TargetKind
    node_id: str | None = None
    edge_id: str | None = None

    @classmethod
    def node(cls, node_id: str) -> "PointerTarget":
        return cls(TargetKind.NODE, node_id=node_id)

    @classmethod
    def port(cls, node_id: str) -> "PointerTarget":
        return cls(TargetKind.PORT, node_id=node_id)

    @classmethod
    def edge(cls, edge_id: str) -> "PointerTarget":
        return cls(TargetKind.EDGE, edge_id=edge_id)

    @classmethod
    def background(cls) -> "PointerTarget":
        return cls(TargetKind.BACKGROUND)


@dataclass(frozen=True)
class PointerDown:
    position: Point
    target: PointerTarget


@dataclass(frozen=True)
class PointerMove:
    position: Point


@dataclass(frozen=True)
class PointerUp:
    position: Point
    target: PointerTarget = field(default_factory=PointerTarget.background)


@dataclass(frozen=True)
class KeyEscape:
    pass


@dataclass(frozen=True)
class Zoom:
    """Wheel/pinch zoom by `factor` around a screen-space anchor."""

    factor: float
    anchor: Point


InputEvent = PointerDown | PointerMove | PointerUp | KeyEscape | Zoom
