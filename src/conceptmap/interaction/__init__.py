"""Interaction module.

Provides:
- Input events (pointer, escape, zoom)
- Interaction modes and per-view state
- Viewport transform and fit computation

The state machine itself lives in conceptmap.interaction.manager.
"""

from conceptmap.interaction.events import (
    InputEvent,
    KeyEscape,
    PointerDown,
    PointerMove,
    PointerTarget,
    PointerUp,
    TargetKind,
    Zoom,
)
from conceptmap.interaction.state import (
    Connecting,
    Dragging,
    Idle,
    InteractionState,
    Mode,
    PanningViewport,
)
from conceptmap.interaction.viewport import Viewport, fit_viewport

__all__ = [
    # Events
    "InputEvent",
    "KeyEscape",
    "PointerDown",
    "PointerMove",
    "PointerTarget",
    "PointerUp",
    "TargetKind",
    "Zoom",
    # State
    "Connecting",
    "Dragging",
    "Idle",
    "InteractionState",
    "Mode",
    "PanningViewport",
    # Viewport
    "Viewport",
    "fit_viewport",
]
