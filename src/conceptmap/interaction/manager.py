"""Interaction state manager.

A synchronous state machine over discrete input events:

    Idle --down(node)-->       Dragging   --up-->        Idle  (commit override)
    Idle --down(port)-->       Connecting --up(port)-->  Idle  (emit connection)
    Idle --down(background)--> PanningViewport --up-->   Idle

Drag, pan and zoom never trigger a layout pass. Structural edits coming
from the graph store do: they re-layout the visible graph, clear every
position override and drop gestures that reference deleted nodes.
"""

import logging
from collections.abc import Callable
from dataclasses import replace

from conceptmap.config import LayoutConfig, Settings, settings
from conceptmap.graph.adapter import Graph
from conceptmap.graph.store import GraphStore, connection_id_for
from conceptmap.interaction.events import (
    InputEvent,
    KeyEscape,
    PointerDown,
    PointerMove,
    PointerUp,
    TargetKind,
    Zoom,
)
from conceptmap.interaction.state import (
    Connecting,
    Dragging,
    Idle,
    InteractionState,
    PanningViewport,
)
from conceptmap.interaction.viewport import fit_viewport
from conceptmap.layout import layout
from conceptmap.models import Connection, ConnectionType, LayoutResult, Orientation, Point
from conceptmap.render.binding import RenderFrame, displayed_position, project

logger = logging.getLogger(__name__)

ConnectionSink = Callable[[Connection], object]


class InteractionManager:
    """
    Owns the InteractionState of one graph view.

    Holds a read-only reference to the latest LayoutResult; events are
    handled one at a time, each fully before the next.
    """

    def __init__(
        self,
        store: GraphStore,
        orientation: Orientation | str | None = None,
        config: LayoutConfig | None = None,
        app_settings: Settings | None = None,
        on_connect: ConnectionSink | None = None,
    ) -> None:
        app_settings = app_settings or settings
        self.store = store
        self.orientation = Orientation(orientation or app_settings.layout_default_orientation)
        self.config = config or LayoutConfig.from_settings(app_settings)
        self.min_zoom = app_settings.viewport_min_zoom
        self.max_zoom = app_settings.viewport_max_zoom
        self.fit_padding = app_settings.viewport_fit_padding
        self.on_connect: ConnectionSink = on_connect or store.add_connection

        self.state = InteractionState()
        self.overrides: dict[str, Point] = {}
        self.collapsed: set[str] = set()
        self.layout_result: LayoutResult = LayoutResult(orientation=self.orientation)
        self.layout_passes = 0

        self._relayout()
        self._unsubscribe = store.subscribe(self._on_graph_changed)

    def close(self) -> None:
        """Detach from the store (view unmount)."""
        self._unsubscribe()

    # ------------------------------------------------------------------
    # Graph / layout
    # ------------------------------------------------------------------

    @property
    def hidden_node_ids(self) -> set[str]:
        """
        Descendants of collapsed nodes.

        A collapsed node stays visible unless it sits strictly below another
        collapsed node. Collapsed nodes on a common cycle reach each other,
        so neither hides the other.
        """
        graph = self.store.graph
        reach = {n: graph.descendants(n) for n in self.collapsed if n in graph}
        roots = {
            n for n in reach
            if not any(n in reach[other] and other not in reach[n] for other in reach if other != n)
        }
        hidden: set[str] = set()
        for node_id in roots:
            hidden |= reach[node_id]
        return hidden - roots

    @property
    def visible_graph(self) -> Graph:
        graph = self.store.graph
        hidden = self.hidden_node_ids
        if not hidden:
            return graph
        return graph.subgraph(n for n in graph.node_ids() if n not in hidden)

    def _relayout(self) -> None:
        self.layout_result = layout(self.visible_graph, self.orientation, self.config)
        self.layout_passes += 1
        self.overrides.clear()
        self._reconcile()

    def _reconcile(self) -> None:
        """Drop gestures and selections that point at vanished items."""
        result = self.layout_result
        referenced = self.state.referenced_node_id()
        if referenced is not None and referenced not in result:
            logger.debug(f"Node {referenced} disappeared mid-gesture, returning to idle")
            self.state.mode = Idle()

        if self.state.selected_node_id is not None and self.state.selected_node_id not in result:
            self.state.selected_node_id = None
        if self.state.selected_edge_id is not None and not any(
            e.id == self.state.selected_edge_id for e in result.edges
        ):
            self.state.selected_edge_id = None

    def _on_graph_changed(self, graph: Graph) -> None:
        self.collapsed &= set(graph.node_ids())
        logger.info(f"Structural edit: re-laying out {len(graph.nodes)} nodes")
        self._relayout()

    def set_orientation(self, orientation: Orientation | str) -> LayoutResult:
        """Switch flow direction; a full re-layout that clears overrides."""
        orientation = Orientation(orientation)
        if orientation != self.orientation:
            self.orientation = orientation
            self._relayout()
        return self.layout_result

    def toggle_collapse(self, node_id: str) -> bool:
        """Collapse or expand a node's descendants. Returns the new collapsed flag."""
        if node_id not in self.store.graph:
            raise KeyError(f"Node not found: {node_id}")
        if node_id in self.collapsed:
            self.collapsed.discard(node_id)
        else:
            self.collapsed.add(node_id)
        self._relayout()
        return node_id in self.collapsed

    def is_collapsed(self, node_id: str) -> bool:
        return node_id in self.collapsed

    def delete_selection(self) -> bool:
        """Remove the selected node or edge from the graph store."""
        if self.state.selected_node_id is not None:
            self.store.remove_node(self.state.selected_node_id)
            return True
        if self.state.selected_edge_id is not None:
            self.store.remove_connection(self.state.selected_edge_id)
            return True
        return False

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def position_of(self, node_id: str) -> Point:
        """Currently displayed top-left corner of a node."""
        node = self.layout_result.node(node_id)
        if node is None:
            raise KeyError(f"Node not laid out: {node_id}")
        return displayed_position(node, self.state, self.overrides)

    def fit_view(self, container_width: float, container_height: float) -> None:
        self.state.viewport = fit_viewport(
            self.layout_result,
            container_width,
            container_height,
            padding=self.fit_padding,
            min_zoom=self.min_zoom,
        )

    def frame(self) -> RenderFrame:
        return project(self.layout_result, self.state, self.overrides, frozenset(self.collapsed))

    # ------------------------------------------------------------------
    # Event dispatch
    # ------------------------------------------------------------------

    def dispatch(self, event: InputEvent) -> InteractionState:
        """Handle a single input event and return the resulting state."""
        if isinstance(event, PointerDown):
            self._pointer_down(event)
        elif isinstance(event, PointerMove):
            self._pointer_move(event)
        elif isinstance(event, PointerUp):
            self._pointer_up(event)
        elif isinstance(event, KeyEscape):
            self._escape()
        elif isinstance(event, Zoom):
            self._zoom(event)
        else:
            raise TypeError(f"Unknown input event: {event!r}")
        return self.state

    def _pointer_down(self, event: PointerDown) -> None:
        if not self.state.is_idle:
            logger.debug(f"Ignoring pointer-down while {type(self.state.mode).__name__}")
            return

        target = event.target
        result = self.layout_result

        if target.kind is TargetKind.NODE and target.node_id in result:
            self.state.select_node(target.node_id)
            corner = self.position_of(target.node_id)
            pointer = self.state.viewport.to_graph(event.position)
            self.state.mode = Dragging(
                node_id=target.node_id,
                offset=Point(pointer.x - corner.x, pointer.y - corner.y),
                position=corner,
            )
        elif target.kind is TargetKind.PORT and target.node_id in result:
            self.state.mode = Connecting(
                from_node_id=target.node_id,
                cursor=self.state.viewport.to_graph(event.position),
            )
        elif target.kind is TargetKind.EDGE and any(e.id == target.edge_id for e in result.edges):
            self.state.select_edge(target.edge_id)
        elif target.kind is TargetKind.BACKGROUND:
            self.state.clear_selection()
            self.state.mode = PanningViewport(
                origin=event.position,
                start_pan=self.state.viewport.pan,
            )
        else:
            logger.debug(f"Pointer-down on unknown target {target!r}")

    def _pointer_move(self, event: PointerMove) -> None:
        mode = self.state.mode
        viewport = self.state.viewport

        if isinstance(mode, Dragging):
            pointer = viewport.to_graph(event.position)
            self.state.mode = replace(
                mode,
                position=Point(pointer.x - mode.offset.x, pointer.y - mode.offset.y),
                moved=True,
            )
        elif isinstance(mode, Connecting):
            self.state.mode = replace(mode, cursor=viewport.to_graph(event.position))
        elif isinstance(mode, PanningViewport):
            self.state.viewport = viewport.with_pan(
                Point(
                    mode.start_pan.x + event.position.x - mode.origin.x,
                    mode.start_pan.y + event.position.y - mode.origin.y,
                )
            )

    def _pointer_up(self, event: PointerUp) -> None:
        mode = self.state.mode
        self.state.mode = Idle()

        if isinstance(mode, Dragging):
            if mode.moved and mode.node_id in self.layout_result:
                self.overrides[mode.node_id] = mode.position
        elif isinstance(mode, Connecting):
            target = event.target
            if target.kind is TargetKind.PORT and target.node_id is not None:
                self._complete_connection(mode.from_node_id, target.node_id)
            else:
                logger.debug("Connection draft dropped outside a port, cancelled")

    def _complete_connection(self, from_node_id: str, to_node_id: str) -> None:
        graph = self.store.graph
        if from_node_id == to_node_id:
            logger.debug(f"Ignoring connection from {from_node_id} to itself")
            return
        if from_node_id not in graph or to_node_id not in graph:
            logger.debug(f"Ignoring connection {from_node_id} -> {to_node_id}: endpoint deleted")
            return

        candidate = Connection(
            id=connection_id_for(from_node_id, to_node_id, graph),
            from_node_id=from_node_id,
            to_node_id=to_node_id,
            type=ConnectionType.RELATED,
        )
        logger.debug(f"Emitting connection candidate {candidate.id}")
        self.on_connect(candidate)

    def _escape(self) -> None:
        mode = self.state.mode
        if isinstance(mode, PanningViewport):
            self.state.viewport = self.state.viewport.with_pan(mode.start_pan)
        elif isinstance(mode, Idle):
            self.state.clear_selection()
        self.state.mode = Idle()

    def _zoom(self, event: Zoom) -> None:
        if isinstance(self.state.mode, PanningViewport):
            return
        self.state.viewport = self.state.viewport.zoom_at(
            event.factor, event.anchor, self.min_zoom, self.max_zoom
        )
