"""Unit tests for the render binding."""

from conceptmap.interaction import (
    Connecting,
    Dragging,
    InteractionState,
    PointerDown,
    PointerMove,
    PointerTarget,
    Viewport,
)
from conceptmap.layout import layout
from conceptmap.models import Point
from conceptmap.render import project


class TestProject:
    """Tests for projecting layout and interaction state."""

    def test_idle_projection_matches_layout(self, diamond_graph, layout_config) -> None:
        result = layout(diamond_graph, "TB", layout_config)
        frame = project(result, InteractionState())

        assert [n.id for n in frame.nodes] == ["A", "B", "C", "D"]
        for node in result.nodes:
            rendered = frame.node(node.id)
            assert (rendered.x, rendered.y) == (node.x, node.y)
            assert not rendered.selected
        assert frame.edge("B>D").points == result.edges[2].points
        assert (frame.width, frame.height) == (result.width, result.height)
        assert frame.drag_preview is None
        assert frame.connection_preview is None

    def test_selection_flags(self, diamond_graph, layout_config) -> None:
        result = layout(diamond_graph, "TB", layout_config)
        state = InteractionState()
        state.select_edge("A>C")

        frame = project(result, state)

        assert frame.edge("A>C").selected
        assert not frame.edge("A>B").selected
        assert frame.selected_edge_id == "A>C"

    def test_drag_preview_carries_edges(self, diamond_graph, layout_config) -> None:
        """Test a dragged node drags its edge endpoints with it."""
        result = layout(diamond_graph, "TB", layout_config)
        state = InteractionState(
            mode=Dragging(node_id="B", offset=Point(0, 0), position=Point(60, 250), moved=True)
        )

        frame = project(result, state)

        node = frame.node("B")
        assert (node.x, node.y) == (60, 250)
        assert node.dragging
        assert frame.drag_preview == ("B", Point(60, 250))
        # A>B ends at B's top port, B>D starts at B's bottom port
        assert frame.edge("A>B").points[-1] == Point(150, 250)
        assert frame.edge("B>D").points[0] == Point(150, 330)
        assert frame.edge("A>C").points == result.edges[1].points

    def test_override_marks_node_pinned(self, diamond_graph, layout_config) -> None:
        result = layout(diamond_graph, "TB", layout_config)
        frame = project(result, InteractionState(), {"D": Point(0, 600)})

        assert frame.node("D").pinned
        assert (frame.node("D").x, frame.node("D").y) == (0, 600)
        assert frame.edge("C>D").points[-1] == Point(90, 600)
        assert not frame.node("A").pinned

    def test_connection_preview(self, diamond_graph, layout_config) -> None:
        result = layout(diamond_graph, "TB", layout_config)
        state = InteractionState(mode=Connecting(from_node_id="A", cursor=Point(500, 500)))

        frame = project(result, state)

        assert frame.node("A").connecting_source
        preview = frame.connection_preview
        assert preview.from_node_id == "A"
        assert preview.start == Point(255, 130)
        assert preview.end == Point(500, 500)

    def test_viewport_passes_through(self, diamond_graph, layout_config) -> None:
        result = layout(diamond_graph, "TB", layout_config)
        state = InteractionState(viewport=Viewport(10, 20, 0.5))
        assert project(result, state).viewport == Viewport(10, 20, 0.5)

    def test_frame_from_manager(self, manager) -> None:
        manager.dispatch(PointerDown(Point(60, 240), PointerTarget.node("B")))
        manager.dispatch(PointerMove(Point(70, 240)))

        frame = manager.frame()

        assert frame.node("B").x == 60
        assert frame.node("B").selected
        assert frame.node("B").to_dict()["id"] == "B"
        assert frame.edge("A>B").to_dict()["points"][-1] == {"x": 150, "y": 230}
