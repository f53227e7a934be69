"""Unit tests for snapshot validation and the graph adjacency view."""

import pytest

from conceptmap.graph import (
    DanglingEdgeError,
    DuplicateConnectionError,
    DuplicateNodeError,
    GraphDataError,
    build_graph,
)
from conceptmap.models import Connection
from tests.factories import make_connections, make_nodes


class TestBuildGraph:
    """Tests for build_graph validation."""

    def test_round_trip(self, diamond_nodes, diamond_connections) -> None:
        """Test the graph holds exactly the nodes and endpoint pairs supplied."""
        graph = build_graph(diamond_nodes, diamond_connections)
        assert {n.id for n in graph.nodes} == {"A", "B", "C", "D"}
        assert set(graph.endpoints()) == {("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")}
        assert len(graph) == 4

    def test_empty_snapshot(self) -> None:
        graph = build_graph([], [])
        assert graph.is_empty
        assert graph.node_ids() == []

    def test_duplicate_node(self) -> None:
        """Test two nodes sharing an id are rejected."""
        nodes = make_nodes("A", "B", "A")
        with pytest.raises(DuplicateNodeError) as exc_info:
            build_graph(nodes, [])
        assert exc_info.value.node_id == "A"

    def test_duplicate_connection(self) -> None:
        """Test two connections sharing an id are rejected."""
        connections = [
            Connection(id="e1", from_node_id="A", to_node_id="B"),
            Connection(id="e1", from_node_id="B", to_node_id="C"),
        ]
        with pytest.raises(DuplicateConnectionError) as exc_info:
            build_graph(make_nodes("A", "B", "C"), connections)
        assert exc_info.value.connection_id == "e1"

    def test_dangling_edge(self) -> None:
        """Test a connection to an unknown node names the missing endpoint."""
        connections = [Connection(id="e1", from_node_id="A", to_node_id="ghost")]
        with pytest.raises(DanglingEdgeError) as exc_info:
            build_graph(make_nodes("A"), connections)
        assert exc_info.value.connection_id == "e1"
        assert exc_info.value.missing_node_id == "ghost"

    def test_dangling_source_reported_first(self) -> None:
        connections = [Connection(id="e1", from_node_id="x", to_node_id="y")]
        with pytest.raises(DanglingEdgeError) as exc_info:
            build_graph(make_nodes("A"), connections)
        assert exc_info.value.missing_node_id == "x"

    def test_errors_share_base_class(self) -> None:
        """Test every data error is a GraphDataError and a ValueError."""
        with pytest.raises(GraphDataError):
            build_graph(make_nodes("A", "A"), [])
        with pytest.raises(ValueError):
            build_graph(make_nodes("A", "A"), [])

    def test_error_to_dict(self) -> None:
        data = DanglingEdgeError("e1", "ghost").to_dict()
        assert data["error"] == "DanglingEdgeError"
        assert data["connection_id"] == "e1"
        assert data["missing_node_id"] == "ghost"
        assert "ghost" in data["message"]

    def test_self_loop_is_valid(self) -> None:
        graph = build_graph(make_nodes("A"), make_connections("A>A"))
        assert graph.successors("A") == ["A"]


class TestGraph:
    """Tests for the adjacency view."""

    def test_adjacency_in_input_order(self, diamond_graph) -> None:
        assert diamond_graph.successors("A") == ["B", "C"]
        assert diamond_graph.predecessors("D") == ["B", "C"]
        assert diamond_graph.successors("D") == []

    def test_index_is_input_position(self, diamond_graph) -> None:
        assert diamond_graph.index == {"A": 0, "B": 1, "C": 2, "D": 3}

    def test_contains_and_lookup(self, diamond_graph) -> None:
        assert "A" in diamond_graph
        assert "Z" not in diamond_graph
        assert diamond_graph.node("B").title == "React"
        assert diamond_graph.has_connection("A>B")
        assert diamond_graph.connection("missing") is None

    def test_descendants(self, diamond_graph) -> None:
        assert diamond_graph.descendants("A") == {"B", "C", "D"}
        assert diamond_graph.descendants("B") == {"D"}
        assert diamond_graph.descendants("D") == set()

    def test_descendants_on_cycle_excludes_start(self) -> None:
        graph = build_graph(make_nodes("X", "Y", "Z"), make_connections("X>Y", "Y>Z", "Z>X"))
        assert graph.descendants("X") == {"Y", "Z"}

    def test_subgraph_keeps_inner_connections(self, diamond_graph) -> None:
        sub = diamond_graph.subgraph(["A", "B", "D"])
        assert sub.node_ids() == ["A", "B", "D"]
        assert set(sub.endpoints()) == {("A", "B"), ("B", "D")}
