"""Pytest configuration and fixtures."""

import pytest

from conceptmap.config import LayoutConfig, Settings, get_test_settings
from conceptmap.graph import Graph, GraphStore, build_graph
from conceptmap.interaction.manager import InteractionManager
from conceptmap.models import ConceptNode, Connection, NodeType
from tests.factories import make_connections


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with stock geometry."""
    return get_test_settings()


@pytest.fixture
def layout_config(test_settings: Settings) -> LayoutConfig:
    """180x80 nodes, 50 node gap, 100 rank gap, 50 margin, 4 passes."""
    return LayoutConfig.from_settings(test_settings)


@pytest.fixture
def diamond_nodes() -> list[ConceptNode]:
    """A (no deps), B and C (depend on A), D (depends on B and C)."""
    return [
        ConceptNode(id="A", title="JavaScript basics", type=NodeType.CONCEPT),
        ConceptNode(id="B", title="React", type=NodeType.SKILL),
        ConceptNode(id="C", title="TypeScript", type=NodeType.SKILL),
        ConceptNode(id="D", title="Frontend course", type=NodeType.COURSE),
    ]


@pytest.fixture
def diamond_connections() -> list[Connection]:
    return make_connections("A>B", "A>C", "B>D", "C>D")


@pytest.fixture
def diamond_graph(diamond_nodes, diamond_connections) -> Graph:
    return build_graph(diamond_nodes, diamond_connections)


@pytest.fixture
def store(diamond_nodes, diamond_connections) -> GraphStore:
    return GraphStore(diamond_nodes, diamond_connections)


@pytest.fixture
def manager(store: GraphStore, test_settings: Settings) -> InteractionManager:
    """Manager over the diamond graph, identity viewport, TB orientation."""
    return InteractionManager(store, orientation="TB", app_settings=test_settings)
