"""Viewport transform (pan + zoom) and fit-to-container computation."""

from dataclasses import dataclass

from conceptmap.models import LayoutResult, Point


@dataclass(frozen=True)
class Viewport:
    """
    Maps graph coordinates to screen coordinates.

    screen = graph * zoom + (x, y)
    """

    x: float = 0.0
    y: float = 0.0
    zoom: float = 1.0

    @property
    def pan(self) -> Point:
        return Point(self.x, self.y)

    def to_graph(self, screen: Point) -> Point:
        return Point((screen.x - self.x) / self.zoom, (screen.y - self.y) / self.zoom)

    def to_screen(self, graph: Point) -> Point:
        return Point(graph.x * self.zoom + self.x, graph.y * self.zoom + self.y)

    def with_pan(self, pan: Point) -> "Viewport":
        return Viewport(pan.x, pan.y, self.zoom)

    def zoom_at(
        self,
        factor: float,
        anchor: Point,
        min_zoom: float,
        max_zoom: float,
    ) -> "Viewport":
        """Scale by `factor`, keeping the graph point under `anchor` fixed."""
        zoom = min(max(self.zoom * factor, min_zoom), max_zoom)
        fixed = self.to_graph(anchor)
        return Viewport(anchor.x - fixed.x * zoom, anchor.y - fixed.y * zoom, zoom)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "zoom": self.zoom}


def fit_viewport(
    result: LayoutResult,
    container_width: float,
    container_height: float,
    padding: float = 50.0,
    min_zoom: float = 0.1,
) -> Viewport:
    """
    Get a viewport that fits every laid-out node inside the container.

    Never zooms in beyond 100%; an empty layout gets the identity viewport.
    """
    if result.is_empty:
        return Viewport()

    min_x = min(n.x for n in result.nodes)
    min_y = min(n.y for n in result.nodes)
    max_x = max(n.x + n.width for n in result.nodes)
    max_y = max(n.y + n.height for n in result.nodes)
    graph_width = max_x - min_x
    graph_height = max_y - min_y

    zoom_x = (container_width - padding * 2) / graph_width
    zoom_y = (container_height - padding * 2) / graph_height
    zoom = max(min(zoom_x, zoom_y, 1.0), min_zoom)

    x = (container_width - graph_width * zoom) / 2 - min_x * zoom
    y = (container_height - graph_height * zoom) / 2 - min_y * zoom
    return Viewport(x, y, zoom)
