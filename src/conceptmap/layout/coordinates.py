"""Coordinate assignment: map (rank, order) onto the drawing plane."""

from dataclasses import dataclass

from conceptmap.config import LayoutConfig
from conceptmap.models import Orientation


@dataclass(frozen=True)
class Placement:
    """Rank, order and top-left corner of one node."""

    rank: int
    order: int
    x: float
    y: float


class RankGeometry:
    """
    Fixed-size grid geometry for one orientation.

    The flow axis carries ranks (y for TB, x for LR); the cross axis
    carries the order within a rank.
    """

    def __init__(self, layers: list[list[str]], orientation: Orientation, config: LayoutConfig) -> None:
        self.orientation = orientation
        self.config = config
        if orientation.is_horizontal:
            self.flow_size, self.cross_size = config.node_width, config.node_height
        else:
            self.flow_size, self.cross_size = config.node_height, config.node_width
        self.cross_step = self.cross_size + config.node_gap
        self.flow_step = self.flow_size + config.rank_gap
        self.rank_counts = [len(layer) for layer in layers]
        self.max_extent = max((self.extent(n) for n in self.rank_counts), default=0.0)

    def extent(self, count: int) -> float:
        """Cross-axis length occupied by a rank of `count` nodes."""
        if count == 0:
            return 0.0
        return count * self.cross_size + (count - 1) * self.config.node_gap

    def flow_start(self, rank: int) -> float:
        return self.config.margin + rank * self.flow_step

    def cross_start(self, rank: int, order: int) -> float:
        # Ranks are centred on the widest one
        offset = (self.max_extent - self.extent(self.rank_counts[rank])) / 2
        return self.config.margin + offset + order * self.cross_step

    def to_xy(self, flow: float, cross: float) -> tuple[float, float]:
        if self.orientation.is_horizontal:
            return flow, cross
        return cross, flow

    def drawing_size(self) -> tuple[float, float]:
        """(width, height) of the drawing including margins."""
        if not self.rank_counts:
            return 0.0, 0.0
        ranks = len(self.rank_counts)
        flow_length = ranks * self.flow_size + (ranks - 1) * self.config.rank_gap
        flow_total = flow_length + 2 * self.config.margin
        cross_total = self.max_extent + 2 * self.config.margin
        return self.to_xy(flow_total, cross_total)


def assign_coordinates(geometry: RankGeometry, layers: list[list[str]]) -> dict[str, Placement]:
    """Place every node of every rank on the fixed grid."""
    placements: dict[str, Placement] = {}
    for rank, layer in enumerate(layers):
        flow = geometry.flow_start(rank)
        for order, node_id in enumerate(layer):
            x, y = geometry.to_xy(flow, geometry.cross_start(rank, order))
            placements[node_id] = Placement(rank=rank, order=order, x=x, y=y)
    return placements
