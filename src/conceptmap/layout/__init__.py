"""Layout engine module.

Provides:
- Deterministic layered layout (layout)
- Individual phases for callers that need rank or order data only
"""

from conceptmap.layout.coordinates import RankGeometry, assign_coordinates
from conceptmap.layout.cycles import CycleRemovalResult, remove_cycles
from conceptmap.layout.engine import layout
from conceptmap.layout.ordering import count_crossings, order_ranks
from conceptmap.layout.ranking import assign_ranks, group_by_rank
from conceptmap.layout.routing import entry_port, exit_port, route_edges

__all__ = [
    "layout",
    # Phases
    "CycleRemovalResult",
    "remove_cycles",
    "assign_ranks",
    "group_by_rank",
    "order_ranks",
    "count_crossings",
    "RankGeometry",
    "assign_coordinates",
    "route_edges",
    "entry_port",
    "exit_port",
]
