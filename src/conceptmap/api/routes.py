"""API routes for conceptmap.

Provides:
- /graph/layout for laying out a full snapshot
- /graph/viewport/fit for the viewport that fits a snapshot's drawing
- /health
"""

import logging
from typing import Any, Literal

from fastapi import APIRouter, HTTPException
from pydantic import AliasChoices, BaseModel, Field

from conceptmap import __version__
from conceptmap.config import LayoutConfig, settings
from conceptmap.graph import GraphDataError, build_graph
from conceptmap.interaction.viewport import fit_viewport
from conceptmap.layout import layout
from conceptmap.models import ConceptNode, Connection, ConnectionType, LayoutResult, NodeType

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Snapshot Models
# ============================================================================


class ConceptNodeIn(BaseModel):
    """Concept node as supplied by the course/roadmap service."""

    id: str
    title: str = ""
    type: str = "concept"
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_domain(self) -> ConceptNode:
        return ConceptNode(
            id=self.id,
            title=self.title,
            type=NodeType.parse(self.type),
            metadata=self.metadata,
        )


class ConnectionIn(BaseModel):
    """Directed connection between two concept nodes."""

    id: str
    from_node_id: str = Field(validation_alias=AliasChoices("from_node_id", "fromNodeId"))
    to_node_id: str = Field(validation_alias=AliasChoices("to_node_id", "toNodeId"))
    type: str = "related"
    strength: float = Field(default=0.5, ge=0.0, le=1.0)

    def to_domain(self) -> Connection:
        return Connection(
            id=self.id,
            from_node_id=self.from_node_id,
            to_node_id=self.to_node_id,
            type=ConnectionType.parse(self.type),
            strength=self.strength,
        )


class LayoutRequest(BaseModel):
    """Full graph snapshot to lay out."""

    nodes: list[ConceptNodeIn] = []
    connections: list[ConnectionIn] = []
    orientation: Literal["TB", "LR"] = Field(default_factory=lambda: settings.layout_default_orientation)


class PointOut(BaseModel):
    x: float
    y: float


class LayoutNodeOut(BaseModel):
    id: str
    rank: int
    order: int
    x: float
    y: float
    width: float
    height: float


class LayoutEdgeOut(BaseModel):
    id: str
    source: str
    target: str
    points: list[PointOut]
    direction: Literal["TB", "LR"]
    reversed: bool = False


class LayoutResponse(BaseModel):
    orientation: Literal["TB", "LR"]
    width: float
    height: float
    nodes: list[LayoutNodeOut]
    edges: list[LayoutEdgeOut]


class FitViewportRequest(LayoutRequest):
    container_width: float = Field(gt=0)
    container_height: float = Field(gt=0)
    padding: float | None = Field(default=None, ge=0)


class ViewportResponse(BaseModel):
    x: float
    y: float
    zoom: float


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = __version__


# ============================================================================
# Helper Functions
# ============================================================================


def run_layout(body: LayoutRequest) -> LayoutResult:
    """Validate a snapshot and lay it out; data errors become 422s."""
    try:
        graph = build_graph(
            [n.to_domain() for n in body.nodes],
            [c.to_domain() for c in body.connections],
        )
    except GraphDataError as e:
        logger.warning(f"Rejected graph snapshot: {e}")
        raise HTTPException(status_code=422, detail=e.to_dict())

    return layout(graph, body.orientation, LayoutConfig.from_settings())


# ============================================================================
# Layout Endpoints
# ============================================================================


@router.post("/graph/layout", response_model=LayoutResponse)
async def compute_layout(body: LayoutRequest) -> LayoutResponse:
    """
    Lay out a full graph snapshot.

    Returns rank, order and top-left coordinates per node and a routed
    point list per connection. Duplicate ids or dangling connections
    are rejected with 422 and no layout is attempted.
    """
    result = run_layout(body)
    return LayoutResponse(**result.to_dict())


@router.post("/graph/viewport/fit", response_model=ViewportResponse)
async def fit_view(body: FitViewportRequest) -> ViewportResponse:
    """Viewport (pan + zoom) that fits the snapshot's drawing in a container."""
    result = run_layout(body)
    padding = settings.viewport_fit_padding if body.padding is None else body.padding
    viewport = fit_viewport(
        result,
        body.container_width,
        body.container_height,
        padding=padding,
        min_zoom=settings.viewport_min_zoom,
    )
    return ViewportResponse(**viewport.to_dict())


# ============================================================================
# Admin Endpoints
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check."""
    return HealthResponse(status="healthy")
