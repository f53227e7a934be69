"""Render binding module."""

from conceptmap.render.binding import (
    ConnectionPreview,
    RenderEdge,
    RenderFrame,
    RenderNode,
    displayed_position,
    project,
)

__all__ = [
    "ConnectionPreview",
    "RenderEdge",
    "RenderFrame",
    "RenderNode",
    "displayed_position",
    "project",
]
