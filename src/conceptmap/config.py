"""Configuration management using Pydantic Settings."""

from dataclasses import dataclass
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Layout geometry (graph units)
    layout_node_width: float = 180.0
    layout_node_height: float = 80.0
    layout_node_gap: float = Field(
        default=50.0,
        description="Gap between neighbouring nodes of the same rank"
    )
    layout_rank_gap: float = Field(
        default=100.0,
        description="Gap between consecutive ranks along the flow axis"
    )
    layout_margin: float = 50.0

    # Crossing reduction
    layout_ordering_passes: int = Field(
        default=4,
        ge=0,
        description="Number of median sweeps over the ranks"
    )
    layout_default_orientation: Literal["TB", "LR"] = "TB"

    # Viewport
    viewport_min_zoom: float = 0.1
    viewport_max_zoom: float = 4.0
    viewport_fit_padding: float = Field(
        default=50.0,
        description="Padding kept around the drawing when fitting the viewport"
    )

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False

    log_level: str = "INFO"


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry and heuristic parameters for a single layout pass."""

    node_width: float = 180.0
    node_height: float = 80.0
    node_gap: float = 50.0
    rank_gap: float = 100.0
    margin: float = 50.0
    ordering_passes: int = 4

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "LayoutConfig":
        """Build a layout config from application settings."""
        source = source or settings
        return cls(
            node_width=source.layout_node_width,
            node_height=source.layout_node_height,
            node_gap=source.layout_node_gap,
            rank_gap=source.layout_rank_gap,
            margin=source.layout_margin,
            ordering_passes=source.layout_ordering_passes,
        )


def get_dev_settings() -> Settings:
    """Get development environment settings."""
    return Settings(
        api_debug=True,
        log_level="DEBUG",
    )


def get_test_settings() -> Settings:
    """Get test environment settings.

    Pinned to the stock geometry so tests do not depend on a local .env.
    """
    return Settings(
        _env_file=None,
        layout_node_width=180.0,
        layout_node_height=80.0,
        layout_node_gap=50.0,
        layout_rank_gap=100.0,
        layout_margin=50.0,
        layout_ordering_passes=4,
        layout_default_orientation="TB",
    )


# Global settings instance
settings = Settings()
