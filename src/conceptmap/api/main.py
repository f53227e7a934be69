"""FastAPI application for conceptmap.

Serves stateless layout computations for hosts that cannot run the
engine in-process.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from conceptmap import __version__
from conceptmap.api.routes import router
from conceptmap.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan - startup and shutdown."""
    logger.info("Starting conceptmap API...")
    logger.info(
        f"Default orientation: {settings.layout_default_orientation}, "
        f"node {settings.layout_node_width}x{settings.layout_node_height}"
    )

    yield

    logger.info("Shutting down conceptmap API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="conceptmap",
        description="Deterministic layered layout for knowledge graphs",
        version=__version__,
        lifespan=lifespan,
    )

    # Rendering hosts are served from other origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "conceptmap.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
