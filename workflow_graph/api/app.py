"""
FastAPI application factory for the layout API.

The root endpoint describes the renderer contract: the step types, status
values and edge kinds a layout can contain, plus the node box geometry.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workflow_graph import __version__
from workflow_graph.api.routes import router
from workflow_graph.config import Settings, get_settings
from workflow_graph.core.models import EdgeKind, StepStatus, StepType

logger = logging.getLogger(__name__)


def renderer_contract(settings: Settings) -> dict:
    """Values a renderer must be prepared to draw."""
    return {
        "step_types": [t.value for t in StepType],
        "statuses": [s.value for s in StepStatus],
        "edge_kinds": [k.value for k in EdgeKind],
        "node_box": {
            "width": settings.layout.node_width,
            "height": settings.layout.node_height,
        },
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    layout = settings.layout

    logger.info(
        f"Layout API ready ({settings.environment.value}): "
        f"node {layout.node_width}x{layout.node_height}, "
        f"initial canvas {layout.initial_canvas_width}x{layout.initial_canvas_height}, "
        f"theme {settings.presentation.theme.value}"
    )

    yield


def create_app() -> FastAPI:
    """Create the layout API application."""
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Layout engine for workflow step graphs with live execution status",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
    )

    # Any origin in dev unless renderer origins are configured
    origins = settings.cors_origins or (["*"] if settings.is_development else [])
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type"],
        )

    app.include_router(router)

    @app.get("/", tags=["root"])
    async def describe_service(current: Settings = Depends(get_settings)):
        return {
            "name": current.app_name,
            "version": __version__,
            "contract": renderer_contract(current),
        }

    return app


# Application instance for uvicorn
app = create_app()
