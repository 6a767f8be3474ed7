"""
FastAPI routes for the layout engine API.

Implements:
- POST /layout - Compute a graph layout
- GET /health - Health check

The endpoint is stateless. Clients keep the canvas size returned by the
previous call and send it back so the canvas never shrinks.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from workflow_graph import __version__
from workflow_graph.config import Settings, get_settings
from workflow_graph.core.layout import compute_layout
from workflow_graph.core.models import CanvasSize, GraphDefinition, StepExecutionRecord

router = APIRouter(prefix="/v1", tags=["layout"])


# ==================== Request/Response Models ====================

class LayoutRequest(BaseModel):
    """Request body for a layout computation."""

    definition: GraphDefinition = Field(..., description="Graph definition with start and steps")
    steps: list[StepExecutionRecord] = Field(
        default_factory=list,
        description="Step execution records, oldest first",
    )
    canvas: Optional[CanvasSize] = Field(
        default=None,
        description="Canvas size returned by the previous layout call",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "definition": {
                    "start": "validate",
                    "steps": {
                        "validate": {"type": "task", "handler": "validate_order", "next": ["check"]},
                        "check": {"type": "condition", "next": ["ship"], "else": "refund"},
                        "ship": {"type": "task", "on_failure": "cancel_shipment"},
                        "refund": {"type": "task"},
                    },
                },
                "steps": [
                    {"step_name": "validate", "status": "completed"},
                    {"step_name": "check", "status": "running"},
                ],
                "canvas": {"width": 1000, "height": 700},
            }
        }
    )


class NodeResponse(BaseModel):
    """A positioned node."""

    id: str
    type: str
    status: str
    level: int
    x: float
    y: float
    width: float
    height: float
    handler: Optional[str] = None
    has_compensation: bool = False
    on_failure: Optional[str] = None


class EdgeResponse(BaseModel):
    """A typed edge between two nodes."""

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(..., alias="from")
    to: str
    type: str


class PresentationResponse(BaseModel):
    """Renderer options, echoed from server configuration."""

    theme: str
    show_legend: bool
    gradient: bool
    title: str


class LayoutResponse(BaseModel):
    """Computed layout."""

    nodes: list[NodeResponse]
    edges: list[EdgeResponse]
    width: float
    height: float
    presentation: PresentationResponse


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


# ==================== Routes ====================

@router.post(
    "/layout",
    response_model=LayoutResponse,
    response_model_by_alias=True,
    summary="Compute a workflow graph layout",
    description="Lay out a step graph and annotate nodes with execution status.",
)
async def create_layout(
    request: LayoutRequest,
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """Compute the layout for a definition and its execution records."""
    canvas = request.canvas or CanvasSize(
        width=settings.layout.initial_canvas_width,
        height=settings.layout.initial_canvas_height,
    )
    layout = compute_layout(request.definition, request.steps, canvas, settings.layout)

    presentation = settings.presentation
    return {
        **layout.to_dict(),
        "presentation": {
            "theme": presentation.theme.value,
            "show_legend": presentation.show_legend,
            "gradient": presentation.gradient,
            "title": presentation.title,
        },
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check() -> HealthResponse:
    """Report service health."""
    return HealthResponse(status="healthy", version=__version__)
