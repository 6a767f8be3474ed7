"""
Layout pipeline.

Status projection, traversal, positioning and edge filtering composed into
one pure computation over (definition, status records, previous canvas).
"""

import logging
from typing import Any, Iterable, Optional, Union

from workflow_graph.config.settings import LayoutSettings
from workflow_graph.core.edges import filter_edges
from workflow_graph.core.models import CanvasSize, GraphDefinition, GraphLayout
from workflow_graph.core.positioner import LayoutPositioner
from workflow_graph.core.status import RecordLike, project_statuses
from workflow_graph.core.traversal import TraversalEngine

logger = logging.getLogger(__name__)

DefinitionLike = Union[GraphDefinition, dict[str, Any]]


def parse_graph_definition(definition_json: dict[str, Any]) -> GraphDefinition:
    """
    Parse a graph definition JSON payload.

    Structural problems inside the graph (missing start, dangling or cyclic
    references) are not errors; they only shrink the resulting layout.

    Raises:
        ValueError: If the JSON cannot be parsed into a GraphDefinition
    """
    return GraphDefinition.model_validate(definition_json)


def compute_layout(
    definition: DefinitionLike,
    records: Optional[Iterable[RecordLike]] = None,
    canvas: Optional[CanvasSize] = None,
    settings: Optional[LayoutSettings] = None,
) -> GraphLayout:
    """
    Compute the node/edge layout of a workflow graph.

    Side-effect free: the only state carried between calls is the canvas
    size, which the caller passes back in.

    Args:
        definition: Graph definition, as a model or raw JSON
        records: Step execution records used to annotate node status
        canvas: Canvas size returned by the previous computation
        settings: Layout geometry

    Returns:
        GraphLayout with positioned nodes, filtered edges and canvas size
    """
    if not isinstance(definition, GraphDefinition):
        definition = parse_graph_definition(definition)

    statuses = project_statuses(records)
    traversal = TraversalEngine(definition, statuses).traverse()

    positioner = LayoutPositioner(settings)
    new_canvas = positioner.position(traversal, canvas)

    edges = filter_edges(traversal.edges, definition)
    if len(edges) != len(traversal.edges):
        logger.debug(f"Dropped {len(traversal.edges) - len(edges)} fork -> join shortcut edges")

    return GraphLayout(
        nodes=list(traversal.nodes.values()),
        edges=edges,
        width=new_canvas.width,
        height=new_canvas.height,
    )


class LayoutSession:
    """
    Caller-owned layout state for one visualization surface.

    Holds the canvas size across recomputations so the canvas only grows.
    Each view keeps its own session; nothing is shared between sessions.
    """

    def __init__(self, settings: Optional[LayoutSettings] = None):
        self.settings = settings or LayoutSettings()
        self.canvas = LayoutPositioner(self.settings).initial_canvas()
        self.last_layout: Optional[GraphLayout] = None

    def update(
        self,
        definition: DefinitionLike,
        records: Optional[Iterable[RecordLike]] = None,
    ) -> GraphLayout:
        """Recompute the layout after a definition or status change."""
        layout = compute_layout(definition, records, self.canvas, self.settings)
        self.canvas = layout.canvas
        self.last_layout = layout
        return layout

    def reset(self) -> None:
        """Start over from the initial canvas, e.g. when switching workflows."""
        self.canvas = LayoutPositioner(self.settings).initial_canvas()
        self.last_layout = None
