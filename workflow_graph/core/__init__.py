"""Core domain models and layout logic."""

from workflow_graph.core.models import (
    CanvasSize,
    EdgeKind,
    GraphDefinition,
    GraphEdge,
    GraphLayout,
    GraphNode,
    StepDefinition,
    StepExecutionRecord,
    StepStatus,
    StepType,
)
from workflow_graph.core.status import StatusMap, project_statuses
from workflow_graph.core.traversal import TraversalEngine, TraversalResult
from workflow_graph.core.positioner import LayoutPositioner
from workflow_graph.core.edges import filter_edges
from workflow_graph.core.layout import LayoutSession, compute_layout, parse_graph_definition

__all__ = [
    "CanvasSize",
    "EdgeKind",
    "GraphDefinition",
    "GraphEdge",
    "GraphLayout",
    "GraphNode",
    "StepDefinition",
    "StepExecutionRecord",
    "StepStatus",
    "StepType",
    "StatusMap",
    "project_statuses",
    "TraversalEngine",
    "TraversalResult",
    "LayoutPositioner",
    "filter_edges",
    "LayoutSession",
    "compute_layout",
    "parse_graph_definition",
]
