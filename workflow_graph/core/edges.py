"""Post-traversal edge filtering."""

from workflow_graph.core.models import GraphDefinition, GraphEdge, StepType


def is_fork_join_shortcut(edge: GraphEdge, definition: GraphDefinition) -> bool:
    """Whether the edge links a fork directly to a join, bypassing the branches."""
    source = definition.get_step(edge.source)
    target = definition.get_step(edge.target)
    if source is None or target is None:
        return False
    return source.type == StepType.FORK and target.type == StepType.JOIN


def filter_edges(edges: list[GraphEdge], definition: GraphDefinition) -> list[GraphEdge]:
    """Drop fork -> join shortcut edges; everything else keeps its order."""
    return [edge for edge in edges if not is_fork_join_shortcut(edge, definition)]
