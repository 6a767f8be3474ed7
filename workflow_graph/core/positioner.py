"""
Level-based 2D positioning of traversed nodes.
"""

import logging
from typing import Iterable, Optional

from workflow_graph.config.settings import LayoutSettings
from workflow_graph.core.models import CanvasSize, GraphNode
from workflow_graph.core.traversal import TraversalResult

logger = logging.getLogger(__name__)


class LayoutPositioner:
    """
    Places each level in its own column and centers the level's nodes
    vertically on the canvas.

    Column width stretches to fill the canvas when there are few levels but
    never drops below ``min_level_width``. Canvas bounds only ever grow, so a
    status-only recomputation never makes the layout jump.
    """

    def __init__(self, settings: Optional[LayoutSettings] = None):
        self.settings = settings or LayoutSettings()

    def initial_canvas(self) -> CanvasSize:
        return CanvasSize(
            width=self.settings.initial_canvas_width,
            height=self.settings.initial_canvas_height,
        )

    def position(
        self,
        traversal: TraversalResult,
        canvas: Optional[CanvasSize] = None,
    ) -> CanvasSize:
        """
        Assign x/y and box size to every traversed node.

        Args:
            traversal: Result of graph traversal; nodes are updated in place
            canvas: Canvas size from the previous computation, if any

        Returns:
            The grown canvas size
        """
        canvas = canvas or self.initial_canvas()
        s = self.settings

        if not traversal.nodes:
            return canvas

        level_width = max(s.min_level_width, canvas.width / traversal.level_count)

        for level, node_ids in traversal.levels.items():
            start_y = max(
                s.padding,
                (canvas.height - (len(node_ids) - 1) * s.node_spacing) / 2,
            )
            for index, node_id in enumerate(node_ids):
                node = traversal.nodes[node_id]
                node.width = s.node_width
                node.height = s.node_height
                node.x = level * level_width + s.padding
                node.y = start_y + index * s.node_spacing

        grown = canvas.grow_to(*self.content_bounds(traversal.nodes.values()))
        if grown != canvas:
            logger.debug(
                f"Canvas grew from {canvas.width}x{canvas.height} "
                f"to {grown.width}x{grown.height}"
            )
        return grown

    def content_bounds(self, nodes: Iterable[GraphNode]) -> tuple[float, float]:
        """Right and bottom extent of the nodes, including padding."""
        nodes = list(nodes)
        max_x = max(node.x + node.width for node in nodes) + self.settings.padding
        max_y = max(node.y + node.height for node in nodes) + self.settings.padding
        return max_x, max_y
