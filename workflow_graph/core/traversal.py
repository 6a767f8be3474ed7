"""
Graph traversal for layout.

Walks a workflow graph definition depth-first from its start step, assigns
each reachable step a level (column) and emits the typed edge list,
including the reconvergence edges into join steps that a visited-set walk
would otherwise drop.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterator, Optional

from workflow_graph.core.models import (
    EdgeKind,
    GraphDefinition,
    GraphEdge,
    GraphNode,
    StepDefinition,
    StepType,
)
from workflow_graph.core.status import StatusMap

logger = logging.getLogger(__name__)


@dataclass
class TraversalResult:
    """Nodes, level buckets and raw edges produced by a traversal."""

    nodes: dict[str, GraphNode] = field(default_factory=dict)  # discovery order
    levels: dict[int, list[str]] = field(default_factory=dict)  # level -> node ids
    edges: list[GraphEdge] = field(default_factory=list)

    @property
    def level_count(self) -> int:
        """Number of columns, counting levels skipped by fan-out reservation."""
        if not self.levels:
            return 0
        return max(self.levels) + 1

    def level_of(self, node_id: str) -> Optional[int]:
        node = self.nodes.get(node_id)
        return node.level if node else None


class TraversalEngine:
    """
    Assigns levels and edges to the steps reachable from the start step.

    Level is the depth at which a step is first reached and is never
    reassigned. Branching order per step:

    - join steps first receive a normal edge from every step listing them
      in ``next``
    - ``parallel`` branch heads get parallel edges at level+1; any ``next``
      targets are then fed by every branch head and placed at level+2
    - otherwise each ``next`` target gets a normal edge at level+1
    - ``else`` gets an else edge at level+1
    - fork steps end the walk after linking their ``next`` targets

    ``on_failure`` is an annotation and is never followed.
    """

    def __init__(self, definition: GraphDefinition, statuses: Optional[StatusMap] = None):
        self.definition = definition
        self.statuses = statuses or StatusMap()
        self._predecessors: dict[str, list[str]] = defaultdict(list)
        self._emitted: set[tuple[str, str, EdgeKind]] = set()

        self._build_graph()

    def _build_graph(self) -> None:
        """Build the successor -> predecessors index over ``next`` references."""
        for name, step in self.definition.steps.items():
            for successor in dict.fromkeys(step.next):
                if successor != name:
                    self._predecessors[successor].append(name)

    def traverse(self) -> TraversalResult:
        """
        Walk the graph from its start step.

        Returns:
            TraversalResult; empty when the start step does not exist
        """
        result = TraversalResult()
        self._emitted = set()

        if not self.definition.has_step(self.definition.start):
            logger.debug(f"Start step '{self.definition.start}' not found, empty layout")
            return result

        self._walk(self.definition.start, result)

        logger.debug(
            f"Traversed {len(result.nodes)} of {len(self.definition.steps)} steps, "
            f"{len(result.edges)} edges, {result.level_count} levels"
        )
        return result

    def _emit(self, result: TraversalResult, source: str, target: str, kind: EdgeKind) -> None:
        edge = GraphEdge(source=source, target=target, kind=kind)
        if edge.key in self._emitted:
            return
        self._emitted.add(edge.key)
        result.edges.append(edge)

    def _walk(self, start: str, result: TraversalResult) -> None:
        """
        Depth-first walk on an explicit stack.

        Each frame is the successor generator of one step. It emits that
        step's edges and yields the (name, level) of each child to descend
        into, so deep chains never touch the interpreter's recursion limit.
        """
        stack: list[Iterator[tuple[str, int]]] = []
        frame = self._enter(start, 0, result)
        if frame is not None:
            stack.append(frame)

        while stack:
            try:
                name, level = next(stack[-1])
            except StopIteration:
                stack.pop()
                continue
            frame = self._enter(name, level, result)
            if frame is not None:
                stack.append(frame)

    def _enter(self, name: str, level: int, result: TraversalResult) -> Optional[Iterator[tuple[str, int]]]:
        """Record a step at its first level; None when visited or unknown."""
        if name in result.nodes:
            return None
        step = self.definition.get_step(name)
        if step is None:
            logger.debug(f"Skipping reference to unknown step '{name}'")
            return None

        result.nodes[name] = GraphNode(
            id=name,
            step=step,
            status=self.statuses.get(name),
            level=level,
        )
        result.levels.setdefault(level, []).append(name)
        return self._successors(name, step, level, result)

    def _successors(
        self,
        name: str,
        step: StepDefinition,
        level: int,
        result: TraversalResult,
    ) -> Iterator[tuple[str, int]]:
        if step.type == StepType.JOIN:
            for predecessor in self._predecessors.get(name, []):
                self._emit(result, predecessor, name, EdgeKind.NORMAL)

        if step.parallel:
            for branch in step.parallel:
                self._emit(result, name, branch, EdgeKind.PARALLEL)
                yield branch, level + 1

            # One level is reserved for the branches themselves
            for next_step in step.next:
                for branch in step.parallel:
                    self._emit(result, branch, next_step, EdgeKind.NORMAL)
                yield next_step, level + 2
        else:
            for next_step in step.next:
                self._emit(result, name, next_step, EdgeKind.NORMAL)
                yield next_step, level + 1

        if step.else_:
            self._emit(result, name, step.else_, EdgeKind.ELSE)
            yield step.else_, level + 1

        if step.type == StepType.FORK:
            # Branches reconverge through the join's own predecessor edges
            for branch_start in step.next:
                self._emit(result, name, branch_start, EdgeKind.NORMAL)


def traverse_graph(definition: GraphDefinition, statuses: Optional[StatusMap] = None) -> TraversalResult:
    """Convenience wrapper around TraversalEngine."""
    return TraversalEngine(definition, statuses).traverse()
