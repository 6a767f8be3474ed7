"""
Domain models for the workflow graph layout engine.

All models use Pydantic for validation and serialization with full Python 3.10+ type hints.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class StepType(str, Enum):
    """Supported step types in a workflow graph definition."""

    TASK = "task"
    PARALLEL = "parallel"
    CONDITION = "condition"
    FORK = "fork"
    JOIN = "join"
    SAVE_POINT = "save_point"


class StepStatus(str, Enum):
    """
    Execution status of a step, as reported by the execution backend.

    This set is a fixed contract with the rendering layer.
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"
    COMPENSATION = "compensation"
    ROLLED_BACK = "rolled_back"


class JoinStrategy(str, Enum):
    """How a join step waits for its branches (metadata only)."""

    ALL = "all"
    ANY = "any"


class EdgeKind(str, Enum):
    """Kind of a layout edge."""

    NORMAL = "normal"
    ELSE = "else"
    PARALLEL = "parallel"
    FAILURE = "failure"  # Reserved by the renderer; on_failure is never traversed


class StepDefinition(BaseModel):
    """Definition of a single step in a workflow graph."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(default="", description="Step name, unique within its graph")
    type: StepType = Field(..., description="Step type")
    handler: Optional[str] = Field(default=None, description="Handler identifier")
    max_retries: Optional[int] = Field(default=None, ge=0)

    # Successors
    next: list[str] = Field(default_factory=list, description="Ordered successor step names")
    else_: Optional[str] = Field(default=None, alias="else", description="Alternate successor")
    parallel: list[str] = Field(default_factory=list, description="Fan-out branch heads")
    prev: Optional[str] = Field(default=None)

    # Annotations, never traversed
    on_failure: Optional[str] = Field(default=None, description="Compensation handler name")
    condition: Optional[str] = Field(default=None, description="Condition expression")
    wait_for: list[str] = Field(default_factory=list)
    join_strategy: Optional[JoinStrategy] = Field(default=None)
    no_idempotent: bool = Field(default=False)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("next", "parallel", "wait_for", mode="before")
    @classmethod
    def null_as_empty_list(cls, v: Any) -> Any:
        """Treat explicit nulls as absent lists."""
        return [] if v is None else v

    @field_validator("metadata", mode="before")
    @classmethod
    def null_as_empty_metadata(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def has_compensation(self) -> bool:
        """Whether a compensation handler is attached."""
        return self.on_failure is not None


class GraphDefinition(BaseModel):
    """A workflow graph: named steps plus the step traversal starts from."""

    start: str = Field(..., description="Name of the entry step")
    steps: dict[str, StepDefinition] = Field(default_factory=dict)

    @model_validator(mode="after")
    def fill_step_names(self) -> "GraphDefinition":
        """Steps are keyed by name; fill in names omitted from the step body."""
        for name, step in self.steps.items():
            if not step.name:
                step.name = name
        return self

    def get_step(self, name: str) -> Optional[StepDefinition]:
        """Get step by name."""
        return self.steps.get(name)

    def has_step(self, name: str) -> bool:
        return name in self.steps


class StepExecutionRecord(BaseModel):
    """
    Execution record of one step attempt, supplied by the execution backend.

    Read-only input; only step_name and status are used for layout.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = Field(default=None)
    instance_id: Optional[int] = Field(default=None)
    step_name: str = Field(..., description="Name of the step this record belongs to")
    step_type: Optional[str] = Field(default=None)
    status: StepStatus = Field(..., description="Execution status")

    input: Optional[Any] = Field(default=None)
    output: Optional[Any] = Field(default=None)
    error: Optional[str] = Field(default=None)

    # Retry tracking
    retry_count: int = Field(default=0, ge=0)
    max_retries: int = Field(default=0, ge=0)
    compensation_retry_count: int = Field(default=0, ge=0)

    # Timing
    started_at: Optional[datetime] = Field(default=None)
    completed_at: Optional[datetime] = Field(default=None)
    created_at: Optional[datetime] = Field(default=None)


class GraphNode(BaseModel):
    """A positioned node in the computed layout."""

    id: str
    step: StepDefinition
    status: StepStatus = StepStatus.PENDING
    level: int = 0
    x: float = 0.0
    y: float = 0.0
    width: float = 120.0
    height: float = 60.0

    @property
    def type(self) -> StepType:
        return self.step.type

    @property
    def has_compensation(self) -> bool:
        return self.step.has_compensation

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the renderer contract."""
        return {
            "id": self.id,
            "type": self.type.value,
            "status": self.status.value,
            "level": self.level,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "handler": self.step.handler,
            "has_compensation": self.has_compensation,
            "on_failure": self.step.on_failure,
        }


class GraphEdge(BaseModel):
    """A directed, typed edge between two steps."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    kind: EdgeKind = EdgeKind.NORMAL

    @property
    def key(self) -> tuple[str, str, EdgeKind]:
        return (self.source, self.target, self.kind)

    def to_dict(self) -> dict[str, str]:
        """Serialize to the renderer contract."""
        return {"from": self.source, "to": self.target, "type": self.kind.value}


class CanvasSize(BaseModel):
    """Canvas bounds retained between layout computations."""

    width: float = Field(default=1000.0, gt=0)
    height: float = Field(default=700.0, gt=0)

    def grow_to(self, width: float, height: float) -> "CanvasSize":
        """Return a canvas at least as large as both self and the given bounds."""
        return CanvasSize(width=max(self.width, width), height=max(self.height, height))


class GraphLayout(BaseModel):
    """Result of a layout computation, ready for rendering."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    width: float
    height: float

    @property
    def canvas(self) -> CanvasSize:
        return CanvasSize(width=self.width, height=self.height)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        """Get node by ID."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "width": self.width,
            "height": self.height,
        }
