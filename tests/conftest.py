"""
Pytest fixtures and configuration for tests.
"""

import pytest

from workflow_graph.config import Environment, LayoutSettings, Settings


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        environment=Environment.TEST,
        debug=True,
        log_level="DEBUG",
    )


@pytest.fixture
def layout_settings() -> LayoutSettings:
    """Default layout geometry."""
    return LayoutSettings()


@pytest.fixture
def sample_condition_graph() -> dict:
    """Sample graph with a condition: a -> b -> (c | else d)."""
    return {
        "start": "a",
        "steps": {
            "a": {"type": "task", "next": ["b"]},
            "b": {"type": "condition", "next": ["c"], "else": "d"},
            "c": {"type": "task"},
            "d": {"type": "task"},
        },
    }


@pytest.fixture
def sample_fork_join_graph() -> dict:
    """Sample fork/join graph: fork -> (left, right) -> join -> done."""
    return {
        "start": "fork",
        "steps": {
            "fork": {"type": "fork", "next": ["left", "right"]},
            "left": {"type": "task", "handler": "charge_card", "next": ["join"]},
            "right": {"type": "task", "handler": "reserve_stock", "next": ["join"]},
            "join": {"type": "join", "wait_for": ["left", "right"], "join_strategy": "all", "next": ["done"]},
            "done": {"type": "task"},
        },
    }


@pytest.fixture
def sample_parallel_graph() -> dict:
    """Sample parallel fan-out: fan -> (a, b) -> merge."""
    return {
        "start": "fan",
        "steps": {
            "fan": {"type": "parallel", "parallel": ["a", "b"], "next": ["merge"]},
            "a": {"type": "task"},
            "b": {"type": "task"},
            "merge": {"type": "task"},
        },
    }


@pytest.fixture
def sample_order_graph() -> dict:
    """A realistic order workflow with compensation handlers and a save point."""
    return {
        "start": "validate",
        "steps": {
            "validate": {"type": "task", "handler": "validate_order", "next": ["checkpoint"]},
            "checkpoint": {"type": "save_point", "next": ["in_stock"]},
            "in_stock": {
                "type": "condition",
                "condition": "stock > 0",
                "next": ["fork"],
                "else": "backorder",
            },
            "fork": {"type": "fork", "next": ["payment", "shipping"]},
            "payment": {
                "type": "task",
                "handler": "charge",
                "on_failure": "refund",
                "max_retries": 3,
                "next": ["join"],
            },
            "shipping": {"type": "task", "handler": "ship", "on_failure": "cancel_shipment", "next": ["join"]},
            "join": {"type": "join", "wait_for": ["payment", "shipping"], "next": ["notify"]},
            "notify": {"type": "task", "handler": "send_email"},
            "backorder": {"type": "task", "handler": "backorder"},
            "refund": {"type": "task", "handler": "refund"},
            "cancel_shipment": {"type": "task", "handler": "cancel_shipment"},
        },
    }


@pytest.fixture
def sample_step_records() -> list[dict]:
    """Execution records for the order workflow, oldest first."""
    return [
        {"id": 1, "instance_id": 7, "step_name": "validate", "step_type": "task", "status": "completed",
         "retry_count": 0, "max_retries": 0, "compensation_retry_count": 0,
         "created_at": "2024-05-01T10:00:00Z"},
        {"id": 2, "instance_id": 7, "step_name": "payment", "step_type": "task", "status": "failed",
         "retry_count": 0, "max_retries": 3, "compensation_retry_count": 0,
         "created_at": "2024-05-01T10:00:05Z"},
        {"id": 3, "instance_id": 7, "step_name": "payment", "step_type": "task", "status": "running",
         "retry_count": 1, "max_retries": 3, "compensation_retry_count": 0,
         "created_at": "2024-05-01T10:00:09Z"},
        {"id": 4, "instance_id": 7, "step_name": "shipping", "step_type": "task", "status": "compensation",
         "retry_count": 0, "max_retries": 0, "compensation_retry_count": 1,
         "created_at": "2024-05-01T10:00:06Z"},
    ]


def linear_graph(length: int) -> dict:
    """Chain of task steps s0 -> s1 -> ... -> s{length-1}."""
    steps = {}
    for i in range(length):
        step = {"type": "task"}
        if i < length - 1:
            step["next"] = [f"s{i + 1}"]
        steps[f"s{i}"] = step
    return {"start": "s0", "steps": steps}


@pytest.fixture
def make_linear_graph():
    """Factory for linear chains of a given length."""
    return linear_graph
