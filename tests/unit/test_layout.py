"""
Unit tests for the layout pipeline and layout sessions.
"""

import pytest
from pydantic import ValidationError

from workflow_graph.config import LayoutSettings
from workflow_graph.core.layout import LayoutSession, compute_layout, parse_graph_definition
from workflow_graph.core.models import CanvasSize, EdgeKind, GraphDefinition, StepStatus


def edge_pairs(layout):
    return [(e.source, e.target, e.kind) for e in layout.edges]


class TestComputeLayout:
    """Tests for compute_layout."""

    def test_condition_example(self, sample_condition_graph):
        layout = compute_layout(sample_condition_graph)

        assert [n.id for n in layout.nodes] == ["a", "b", "c", "d"]
        assert [n.level for n in layout.nodes] == [0, 1, 2, 2]
        assert edge_pairs(layout) == [
            ("a", "b", EdgeKind.NORMAL),
            ("b", "c", EdgeKind.NORMAL),
            ("b", "d", EdgeKind.ELSE),
        ]
        assert (layout.width, layout.height) == (1000, 700)

    def test_accepts_parsed_definition(self, sample_condition_graph):
        definition = parse_graph_definition(sample_condition_graph)

        layout = compute_layout(definition)

        assert len(layout.nodes) == 4

    def test_fork_join_final_edges(self):
        """Test branches reconverge into the join and the fork shortcut is gone."""
        layout = compute_layout({
            "start": "f",
            "steps": {
                "f": {"type": "fork", "next": ["a", "b", "j"]},
                "a": {"type": "task", "next": ["j"]},
                "b": {"type": "task", "next": ["j"]},
                "j": {"type": "join"},
            },
        })
        pairs = [(s, t) for s, t, _ in edge_pairs(layout)]

        assert ("a", "j") in pairs
        assert ("b", "j") in pairs
        assert ("f", "j") not in pairs
        assert ("f", "a") in pairs
        assert ("f", "b") in pairs

    def test_parallel_final_edges(self, sample_parallel_graph):
        layout = compute_layout(sample_parallel_graph)

        assert edge_pairs(layout) == [
            ("fan", "a", EdgeKind.PARALLEL),
            ("fan", "b", EdgeKind.PARALLEL),
            ("a", "merge", EdgeKind.NORMAL),
            ("b", "merge", EdgeKind.NORMAL),
        ]
        assert layout.get_node("merge").level == layout.get_node("fan").level + 2

    def test_no_duplicate_edges(self, sample_order_graph):
        layout = compute_layout(sample_order_graph)
        keys = [e.key for e in layout.edges]

        assert len(keys) == len(set(keys))

    def test_status_annotation(self, sample_order_graph, sample_step_records):
        layout = compute_layout(sample_order_graph, sample_step_records)

        assert layout.get_node("validate").status == StepStatus.COMPLETED
        assert layout.get_node("payment").status == StepStatus.RUNNING
        assert layout.get_node("shipping").status == StepStatus.COMPENSATION
        assert layout.get_node("notify").status == StepStatus.PENDING

    def test_presentation_contract(self, sample_order_graph):
        layout = compute_layout(sample_order_graph)
        payment = layout.get_node("payment").to_dict()

        assert payment["type"] == "task"
        assert payment["status"] == "pending"
        assert payment["has_compensation"] is True
        assert payment["on_failure"] == "refund"
        assert payment["handler"] == "charge"

    def test_missing_start_gives_empty_layout(self):
        layout = compute_layout({"start": "nope", "steps": {"a": {"type": "task"}}})

        assert layout.is_empty
        assert layout.edges == []
        assert (layout.width, layout.height) == (1000, 700)

    def test_previous_canvas_is_kept(self, sample_condition_graph):
        canvas = CanvasSize(width=2500, height=1800)

        layout = compute_layout(sample_condition_graph, canvas=canvas)

        assert layout.width == 2500
        assert layout.height == 1800

    def test_custom_settings(self, sample_condition_graph):
        settings = LayoutSettings(initial_canvas_width=400, initial_canvas_height=300)

        layout = compute_layout(sample_condition_graph, settings=settings)

        # Three 200-unit columns plus padding and the last node box
        assert layout.width == pytest.approx(2 * 200 + 50 + 120 + 50)
        # Lower node of the last level: (300 - 100) / 2 + 100, plus box and padding
        assert layout.height == pytest.approx(200 + 60 + 50)

    def test_pure_computation(self, sample_order_graph, sample_step_records):
        """Test identical inputs give identical outputs."""
        first = compute_layout(sample_order_graph, sample_step_records)
        second = compute_layout(sample_order_graph, sample_step_records)

        assert first.to_dict() == second.to_dict()

    def test_definition_is_not_mutated(self, sample_order_graph, sample_step_records):
        definition = parse_graph_definition(sample_order_graph)
        before = definition.model_dump()

        compute_layout(definition, sample_step_records)

        assert definition.model_dump() == before

    def test_deep_graph_lays_out(self, make_linear_graph):
        layout = compute_layout(make_linear_graph(3000))

        assert len(layout.nodes) == 3000
        assert layout.get_node("s2999").x == pytest.approx(2999 * 200 + 50)
        assert layout.width == pytest.approx(2999 * 200 + 50 + 120 + 50)

    def test_invalid_definition_raises(self):
        with pytest.raises(ValidationError):
            compute_layout({"start": "a", "steps": {"a": {"type": "teleport"}}})

    def test_to_dict(self, sample_condition_graph):
        data = compute_layout(sample_condition_graph).to_dict()

        assert set(data) == {"nodes", "edges", "width", "height"}
        assert data["edges"][2] == {"from": "b", "to": "d", "type": "else"}
        assert data["nodes"][0]["id"] == "a"


class TestLayoutSession:
    """Tests for LayoutSession canvas retention."""

    def test_starts_from_initial_canvas(self):
        session = LayoutSession()

        assert session.canvas == CanvasSize(width=1000, height=700)
        assert session.last_layout is None

    def test_canvas_grows_monotonically(self, make_linear_graph, sample_condition_graph):
        session = LayoutSession()

        wide = session.update(make_linear_graph(8))
        assert wide.width == pytest.approx(1620)

        small = session.update(sample_condition_graph)
        assert small.width == pytest.approx(1620)
        assert small.height == 700
        assert session.canvas.width == pytest.approx(1620)

    def test_status_change_does_not_move_nodes(self, sample_condition_graph):
        session = LayoutSession()

        before = session.update(sample_condition_graph)
        after = session.update(sample_condition_graph, [{"step_name": "b", "status": "failed"}])

        assert [(n.x, n.y) for n in before.nodes] == [(n.x, n.y) for n in after.nodes]
        assert after.get_node("b").status == StepStatus.FAILED
        assert before.get_node("b").status == StepStatus.PENDING

    def test_sessions_are_independent(self, make_linear_graph):
        first = LayoutSession()
        second = LayoutSession()

        first.update(make_linear_graph(10))

        assert second.canvas == CanvasSize(width=1000, height=700)

    def test_reset(self, make_linear_graph):
        session = LayoutSession()
        session.update(make_linear_graph(10))

        session.reset()

        assert session.canvas == CanvasSize(width=1000, height=700)
        assert session.last_layout is None

    def test_last_layout(self, sample_condition_graph):
        session = LayoutSession()

        layout = session.update(GraphDefinition.model_validate(sample_condition_graph))

        assert session.last_layout is layout
