"""
Projection of step execution records onto a per-step status lookup.
"""

from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Union

from workflow_graph.core.models import StepExecutionRecord, StepStatus

RecordLike = Union[StepExecutionRecord, Mapping[str, Any]]


class StatusMap:
    """
    Resolved status per step name.

    Steps with no record resolve to PENDING. Lookups for names that never
    appear in the graph are harmless, so records for unknown steps are kept
    but never consulted.
    """

    def __init__(self, statuses: Optional[dict[str, StepStatus]] = None):
        self._statuses: dict[str, StepStatus] = dict(statuses or {})

    def get(self, step_name: str) -> StepStatus:
        return self._statuses.get(step_name, StepStatus.PENDING)

    def as_dict(self) -> dict[str, str]:
        return {name: status.value for name, status in self._statuses.items()}


def _coerce_record(record: RecordLike) -> StepExecutionRecord:
    if isinstance(record, StepExecutionRecord):
        return record
    return StepExecutionRecord.model_validate(record)


def project_statuses(records: Optional[Iterable[RecordLike]] = None) -> StatusMap:
    """
    Build a status lookup from execution records.

    Retries produce several records for one step; the last one in iteration
    order wins. Pre-sort with sort_records_by_time() for latest-by-time.

    Args:
        records: Execution records, as models or raw JSON dicts

    Returns:
        StatusMap keyed by step name
    """
    statuses: dict[str, StepStatus] = {}
    for record in records or ():
        record = _coerce_record(record)
        statuses[record.step_name] = record.status
    return StatusMap(statuses)


def _record_timestamp(record: StepExecutionRecord) -> Optional[datetime]:
    return record.started_at or record.created_at


def sort_records_by_time(records: Iterable[RecordLike]) -> list[StepExecutionRecord]:
    """
    Order records oldest first.

    Uses started_at, falling back to created_at. Records without any
    timestamp sort first; ties keep their input order.
    """
    coerced = [_coerce_record(record) for record in records]

    def sort_key(record: StepExecutionRecord) -> tuple[int, float]:
        ts = _record_timestamp(record)
        if ts is None:
            return (0, 0.0)
        return (1, ts.timestamp())

    return sorted(coerced, key=sort_key)
