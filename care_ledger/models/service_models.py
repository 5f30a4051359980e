"""Pydantic models for service layer return types.

These models give the presentation layer typed, validated views over the
aggregates computed from a record snapshot.
"""

from pydantic import BaseModel

from care_ledger.domain.care_record import CareTaskType, RecipientType


class TaskTypeCount(BaseModel):
    """Number of records logged for one task type."""

    task_type: CareTaskType
    count: int


class LedgerSummary(BaseModel):
    """Aggregate statistics shown on the insights view."""

    entry_count: int
    total_hours: float
    invisible_hours: float
    total_emotional_weight: int
    task_type_counts: list[TaskTypeCount]
    recipient_type_counts: dict[RecipientType, int]
