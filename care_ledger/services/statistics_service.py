"""Statistics over a snapshot of care records.

This module provides functions for:
- Totalling time spent on care work, overall and for invisible labor
- Totalling emotional weight
- Counting records per task type and per recipient

Key Concepts:
- Invisible labor: a record with was_visible == False, i.e. work nobody acknowledged.
- Hours: minutes divided by 60 using true division, never truncated.
- Counts: categories with no records are omitted; keys follow enum declaration order.

Every function is pure: it reads the records passed in and keeps no state.
"""

import logging
from collections.abc import Iterable, Sequence

from care_ledger.core.config import Constants
from care_ledger.core.logging import span
from care_ledger.domain.care_record import CareRecord, CareTaskType, RecipientType
from care_ledger.models.service_models import LedgerSummary, TaskTypeCount


logger = logging.getLogger(__name__)


def _minutes_to_hours(minutes: int) -> float:
    return minutes / Constants.MINUTES_PER_HOUR


def total_hours(records: Iterable[CareRecord]) -> float:
    """Return the total time logged, in hours."""
    return _minutes_to_hours(sum(record.time_spent_minutes for record in records))


def invisible_hours(records: Iterable[CareRecord]) -> float:
    """Return the time logged on work that was not acknowledged by others, in hours."""
    return _minutes_to_hours(sum(record.time_spent_minutes for record in records if record.is_invisible))


def total_emotional_weight(records: Iterable[CareRecord]) -> int:
    """Return the sum of emotional weight across all records."""
    return sum(record.emotional_weight for record in records)


def count_by_task_type(records: Iterable[CareRecord]) -> dict[CareTaskType, int]:
    """Count records per task type.

    Args:
        records: Records to count

    Returns:
        Mapping of task type to count, in CareTaskType declaration order.
        Task types with no records are omitted.
    """
    counts: dict[CareTaskType, int] = {}
    for record in records:
        counts[record.task_type] = counts.get(record.task_type, 0) + 1
    return {task_type: counts[task_type] for task_type in CareTaskType if task_type in counts}


def count_by_recipient_type(records: Iterable[CareRecord]) -> dict[RecipientType, int]:
    """Count records per recipient, omitting recipients with no records."""
    counts: dict[RecipientType, int] = {}
    for record in records:
        counts[record.recipient_type] = counts.get(record.recipient_type, 0) + 1
    return {recipient: counts[recipient] for recipient in RecipientType if recipient in counts}


def get_summary(records: Sequence[CareRecord]) -> LedgerSummary:
    """Compute every aggregate shown on the insights view.

    Args:
        records: Snapshot of records, typically RecordStore.all()

    Returns:
        LedgerSummary with totals and per-category counts
    """
    with span("statistics_service.get_summary"):
        summary = LedgerSummary(
            entry_count=len(records),
            total_hours=total_hours(records),
            invisible_hours=invisible_hours(records),
            total_emotional_weight=total_emotional_weight(records),
            task_type_counts=[
                TaskTypeCount(task_type=task_type, count=count)
                for task_type, count in count_by_task_type(records).items()
            ],
            recipient_type_counts=count_by_recipient_type(records),
        )

        logger.debug(
            "ledger_summary_computed",
            extra={"entry_count": summary.entry_count, "total_hours": summary.total_hours},
        )
        return summary
