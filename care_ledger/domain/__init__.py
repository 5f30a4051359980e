"""Domain models and DTOs."""

from care_ledger.domain.care_record import CareRecord, CareRecordDraft, CareTaskType, RecipientType


__all__ = [
    "CareRecord",
    "CareRecordDraft",
    "CareTaskType",
    "RecipientType",
]
