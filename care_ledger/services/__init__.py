from care_ledger.services import record_store, statistics_service
from care_ledger.services.record_store import RecordStore


__all__ = [
    "RecordStore",
    "record_store",
    "statistics_service",
]
