"""Pytest configuration and fixtures for unit tests."""

import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from care_ledger.core.blob_store import InMemoryBlobStore
from care_ledger.domain.care_record import CareRecord, CareRecordDraft, CareTaskType, RecipientType
from care_ledger.services.record_store import RecordStore
from tests.unit.mocks import STORAGE_KEY


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    """Provides a fresh InMemoryBlobStore for each test."""
    return InMemoryBlobStore()


@pytest.fixture
def record_store(blob_store: InMemoryBlobStore) -> RecordStore:
    """Provides a loaded, empty RecordStore backed by the in-memory blob store."""
    store = RecordStore(blob_store, storage_key=STORAGE_KEY)
    store.load()
    return store


@pytest.fixture
def make_draft() -> Callable[..., CareRecordDraft]:
    """Factory for valid drafts; keyword arguments override the defaults."""

    def _make(**overrides: Any) -> CareRecordDraft:
        fields: dict[str, Any] = {
            "task_type": CareTaskType.EMOTIONAL_SUPPORT,
            "recipient_type": RecipientType.PEER,
            "emotional_weight": 3,
            "time_spent_minutes": 30,
            "notes": "",
            "was_visible": False,
        }
        fields.update(overrides)
        return CareRecordDraft(**fields)

    return _make


@pytest.fixture
def make_record() -> Callable[..., CareRecord]:
    """Factory for stored records, bypassing RecordStore for pure statistics tests."""

    def _make(**overrides: Any) -> CareRecord:
        fields: dict[str, Any] = {
            "id": uuid.uuid4(),
            "timestamp": datetime.now(UTC),
            "task_type": CareTaskType.EMOTIONAL_SUPPORT,
            "recipient_type": RecipientType.PEER,
            "emotional_weight": 3,
            "time_spent_minutes": 30,
            "notes": "",
            "was_visible": False,
        }
        fields.update(overrides)
        return CareRecord(**fields)

    return _make
