"""Record store: the single source of truth for care records.

The store owns the ordered collection (newest first) and its persistence:
- create() validates a draft, assigns id and timestamp, inserts at the front and saves
- delete() removes a record by id and saves; unknown ids are a no-op
- load() reads the persisted blob once at startup; missing or unreadable data
  yields an empty ledger, never an exception
- save() replaces the whole blob with the serialized collection

Writes are all-or-nothing: if the blob cannot be written, the in-memory change
is rolled back and PersistenceWriteError is raised, so the collection always
mirrors what is on disk. Observers registered with subscribe() receive a new
snapshot after every successful create, delete and load.
"""

import logging
import threading
import uuid
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import TypeAdapter, ValidationError

from care_ledger.core.blob_store import BlobStore
from care_ledger.core.config import Constants, settings
from care_ledger.core.errors import PersistenceReadError, PersistenceWriteError, RecordValidationError
from care_ledger.core.logging import log_with_context, span
from care_ledger.domain.care_record import CareRecord, CareRecordDraft


logger = logging.getLogger(__name__)

ChangeCallback = Callable[[tuple[CareRecord, ...]], None]

_RECORDS_ADAPTER = TypeAdapter(list[CareRecord])


def _parse_record_id(record_id: uuid.UUID | str) -> uuid.UUID | None:
    """Return record_id as a UUID, or None if it is not a valid identifier."""
    if isinstance(record_id, uuid.UUID):
        return record_id
    try:
        return uuid.UUID(str(record_id))
    except ValueError:
        return None


def validate_draft(draft: CareRecordDraft | Mapping[str, Any]) -> CareRecordDraft:
    """Re-validate a draft (or plain mapping) before it becomes a record.

    Drafts built with model_construct() or mutated mappings are not trusted.

    Raises:
        RecordValidationError: If any field is missing, mistyped or out of range
    """
    data = draft.model_dump() if isinstance(draft, CareRecordDraft) else draft
    try:
        return CareRecordDraft.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid care record draft: {e.error_count()} validation error(s)"
        raise RecordValidationError(msg, errors=e.errors(include_url=False)) from e


class RecordStore:
    """Ordered, persisted collection of care records."""

    def __init__(self, blob_store: BlobStore, *, storage_key: str | None = None) -> None:
        self._blob_store = blob_store
        self.storage_key = storage_key or settings.storage_key
        self._records: list[CareRecord] = []
        self._issued_ids: set[uuid.UUID] = set()
        self._observers: list[ChangeCallback] = []
        # Single writer: every read-modify-write of the collection and blob holds this lock
        self._lock = threading.RLock()
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        """Whether load() has run."""
        return self._loaded

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def all(self) -> tuple[CareRecord, ...]:
        """Return a read-only snapshot of all records, newest first."""
        with self._lock:
            return tuple(self._records)

    def get(self, record_id: uuid.UUID | str) -> CareRecord | None:
        """Return the record with the given id, or None if absent."""
        target = _parse_record_id(record_id)
        with self._lock:
            return next((record for record in self._records if record.id == target), None)

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register a callback fired with the new snapshot after every change.

        Args:
            callback: Called with the full snapshot after create, delete and load

        Returns:
            A function that unregisters the callback
        """
        with self._lock:
            self._observers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._observers:
                    self._observers.remove(callback)

        return unsubscribe

    def create(self, draft: CareRecordDraft | Mapping[str, Any]) -> CareRecord:
        """Validate a draft, store it as the newest record and persist the ledger.

        Args:
            draft: User-supplied fields; a CareRecordDraft or an equivalent mapping

        Returns:
            The created record with its generated id and timestamp

        Raises:
            RecordValidationError: If the draft is invalid (values are never clamped)
            PersistenceWriteError: If the ledger could not be saved; the record is not kept
        """
        validated = validate_draft(draft)

        with span("record_store.create"), self._lock:
            self._ensure_loaded()

            record = CareRecord.from_draft(
                validated,
                record_id=self._new_id(),
                timestamp=datetime.now(UTC),
            )
            self._records.insert(0, record)

            try:
                self.save()
            except PersistenceWriteError:
                self._records.remove(record)
                raise

            self._issued_ids.add(record.id)
            logger.info(
                "record_created",
                extra={"record_id": str(record.id), "task_type": record.task_type.value, "count": len(self._records)},
            )
            self._notify()
            return record

    def delete(self, record_id: uuid.UUID | str) -> None:
        """Remove a record by id and persist the ledger.

        Deleting an id that is not in the ledger is a no-op: nothing is saved and
        no observer is notified.

        Raises:
            PersistenceWriteError: If the ledger could not be saved; the record is restored
        """
        target = _parse_record_id(record_id)

        with span("record_store.delete"), self._lock:
            self._ensure_loaded()

            index = next((i for i, record in enumerate(self._records) if record.id == target), None)
            if index is None:
                logger.debug("record_delete_noop", extra={"record_id": str(record_id)})
                return

            removed = self._records.pop(index)

            try:
                self.save()
            except PersistenceWriteError:
                self._records.insert(index, removed)
                raise

            log_with_context(logger, "info", "record_deleted", record_id=str(removed.id), count=len(self._records))
            self._notify()

    def load(self) -> None:
        """Replace the in-memory collection with the persisted ledger.

        A missing blob yields an empty ledger. An unreadable blob also yields an
        empty ledger; its bytes are first copied to a backup key so the next save
        cannot destroy them. Nothing is raised to the caller.
        """
        with span("record_store.load"), self._lock:
            try:
                records = self._read_records()
            except PersistenceReadError as e:
                logger.warning(
                    "ledger_unreadable_starting_empty",
                    extra={"storage_key": self.storage_key, "error": str(e)},
                )
                records = []

            self._records = records
            self._issued_ids.update(record.id for record in records)
            self._loaded = True

            logger.info("ledger_loaded", extra={"storage_key": self.storage_key, "count": len(records)})
            self._notify()

    def save(self) -> None:
        """Serialize the full collection and replace the persisted blob.

        Raises:
            PersistenceWriteError: If the blob store rejects the write
        """
        with self._lock:
            payload = _RECORDS_ADAPTER.dump_json(self._records, by_alias=True, indent=2)
            try:
                self._blob_store.write(self.storage_key, payload)
            except Exception as e:
                logger.error("ledger_save_failed", extra={"storage_key": self.storage_key, "error": str(e)})
                msg = f"Failed to save ledger to {self.storage_key}: {e}"
                raise PersistenceWriteError(msg) from e

            logger.debug("ledger_saved", extra={"storage_key": self.storage_key, "bytes": len(payload)})

    def _ensure_loaded(self) -> None:
        """Load before the first mutation so a save never clobbers unread history."""
        if not self._loaded:
            self.load()

    def _new_id(self) -> uuid.UUID:
        """Generate an id not used by any record this store has seen."""
        while True:
            candidate = uuid.uuid4()
            if candidate not in self._issued_ids:
                return candidate

    def _read_records(self) -> list[CareRecord]:
        """Read and decode the persisted ledger.

        Raises:
            PersistenceReadError: If the blob cannot be read or decoded
        """
        try:
            raw = self._blob_store.read(self.storage_key)
        except Exception as e:
            msg = f"Failed to read ledger from {self.storage_key}: {e}"
            raise PersistenceReadError(msg) from e

        if raw is None:
            logger.info("ledger_not_found_starting_empty", extra={"storage_key": self.storage_key})
            return []

        try:
            records = _RECORDS_ADAPTER.validate_json(raw)
        except ValidationError as e:
            self._backup_unreadable(raw)
            msg = f"Failed to decode ledger from {self.storage_key}: {e.error_count()} error(s)"
            raise PersistenceReadError(msg) from e

        return self._drop_duplicate_ids(records)

    def _drop_duplicate_ids(self, records: list[CareRecord]) -> list[CareRecord]:
        """Keep the first record for each id."""
        seen: set[uuid.UUID] = set()
        unique: list[CareRecord] = []
        for record in records:
            if record.id in seen:
                logger.warning(
                    "ledger_duplicate_record_dropped",
                    extra={"storage_key": self.storage_key, "record_id": str(record.id)},
                )
                continue
            seen.add(record.id)
            unique.append(record)
        return unique

    def _backup_unreadable(self, raw: bytes) -> None:
        """Copy an unreadable blob aside before it can be overwritten."""
        stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S%fZ")
        backup_key = f"{self.storage_key}{Constants.CORRUPT_BACKUP_SUFFIX}{stamp}"
        try:
            self._blob_store.write(backup_key, raw)
        except Exception as e:
            logger.error(
                "ledger_backup_failed",
                extra={"storage_key": self.storage_key, "backup_key": backup_key, "error": str(e)},
            )
            return

        logger.warning("ledger_backed_up", extra={"storage_key": self.storage_key, "backup_key": backup_key})

    def _notify(self) -> None:
        """Send the current snapshot to every observer; observer failures are logged."""
        snapshot = tuple(self._records)
        for callback in list(self._observers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception(
                    "record_store_observer_failed",
                    extra={"observer": getattr(callback, "__qualname__", repr(callback))},
                )
