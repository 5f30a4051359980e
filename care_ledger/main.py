"""care_ledger - a personal ledger that makes invisible care labor visible.

Startup wiring for a presentation layer:

    from care_ledger.main import open_ledger

    store = open_ledger()
    unsubscribe = store.subscribe(render)
"""

import logging
import os

from care_ledger.core.blob_store import FileBlobStore
from care_ledger.core.config import Settings, settings
from care_ledger.core.logging import configure_logfire
from care_ledger.services.record_store import RecordStore


logger = logging.getLogger(__name__)


def check_data_dir(app_settings: Settings) -> bool:
    """Verify the data directory exists and is writable.

    A failure is logged rather than raised: the ledger still opens, and any
    save that cannot be written surfaces as PersistenceWriteError.

    Returns:
        True if the directory is usable
    """
    data_dir = app_settings.resolved_data_dir()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("startup_validation", extra={"data_dir": str(data_dir), "status": "failed", "error": str(e)})
        return False

    if not os.access(data_dir, os.W_OK):
        logger.error("startup_validation", extra={"data_dir": str(data_dir), "status": "read_only"})
        return False

    logger.info("startup_validation", extra={"data_dir": str(data_dir), "status": "ok"})
    return True


def open_ledger(app_settings: Settings | None = None, *, configure_logging: bool = True) -> RecordStore:
    """Build the file-backed record store and load persisted history.

    Args:
        app_settings: Settings to use, defaults to the process-wide settings
        configure_logging: Configure Logfire before opening (disable when the host app already did)

    Returns:
        A loaded RecordStore owned by the caller
    """
    app_settings = app_settings or settings

    # Configure logging first so startup logs are captured
    if configure_logging:
        configure_logfire()

    check_data_dir(app_settings)

    blob_store = FileBlobStore(app_settings.resolved_data_dir())
    store = RecordStore(blob_store, storage_key=app_settings.storage_key)
    store.load()
    return store
