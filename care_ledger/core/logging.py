"""Logging and observability configuration using Pydantic Logfire.

This module provides standardized logging utilities and configuration.
All modules should use Python's standard logging library (logging.getLogger(__name__)),
and Logfire will automatically capture and enrich these logs.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("record_created", extra={"record_id": "..."})

Structured logging utilities:
    log_with_context(logger, "info", "Message", record_id="123", storage_key="CareEntries")
"""

import logging

import logfire

from care_ledger import __version__
from care_ledger.core.config import settings


def configure_logfire() -> None:
    """Configure Pydantic Logfire with token from environment.

    Routes stdlib logging records through Logfire so every module logger is captured.
    Nothing leaves the machine unless LOGFIRE_TOKEN is set.
    """
    logfire.configure(
        token=settings.logfire_token,
        service_name="care_ledger",
        service_version=__version__,
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )
    logging.basicConfig(
        level=settings.log_level.upper(),
        handlers=[logfire.LogfireLoggingHandler()],
    )

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def span(name: str) -> logfire.LogfireSpan:
    """Create a custom span for service layer functions.

    Usage:
        with span("record_store.create"):
            # Your service logic here
            pass
    """
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (record_id, storage_key, etc.)

    Usage:
        log_with_context(logger, "info", "record_deleted", record_id="123")
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)
