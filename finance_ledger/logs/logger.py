"""
Ledger Event Logger

DESIGN DECISION: Every ledger mutation, refusal and silent correction is
logged as a structured event. This provides:
1. Debugging capability when a user reports missing data
2. Visibility into self-healing loads (dropped records, backfills)

The event logger:
- Is synchronous, like the ledger store
- Only writes to the local structured log (the ledger keeps no history)
- Never raises: a logging failure must not break a ledger operation
"""

import logging
from typing import Optional

import structlog

from finance_ledger.models.events import (
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventSeverity,
)
from finance_ledger.models.validation import ValidationIssue


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route ledger logs to stderr at the given level.

    structlog hands records to the stdlib logger, so the stdlib level
    decides what gets through filter_by_level.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
    )
    logging.getLogger("finance_ledger").setLevel(
        getattr(logging, level.upper(), logging.INFO)
    )


class LedgerEventLogger:
    """
    Central event logging service for the ledger store.
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        """
        Initialize event logger.

        Args:
            logger: structlog logger to write to. Defaults to the
                    finance_ledger.events logger.
        """
        self._logger = logger or structlog.get_logger("finance_ledger.events")

    def log(self, event: LedgerEvent) -> bool:
        """
        Log a ledger event.

        Returns True if the event was written.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity == LedgerEventSeverity.ERROR:
                self._logger.error("ledger_event", **log_dict)
            elif event.severity == LedgerEventSeverity.WARNING:
                self._logger.warning("ledger_event", **log_dict)
            elif event.severity == LedgerEventSeverity.DEBUG:
                self._logger.debug("ledger_event", **log_dict)
            else:
                self._logger.info("ledger_event", **log_dict)
        except Exception:
            # Logging must never break a ledger operation
            return False

        return True

    def log_document_created(self, data_key: str, reason: str) -> None:
        """Log creation of a fresh default document."""
        self.log(LedgerEventBuilder.document_created(data_key, reason))

    def log_document_reset(self, data_key: str, reason: str) -> None:
        """Log replacement of an unreadable document."""
        self.log(LedgerEventBuilder.document_reset(data_key, reason))

    def log_document_normalized(
        self,
        data_key: str,
        dropped: list[ValidationIssue],
        backfilled: list[str],
    ) -> None:
        """Log records dropped and categories backfilled on load."""
        self.log(LedgerEventBuilder.document_normalized(
            data_key,
            dropped=[issue.model_dump() for issue in dropped],
            backfilled=backfilled,
        ))

    def log_category_added(self, category_id: str, name: str, category_type: str) -> None:
        self.log(LedgerEventBuilder.category_added(category_id, name, category_type))

    def log_category_updated(
        self,
        category_id: str,
        name: str,
        old_type: str,
        new_type: str,
    ) -> None:
        self.log(LedgerEventBuilder.category_updated(category_id, name, old_type, new_type))

    def log_category_deleted(self, category_id: str) -> None:
        self.log(LedgerEventBuilder.category_deleted(category_id))

    def log_entry_added(self, entry_id: str, category_id: str, amount: float) -> None:
        self.log(LedgerEventBuilder.entry_added(entry_id, category_id, amount))

    def log_entry_updated(self, entry_id: str, category_id: str, amount: float) -> None:
        self.log(LedgerEventBuilder.entry_updated(entry_id, category_id, amount))

    def log_entry_deleted(self, entry_id: str, existed: bool) -> None:
        self.log(LedgerEventBuilder.entry_deleted(entry_id, existed))

    def log_mutation_rejected(
        self,
        operation: str,
        entity_id: Optional[str],
        error_code: str,
    ) -> None:
        """Log a mutation refused with a validation error."""
        self.log(LedgerEventBuilder.mutation_rejected(operation, entity_id, error_code))

    def log_mutation_skipped(self, operation: str, reason: str) -> None:
        """Log a mutation that was silently not applied."""
        self.log(LedgerEventBuilder.mutation_skipped(operation, reason))

    def log_storage_error(self, operation: str, error_message: str) -> None:
        self.log(LedgerEventBuilder.storage_error(operation, error_message))
