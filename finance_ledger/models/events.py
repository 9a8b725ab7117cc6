"""
Ledger Event Models

Significant ledger actions are described as events and written to the
structured log. Events are NOT persisted: the ledger keeps no history of
changes, the log is for debugging only.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class LedgerEventType(str, Enum):
    """
    Types of events the ledger logs.
    """
    # Document lifecycle
    DOCUMENT_CREATED = "document_created"
    DOCUMENT_RESET = "document_reset"
    DOCUMENT_NORMALIZED = "document_normalized"

    # Categories
    CATEGORY_ADDED = "category_added"
    CATEGORY_UPDATED = "category_updated"
    CATEGORY_DELETED = "category_deleted"

    # Entries
    ENTRY_ADDED = "entry_added"
    ENTRY_UPDATED = "entry_updated"
    ENTRY_DELETED = "entry_deleted"

    # Refusals
    MUTATION_REJECTED = "mutation_rejected"
    MUTATION_SKIPPED = "mutation_skipped"

    # Storage
    STORAGE_ERROR = "storage_error"


class LedgerEventSeverity(str, Enum):
    """Severity level for ledger events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LedgerEvent(BaseModel):
    """
    A single ledger event.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: LedgerEventType
    severity: LedgerEventSeverity = LedgerEventSeverity.INFO

    # What the event is about
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity ('document', 'category' or 'entry')"
    )
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
        }


class LedgerEventBuilder:
    """
    Helper class to build ledger events with common patterns.

    Usage:
        event = LedgerEventBuilder.entry_added(entry_id, category_id, amount)
        event = LedgerEventBuilder.mutation_rejected("delete_category", cat_id, code)
    """

    @staticmethod
    def document_created(data_key: str, reason: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.DOCUMENT_CREATED,
            entity_type="document",
            entity_id=data_key,
            description=f"Created default document ({reason})",
            details={"reason": reason},
        )

    @staticmethod
    def document_reset(data_key: str, reason: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.DOCUMENT_RESET,
            severity=LedgerEventSeverity.WARNING,
            entity_type="document",
            entity_id=data_key,
            description="Persisted document unreadable, replaced with defaults",
            details={"reason": reason},
        )

    @staticmethod
    def document_normalized(
        data_key: str,
        dropped: list[dict],
        backfilled: list[str],
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.DOCUMENT_NORMALIZED,
            severity=LedgerEventSeverity.WARNING,
            entity_type="document",
            entity_id=data_key,
            description=(
                f"Document normalized: dropped {len(dropped)} records, "
                f"backfilled {len(backfilled)} categories"
            ),
            details={
                "dropped": dropped,
                "backfilled": backfilled,
            },
        )

    @staticmethod
    def category_added(category_id: str, name: str, category_type: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CATEGORY_ADDED,
            entity_type="category",
            entity_id=category_id,
            description=f"Category added: {name}",
            details={"name": name, "type": category_type},
        )

    @staticmethod
    def category_updated(
        category_id: str,
        name: str,
        old_type: str,
        new_type: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CATEGORY_UPDATED,
            entity_type="category",
            entity_id=category_id,
            description=f"Category updated: {name}",
            details={"name": name, "old_type": old_type, "new_type": new_type},
        )

    @staticmethod
    def category_deleted(category_id: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CATEGORY_DELETED,
            entity_type="category",
            entity_id=category_id,
            description="Category deleted",
        )

    @staticmethod
    def entry_added(entry_id: str, category_id: str, amount: float) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.ENTRY_ADDED,
            entity_type="entry",
            entity_id=entry_id,
            description=f"Entry added: {amount}",
            details={"category_id": category_id, "amount": amount},
        )

    @staticmethod
    def entry_updated(entry_id: str, category_id: str, amount: float) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.ENTRY_UPDATED,
            entity_type="entry",
            entity_id=entry_id,
            description=f"Entry updated: {amount}",
            details={"category_id": category_id, "amount": amount},
        )

    @staticmethod
    def entry_deleted(entry_id: str, existed: bool) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.ENTRY_DELETED,
            entity_type="entry",
            entity_id=entry_id,
            description="Entry deleted" if existed else "Entry to delete not found",
            details={"existed": existed},
        )

    @staticmethod
    def mutation_rejected(
        operation: str,
        entity_id: Optional[str],
        error_code: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.MUTATION_REJECTED,
            severity=LedgerEventSeverity.WARNING,
            entity_id=entity_id,
            description=f"{operation} rejected: {error_code}",
            details={"operation": operation, "error_code": error_code},
        )

    @staticmethod
    def mutation_skipped(operation: str, reason: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.MUTATION_SKIPPED,
            description=f"{operation} skipped: {reason}",
            details={"operation": operation, "reason": reason},
        )

    @staticmethod
    def storage_error(operation: str, error_message: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.STORAGE_ERROR,
            severity=LedgerEventSeverity.ERROR,
            description=f"Settings store {operation} failed",
            details={"operation": operation, "error_message": error_message},
        )
