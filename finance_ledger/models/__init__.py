"""
Data Models Package

This package contains all Pydantic models used by the finance ledger.
Everything persisted or returned by the ledger store conforms to these schemas.
"""

from finance_ledger.models.ledger import (
    Category,
    CategoryType,
    Entry,
    EntryInput,
    FinanceData,
    LedgerErrorCode,
    MutationResult,
    create_id,
    is_valid_amount,
    normalize_date,
)
from finance_ledger.models.validation import (
    DocumentParseResult,
    InvalidDocument,
    NormalizationReport,
    ValidDocument,
    ValidationIssue,
)
from finance_ledger.models.events import (
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventSeverity,
    LedgerEventType,
)

__all__ = [
    # Ledger models
    "Category",
    "CategoryType",
    "Entry",
    "EntryInput",
    "FinanceData",
    "LedgerErrorCode",
    "MutationResult",
    "create_id",
    "is_valid_amount",
    "normalize_date",
    # Validation models
    "DocumentParseResult",
    "InvalidDocument",
    "NormalizationReport",
    "ValidDocument",
    "ValidationIssue",
    # Event models
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventSeverity",
    "LedgerEventType",
]
