"""Document validation package."""

from finance_ledger.validation.validator import (
    DocumentValidator,
    build_default_category,
    build_default_document,
)

__all__ = [
    "DocumentValidator",
    "build_default_category",
    "build_default_document",
]
