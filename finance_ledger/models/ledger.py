"""
Core Data Models for Finance Ledger

These models define the strict schemas for everything the ledger persists.
They are designed to:
1. Enforce type safety at the storage boundary
2. Serialize to the exact JSON document layout the settings store holds
3. Be immutable snapshots: a mutation builds a new document

DESIGN DECISION: We use Pydantic v2 frozen models. Stored records are
checked for shape and type only (no numeric strings, no bools posing as
amounts). Value rules such as a positive amount or a non-empty name are
enforced by the ledger store on write. EntryInput accepts any amount so the
store can turn a bad one into a user-facing message instead of an exception.

Amounts keep their JSON number type: integers stay int and are never
widened to float.
"""

import math
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ].*)?$")


# =============================================================================
# ENUMS
# =============================================================================

class CategoryType(str, Enum):
    """Whether a category (and the entries tagged with it) is money in or out."""
    INCOME = "income"
    EXPENSE = "expense"


class LedgerErrorCode(str, Enum):
    """Reasons a mutation can be rejected."""
    CATEGORY_NAME_REQUIRED = "category_name_required"
    CATEGORY_NOT_FOUND = "category_not_found"
    CATEGORY_IN_USE = "category_in_use"
    LAST_CATEGORY_OF_TYPE = "last_category_of_type"
    ENTRY_NOT_FOUND = "entry_not_found"
    AMOUNT_NOT_POSITIVE = "amount_not_positive"


# =============================================================================
# HELPERS
# =============================================================================

def create_id(prefix: str) -> str:
    """Create an opaque unique identifier like ``cat_<uuid4>``."""
    return f"{prefix}_{uuid4()}"


def normalize_date(value: Any) -> str:
    """
    Normalize a calendar date to a zero-padded YYYY-MM-DD string.

    Accepts date/datetime objects and strings such as "2024-1-5" or
    "2024-01-05T10:00:00Z". Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise ValueError("Date must be a string or a date")

    match = _DATE_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Not a calendar date: {value!r}")

    year, month, day = (int(part) for part in match.groups())
    # date() rejects 2024-02-30 and friends
    return date(year, month, day).isoformat()


def is_valid_amount(amount: Any) -> bool:
    """True for a finite real number strictly greater than zero."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    if isinstance(amount, float) and not math.isfinite(amount):
        return False
    return amount > 0


# =============================================================================
# RECORDS
# =============================================================================

class Category(BaseModel):
    """
    A named bucket of type income or expense that entries are tagged with.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier, never reused"
    )
    name: str = Field(
        ...,
        description="Display name, trimmed by the ledger store on write"
    )
    type: CategoryType


class Entry(BaseModel):
    """
    A single dated financial transaction record.

    `type` is copied from the category when the entry is written and is
    stored independently: changing a category's type does not touch its
    entries.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    type: CategoryType
    category_id: str = Field(
        ...,
        alias="categoryId",
        description="Category this entry is tagged with"
    )
    amount: Union[int, float] = Field(
        ...,
        description="Finite amount, stored exactly as given"
    )
    date: str = Field(
        ...,
        description="Calendar date as zero-padded YYYY-MM-DD"
    )
    note: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def require_number(cls, v: Any) -> Any:
        """Reject numeric strings and bools that lax mode would coerce."""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("Amount must be a number")
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("Amount must be finite")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def normalize_entry_date(cls, v: Any) -> str:
        return normalize_date(v)

    @field_validator("note", mode="before")
    @classmethod
    def default_note(cls, v: Any) -> Any:
        return "" if v is None else v


class EntryInput(BaseModel):
    """
    Caller-supplied fields of an entry (everything except the id).

    Amount is not validated here, not even for type: None, strings and
    non-finite values reach the ledger store, which rejects them.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: CategoryType
    category_id: str = Field(..., alias="categoryId")
    amount: Any = None
    date: str
    note: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def normalize_input_date(cls, v: Any) -> str:
        return normalize_date(v)


# =============================================================================
# DOCUMENT
# =============================================================================

class FinanceData(BaseModel):
    """
    The full persisted state: all categories and all entries.

    Entries are kept in insertion order, newest first. Ordering by date is
    a view computed by finance_ledger.queries, never persisted.
    """
    model_config = ConfigDict(frozen=True)

    categories: tuple[Category, ...] = ()
    entries: tuple[Entry, ...] = ()

    def find_category(self, category_id: str) -> Optional[Category]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def find_entry(self, entry_id: str) -> Optional[Entry]:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def categories_of_type(self, category_type: CategoryType) -> list[Category]:
        return [cat for cat in self.categories if cat.type == category_type]

    def is_category_in_use(self, category_id: str) -> bool:
        """Check whether any entry references the category."""
        return any(entry.category_id == category_id for entry in self.entries)

    def to_document(self) -> dict:
        """
        Convert to the JSON-ready document layout.

        Keys match the persisted format (camelCase `categoryId`).
        """
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class MutationResult(BaseModel):
    """
    Outcome of a mutation that can be rejected.

    On rejection `data` is the document as loaded and `error` holds a
    message in the configured display language.
    """
    model_config = ConfigDict(frozen=True)

    data: FinanceData
    error: Optional[str] = None
    error_code: Optional[LedgerErrorCode] = None

    @property
    def ok(self) -> bool:
        return self.error is None
