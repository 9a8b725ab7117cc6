"""
Validation Result Models

The persisted document is external input: it may be missing, truncated,
written by an older build, or edited by hand. Parsing it produces one of
two explicit outcomes, and normalization reports what it had to correct.
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from finance_ledger.models.ledger import CategoryType, FinanceData


class ValidationIssue(BaseModel):
    """A single record dropped during normalization."""

    collection: str = Field(
        ...,
        pattern="^(categories|entries)$",
        description="Collection the record came from"
    )
    index: int = Field(
        ...,
        ge=0,
        description="Position of the record in the persisted collection"
    )
    record_id: Optional[str] = Field(
        default=None,
        description="Record id, when one could be read"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'not_an_object', 'invalid_field', 'duplicate_id')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ValidDocument(BaseModel):
    """The raw document decoded to a JSON object."""

    kind: Literal["valid"] = "valid"
    payload: dict[str, Any] = Field(default_factory=dict)


class InvalidDocument(BaseModel):
    """The raw document could not be used at all."""

    kind: Literal["invalid"] = "invalid"
    reason: str


DocumentParseResult = Union[ValidDocument, InvalidDocument]


class NormalizationReport(BaseModel):
    """
    Result of normalizing a decoded document.

    `data` is always usable; `dropped` and `backfilled` describe the silent
    corrections that were applied to get there.
    """

    data: FinanceData
    dropped: list[ValidationIssue] = Field(default_factory=list)
    backfilled: list[CategoryType] = Field(default_factory=list)

    @property
    def was_corrected(self) -> bool:
        return bool(self.dropped or self.backfilled)
