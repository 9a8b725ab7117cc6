"""
Document Validation

DESIGN DECISION: The persisted document is validated in two stages:

STAGE 1 - DOCUMENT PARSING:
- JSON decoding
- Root must be an object
- The outcome is explicit: ValidDocument or InvalidDocument
- An invalid document is never repaired, the store starts over

STAGE 2 - RECORD NORMALIZATION:
- Each category/entry is validated against its model on its own
- Malformed records are dropped, duplicates by id are dropped
- Missing income/expense categories are backfilled with defaults
- This catches hand edits, truncated writes and older layouts

IMPORTANT: Normalization silently corrects. Dropped records are reported
back in the NormalizationReport for logging, never as caller errors.
"""

import json
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from finance_ledger.messages import DEFAULT_LANGUAGE, default_category_name
from finance_ledger.models.ledger import (
    Category,
    CategoryType,
    Entry,
    FinanceData,
    create_id,
)
from finance_ledger.models.validation import (
    DocumentParseResult,
    InvalidDocument,
    NormalizationReport,
    ValidDocument,
    ValidationIssue,
)


def build_default_category(
    category_type: CategoryType,
    language: str = DEFAULT_LANGUAGE,
) -> Category:
    """Create the default category of a type with a fresh id."""
    return Category(
        id=create_id("cat"),
        name=default_category_name(category_type, language),
        type=category_type,
    )


def build_default_document(language: str = DEFAULT_LANGUAGE) -> FinanceData:
    """A fresh document: one income category, one expense category, no entries."""
    return FinanceData(
        categories=(
            build_default_category(CategoryType.INCOME, language),
            build_default_category(CategoryType.EXPENSE, language),
        ),
        entries=(),
    )


class DocumentValidator:
    """
    Validates the persisted ledger document.

    Stage 1: parse_document (raw string -> ValidDocument | InvalidDocument)
    Stage 2: normalize (decoded payload -> NormalizationReport)
    """

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        """
        Initialize validator.

        Args:
            language: Language used to name backfilled default categories.
        """
        self._language = language

    def parse_document(self, raw: str) -> DocumentParseResult:
        """
        Stage 1: decode the raw document.

        Returns InvalidDocument when the string is not JSON or its root
        is not an object.
        """
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            return InvalidDocument(reason=f"not valid JSON: {e}")

        if not isinstance(payload, dict):
            return InvalidDocument(
                reason=f"document root is {type(payload).__name__}, expected object"
            )

        return ValidDocument(payload=payload)

    def _collect(
        self,
        collection: str,
        raw_records: Any,
        model: type[BaseModel],
    ) -> tuple[list[Any], list[ValidationIssue]]:
        """Validate one collection record by record, dropping what fails."""
        kept: list[Any] = []
        issues: list[ValidationIssue] = []
        seen_ids: set[str] = set()

        # A missing or non-list collection counts as empty
        if not isinstance(raw_records, list):
            return kept, issues

        for index, item in enumerate(raw_records):
            if not isinstance(item, dict):
                issues.append(ValidationIssue(
                    collection=collection,
                    index=index,
                    issue_type="not_an_object",
                    message=f"Record is {type(item).__name__}, expected object",
                ))
                continue

            raw_id = item.get("id")
            record_id: Optional[str] = raw_id if isinstance(raw_id, str) else None

            try:
                record = model.model_validate(item)
            except ValidationError as e:
                issues.append(ValidationIssue(
                    collection=collection,
                    index=index,
                    record_id=record_id,
                    issue_type="invalid_field",
                    message="; ".join(
                        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                        for err in e.errors()
                    ),
                ))
                continue

            if record.id in seen_ids:
                issues.append(ValidationIssue(
                    collection=collection,
                    index=index,
                    record_id=record.id,
                    issue_type="duplicate_id",
                    message=f"Duplicate id {record.id}",
                ))
                continue

            seen_ids.add(record.id)
            kept.append(record)

        return kept, issues

    def normalize(self, payload: dict[str, Any]) -> NormalizationReport:
        """
        Stage 2: keep well-formed records and backfill required categories.

        Entries pointing at categories that no longer exist are kept:
        category references are checked on write, not on load.
        """
        categories, category_issues = self._collect(
            "categories", payload.get("categories"), Category
        )
        entries, entry_issues = self._collect(
            "entries", payload.get("entries"), Entry
        )

        backfilled: list[CategoryType] = []
        for category_type in (CategoryType.INCOME, CategoryType.EXPENSE):
            if not any(cat.type == category_type for cat in categories):
                categories.append(build_default_category(category_type, self._language))
                backfilled.append(category_type)

        return NormalizationReport(
            data=FinanceData(categories=tuple(categories), entries=tuple(entries)),
            dropped=category_issues + entry_issues,
            backfilled=backfilled,
        )
