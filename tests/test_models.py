"""
Tests for Finance Ledger models

Test strategy:
1. Unit tests for models and helpers (this file)
2. Validation, storage and store behaviour in their own modules
3. No real files outside pytest's tmp_path
"""

import math
from datetime import date, datetime

import pytest
from pydantic import ValidationError

from finance_ledger.models import (
    Category,
    CategoryType,
    Entry,
    EntryInput,
    FinanceData,
    LedgerErrorCode,
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventSeverity,
    LedgerEventType,
    MutationResult,
    create_id,
    is_valid_amount,
    normalize_date,
)


class TestHelpers:
    """Tests for id, date and amount helpers."""

    def test_create_id_prefix_and_uniqueness(self):
        """Test ids carry the prefix and are not reused."""
        first = create_id("cat")
        second = create_id("cat")
        assert first.startswith("cat_")
        assert first != second

    def test_normalize_date_zero_pads(self):
        """Test short month/day are zero-padded."""
        assert normalize_date("2024-1-5") == "2024-01-05"

    def test_normalize_date_accepts_date_objects(self):
        """Test date and datetime values are normalized."""
        assert normalize_date(date(2024, 3, 9)) == "2024-03-09"
        assert normalize_date(datetime(2024, 3, 9, 18, 30)) == "2024-03-09"

    def test_normalize_date_drops_time_suffix(self):
        """Test ISO timestamps keep only the calendar date."""
        assert normalize_date("2024-01-05T10:00:00.000Z") == "2024-01-05"

    @pytest.mark.parametrize("value", ["2024-02-30", "05.01.2024", "", 20240105, None])
    def test_normalize_date_rejects_non_dates(self, value):
        """Test impossible or unrecognized dates raise ValueError."""
        with pytest.raises(ValueError):
            normalize_date(value)

    def test_is_valid_amount(self):
        """Test only finite numbers above zero are valid amounts."""
        assert is_valid_amount(1000)
        assert is_valid_amount(0.01)
        assert not is_valid_amount(0)
        assert not is_valid_amount(-5)
        assert not is_valid_amount(math.inf)
        assert not is_valid_amount(math.nan)
        assert not is_valid_amount(True)
        assert not is_valid_amount("100")
        assert not is_valid_amount(None)

    def test_is_valid_amount_handles_huge_integers(self):
        """Test integers too large for a float are still valid amounts."""
        assert is_valid_amount(10**400)
        assert not is_valid_amount(-10**400)


class TestRecordModels:
    """Tests for Category and Entry."""

    def test_category_keeps_name_as_stored(self):
        """Test category names are not rewritten when loaded."""
        category = Category(id="cat_1", name="  Rent  ", type="expense")
        assert category.name == "  Rent  "
        assert category.type == CategoryType.EXPENSE

    def test_category_allows_blank_name(self):
        """Test a stored blank name is kept; the non-empty rule applies on write."""
        category = Category(id="cat_1", name="", type="income")
        assert category.name == ""

    def test_category_rejects_non_string_name(self):
        """Test a name must be a string."""
        with pytest.raises(ValidationError):
            Category(id="cat_1", name=None, type="income")

    def test_category_rejects_unknown_type(self):
        """Test only income and expense are valid types."""
        with pytest.raises(ValidationError):
            Category(id="cat_1", name="Gifts", type="transfer")

    def test_category_is_frozen(self):
        """Test records can't be mutated in place."""
        category = Category(id="cat_1", name="Rent", type="expense")
        with pytest.raises(ValidationError):
            category.name = "Other"

    def test_entry_reads_camel_case_alias(self):
        """Test Entry accepts the persisted categoryId key."""
        entry = Entry.model_validate({
            "id": "entry_1",
            "type": "income",
            "categoryId": "cat_1",
            "amount": 1000,
            "date": "2024-1-5",
            "note": "",
        })
        assert entry.category_id == "cat_1"
        assert entry.amount == 1000
        assert entry.date == "2024-01-05"

    def test_entry_missing_note_defaults_to_empty(self):
        """Test a null note becomes an empty string."""
        entry = Entry(
            id="entry_1",
            type=CategoryType.EXPENSE,
            category_id="cat_1",
            amount=12.5,
            date="2024-01-05",
            note=None,
        )
        assert entry.note == ""

    @pytest.mark.parametrize("amount", [math.inf, -math.inf, math.nan, "100", True, None])
    def test_entry_rejects_bad_amounts(self, amount):
        """Test stored entries need a finite real number."""
        with pytest.raises(ValidationError):
            Entry(
                id="entry_1",
                type=CategoryType.EXPENSE,
                category_id="cat_1",
                amount=amount,
                date="2024-01-05",
            )

    @pytest.mark.parametrize("amount", [0, -1, -2.5])
    def test_entry_keeps_non_positive_amounts(self, amount):
        """Test stored entries with zero or negative amounts load unchanged."""
        entry = Entry(
            id="entry_1",
            type=CategoryType.EXPENSE,
            category_id="cat_1",
            amount=amount,
            date="2024-01-05",
        )
        assert entry.amount == amount

    def test_entry_keeps_integer_amounts_exact(self):
        """Test integer amounts are not widened to float."""
        entry = Entry.model_validate({
            "id": "entry_1",
            "type": "income",
            "categoryId": "cat_1",
            "amount": 10**17 + 1,
            "date": "2024-01-05",
        })
        assert type(entry.amount) is int
        assert entry.amount == 10**17 + 1
        assert '"amount":100000000000000001' in FinanceData(entries=(entry,)).to_json()

    def test_entry_keeps_float_amounts(self):
        """Test float amounts stay float."""
        entry = Entry(
            id="entry_1",
            type=CategoryType.EXPENSE,
            category_id="cat_1",
            amount=12.5,
            date="2024-01-05",
        )
        assert type(entry.amount) is float

    def test_entry_input_allows_any_amount(self):
        """Test EntryInput leaves amount checks to the ledger store."""
        entry_input = EntryInput(
            type="expense",
            categoryId="cat_1",
            amount=-3,
            date=date(2024, 1, 5),
        )
        assert entry_input.amount == -3
        assert entry_input.date == "2024-01-05"
        assert entry_input.note is None

    @pytest.mark.parametrize("amount", [None, "abc", "12", True])
    def test_entry_input_does_not_coerce_amount(self, amount):
        """Test non-numeric amounts pass through untouched instead of raising."""
        entry_input = EntryInput.model_validate({
            "type": "expense",
            "categoryId": "cat_1",
            "amount": amount,
            "date": "2024-01-05",
        })
        assert entry_input.amount is amount

    def test_entry_input_missing_amount(self):
        """Test a missing amount is None rather than a validation error."""
        entry_input = EntryInput.model_validate({
            "type": "expense",
            "categoryId": "cat_1",
            "date": "2024-01-05",
        })
        assert entry_input.amount is None


class TestFinanceData:
    """Tests for the document model."""

    @pytest.fixture
    def data(self):
        return FinanceData(
            categories=(
                Category(id="cat_in", name="Salary", type="income"),
                Category(id="cat_out", name="Food", type="expense"),
                Category(id="cat_out2", name="Rent", type="expense"),
            ),
            entries=(
                Entry(
                    id="entry_1",
                    type="expense",
                    category_id="cat_out",
                    amount=20,
                    date="2024-01-05",
                ),
            ),
        )

    def test_lookups(self, data):
        """Test category and entry lookups by id."""
        assert data.find_category("cat_in").name == "Salary"
        assert data.find_category("missing") is None
        assert data.find_entry("entry_1").amount == 20
        assert data.find_entry("missing") is None

    def test_categories_of_type(self, data):
        """Test filtering categories by type keeps order."""
        expense = data.categories_of_type(CategoryType.EXPENSE)
        assert [cat.id for cat in expense] == ["cat_out", "cat_out2"]

    def test_is_category_in_use(self, data):
        """Test usage check looks at entry references."""
        assert data.is_category_in_use("cat_out") is True
        assert data.is_category_in_use("cat_out2") is False

    def test_to_document_uses_persisted_layout(self, data):
        """Test the document dict matches the stored JSON shape."""
        document = data.to_document()
        assert set(document) == {"categories", "entries"}
        assert document["categories"][0] == {"id": "cat_in", "name": "Salary", "type": "income"}
        assert document["entries"][0] == {
            "id": "entry_1",
            "type": "expense",
            "categoryId": "cat_out",
            "amount": 20,
            "date": "2024-01-05",
            "note": "",
        }

    def test_json_round_trip(self, data):
        """Test the serialized document parses back to an equal model."""
        assert FinanceData.model_validate_json(data.to_json()) == data


class TestMutationResult:
    """Tests for MutationResult."""

    def test_ok_without_error(self):
        """Test a result without error is ok."""
        assert MutationResult(data=FinanceData()).ok is True

    def test_not_ok_with_error(self):
        """Test a rejected result carries code and message."""
        result = MutationResult(
            data=FinanceData(),
            error="Entry not found.",
            error_code=LedgerErrorCode.ENTRY_NOT_FOUND,
        )
        assert result.ok is False
        assert result.error_code == LedgerErrorCode.ENTRY_NOT_FOUND


class TestEventModels:
    """Tests for ledger event models."""

    def test_event_defaults(self):
        """Test LedgerEvent model creation."""
        event = LedgerEvent(
            event_type=LedgerEventType.ENTRY_ADDED,
            description="Entry added",
        )
        assert event.severity == LedgerEventSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = LedgerEventBuilder.category_added("cat_1", "Rent", "expense")
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "category_added"
        assert log_dict["entity_type"] == "category"
        assert log_dict["entity_id"] == "cat_1"
        assert log_dict["details"]["name"] == "Rent"

    def test_builder_mutation_rejected_is_warning(self):
        """Test rejections are logged as warnings."""
        event = LedgerEventBuilder.mutation_rejected(
            "delete_category", "cat_1", "category_in_use"
        )
        assert event.event_type == LedgerEventType.MUTATION_REJECTED
        assert event.severity == LedgerEventSeverity.WARNING
        assert event.details["error_code"] == "category_in_use"

    def test_builder_document_normalized_counts(self):
        """Test the normalization event describes what was corrected."""
        event = LedgerEventBuilder.document_normalized(
            "financeData",
            dropped=[{"collection": "entries"}],
            backfilled=["income", "expense"],
        )
        assert "dropped 1 records" in event.description
        assert "backfilled 2 categories" in event.description


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
