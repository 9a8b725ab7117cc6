"""
Ledger Store

This module owns the persisted ledger document and every change to it.

Flow of each operation:
1. Load → read the whole document from the settings store, normalize it
2. Validate → check the request against the loaded document
3. Mutate → build a new document snapshot
4. Persist → overwrite the whole document
5. Return → the new snapshot, or the loaded one plus an error

DESIGN DECISION: There is no cache between calls. Every operation is an
independent read-modify-write against the settings store, so the store is
not safe against concurrent writers.

KNOWN INCONSISTENCY: creation operations (add_category, add_entry) silently
ignore invalid input and return the document unchanged, while update and
delete operations return an explicit error.
"""

from typing import Optional, Union

from finance_ledger.config import LedgerSettings, get_settings
from finance_ledger.logs import LedgerEventLogger, configure_logging
from finance_ledger.messages import get_message
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
)
from finance_ledger.models.validation import InvalidDocument
from finance_ledger.services.storage import (
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
    StorageError,
)
from finance_ledger.validation import DocumentValidator, build_default_document


class LedgerStore:
    """
    Validated CRUD over the categories and entries of one ledger document.

    GUARANTEES:
    - At least one income and one expense category after every operation
    - Entries only ever written against an existing category
    - Amounts written by the store are numbers, finite and greater than zero
    - Returned documents are frozen snapshots; callers can't corrupt state
    """

    def __init__(
        self,
        storage: KeyValueStoreInterface,
        settings: Optional[LedgerSettings] = None,
        event_logger: Optional[LedgerEventLogger] = None,
        validator: Optional[DocumentValidator] = None,
    ):
        """
        Initialize the store.

        Args:
            storage: Settings store holding the serialized document
            settings: Ledger settings. Defaults to get_settings().
            event_logger: Logger for ledger events
            validator: Document validator. Defaults to one using the
                       configured language for backfilled categories.
        """
        self._storage = storage
        self._settings = settings or get_settings()
        self._events = event_logger or LedgerEventLogger()
        self._validator = validator or DocumentValidator(self._settings.language)

    @property
    def data_key(self) -> str:
        return self._settings.data_key

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _read_raw(self) -> str:
        try:
            return self._storage.get_string(self.data_key, "")
        except StorageError as e:
            self._events.log_storage_error("read", str(e))
            raise

    def save(self, data: FinanceData) -> None:
        """Serialize the whole document and overwrite the stored one."""
        try:
            self._storage.set_string(self.data_key, data.to_json())
        except StorageError as e:
            self._events.log_storage_error("write", str(e))
            raise

    def _create_default(self) -> FinanceData:
        data = build_default_document(self._settings.language)
        self.save(data)
        return data

    def load(self) -> FinanceData:
        """
        Load the ledger document, creating or repairing it as needed.

        A missing or unparseable document is replaced by a fresh one with
        the two default categories. A parseable one is normalized (malformed
        records dropped, missing category types backfilled) and written back.

        Raises:
            StorageError: only if the settings store itself fails
        """
        raw = self._read_raw()
        if not raw:
            data = self._create_default()
            self._events.log_document_created(self.data_key, "no stored document")
            return data

        parsed = self._validator.parse_document(raw)
        if isinstance(parsed, InvalidDocument):
            data = self._create_default()
            self._events.log_document_reset(self.data_key, parsed.reason)
            return data

        report = self._validator.normalize(parsed.payload)
        if report.was_corrected:
            self._events.log_document_normalized(
                self.data_key,
                dropped=report.dropped,
                backfilled=[category_type.value for category_type in report.backfilled],
            )

        self.save(report.data)
        return report.data

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _reject(
        self,
        operation: str,
        data: FinanceData,
        code: LedgerErrorCode,
        entity_id: Optional[str] = None,
    ) -> MutationResult:
        self._events.log_mutation_rejected(operation, entity_id, code.value)
        return MutationResult(
            data=data,
            error=get_message(code, self._settings.language),
            error_code=code,
        )

    @staticmethod
    def _coerce_input(entry_input: Union[EntryInput, dict]) -> EntryInput:
        if isinstance(entry_input, EntryInput):
            return entry_input
        return EntryInput.model_validate(entry_input)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def add_category(
        self,
        name: str,
        category_type: Union[CategoryType, str],
    ) -> FinanceData:
        """
        Append a new category.

        A name that is empty after trimming is ignored and the document is
        returned unchanged.
        """
        data = self.load()
        trimmed = name.strip()
        if not trimmed:
            self._events.log_mutation_skipped("add_category", "empty name")
            return data

        category = Category(
            id=create_id("cat"),
            name=trimmed,
            type=CategoryType(category_type),
        )
        updated = data.model_copy(update={"categories": data.categories + (category,)})
        self.save(updated)
        self._events.log_category_added(category.id, category.name, category.type.value)
        return updated

    def update_category(
        self,
        category_id: str,
        name: str,
        category_type: Union[CategoryType, str],
    ) -> MutationResult:
        """
        Rename a category and/or change its type.

        Rejected when the name is empty, the category doesn't exist, or the
        type change would leave the old type with no categories. Entries of
        the category keep the type they were written with.
        """
        data = self.load()
        trimmed = name.strip()
        if not trimmed:
            return self._reject(
                "update_category", data, LedgerErrorCode.CATEGORY_NAME_REQUIRED, category_id
            )

        category = data.find_category(category_id)
        if category is None:
            return self._reject(
                "update_category", data, LedgerErrorCode.CATEGORY_NOT_FOUND, category_id
            )

        new_type = CategoryType(category_type)
        if category.type != new_type and len(data.categories_of_type(category.type)) <= 1:
            return self._reject(
                "update_category", data, LedgerErrorCode.LAST_CATEGORY_OF_TYPE, category_id
            )

        replacement = category.model_copy(update={"name": trimmed, "type": new_type})
        updated = data.model_copy(update={
            "categories": tuple(
                replacement if cat.id == category_id else cat
                for cat in data.categories
            ),
        })
        self.save(updated)
        self._events.log_category_updated(
            category_id, trimmed, category.type.value, new_type.value
        )
        return MutationResult(data=updated)

    def delete_category(self, category_id: str) -> MutationResult:
        """
        Delete a category.

        Rejected when the category doesn't exist, any entry references it,
        or it is the last category of its type. Entries are never deleted
        along with their category.
        """
        data = self.load()
        category = data.find_category(category_id)
        if category is None:
            return self._reject(
                "delete_category", data, LedgerErrorCode.CATEGORY_NOT_FOUND, category_id
            )

        if data.is_category_in_use(category_id):
            return self._reject(
                "delete_category", data, LedgerErrorCode.CATEGORY_IN_USE, category_id
            )

        if len(data.categories_of_type(category.type)) <= 1:
            return self._reject(
                "delete_category", data, LedgerErrorCode.LAST_CATEGORY_OF_TYPE, category_id
            )

        updated = data.model_copy(update={
            "categories": tuple(cat for cat in data.categories if cat.id != category_id),
        })
        self.save(updated)
        self._events.log_category_deleted(category_id)
        return MutationResult(data=updated)

    # -------------------------------------------------------------------------
    # Entries
    # -------------------------------------------------------------------------

    def add_entry(self, entry_input: Union[EntryInput, dict]) -> FinanceData:
        """
        Insert a new entry at the front of the entries list.

        Input whose category doesn't exist, or whose amount is not a finite
        number above zero, is ignored and the document returned unchanged.
        """
        entry_input = self._coerce_input(entry_input)
        data = self.load()

        if data.find_category(entry_input.category_id) is None:
            self._events.log_mutation_skipped("add_entry", "category not found")
            return data

        if not is_valid_amount(entry_input.amount):
            self._events.log_mutation_skipped("add_entry", "amount not positive")
            return data

        entry = Entry(
            id=create_id("entry"),
            type=entry_input.type,
            category_id=entry_input.category_id,
            amount=entry_input.amount,
            date=entry_input.date,
            note=entry_input.note or "",
        )
        updated = data.model_copy(update={"entries": (entry,) + data.entries})
        self.save(updated)
        self._events.log_entry_added(entry.id, entry.category_id, entry.amount)
        return updated

    def update_entry(
        self,
        entry_id: str,
        entry_input: Union[EntryInput, dict],
    ) -> MutationResult:
        """
        Overwrite an entry's fields, keeping its id and position.

        Rejected when the entry or the category doesn't exist, or the amount
        is not a finite number above zero.
        """
        entry_input = self._coerce_input(entry_input)
        data = self.load()

        entry = data.find_entry(entry_id)
        if entry is None:
            return self._reject(
                "update_entry", data, LedgerErrorCode.ENTRY_NOT_FOUND, entry_id
            )

        if data.find_category(entry_input.category_id) is None:
            return self._reject(
                "update_entry", data, LedgerErrorCode.CATEGORY_NOT_FOUND, entry_id
            )

        if not is_valid_amount(entry_input.amount):
            return self._reject(
                "update_entry", data, LedgerErrorCode.AMOUNT_NOT_POSITIVE, entry_id
            )

        replacement = Entry(
            id=entry.id,
            type=entry_input.type,
            category_id=entry_input.category_id,
            amount=entry_input.amount,
            date=entry_input.date,
            note=entry_input.note or "",
        )
        updated = data.model_copy(update={
            "entries": tuple(
                replacement if item.id == entry_id else item
                for item in data.entries
            ),
        })
        self.save(updated)
        self._events.log_entry_updated(entry_id, replacement.category_id, replacement.amount)
        return MutationResult(data=updated)

    def delete_entry(self, entry_id: str) -> FinanceData:
        """Remove an entry. Unknown ids are ignored."""
        data = self.load()
        existed = data.find_entry(entry_id) is not None
        updated = data.model_copy(update={
            "entries": tuple(entry for entry in data.entries if entry.id != entry_id),
        })
        self.save(updated)
        self._events.log_entry_deleted(entry_id, existed)
        return updated


def create_ledger_store(settings: Optional[LedgerSettings] = None) -> LedgerStore:
    """
    Create a ledger store wired from settings.

    Uses the JSON settings file at settings.storage_path as backend.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    return LedgerStore(
        storage=JsonFileKeyValueStore(settings.storage_path),
        settings=settings,
    )
