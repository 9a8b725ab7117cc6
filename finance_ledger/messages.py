"""
User-facing text in the caller's display language.

Error codes are stable; the message strings are what UI layers show.
"""

from typing import Final

from finance_ledger.models.ledger import CategoryType, LedgerErrorCode


DEFAULT_LANGUAGE: Final[str] = "en"

MESSAGES: Final[dict[str, dict[LedgerErrorCode, str]]] = {
    "en": {
        LedgerErrorCode.CATEGORY_NAME_REQUIRED: "Enter a category name.",
        LedgerErrorCode.CATEGORY_NOT_FOUND: "Category not found.",
        LedgerErrorCode.CATEGORY_IN_USE: "Category is in use by entries.",
        LedgerErrorCode.LAST_CATEGORY_OF_TYPE: "Need at least one category of each type.",
        LedgerErrorCode.ENTRY_NOT_FOUND: "Entry not found.",
        LedgerErrorCode.AMOUNT_NOT_POSITIVE: "Enter an amount greater than 0.",
    },
    "ru": {
        LedgerErrorCode.CATEGORY_NAME_REQUIRED: "Введите название категории.",
        LedgerErrorCode.CATEGORY_NOT_FOUND: "Категория не найдена.",
        LedgerErrorCode.CATEGORY_IN_USE: "Категория используется в записях.",
        LedgerErrorCode.LAST_CATEGORY_OF_TYPE: "Нужна хотя бы одна категория каждого типа.",
        LedgerErrorCode.ENTRY_NOT_FOUND: "Запись не найдена.",
        LedgerErrorCode.AMOUNT_NOT_POSITIVE: "Введите сумму больше 0.",
    },
}

DEFAULT_CATEGORY_NAMES: Final[dict[str, dict[CategoryType, str]]] = {
    "en": {
        CategoryType.INCOME: "Salary",
        CategoryType.EXPENSE: "Food",
    },
    "ru": {
        CategoryType.INCOME: "Зарплата",
        CategoryType.EXPENSE: "Еда",
    },
}


def get_message(code: LedgerErrorCode, language: str = DEFAULT_LANGUAGE) -> str:
    """Message for an error code; unknown languages fall back to English."""
    catalog = MESSAGES.get(language, MESSAGES[DEFAULT_LANGUAGE])
    return catalog[code]


def default_category_name(
    category_type: CategoryType,
    language: str = DEFAULT_LANGUAGE,
) -> str:
    names = DEFAULT_CATEGORY_NAMES.get(language, DEFAULT_CATEGORY_NAMES[DEFAULT_LANGUAGE])
    return names[category_type]
