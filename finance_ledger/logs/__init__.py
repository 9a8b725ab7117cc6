"""Ledger logging package."""

from finance_ledger.logs.logger import LedgerEventLogger, configure_logging

__all__ = ["LedgerEventLogger", "configure_logging"]
