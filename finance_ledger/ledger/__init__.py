"""Ledger store package."""

from finance_ledger.ledger.store import LedgerStore, create_ledger_store

__all__ = ["LedgerStore", "create_ledger_store"]
