"""
Finance Ledger - Source Package

The data service behind a personal-finance tracker: categories and
income/expense entries kept as one JSON document in a local settings store.

DESIGN PRINCIPLES:
1. One document, read and overwritten whole on every operation
2. Every category type always has at least one category
3. Entries only point at categories that exist when written
4. Corrupt stored data is corrected, never fatal
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Ledger Team"
