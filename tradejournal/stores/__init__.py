"""Record store implementations for tradejournal."""

from tradejournal.stores.base import BaseRecordStore
from tradejournal.stores.memory import InMemoryRecordStore
from tradejournal.stores.sqlite import SQLiteRecordStore

__all__ = [
    "BaseRecordStore",
    "InMemoryRecordStore",
    "SQLiteRecordStore",
]
