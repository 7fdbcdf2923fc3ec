"""Local persistence for VBOX Trade."""

from vboxtrade.db.store import DataStore, KeyValueStore

__all__ = ["DataStore", "KeyValueStore"]
