"""
Storage Services Package

Provides the snapshot storage interface and its implementations.
The JSON file backend is the default; the in-memory backend is used for
tests and throwaway sessions.
"""

from finledger.services.storage.interface import (
    EntryStorageInterface,
    SnapshotReadError,
    StorageError,
    StorageWriteError,
    dump_snapshot,
    parse_snapshot,
)
from finledger.services.storage.json_file import JsonFileEntryStorage
from finledger.services.storage.memory import InMemoryEntryStorage

__all__ = [
    # Interface
    "EntryStorageInterface",
    "dump_snapshot",
    "parse_snapshot",
    # Exceptions
    "SnapshotReadError",
    "StorageError",
    "StorageWriteError",
    # Implementations
    "InMemoryEntryStorage",
    "JsonFileEntryStorage",
]
