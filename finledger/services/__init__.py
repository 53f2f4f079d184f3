"""Services package."""

from finledger.services.storage import (
    EntryStorageInterface,
    InMemoryEntryStorage,
    JsonFileEntryStorage,
    SnapshotReadError,
    StorageError,
    StorageWriteError,
)

__all__ = [
    "EntryStorageInterface",
    "InMemoryEntryStorage",
    "JsonFileEntryStorage",
    "SnapshotReadError",
    "StorageError",
    "StorageWriteError",
]
