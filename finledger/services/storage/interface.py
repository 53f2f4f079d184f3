"""
Abstract Storage Interface

DESIGN DECISION: The ledger persists through a deliberately tiny interface:
load everything, save everything. There are no incremental writes; every
mutation replaces the full snapshot stored under one fixed key.

This allows us to:
1. Use in-memory storage for testing
2. Swap the JSON file for another key-value store later
3. Keep the store and the aggregation engine decoupled from storage

Backends must never crash on a missing or corrupt snapshot: load() returns
an empty list instead. Write failures do propagate.
"""

import json
from abc import ABC, abstractmethod
from typing import Iterable

from pydantic import TypeAdapter, ValidationError

from finledger.models.entry import Entry

_SNAPSHOT_ADAPTER = TypeAdapter(list[Entry])


class EntryStorageInterface(ABC):
    """
    Abstract interface for the entry snapshot store.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> list[Entry]:
        """
        Load the stored snapshot.

        Returns:
            The stored entries, or an empty list when nothing is stored
            or the stored content cannot be read
        """
        pass

    @abstractmethod
    def save(self, entries: Iterable[Entry]) -> None:
        """
        Replace the stored snapshot with `entries`.

        Raises:
            StorageWriteError: If the snapshot could not be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class SnapshotReadError(StorageError):
    """Stored snapshot is malformed."""
    pass


class StorageWriteError(StorageError):
    """Snapshot could not be written."""
    pass


def dump_snapshot(entries: Iterable[Entry]) -> str:
    """Serialize entries to the JSON snapshot format."""
    return _SNAPSHOT_ADAPTER.dump_json(list(entries)).decode("utf-8")


def parse_snapshot(raw: str) -> list[Entry]:
    """
    Parse a JSON snapshot.

    Raises:
        SnapshotReadError: If the text is not a valid list of entries
            or contains duplicate ids
    """
    try:
        data = json.loads(raw)
        entries = _SNAPSHOT_ADAPTER.validate_python(data)
    except (json.JSONDecodeError, ValidationError, TypeError, RecursionError) as e:
        # RecursionError: nesting too deep for the JSON decoder
        raise SnapshotReadError(f"Malformed entry snapshot: {e}") from e

    ids = [entry.id for entry in entries]
    if len(ids) != len(set(ids)):
        raise SnapshotReadError("Malformed entry snapshot: duplicate entry ids")

    return entries
