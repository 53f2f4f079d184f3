"""
In-Memory Storage

A dict-backed key-value store. The snapshot is kept as the same JSON text
the file backend writes, so the codec is exercised even in tests.
"""

from typing import Iterable, Optional

from finledger.logger import get_logger
from finledger.models.entry import Entry
from finledger.services.storage.interface import (
    EntryStorageInterface,
    SnapshotReadError,
    dump_snapshot,
    parse_snapshot,
)

logger = get_logger(__name__)


class InMemoryEntryStorage(EntryStorageInterface):
    """Keeps the snapshot in a process-local dict under one fixed key."""

    def __init__(self, key: str = "transactions"):
        self._key = key
        self._values: dict[str, str] = {}

    @property
    def raw(self) -> Optional[str]:
        """The stored JSON text, or None if nothing was saved."""
        return self._values.get(self._key)

    @raw.setter
    def raw(self, value: Optional[str]) -> None:
        if value is None:
            self._values.pop(self._key, None)
        else:
            self._values[self._key] = value

    def load(self) -> list[Entry]:
        raw = self.raw
        if raw is None:
            return []
        try:
            return parse_snapshot(raw)
        except SnapshotReadError as e:
            logger.warning("snapshot_unreadable", key=self._key, error=str(e))
            return []

    def save(self, entries: Iterable[Entry]) -> None:
        self._values[self._key] = dump_snapshot(entries)
