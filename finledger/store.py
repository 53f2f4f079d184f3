"""
Entry Store

The single source of truth for ledger entries. It owns the in-memory list,
runs validation on new entries and persists the full snapshot after every
mutation.

GUARANTEES:
- A rejected entry leaves the store and the stored snapshot untouched
- Entry ids are unique within the store
- remove() is idempotent
- clear() never empties a non-empty store without confirmation
"""

import time
from typing import Any, Callable, Iterator, Optional

from finledger.logger import get_logger
from finledger.models.entry import Entry
from finledger.models.views import ClearOutcome
from finledger.services.storage import EntryStorageInterface
from finledger.validation import EntryValidationError, EntryValidator

logger = get_logger(__name__)


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class EntryStore:
    """
    In-memory ledger backed by a load-all/save-all storage collaborator.

    The snapshot is loaded once at construction. A missing or corrupt
    snapshot starts an empty store.
    """

    def __init__(
        self,
        storage: EntryStorageInterface,
        validator: Optional[EntryValidator] = None,
        clock: Callable[[], int] = _now_millis,
    ):
        """
        Initialize the store.

        Args:
            storage: Snapshot storage backend
            validator: Validator for new entries (default settings if None)
            clock: Returns the current time in milliseconds, used for ids
        """
        self._storage = storage
        self._validator = validator or EntryValidator()
        self._clock = clock
        self._entries: list[Entry] = list(storage.load())

    @property
    def storage(self) -> EntryStorageInterface:
        return self._storage

    @property
    def entries(self) -> tuple[Entry, ...]:
        """Read-only snapshot of the current entries, in insertion order."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(tuple(self._entries))

    def get(self, entry_id: int) -> Optional[Entry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def _next_id(self) -> int:
        """Creation timestamp, bumped past the largest id already used."""
        candidate = self._clock()
        if self._entries:
            candidate = max(candidate, max(entry.id for entry in self._entries) + 1)
        return candidate

    def _persist(self) -> None:
        self._storage.save(self._entries)

    def add(
        self,
        type: Any,
        description: Any,
        amount: Any,
        category: Any = "",
        date: Any = None,
    ) -> Entry:
        """
        Validate raw form values and append the resulting entry.

        Returns:
            The stored Entry with its assigned id

        Raises:
            EntryValidationError: If the input is invalid (store unchanged)
        """
        raw = {
            "type": type,
            "description": description,
            "amount": amount,
            "category": category,
            "date": date,
        }

        result = self._validator.validate(raw)
        if not result.is_valid:
            logger.info(
                "entry_rejected",
                fields=[issue.field for issue in result.errors],
            )
            raise EntryValidationError(result.errors)

        for warning in result.warnings:
            logger.warning(
                "entry_warning",
                field=warning.field,
                issue_type=warning.issue_type,
                message=warning.message,
            )

        entry = Entry(id=self._next_id(), **result.draft.model_dump())
        self._entries.append(entry)
        self._persist()

        logger.info(
            "entry_added",
            entry_id=entry.id,
            entry_type=entry.type.value,
            category=entry.category,
        )
        return entry

    def remove(self, entry_id: int) -> bool:
        """
        Remove the entry with `entry_id`.

        Removing an id that is not present is a no-op. The snapshot is
        saved either way.

        Returns:
            True if an entry was removed
        """
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        removed = len(remaining) != len(self._entries)
        self._entries = remaining
        self._persist()

        logger.info("entry_removed", entry_id=entry_id, found=removed)
        return removed

    def clear(self, confirm: Callable[[], bool]) -> ClearOutcome:
        """
        Remove every entry after the caller confirms.

        `confirm` is only called when there is something to clear.

        Returns:
            NOTHING_TO_CLEAR, DECLINED or CLEARED
        """
        if not self._entries:
            return ClearOutcome.NOTHING_TO_CLEAR

        if not confirm():
            return ClearOutcome.DECLINED

        count = len(self._entries)
        self._entries = []
        self._persist()

        logger.info("entries_cleared", count=count)
        return ClearOutcome.CLEARED
