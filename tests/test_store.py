"""Tests for the entry store."""

import pytest
from datetime import date
from decimal import Decimal

from finledger.config import AppSettings
from finledger.models.views import ClearOutcome
from finledger.services.storage import InMemoryEntryStorage, JsonFileEntryStorage
from finledger.store import EntryStore
from finledger.validation import EntryValidationError, EntryValidator


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: int = 1_730_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now


class CountingStorage(InMemoryEntryStorage):
    """In-memory storage that counts saves."""

    def __init__(self):
        super().__init__()
        self.saves = 0

    def save(self, entries):
        self.saves += 1
        super().save(entries)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def storage():
    return CountingStorage()


@pytest.fixture
def store(storage, clock):
    validator = EntryValidator(settings=AppSettings(), today=lambda: date(2025, 10, 15))
    return EntryStore(storage, validator=validator, clock=clock)


def add_sample(store, **overrides):
    fields = {
        "type": "expense",
        "description": "Groceries",
        "amount": "42.50",
        "category": "Food",
        "date": "2025-10-05",
    }
    fields.update(overrides)
    return store.add(**fields)


def never_called():
    raise AssertionError("confirmation should not be requested")


class TestAdd:
    """Tests for EntryStore.add."""

    def test_add_assigns_id_and_persists(self, store, storage, clock):
        """Test a valid entry is stored and saved."""
        entry = add_sample(store)
        assert entry.id == clock.now
        assert entry.amount == Decimal("42.50")
        assert store.entries == (entry,)
        assert storage.saves == 1
        assert storage.load() == [entry]

    def test_ids_unique_with_frozen_clock(self, store):
        """Test two entries in the same millisecond get distinct ids."""
        first = add_sample(store)
        second = add_sample(store)
        third = add_sample(store)
        assert len({first.id, second.id, third.id}) == 3
        assert first.id < second.id < third.id

    def test_id_follows_clock_when_it_moves(self, store, clock):
        """Test ids are creation timestamps."""
        add_sample(store)
        clock.now += 5000
        assert add_sample(store).id == clock.now

    def test_zero_amount_rejected_store_unchanged(self, store, storage):
        """Test amount=0 is rejected with no mutation and no save."""
        add_sample(store)
        before = store.entries

        with pytest.raises(EntryValidationError) as exc_info:
            add_sample(store, amount="0")

        assert exc_info.value.issues[0].field == "amount"
        assert "greater than zero" in exc_info.value.message
        assert store.entries == before
        assert storage.saves == 1

    def test_missing_description_rejected(self, store):
        """Test a blank description is rejected."""
        with pytest.raises(EntryValidationError, match="description"):
            add_sample(store, description="  ")
        assert len(store) == 0

    def test_missing_date_rejected(self, store):
        """Test a missing date is rejected."""
        with pytest.raises(EntryValidationError, match="valid date"):
            add_sample(store, date=None)

    def test_validation_error_is_value_error(self, store):
        """Test callers can catch it as ValueError."""
        with pytest.raises(ValueError):
            add_sample(store, amount="abc")

    def test_warning_does_not_block(self, store):
        """Test a far-future date is still accepted."""
        entry = add_sample(store, date="2030-01-01")
        assert entry.date == date(2030, 1, 1)


class TestRemove:
    """Tests for EntryStore.remove."""

    def test_remove_existing(self, store, storage):
        """Test removing by id."""
        keep = add_sample(store, description="Keep")
        drop = add_sample(store, description="Drop")
        assert store.remove(drop.id) is True
        assert store.entries == (keep,)
        assert storage.load() == [keep]

    def test_remove_missing_is_noop(self, store, storage):
        """Test an unknown id is silently ignored but still saved."""
        entry = add_sample(store)
        saves = storage.saves
        assert store.remove(12345) is False
        assert store.entries == (entry,)
        assert storage.saves == saves + 1

    def test_remove_is_idempotent(self, store):
        """Test removing twice equals removing once."""
        entry = add_sample(store)
        other = add_sample(store)
        store.remove(entry.id)
        once = store.entries
        store.remove(entry.id)
        assert store.entries == once == (other,)

    def test_get(self, store):
        """Test lookup by id."""
        entry = add_sample(store)
        assert store.get(entry.id) == entry
        assert store.get(-1) is None


class TestClear:
    """Tests for EntryStore.clear."""

    def test_nothing_to_clear(self, store, storage):
        """Test clearing an empty store asks nothing and saves nothing."""
        assert store.clear(never_called) == ClearOutcome.NOTHING_TO_CLEAR
        assert storage.saves == 0

    def test_declined(self, store, storage):
        """Test a declined confirmation keeps the entries."""
        add_sample(store)
        saves = storage.saves
        assert store.clear(lambda: False) == ClearOutcome.DECLINED
        assert len(store) == 1
        assert storage.saves == saves

    def test_cleared(self, store, storage):
        """Test a confirmed clear empties and persists."""
        add_sample(store)
        add_sample(store)
        assert store.clear(lambda: True) == ClearOutcome.CLEARED
        assert len(store) == 0
        assert storage.load() == []


class TestLoading:
    """Tests for loading the snapshot at construction."""

    def test_loads_existing_snapshot(self, tmp_path, clock):
        """Test a new store picks up what a previous one saved."""
        path = tmp_path / "ledger.json"
        first = EntryStore(JsonFileEntryStorage(path), validator=EntryValidator(AppSettings()), clock=clock)
        entry = add_sample(first)

        second = EntryStore(JsonFileEntryStorage(path), validator=EntryValidator(AppSettings()), clock=clock)
        assert second.entries == (entry,)

    def test_ids_stay_unique_after_reload(self, tmp_path, clock):
        """Test ids keep increasing past loaded entries."""
        path = tmp_path / "ledger.json"
        first = EntryStore(JsonFileEntryStorage(path), validator=EntryValidator(AppSettings()), clock=clock)
        old = add_sample(first)

        second = EntryStore(JsonFileEntryStorage(path), validator=EntryValidator(AppSettings()), clock=clock)
        assert add_sample(second).id > old.id

    def test_corrupt_snapshot_starts_empty(self, clock):
        """Test a corrupt snapshot never crashes startup."""
        storage = InMemoryEntryStorage()
        storage.raw = "garbage"
        store = EntryStore(storage, validator=EntryValidator(AppSettings()), clock=clock)
        assert len(store) == 0

    def test_entries_snapshot_is_read_only(self, store):
        """Test the entries property cannot be used to mutate the store."""
        add_sample(store)
        assert isinstance(store.entries, tuple)
        assert list(store) == list(store.entries)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
