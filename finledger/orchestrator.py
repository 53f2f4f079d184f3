"""
Dashboard Orchestrator

This module ties the store and the aggregation engine together and
defines what happens on each user event:
1. Submit a new entry
2. Delete an entry
3. Change the category or period filter
4. Clear all entries

DESIGN DECISION: Nothing is cached. After every event the whole dashboard
view is recomputed from the store. The ledger is small enough that
recomputing is cheaper than keeping derived state consistent.
"""

from decimal import Decimal
from typing import Any, Callable, Optional

from finledger.analytics import (
    available_categories,
    available_periods,
    build_time_series,
    group_expenses_by_category,
    list_entries,
    summarize,
)
from finledger.config import Settings, get_settings
from finledger.formatting import format_currency
from finledger.logger import configure_logging, get_logger
from finledger.models.views import ActionResult, ClearOutcome, DashboardView
from finledger.periods import ALL
from finledger.services.storage import (
    EntryStorageInterface,
    InMemoryEntryStorage,
    JsonFileEntryStorage,
)
from finledger.store import EntryStore
from finledger.validation import EntryValidationError, EntryValidator

logger = get_logger(__name__)

NOTHING_TO_CLEAR_MESSAGE = "No data to clear."
CLEARED_MESSAGE = "All transactions have been cleared."


class LedgerDashboard:
    """
    Holds the filter selections and answers every user event with a
    freshly computed DashboardView.

    Filters are the ALL sentinel or an exact value:
    - category_filter: a category label
    - period_filter: a period key such as "Oct 2025"
    """

    def __init__(
        self,
        store: EntryStore,
        currency_symbol: str = "₹",
        digit_grouping: str = "indian",
    ):
        self._store = store
        self._currency_symbol = currency_symbol
        self._digit_grouping = digit_grouping
        self.category_filter = ALL
        self.period_filter = ALL

    @property
    def store(self) -> EntryStore:
        return self._store

    def view(self) -> DashboardView:
        """Recompute every view from the current store contents."""
        entries = self._store.entries
        summary = summarize(entries, self.period_filter)

        return DashboardView(
            summary=summary,
            entries=list_entries(entries, self.category_filter, self.period_filter),
            expenses_by_category=group_expenses_by_category(entries, self.period_filter),
            income_vs_expense=summary.income_vs_expense(),
            time_series=build_time_series(entries),
            categories=available_categories(entries),
            periods=available_periods(entries),
            category_filter=self.category_filter,
            period_filter=self.period_filter,
            can_clear=len(self._store) > 0,
        )

    def format_amount(self, amount: Decimal) -> str:
        """Render an amount with the configured currency settings."""
        return format_currency(
            amount,
            symbol=self._currency_symbol,
            grouping=self._digit_grouping,
        )

    def submit(
        self,
        type: Any = None,
        description: Any = None,
        amount: Any = None,
        category: Any = "",
        date: Any = None,
    ) -> ActionResult:
        """
        Handle the new-entry form.

        Missing fields are reported as validation failures.
        """
        try:
            self._store.add(
                type=type,
                description=description,
                amount=amount,
                category=category,
                date=date,
            )
        except EntryValidationError as e:
            return ActionResult(ok=False, message=e.message, view=self.view())

        return ActionResult(ok=True, view=self.view())

    def delete(self, entry_id: int) -> ActionResult:
        """Delete one entry. Unknown ids are ignored."""
        self._store.remove(entry_id)
        return ActionResult(ok=True, view=self.view())

    def set_category_filter(self, value: str) -> DashboardView:
        self.category_filter = value or ALL
        return self.view()

    def set_period_filter(self, value: str) -> DashboardView:
        self.period_filter = value or ALL
        return self.view()

    def clear_all(self, confirm: Callable[[], bool]) -> ActionResult:
        """
        Clear every entry after confirmation.

        On success both filters are reset to ALL.
        """
        outcome = self._store.clear(confirm)

        if outcome == ClearOutcome.NOTHING_TO_CLEAR:
            return ActionResult(ok=False, message=NOTHING_TO_CLEAR_MESSAGE, view=self.view())

        if outcome == ClearOutcome.DECLINED:
            return ActionResult(ok=False, view=self.view())

        self.category_filter = ALL
        self.period_filter = ALL
        return ActionResult(ok=True, message=CLEARED_MESSAGE, view=self.view())


def create_storage(settings: Settings) -> EntryStorageInterface:
    """Build the configured snapshot storage backend."""
    storage_settings = settings.storage
    if storage_settings.backend == "memory":
        return InMemoryEntryStorage(key=storage_settings.key)
    return JsonFileEntryStorage(storage_settings.path, key=storage_settings.key)


def create_app_components(
    settings: Optional[Settings] = None,
    use_storage: bool = True,
) -> tuple[EntryStore, LedgerDashboard]:
    """
    Create all application components.

    Args:
        settings: Settings to use (cached defaults if None)
        use_storage: If False, use in-memory storage regardless of settings

    Returns:
        (store, dashboard)
    """
    settings = settings or get_settings()
    app_settings = settings.app

    configure_logging(app_settings.log_level, app_settings.json_logs)

    if use_storage:
        storage = create_storage(settings)
    else:
        storage = InMemoryEntryStorage(key=settings.storage.key)

    store = EntryStore(storage, validator=EntryValidator(app_settings))
    dashboard = LedgerDashboard(
        store,
        currency_symbol=app_settings.currency_symbol,
        digit_grouping=app_settings.digit_grouping,
    )

    logger.info(
        "ledger_ready",
        backend=type(storage).__name__,
        entries=len(store),
    )
    return store, dashboard
