"""
Aggregation Engine

DESIGN DECISION: Everything here is a pure function of (entries, filters).
Nothing reads the store directly and nothing is cached; the dashboard
recomputes every view after each mutation or filter change.

All sums are accumulated as Decimal and quantized to cents, so float drift
never reaches a displayed total.

Filter values are either the ALL sentinel or an exact value:
- category filter: the category label
- period filter: a period key such as "Oct 2025"
"""

from decimal import Decimal
from typing import Iterable

from finledger.models.entry import Entry, EntryType, to_cents
from finledger.models.views import LedgerSummary, TimeSeries
from finledger.periods import ALL, Period, matches_period, period_of

ZERO = Decimal("0")


def _in_period(entries: Iterable[Entry], period_filter: str) -> list[Entry]:
    return [entry for entry in entries if matches_period(entry.date, period_filter)]


def summarize(entries: Iterable[Entry], period_filter: str = ALL) -> LedgerSummary:
    """
    Compute the dashboard card totals.

    The balance always covers the whole history (income minus expense
    minus investment). Only the three per-type totals are restricted to
    `period_filter`.
    """
    entries = list(entries)

    balance = sum((entry.signed_amount for entry in entries), ZERO)

    totals = {entry_type: ZERO for entry_type in EntryType}
    for entry in _in_period(entries, period_filter):
        totals[entry.type] += entry.amount

    return LedgerSummary(
        balance=to_cents(balance),
        income_total=to_cents(totals[EntryType.INCOME]),
        expense_total=to_cents(totals[EntryType.EXPENSE]),
        investment_total=to_cents(totals[EntryType.INVESTMENT]),
    )


def group_expenses_by_category(
    entries: Iterable[Entry],
    period_filter: str = ALL,
) -> dict[str, Decimal]:
    """
    Total expense per category for the selected period.

    Categories with no expense in the period are left out entirely.
    Keys keep the order in which each category first appears.
    """
    groups: dict[str, Decimal] = {}

    for entry in _in_period(entries, period_filter):
        if entry.type != EntryType.EXPENSE:
            continue
        groups[entry.category] = groups.get(entry.category, ZERO) + entry.amount

    return {category: to_cents(total) for category, total in groups.items()}


def build_time_series(entries: Iterable[Entry]) -> TimeSeries:
    """
    Income and expense per period over the full history.

    Filters never apply here. Investment entries do not contribute to
    either line but still make their period appear. Months without any
    entry are not filled in.
    """
    buckets: dict[Period, dict[EntryType, Decimal]] = {}

    for entry in entries:
        bucket = buckets.setdefault(
            period_of(entry.date),
            {EntryType.INCOME: ZERO, EntryType.EXPENSE: ZERO},
        )
        if entry.type in bucket:
            bucket[entry.type] += entry.amount

    ordered = sorted(buckets)

    return TimeSeries(
        periods=[period.label for period in ordered],
        income=[to_cents(buckets[period][EntryType.INCOME]) for period in ordered],
        expense=[to_cents(buckets[period][EntryType.EXPENSE]) for period in ordered],
    )


def list_entries(
    entries: Iterable[Entry],
    category_filter: str = ALL,
    period_filter: str = ALL,
) -> list[Entry]:
    """
    Entries for the history table, most recent date first.

    Entries on the same date are ordered newest id first. Both filters
    apply together.
    """
    selected = [
        entry for entry in entries
        if (category_filter == ALL or entry.category == category_filter)
        and matches_period(entry.date, period_filter)
    ]
    return sorted(selected, key=lambda entry: (entry.date, entry.id), reverse=True)


def available_categories(entries: Iterable[Entry]) -> list[str]:
    """Distinct categories for the category filter, in first-seen order."""
    seen: dict[str, None] = {}
    for entry in entries:
        seen.setdefault(entry.category, None)
    return list(seen)


def available_periods(entries: Iterable[Entry]) -> list[str]:
    """Distinct period keys for the period filter, newest first."""
    periods = {period_of(entry.date) for entry in entries}
    return [period.label for period in sorted(periods, reverse=True)]
