"""
View Models

Outputs of the aggregation engine and of the dashboard facade. These are
what a presentation layer consumes: plain Decimals and labels, never
formatted money strings.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from finledger.models.entry import Entry
from finledger.periods import ALL

ZERO = Decimal("0.00")


class ClearOutcome(str, Enum):
    """What happened when clearing all entries was requested."""
    NOTHING_TO_CLEAR = "nothing_to_clear"  # Store was already empty
    DECLINED = "declined"                  # Caller did not confirm
    CLEARED = "cleared"


class LedgerSummary(BaseModel):
    """
    Card totals.

    `balance` is lifetime. The three totals cover the selected period only.
    """

    balance: Decimal = ZERO
    income_total: Decimal = ZERO
    expense_total: Decimal = ZERO
    investment_total: Decimal = ZERO

    def income_vs_expense(self) -> tuple[Decimal, Decimal]:
        """Values for the income/expense comparison chart."""
        return self.income_total, self.expense_total


class TimeSeries(BaseModel):
    """Per-period income and expense sums, oldest period first."""

    periods: list[str] = Field(default_factory=list)
    income: list[Decimal] = Field(default_factory=list)
    expense: list[Decimal] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_parallel(self) -> 'TimeSeries':
        """All three sequences must line up slot for slot."""
        if not len(self.periods) == len(self.income) == len(self.expense):
            raise ValueError("Time series sequences must have equal length")
        return self

    def __len__(self) -> int:
        return len(self.periods)


class DashboardView(BaseModel):
    """Everything the dashboard shows, recomputed from the store."""

    summary: LedgerSummary
    entries: list[Entry] = Field(default_factory=list)
    expenses_by_category: dict[str, Decimal] = Field(default_factory=dict)
    income_vs_expense: tuple[Decimal, Decimal] = (ZERO, ZERO)
    time_series: TimeSeries = Field(default_factory=TimeSeries)

    # Filter dropdown options and current selections
    categories: list[str] = Field(default_factory=list)
    periods: list[str] = Field(default_factory=list)
    category_filter: str = ALL
    period_filter: str = ALL

    can_clear: bool = False


class ActionResult(BaseModel):
    """Outcome of a user action, with the message to show as a toast."""

    ok: bool
    message: Optional[str] = None
    view: DashboardView
