"""
Period Keys

A period is one calendar month of one year. Entries are grouped and
filtered by period.

DESIGN DECISION: The display label ("Oct 2025") is only produced at the
boundary. Internally a period is the (year, month) pair, which is what every
sort uses. Sorting labels as strings puts "Nov 2024" after "Oct 2025".

Month names come from a fixed table, never from the process locale, so the
same date always produces the same key.
"""

from dataclasses import dataclass
from datetime import date

# Filter sentinel meaning "do not restrict"
ALL = "all"

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_MONTH_NUMBERS = {name.lower(): i for i, name in enumerate(MONTH_ABBREVIATIONS, start=1)}


@dataclass(frozen=True, order=True)
class Period:
    """A calendar month, ordered by (year, month)."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")

    @property
    def label(self) -> str:
        """Human-readable key, e.g. 'Oct 2025'."""
        return f"{MONTH_ABBREVIATIONS[self.month - 1]} {self.year:04d}"

    @classmethod
    def parse(cls, label: str) -> "Period":
        """
        Parse a label produced by `label` back into a Period.

        Raises:
            ValueError: If the label is not '<Mon> <YYYY>'
        """
        parts = label.strip().split()
        if len(parts) != 2:
            raise ValueError(f"Not a period label: {label!r}")

        month_name, year_text = parts
        month = _MONTH_NUMBERS.get(month_name.lower())
        if month is None or not year_text.isdigit() or len(year_text) != 4:
            raise ValueError(f"Not a period label: {label!r}")

        return cls(year=int(year_text), month=month)

    def __str__(self) -> str:
        return self.label


def period_of(day: date) -> Period:
    """Return the period containing `day`."""
    return Period(year=day.year, month=day.month)


def period_key(day: date) -> str:
    """Return the grouping/filter label for `day`, e.g. 'Oct 2025'."""
    return period_of(day).label


def matches_period(day: date, period_filter: str) -> bool:
    """True when `period_filter` is ALL or names the period of `day`."""
    return period_filter == ALL or period_key(day) == period_filter
