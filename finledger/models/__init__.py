"""
Data Models Package

This package contains all Pydantic models used by the ledger.
All data flowing through the system must conform to these schemas.
"""

from finledger.models.entry import (
    CENT,
    Entry,
    EntryDraft,
    EntryType,
    EntryValidationResult,
    ValidationIssue,
    to_cents,
)
from finledger.models.views import (
    ActionResult,
    ClearOutcome,
    DashboardView,
    LedgerSummary,
    TimeSeries,
)

__all__ = [
    # Entry models
    "CENT",
    "Entry",
    "EntryDraft",
    "EntryType",
    "EntryValidationResult",
    "ValidationIssue",
    "to_cents",
    # View models
    "ActionResult",
    "ClearOutcome",
    "DashboardView",
    "LedgerSummary",
    "TimeSeries",
]
