"""
Core Data Models for the Finance Ledger

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce the entry invariants at runtime
2. Provide clear validation error messages
3. Be serializable for the snapshot storage

DESIGN DECISION: An Entry is frozen. The ledger never edits an entry in
place; the only mutations are add, remove and clear on the store.
"""

import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

CENT = Decimal("0.01")

# Largest single amount. Sums must stay inside the default 28-digit context.
AMOUNT_LIMIT = Decimal("1000000000000")


def to_cents(value: Decimal) -> Decimal:
    """Quantize to the stored 2-decimal precision (half-up)."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class EntryType(str, Enum):
    """
    Kind of ledger entry.

    The type alone decides the sign of the entry in the balance and which
    total it lands in: income adds, expense and investment subtract.
    """
    INCOME = "income"
    EXPENSE = "expense"
    INVESTMENT = "investment"


# =============================================================================
# CORE ENTRY MODEL
# =============================================================================

class Entry(BaseModel):
    """
    One recorded financial event.

    `amount` is always positive. A refund or withdrawal is not modelled
    as a negative amount.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: int = Field(
        ...,
        ge=0,
        description="Creation timestamp in milliseconds, unique in the store"
    )
    type: EntryType = Field(
        ...,
        description="Income, expense or investment"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Free-text label"
    )
    amount: Decimal = Field(
        ...,
        description="Positive amount with 2-decimal precision"
    )
    category: str = Field(
        default="",
        max_length=100,
        description="User-defined category label"
    )
    date: datetime.date = Field(
        ...,
        description="Day the event happened"
    )

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        """Round to cents and reject anything outside (0, AMOUNT_LIMIT]."""
        if not v.is_finite():
            raise ValueError("Amount must be a finite number")
        v = to_cents(v)
        if v <= 0:
            raise ValueError("Amount must be greater than zero")
        if v > AMOUNT_LIMIT:
            raise ValueError(f"Amount must be at most {AMOUNT_LIMIT:,}")
        return v

    @property
    def signed_amount(self) -> Decimal:
        """Contribution of this entry to the running balance."""
        if self.type == EntryType.INCOME:
            return self.amount
        return -self.amount


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found in submitted form input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning)$",
        description="Issue severity"
    )


class EntryDraft(BaseModel):
    """
    Normalized form input that passed schema validation.

    Everything here is typed; only the id is missing.
    """

    type: EntryType
    description: str
    amount: Decimal
    category: str
    date: datetime.date


class EntryValidationResult(BaseModel):
    """
    Result of the two-stage validation.

    Stage 1: Schema validation (presence, parsing, positivity)
    Stage 2: Semantic validation (suspicious but allowed values)
    """

    is_valid: bool = Field(
        ...,
        description="True when no error-level issue was found"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    draft: Optional[EntryDraft] = Field(
        default=None,
        description="Parsed values, present only when is_valid"
    )

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]
