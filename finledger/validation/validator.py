"""
Two-Stage Validation of New Entries

DESIGN DECISION: Form input is validated in two distinct stages:

STAGE 1 - SCHEMA VALIDATION (blocking):
- Entry type is one of income / expense / investment
- Description present after trimming
- Date present and parseable
- Amount numeric and positive at cent precision, at most AMOUNT_LIMIT

STAGE 2 - SEMANTIC VALIDATION (warnings only):
- Date unusually far in the future
- Amount unusually large

Stage 2 only runs when stage 1 passes. Warnings never block an entry.

IMPORTANT: Validation NEVER silently fixes input beyond trimming whitespace
and rounding the amount to cents.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping, Optional

from finledger.config import AppSettings, get_settings
from finledger.models.entry import (
    AMOUNT_LIMIT,
    EntryDraft,
    EntryType,
    EntryValidationResult,
    ValidationIssue,
    to_cents,
)

MAX_DESCRIPTION_LENGTH = 200
MAX_CATEGORY_LENGTH = 100


class EntryValidationError(ValueError):
    """Submitted entry was rejected. The store was left unchanged."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        self.message = " ".join(issue.message for issue in issues) or "Invalid entry"
        super().__init__(self.message)


def parse_entry_date(value: Any) -> Optional[date]:
    """Parse a form date (ISO 'YYYY-MM-DD', date or datetime). None if unusable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def parse_amount(value: Any) -> Optional[Decimal]:
    """Parse a form amount into a cent-precision Decimal. None if not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(value.strip() if isinstance(value, str) else str(value))
        if not amount.is_finite():
            return None
        return to_cents(amount)
    except (InvalidOperation, ValueError):
        return None


class EntryValidator:
    """
    Validates raw new-entry input through a two-stage pipeline.

    Raw input is a mapping with the form fields: type, description,
    amount, category and date. Values may be strings as typed by the user
    or already-typed Python values.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        today: Callable[[], date] = date.today,
    ):
        self._settings = settings or get_settings().app
        self._today = today

    def _validate_schema(
        self,
        raw: Mapping[str, Any],
    ) -> tuple[Optional[EntryDraft], list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (draft_or_None, list_of_issues)
        """
        issues = []

        entry_type = None
        raw_type = raw.get("type")
        try:
            entry_type = EntryType(
                raw_type.strip().lower() if isinstance(raw_type, str) else raw_type
            )
        except ValueError:
            issues.append(ValidationIssue(
                field="type",
                issue_type="invalid_value",
                message="Please choose income, expense or investment.",
                severity="error",
            ))

        description = str(raw.get("description") or "").strip()
        if not description:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Please enter a description.",
                severity="error",
            ))
        elif len(description) > MAX_DESCRIPTION_LENGTH:
            issues.append(ValidationIssue(
                field="description",
                issue_type="too_long",
                message=f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters.",
                severity="error",
            ))

        category = str(raw.get("category") or "").strip()
        if len(category) > MAX_CATEGORY_LENGTH:
            issues.append(ValidationIssue(
                field="category",
                issue_type="too_long",
                message=f"Category must be at most {MAX_CATEGORY_LENGTH} characters.",
                severity="error",
            ))

        raw_date = raw.get("date")
        entry_date = parse_entry_date(raw_date)
        if entry_date is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing" if not raw_date else "invalid_format",
                message="Please enter a valid date.",
                severity="error",
            ))

        amount = parse_amount(raw.get("amount"))
        if amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message="Please enter the amount as a number.",
                severity="error",
            ))
        elif amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero.",
                severity="error",
            ))
        elif amount > AMOUNT_LIMIT:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message=f"Amount must be at most {AMOUNT_LIMIT:,}.",
                severity="error",
            ))

        if issues:
            return None, issues

        draft = EntryDraft(
            type=entry_type,
            description=description,
            amount=amount,
            category=category,
            date=entry_date,
        )
        return draft, issues

    def _validate_semantic(self, draft: EntryDraft) -> list[ValidationIssue]:
        """Stage 2: Semantic validation. Only produces warnings."""
        issues = []

        max_future_date = self._today() + timedelta(
            days=self._settings.future_date_tolerance_days
        )
        if draft.date > max_future_date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({draft.date.isoformat()}) is far in the future.",
                severity="warning",
            ))

        max_amount = Decimal(str(self._settings.max_entry_amount))
        if draft.amount > max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({draft.amount}) seems unusually high.",
                severity="warning",
            ))

        return issues

    def validate(self, raw: Mapping[str, Any]) -> EntryValidationResult:
        """Run the full validation pipeline and report every issue found."""
        draft, issues = self._validate_schema(raw)

        if draft is not None:
            issues.extend(self._validate_semantic(draft))

        return EntryValidationResult(
            is_valid=draft is not None,
            issues=issues,
            draft=draft,
        )

