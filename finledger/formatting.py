"""Currency formatting for display.

The aggregation engine only ever hands out plain Decimal amounts. Turning
them into strings happens here, at the presentation boundary.
"""

from decimal import Decimal
from typing import Literal, Union

from finledger.models.entry import to_cents

Number = Union[Decimal, int, float]


def _group_indian(digits: str) -> str:
    """Group an integer digit string as 1,00,00,000 (lakh/crore)."""
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)

    return ",".join(groups + [tail])


def format_currency(
    amount: Number,
    symbol: str = "₹",
    grouping: Literal["indian", "western"] = "indian",
) -> str:
    """Format an amount as a currency string.

    Args:
        amount: The amount to format
        symbol: Currency symbol placed before the digits
        grouping: "indian" (1,00,000.00) or "western" (100,000.00)

    Returns:
        Formatted string, e.g. "₹1,23,456.70" or "-₹500.00"

    Example:
        >>> format_currency(Decimal("123456.7"))
        '₹1,23,456.70'
        >>> format_currency(-500, grouping="western")
        '-₹500.00'
    """
    value = to_cents(Decimal(str(amount)))
    sign = "-" if value < 0 else ""

    if grouping == "western":
        body = f"{abs(value):,.2f}"
    else:
        integer_part, fraction = f"{abs(value):.2f}".split(".")
        body = f"{_group_indian(integer_part)}.{fraction}"

    return f"{sign}{symbol}{body}"
