"""
Client-side filtering and formatting for the dashboard tables.

Works on transaction dicts as returned by the API.
"""

from decimal import Decimal
from typing import Iterable, Optional, Union


def filter_transactions(
    transactions: Iterable[dict],
    search: str = "",
    category_id: Optional[int] = None,
    transaction_type: Optional[str] = None,
) -> list[dict]:
    """
    Apply the transaction list filters.

    - search: case-insensitive substring of the description
    - category_id: exact match
    - transaction_type: exact match ("receita" / "despesa")
    Empty/None filters match everything.
    """
    needle = search.strip().lower()
    result = []

    for t in transactions:
        if needle and needle not in t.get("description", "").lower():
            continue
        if category_id is not None and t.get("categoryId") != category_id:
            continue
        if transaction_type and t.get("type") != transaction_type:
            continue
        result.append(t)

    return result


def format_currency(amount: Union[str, float, Decimal]) -> str:
    """
    Format an amount as Brazilian reais: R$ 1.234,56
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"))
    sign = "-" if value < 0 else ""
    integer, _, cents = f"{abs(value):.2f}".partition(".")
    groups = []
    while len(integer) > 3:
        groups.insert(0, integer[-3:])
        integer = integer[:-3]
    groups.insert(0, integer)
    return f"{sign}R$ {'.'.join(groups)},{cents}"


def _is_thousands(value: str) -> bool:
    """True for "1.234" or "12.345.678": dot-separated groups of three digits."""
    head, *groups = value.split(".")
    return (
        bool(groups)
        and head.isdigit()
        and len(head) <= 3
        and not head.startswith("0")
        and all(len(g) == 3 and g.isdigit() for g in groups)
    )


def parse_amount_input(text: str) -> str:
    """
    Normalize user input like "1.234,56", "1.234" or "187,5" to a
    decimal string with two places ("1234.56", "1234.00", "187.50").

    Never rounds. Raises ValueError for negative amounts, more than two
    decimal places, or anything that is not a number.
    """
    if "-" in text:
        raise ValueError(f"Amount cannot be negative: {text!r}")

    cleaned = "".join(c for c in text if c.isdigit() or c in ",.")
    integer, comma, fraction = cleaned.partition(",")

    if comma:
        # Brazilian format: dots group thousands, comma separates cents
        if "." in integer and not _is_thousands(integer):
            raise ValueError(f"Not an amount: {text!r}")
        integer = integer.replace(".", "")
    elif _is_thousands(integer):
        integer = integer.replace(".", "")
    else:
        integer, _, fraction = integer.partition(".")

    if not integer and fraction:
        integer = "0"
    if not integer.isdigit() or (fraction and not fraction.isdigit()):
        raise ValueError(f"Not an amount: {text!r}")
    if len(fraction) > 2:
        raise ValueError(f"More than two decimal places: {text!r}")

    return f"{int(integer)}.{fraction.ljust(2, '0')}"
