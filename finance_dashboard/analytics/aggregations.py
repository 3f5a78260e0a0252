"""
Aggregation Engine

DESIGN DECISION: Aggregations are pure functions over a snapshot of
transactions. They are recomputed from the full set on every call:
no incremental totals, no caching, so they can never drift from the
underlying records.

All arithmetic is Decimal. Floats only appear when the API serializes
the results.
"""

import calendar
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from finance_dashboard.models.finance import (
    CategoryExpense,
    FinancialSummary,
    MonthlyRevenueExpense,
    Transaction,
    TransactionType,
)


UNDEFINED_CATEGORY = "Indefinido"

MONTH_LABELS = (
    "Jan", "Fev", "Mar", "Abr", "Mai", "Jun",
    "Jul", "Ago", "Set", "Out", "Nov", "Dez",
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _total(transactions: Iterable[Transaction], transaction_type: TransactionType) -> Decimal:
    return sum(
        (t.amount for t in transactions if t.type == transaction_type),
        ZERO,
    )


def financial_summary(transactions: Iterable[Transaction]) -> FinancialSummary:
    """Totals of revenue and expenses, and the resulting balance."""
    transactions = list(transactions)
    total_receitas = _total(transactions, TransactionType.RECEITA)
    total_despesas = _total(transactions, TransactionType.DESPESA)

    return FinancialSummary(
        total_receitas=total_receitas,
        total_despesas=total_despesas,
        saldo=total_receitas - total_despesas,
    )


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move (year, month) back by offset calendar months."""
    index = year * 12 + (month - 1) - offset
    return index // 12, index % 12 + 1


def month_window(reference: date, offset: int = 0) -> tuple[datetime, datetime]:
    """
    Calendar-month boundaries, offset months before the reference month.

    Returns (first instant of the month, last instant of the month),
    both inclusive.
    """
    year, month = shift_month(reference.year, reference.month, offset)
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime.combine(date(year, month, last_day), time.max)
    return start, end


def month_label(month: int) -> str:
    """Three-letter pt-BR label for a month number (1-12)."""
    return MONTH_LABELS[month - 1]


def utc_today() -> date:
    """Today on the same clock stored dates are normalized to."""
    return datetime.now(timezone.utc).date()


def in_window(transaction: Transaction, start: datetime, end: datetime) -> bool:
    return start <= transaction.date <= end


def monthly_revenue_expenses(
    transactions: Iterable[Transaction],
    months: int = 6,
    reference: Optional[date] = None,
) -> list[MonthlyRevenueExpense]:
    """
    Revenue and expenses for each of the trailing months.

    Counts backward from the reference month (default: today in UTC) inclusive
    and returns the points oldest first.
    """
    if months < 1:
        raise ValueError("months must be at least 1")

    reference = reference or utc_today()
    transactions = list(transactions)
    points = []

    for offset in range(months - 1, -1, -1):
        start, end = month_window(reference, offset)
        in_month = [t for t in transactions if in_window(t, start, end)]
        points.append(MonthlyRevenueExpense(
            month=month_label(start.month),
            receitas=_total(in_month, TransactionType.RECEITA),
            despesas=_total(in_month, TransactionType.DESPESA),
        ))

    return points


def expenses_by_category(
    transactions: Iterable[Transaction],
    category_names: Mapping[int, str],
) -> list[CategoryExpense]:
    """
    Breakdown of expenses per category name, largest first.

    Transactions whose category no longer resolves are grouped under
    "Indefinido". Categories with the same name share one group.
    """
    totals: dict[str, Decimal] = {}

    for t in transactions:
        if t.type != TransactionType.DESPESA:
            continue
        name = category_names.get(t.category_id, UNDEFINED_CATEGORY)
        totals[name] = totals.get(name, ZERO) + t.amount

    grand_total = sum(totals.values(), ZERO)

    breakdown = [
        CategoryExpense(
            category=name,
            amount=amount,
            percentage=(amount / grand_total * HUNDRED) if grand_total > 0 else ZERO,
        )
        for name, amount in totals.items()
    ]
    # stable sort: equal amounts keep the order in which their category first
    # appears in the input (newest first when the store supplies it)
    breakdown.sort(key=lambda entry: entry.amount, reverse=True)
    return breakdown
