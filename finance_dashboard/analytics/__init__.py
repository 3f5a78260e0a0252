"""Aggregation package."""

from finance_dashboard.analytics.aggregations import (
    MONTH_LABELS,
    UNDEFINED_CATEGORY,
    expenses_by_category,
    financial_summary,
    month_label,
    month_window,
    monthly_revenue_expenses,
)

__all__ = [
    "MONTH_LABELS",
    "UNDEFINED_CATEGORY",
    "expenses_by_category",
    "financial_summary",
    "month_label",
    "month_window",
    "monthly_revenue_expenses",
]
