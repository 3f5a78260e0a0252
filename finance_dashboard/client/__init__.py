"""API client package."""

from finance_dashboard.client.api_client import ApiError, FinanceApiClient
from finance_dashboard.client.filters import (
    filter_transactions,
    format_currency,
    parse_amount_input,
)

__all__ = [
    "ApiError",
    "FinanceApiClient",
    "filter_transactions",
    "format_currency",
    "parse_amount_input",
]
