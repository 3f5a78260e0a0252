"""API routers."""

from finance_dashboard.api.routes import analytics, categories, transactions

__all__ = ["analytics", "categories", "transactions"]
