"""HTTP API package."""

from finance_dashboard.api.app import CORRELATION_HEADER, create_app

__all__ = ["CORRELATION_HEADER", "create_app"]
