"""
HTTP client for the Finance Dashboard API.

Used by the Streamlit dashboard. Returns plain dicts exactly as the
API serializes them (camelCase keys, amounts as decimal strings).

Connection failures are retried with exponential backoff; HTTP error
responses are not retried and surface as ApiError.
"""

from typing import Any, Optional

import requests
import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finance_dashboard.config import ClientSettings, get_settings


logger = structlog.get_logger("finance_dashboard.client")


class ApiError(Exception):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, errors: Optional[list] = None):
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        super().__init__(f"{status_code}: {message}")


class FinanceApiClient:
    """
    Thin wrapper over every API endpoint.

    Usage:
        client = FinanceApiClient()
        summary = client.get_financial_summary()
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        session: Optional[requests.Session] = None,
    ):
        self._settings = settings or get_settings().client
        self._session = session or requests.Session()
        self._base_url = self._settings.api_base_url.rstrip("/")

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        url = f"{self._base_url}{path}"

        retrying = Retrying(
            stop=stop_after_attempt(self._settings.retry_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
            retry=retry_if_exception_type(requests.ConnectionError),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                response = self._session.request(
                    method,
                    url,
                    json=json,
                    params=params,
                    timeout=self._settings.timeout_seconds,
                )

        logger.debug("api_request", method=method, url=url, status=response.status_code)

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            raise ApiError(
                response.status_code,
                body.get("message", response.reason or "Request failed"),
                body.get("errors"),
            )

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def list_transactions(self) -> list[dict]:
        return self._request("GET", "/transactions")

    def get_transaction(self, transaction_id: int) -> dict:
        return self._request("GET", f"/transactions/{transaction_id}")

    def create_transaction(self, data: dict) -> dict:
        return self._request("POST", "/transactions", json=data)

    def update_transaction(self, transaction_id: int, changes: dict) -> dict:
        return self._request("PATCH", f"/transactions/{transaction_id}", json=changes)

    def delete_transaction(self, transaction_id: int) -> None:
        self._request("DELETE", f"/transactions/{transaction_id}")

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def list_categories(self) -> list[dict]:
        return self._request("GET", "/categories")

    def list_categories_by_type(self, category_type: str) -> list[dict]:
        return self._request("GET", f"/categories/type/{category_type}")

    def create_category(self, data: dict) -> dict:
        return self._request("POST", "/categories", json=data)

    def update_category(self, category_id: int, changes: dict) -> dict:
        return self._request("PATCH", f"/categories/{category_id}", json=changes)

    def delete_category(self, category_id: int) -> None:
        self._request("DELETE", f"/categories/{category_id}")

    # -------------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------------

    def get_financial_summary(self) -> dict:
        return self._request("GET", "/analytics/financial-summary")

    def get_monthly_revenue_expenses(self, months: int = 6) -> list[dict]:
        return self._request(
            "GET",
            "/analytics/monthly-revenue-expenses",
            params={"months": months},
        )

    def get_expenses_by_category(self) -> list[dict]:
        return self._request("GET", "/analytics/expenses-by-category")

    def health(self) -> dict:
        return self._request("GET", "/health")
