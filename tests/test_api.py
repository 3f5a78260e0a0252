"""
Tests for the HTTP API.

Integration tests through FastAPI's TestClient against a seeded
in-memory store. No server process is started.
"""

from uuid import UUID

from fastapi.testclient import TestClient

from finance_dashboard.api import CORRELATION_HEADER, create_app
from finance_dashboard.config import AppSettings
from finance_dashboard.models import AuditEventType
from finance_dashboard.services.storage import MemoryFinanceStorage


NEW_TRANSACTION = {
    "type": "despesa",
    "amount": "32.90",
    "categoryId": 13,
    "description": "Almoço",
    "paymentMethod": "PIX",
    "date": "2024-12-16T12:30:00",
}


class TestTransactionRoutes:
    """Tests for /api/transactions."""

    def test_list_newest_first(self, client):
        response = client.get("/api/transactions")
        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [2, 1, 3, 4, 5]

    def test_wire_shape(self, client):
        """Test camelCase keys and the decimal-string amount."""
        data = client.get("/api/transactions/2").json()
        assert data["amount"] == "187.50"
        assert data["categoryId"] == 12
        assert data["paymentMethod"] == "Cartão de Débito"
        assert data["date"] == "2024-12-15T14:30:00"
        assert "createdAt" in data

    def test_list_with_date_window(self, client):
        response = client.get(
            "/api/transactions",
            params={"start": "2024-12-13T00:00:00", "end": "2024-12-14T23:59:59"},
        )
        assert [t["id"] for t in response.json()] == [1, 3]

    def test_get_missing(self, client):
        response = client.get("/api/transactions/99")
        assert response.status_code == 404
        assert response.json() == {"message": "Transaction not found"}

    def test_non_integer_id_is_bad_request(self, client):
        assert client.get("/api/transactions/abc").status_code == 400

    def test_create(self, client):
        """Test that the server assigns id and createdAt."""
        response = client.post("/api/transactions", json=NEW_TRANSACTION)
        assert response.status_code == 201

        data = response.json()
        assert data["id"] == 6
        assert data["amount"] == "32.90"
        assert client.get("/api/transactions/6").status_code == 200

    def test_create_accepts_numeric_amount(self, client):
        response = client.post("/api/transactions", json={**NEW_TRANSACTION, "amount": 187.5})
        assert response.status_code == 201
        assert response.json()["amount"] == "187.50"

    def test_create_schema_error(self, client):
        """Test that schema failures are 400 with field errors."""
        response = client.post("/api/transactions", json={**NEW_TRANSACTION, "amount": "-5"})
        assert response.status_code == 400

        body = response.json()
        assert body["message"] == "Invalid transaction data"
        assert any("amount" in error["loc"] for error in body["errors"])

    def test_create_missing_field(self, client):
        payload = {k: v for k, v in NEW_TRANSACTION.items() if k != "description"}
        assert client.post("/api/transactions", json=payload).status_code == 400

    def test_create_unknown_category(self, client):
        """Test that a dangling categoryId is refused."""
        response = client.post("/api/transactions", json={**NEW_TRANSACTION, "categoryId": 99})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "categoryId"
        assert len(client.get("/api/transactions").json()) == 5

    def test_patch(self, client):
        response = client.patch("/api/transactions/2", json={"amount": "200"})
        assert response.status_code == 200
        assert response.json()["amount"] == "200.00"
        assert response.json()["description"] == "Supermercado Extra"

    def test_patch_null_required_field(self, client):
        response = client.patch("/api/transactions/2", json={"description": None})
        assert response.status_code == 400

    def test_patch_missing(self, client, seeded_storage):
        """Test that patching an unknown id creates nothing."""
        response = client.patch("/api/transactions/99", json={"amount": "1"})
        assert response.status_code == 404
        assert seeded_storage.transaction_count == 5

    def test_delete(self, client):
        response = client.delete("/api/transactions/3")
        assert response.status_code == 204
        assert response.content == b""
        assert client.delete("/api/transactions/3").status_code == 404


class TestCategoryRoutes:
    """Tests for /api/categories."""

    def test_list_sorted(self, client):
        names = [c["name"] for c in client.get("/api/categories").json()]
        assert names[:3] == ["Alimentação", "Aluguel", "Condomínio"]
        assert len(names) == 14

    def test_is_active_is_string(self, client):
        data = client.get("/api/categories/1").json()
        assert data["isActive"] == "true"
        assert data["parentId"] is None

    def test_by_type(self, client):
        response = client.get("/api/categories/type/receita")
        assert [c["name"] for c in response.json()] == ["Freelance", "Investimentos", "Salário"]

    def test_by_unknown_type(self, client):
        assert client.get("/api/categories/type/transferencia").status_code == 400

    def test_get_missing(self, client):
        response = client.get("/api/categories/99")
        assert response.status_code == 404
        assert response.json()["message"] == "Category not found"

    def test_create_subcategory(self, client):
        response = client.post(
            "/api/categories",
            json={"name": "Luz", "type": "despesa", "parentId": 4},
        )
        assert response.status_code == 201
        assert response.json()["id"] == 15
        assert response.json()["color"] == "#6b7280"

    def test_create_too_deep(self, client):
        """Test that the tree stays two levels deep."""
        response = client.post(
            "/api/categories",
            json={"name": "Quitinete", "type": "despesa", "parentId": 9},
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["issue_type"] == "too_deep"

    def test_create_empty_name(self, client):
        assert client.post("/api/categories", json={"name": "", "type": "despesa"}).status_code == 400

    def test_patch(self, client):
        response = client.patch("/api/categories/6", json={"isActive": False})
        assert response.status_code == 200
        assert response.json()["isActive"] == "false"

        names = [c["name"] for c in client.get("/api/categories/type/despesa").json()]
        assert "Transporte" not in names

    def test_patch_self_parent(self, client):
        assert client.patch("/api/categories/8", json={"parentId": 8}).status_code == 400

    def test_patch_missing(self, client):
        assert client.patch("/api/categories/99", json={"name": "X"}).status_code == 404

    def test_delete_unused(self, client):
        assert client.delete("/api/categories/8").status_code == 204
        assert client.get("/api/categories/8").status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/api/categories/99").status_code == 404

    def test_delete_used_by_transactions(self, client):
        """Test that a category in use is kept and the reason reported."""
        response = client.delete("/api/categories/6")
        assert response.status_code == 409
        assert response.json()["reason"] == "has_transactions"
        assert client.get("/api/categories/6").status_code == 200

    def test_delete_with_subcategories(self, client):
        response = client.delete("/api/categories/5")
        assert response.status_code == 409
        assert response.json()["reason"] == "has_subcategories"


class TestAnalyticsRoutes:
    """Tests for /api/analytics."""

    def test_financial_summary(self, client):
        response = client.get("/api/analytics/financial-summary")
        assert response.status_code == 200
        assert response.json() == {
            "totalReceitas": 4500.0,
            "totalDespesas": 1530.9,
            "saldo": 2969.1,
        }

    def test_expenses_by_category(self, client):
        data = client.get("/api/analytics/expenses-by-category").json()
        assert data[0]["category"] == "Aluguel"
        assert data[0]["amount"] == 1200.0
        assert abs(sum(entry["percentage"] for entry in data) - 100) < 0.01

    def test_monthly_default_six(self, client):
        data = client.get("/api/analytics/monthly-revenue-expenses").json()
        assert len(data) == 6
        assert set(data[0]) == {"month", "receitas", "despesas"}

    def test_monthly_months_param(self, client):
        assert len(client.get("/api/analytics/monthly-revenue-expenses?months=12").json()) == 12

    def test_monthly_rejects_zero(self, client):
        assert client.get("/api/analytics/monthly-revenue-expenses?months=0").status_code == 400

    def test_monthly_rejects_too_many(self, client):
        response = client.get("/api/analytics/monthly-revenue-expenses?months=121")
        assert response.status_code == 400
        assert response.json()["message"] == "months must be at most 120"

    def test_empty_store(self, empty_client):
        data = empty_client.get("/api/analytics/financial-summary").json()
        assert data == {"totalReceitas": 0.0, "totalDespesas": 0.0, "saldo": 0.0}
        assert empty_client.get("/api/analytics/expenses-by-category").json() == []


class TestAppWiring:
    """Tests for app-level behavior."""

    def test_health(self, client):
        data = client.get("/api/health").json()
        assert data["status"] == "ok"
        assert data["transactions"] == 5
        assert data["categories"] == 14

    def test_correlation_header_on_every_response(self, client):
        ok = client.get("/api/transactions")
        missing = client.get("/api/transactions/99")
        UUID(ok.headers[CORRELATION_HEADER])
        UUID(missing.headers[CORRELATION_HEADER])
        assert ok.headers[CORRELATION_HEADER] != missing.headers[CORRELATION_HEADER]

    def test_writes_audited_under_request_id(self, client, audit_logger):
        """Test that a write's audit events carry the request's correlation id."""
        response = client.post("/api/transactions", json=NEW_TRANSACTION)
        request_id = UUID(response.headers[CORRELATION_HEADER])

        (event,) = audit_logger.events_for_correlation(request_id)
        assert event.event_type == AuditEventType.TRANSACTION_CREATED
        assert event.entity_id == 6

    def test_blocked_delete_audited(self, client, audit_logger):
        client.delete("/api/categories/6")
        assert audit_logger.recent_events()[0].event_type == AuditEventType.CATEGORY_DELETE_BLOCKED

    def test_stores_are_isolated(self, app_settings):
        """Test that two apps never share records."""
        first = TestClient(create_app(storage=MemoryFinanceStorage(), settings=app_settings))
        second = TestClient(create_app(storage=MemoryFinanceStorage(), settings=app_settings))
        first.post("/api/categories", json={"name": "Pets", "type": "despesa"})

        assert len(first.get("/api/categories").json()) == 1
        assert second.get("/api/categories").json() == []

    def test_custom_prefix(self, seeded_storage):
        settings = AppSettings(_env_file=None, api_prefix="v1/")
        test_client = TestClient(create_app(storage=seeded_storage, settings=settings))
        assert test_client.get("/v1/transactions").status_code == 200
        assert test_client.get("/api/transactions").status_code == 404

    def test_unexpected_error_is_500_with_correlation_id(self, seeded_storage, app_settings, audit_logger):
        """Test that a crashing route still answers with the request id, and audits under it."""
        app = create_app(storage=seeded_storage, settings=app_settings, audit_logger=audit_logger)

        async def crash():
            raise RuntimeError("storage exploded")

        app.add_api_route("/api/crash", crash)
        test_client = TestClient(app, raise_server_exceptions=False)

        response = test_client.get("/api/crash")
        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}

        request_id = UUID(response.headers[CORRELATION_HEADER])
        (event,) = audit_logger.events_for_correlation(request_id)
        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.error_message == "storage exploded"
