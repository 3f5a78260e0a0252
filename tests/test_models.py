"""
Tests for Finance Dashboard models

Test strategy:
1. Schema rules live in the models, so they are tested without a store
2. JSON shape is checked the way the API emits it (camelCase, by alias)
"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from pydantic import ValidationError

from finance_dashboard.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    Category,
    CategoryCreate,
    CategoryExpense,
    CategoryUpdate,
    DeleteOutcome,
    FinancialSummary,
    TransactionCreate,
    TransactionType,
    TransactionUpdate,
    ValidationIssue,
    ValidationResult,
)


def make_transaction(**overrides) -> TransactionCreate:
    data = {
        "type": "despesa",
        "amount": "187.50",
        "categoryId": 12,
        "description": "Supermercado Extra",
        "paymentMethod": "Cartão de Débito",
        "date": datetime(2024, 12, 15, 14, 30),
    }
    data.update(overrides)
    return TransactionCreate(**data)


class TestTransactionModels:
    """Tests for transaction insert and patch shapes."""

    def test_amount_is_quantized_to_cents(self):
        """Test that amounts always carry two fractional digits."""
        tx = make_transaction(amount="187.5")
        assert tx.amount == Decimal("187.50")
        assert str(tx.amount) == "187.50"

    def test_amount_serializes_as_decimal_string(self):
        """Test the stored amount round-trips through JSON unchanged."""
        tx = make_transaction(amount="187.50")
        data = tx.model_dump(mode="json", by_alias=True)
        assert data["amount"] == "187.50"

    def test_amount_rejects_three_decimal_places(self):
        """Test that fractions of a cent are refused."""
        with pytest.raises(ValidationError):
            make_transaction(amount="10.123")

    def test_amount_rejects_negative(self):
        """Test that the amount is a non-negative magnitude."""
        with pytest.raises(ValidationError):
            make_transaction(amount="-1.00")

    def test_amount_rejects_garbage(self):
        with pytest.raises(ValidationError):
            make_transaction(amount="abc")

    def test_invalid_type_rejected(self):
        """Test that only receita and despesa are accepted."""
        with pytest.raises(ValidationError):
            make_transaction(type="transferencia")

    def test_description_is_stripped_and_required(self):
        """Test whitespace stripping on the description."""
        assert make_transaction(description="  Mercado  ").description == "Mercado"
        with pytest.raises(ValidationError):
            make_transaction(description="   ")

    def test_camel_case_on_the_wire(self):
        """Test camelCase aliases in and out, snake_case in Python."""
        tx = make_transaction()
        assert tx.category_id == 12
        assert tx.payment_method == "Cartão de Débito"

        data = tx.model_dump(mode="json", by_alias=True)
        assert "categoryId" in data
        assert "paymentMethod" in data
        assert "category_id" not in data

    def test_snake_case_input_accepted(self):
        tx = TransactionCreate(
            type=TransactionType.RECEITA,
            amount=Decimal("4500"),
            category_id=1,
            description="Salário",
            date=datetime(2024, 12, 14),
        )
        assert tx.category_id == 1
        assert tx.payment_method is None

    def test_aware_date_normalized_to_naive_utc(self):
        """Test that a date with an offset is stored as naive UTC."""
        brt = timezone(timedelta(hours=-3))
        tx = make_transaction(date=datetime(2024, 12, 15, 12, 0, tzinfo=brt))
        assert tx.date == datetime(2024, 12, 15, 15, 0)
        assert tx.date.tzinfo is None

    def test_signed_amount(self):
        assert make_transaction(type="despesa", amount="10").signed_amount == Decimal("-10.00")
        assert make_transaction(type="receita", amount="10").signed_amount == Decimal("10.00")

    def test_update_changes_only_supplied_fields(self):
        """Test that a patch reports only what the caller sent."""
        patch = TransactionUpdate(amount="99.9")
        assert patch.changes() == {"amount": Decimal("99.90")}

    def test_update_allows_clearing_payment_method(self):
        patch = TransactionUpdate(paymentMethod=None)
        assert patch.changes() == {"payment_method": None}

    def test_update_rejects_null_required_field(self):
        """Test that required fields cannot be nulled by a patch."""
        with pytest.raises(ValidationError):
            TransactionUpdate(amount=None)
        with pytest.raises(ValidationError):
            TransactionUpdate(description=None)


class TestCategoryModels:
    """Tests for category insert and patch shapes."""

    def test_defaults(self):
        """Test default display fields and active flag."""
        category = CategoryCreate(name="Pets", type="despesa")
        assert category.parent_id is None
        assert category.color == "#6b7280"
        assert category.icon == "tag"
        assert category.is_active is True

    def test_is_active_serializes_as_string(self):
        """Test that the active flag leaves the API as "true"/"false"."""
        category = Category(
            id=1,
            created_at=datetime(2024, 12, 1),
            name="Pets",
            type="despesa",
            is_active=False,
        )
        assert category.model_dump(mode="json", by_alias=True)["isActive"] == "false"
        assert category.model_dump()["is_active"] is False

    def test_is_root(self):
        root = Category(id=4, created_at=datetime(2024, 12, 1), name="Moradia", type="despesa")
        child = Category(
            id=9,
            created_at=datetime(2024, 12, 1),
            name="Aluguel",
            type="despesa",
            parentId=4,
        )
        assert root.is_root
        assert not child.is_root

    def test_name_length_limits(self):
        with pytest.raises(ValidationError):
            CategoryCreate(name="", type="despesa")
        with pytest.raises(ValidationError):
            CategoryCreate(name="x" * 51, type="despesa")

    def test_update_allows_null_parent(self):
        """Test that a patch may promote a subcategory to root."""
        patch = CategoryUpdate(parentId=None)
        assert patch.changes() == {"parent_id": None}

    def test_update_rejects_null_name(self):
        with pytest.raises(ValidationError):
            CategoryUpdate(name=None)

    def test_empty_update_has_no_changes(self):
        assert CategoryUpdate().changes() == {}


class TestDeleteOutcome:
    """Tests for the tagged delete result."""

    def test_flags(self):
        assert DeleteOutcome.DELETED.deleted
        assert not DeleteOutcome.DELETED.blocked
        assert not DeleteOutcome.NOT_FOUND.deleted
        assert not DeleteOutcome.NOT_FOUND.blocked
        assert DeleteOutcome.HAS_TRANSACTIONS.blocked
        assert DeleteOutcome.HAS_SUBCATEGORIES.blocked


class TestAnalyticsModels:
    """Tests for aggregate result shapes."""

    def test_aggregates_serialize_as_numbers(self):
        """Test that aggregate amounts leave the API as JSON numbers."""
        summary = FinancialSummary(
            total_receitas=Decimal("4500.00"),
            total_despesas=Decimal("1200.00"),
            saldo=Decimal("3300.00"),
        )
        data = summary.model_dump(mode="json", by_alias=True)
        assert data == {"totalReceitas": 4500.0, "totalDespesas": 1200.0, "saldo": 3300.0}

    def test_aggregates_stay_decimal_in_python(self):
        entry = CategoryExpense(category="Transporte", amount=Decimal("400"), percentage=Decimal("100"))
        assert isinstance(entry.model_dump()["amount"], Decimal)


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_empty_result_is_valid(self):
        result = ValidationResult()
        assert result.is_valid
        assert result.error_count == 0

    def test_has_errors(self):
        """Test that error-level issues make the result invalid."""
        result = ValidationResult(issues=[
            ValidationIssue(field="categoryId", issue_type="missing_reference", message="gone"),
            ValidationIssue(field="color", issue_type="style", message="odd", severity="warning"),
        ])
        assert result.has_errors
        assert result.error_count == 1
        assert not result.is_valid

    def test_warnings_only_is_valid(self):
        result = ValidationResult(issues=[
            ValidationIssue(field="color", issue_type="style", message="odd", severity="warning"),
        ])
        assert result.is_valid

    def test_invalid_severity_rejected(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=3,
            description="Transaction deleted",
        )
        assert event.event_id is not None
        assert event.severity == AuditSeverity.INFO

    def test_to_log_dict(self):
        """Test conversion to a structured-log dict."""
        event = AuditEventBuilder.transaction_created(7, "despesa", "187.50")
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "transaction_created"
        assert log_dict["entity_id"] == 7
        assert log_dict["details"] == {"type": "despesa", "amount": "187.50"}
        assert log_dict["correlation_id"] is None

    def test_delete_blocked_is_warning(self):
        event = AuditEventBuilder.category_delete_blocked(6, "has_transactions")
        assert event.severity == AuditSeverity.WARNING
        assert event.details["reason"] == "has_transactions"

    def test_not_found_is_debug(self):
        event = AuditEventBuilder.not_found("category", 99)
        assert event.severity == AuditSeverity.DEBUG
        assert event.description == "Category 99 not found"
