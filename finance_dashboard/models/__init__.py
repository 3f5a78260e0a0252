"""
Data Models Package

This package contains all Pydantic models used in the Finance Dashboard.
All data flowing through the system must conform to these schemas.
"""

from finance_dashboard.models.finance import (
    AggregateAmount,
    Category,
    CategoryCreate,
    CategoryExpense,
    CategoryUpdate,
    DeleteOutcome,
    FinancialSummary,
    MonthlyRevenueExpense,
    Transaction,
    TransactionCreate,
    TransactionType,
    TransactionUpdate,
    User,
    UserCreate,
    ValidationIssue,
    ValidationResult,
    quantize_money,
)
from finance_dashboard.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Finance models
    "AggregateAmount",
    "Category",
    "CategoryCreate",
    "CategoryExpense",
    "CategoryUpdate",
    "DeleteOutcome",
    "FinancialSummary",
    "MonthlyRevenueExpense",
    "Transaction",
    "TransactionCreate",
    "TransactionType",
    "TransactionUpdate",
    "User",
    "UserCreate",
    "ValidationIssue",
    "ValidationResult",
    "quantize_money",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
