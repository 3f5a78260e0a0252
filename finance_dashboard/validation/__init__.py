"""Validation package."""

from finance_dashboard.validation.validator import FinanceValidationError, FinanceValidator

__all__ = ["FinanceValidationError", "FinanceValidator"]
