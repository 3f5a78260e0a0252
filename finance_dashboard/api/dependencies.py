"""
Request-scoped accessors for the collaborators the app was built with.

Everything lives on app.state, set once by create_app(). Routes ask
for what they need through Depends, so tests can build an app around
a fresh store without touching any module-level state.
"""

from typing import Optional
from uuid import UUID

from fastapi import Request

from finance_dashboard.audit import AuditLogger
from finance_dashboard.config import AppSettings
from finance_dashboard.services.storage import FinanceStorageInterface
from finance_dashboard.validation import FinanceValidator


def get_storage(request: Request) -> FinanceStorageInterface:
    return request.app.state.storage


def get_audit_logger(request: Request) -> AuditLogger:
    return request.app.state.audit_logger


def get_validator(request: Request) -> FinanceValidator:
    return request.app.state.validator


def get_app_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_correlation_id(request: Request) -> Optional[UUID]:
    return getattr(request.state, "correlation_id", None)
