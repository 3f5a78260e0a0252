"""Configuration package."""

from finance_dashboard.config.settings import (
    AppSettings,
    ClientSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "ClientSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
