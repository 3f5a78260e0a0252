"""
Finance Dashboard - Source Package

A personal-finance tracker: income and expense transactions organized
in a two-level category tree, with a REST API and simple analytics.

DESIGN PRINCIPLES:
1. Money is Decimal end to end
2. Fail early, fail visibly
3. No hidden global state: the store is handed to the API at startup
4. Every write is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Dashboard Team"
