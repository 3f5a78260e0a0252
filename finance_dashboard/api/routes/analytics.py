"""
FastAPI routes for the dashboard analytics.

Every figure is recomputed from the full transaction set on each request.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from finance_dashboard.api.dependencies import get_app_settings, get_storage
from finance_dashboard.config import AppSettings
from finance_dashboard.models.finance import (
    CategoryExpense,
    FinancialSummary,
    MonthlyRevenueExpense,
)
from finance_dashboard.services.storage import FinanceStorageInterface

router = APIRouter(tags=["Analytics"])


@router.get("/monthly-revenue-expenses", response_model=List[MonthlyRevenueExpense])
async def monthly_revenue_expenses(
    months: Optional[int] = Query(default=None, ge=1, description="Trailing months, current one included"),
    storage: FinanceStorageInterface = Depends(get_storage),
    settings: AppSettings = Depends(get_app_settings),
):
    """
    Revenue vs. expenses per calendar month, oldest month first.
    """
    months = months or settings.default_months
    if months > settings.max_months:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"months must be at most {settings.max_months}",
        )
    return await storage.get_monthly_revenue_expenses(months)


@router.get("/expenses-by-category", response_model=List[CategoryExpense])
async def expenses_by_category(storage: FinanceStorageInterface = Depends(get_storage)):
    """
    Share of total expenses per category, largest first.
    """
    return await storage.get_expenses_by_category()


@router.get("/financial-summary", response_model=FinancialSummary)
async def financial_summary(storage: FinanceStorageInterface = Depends(get_storage)):
    return await storage.get_financial_summary()
