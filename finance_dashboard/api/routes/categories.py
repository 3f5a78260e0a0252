"""
FastAPI routes for category CRUD.

Deleting a category is guarded: a category still used by a
transaction, or parent of another category, is never removed.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from finance_dashboard.api.dependencies import (
    get_audit_logger,
    get_correlation_id,
    get_storage,
    get_validator,
)
from finance_dashboard.audit import AuditLogger
from finance_dashboard.models.finance import (
    Category,
    CategoryCreate,
    CategoryUpdate,
    DeleteOutcome,
    TransactionType,
)
from finance_dashboard.services.storage import (
    FinanceStorageInterface,
    NotFoundError,
    ReferentialIntegrityError,
)
from finance_dashboard.validation import FinanceValidator

router = APIRouter(
    tags=["Categories"],
    responses={404: {"description": "Category not found"}},
)


@router.get("", response_model=List[Category])
async def list_categories(storage: FinanceStorageInterface = Depends(get_storage)):
    """
    Lists every category, ordered by name.
    """
    return await storage.list_categories()


@router.get("/type/{category_type}", response_model=List[Category])
async def list_categories_by_type(
    category_type: TransactionType,
    storage: FinanceStorageInterface = Depends(get_storage),
):
    """
    Lists the active categories of one type, ordered by name.
    """
    return await storage.list_categories_by_type(category_type)


@router.get("/{category_id}", response_model=Category)
async def get_category(
    category_id: int,
    storage: FinanceStorageInterface = Depends(get_storage),
):
    category = await storage.get_category(category_id)
    if category is None:
        raise NotFoundError("category", category_id)
    return category


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    storage: FinanceStorageInterface = Depends(get_storage),
    validator: FinanceValidator = Depends(get_validator),
    audit: AuditLogger = Depends(get_audit_logger),
    correlation_id: Optional[UUID] = Depends(get_correlation_id),
):
    await validator.validate_category_create(payload)
    category = await storage.create_category(payload)
    await audit.log_category_created(
        category_id=category.id,
        name=category.name,
        parent_id=category.parent_id,
        correlation_id=correlation_id,
    )
    return category


@router.patch("/{category_id}", response_model=Category)
async def update_category(
    category_id: int,
    payload: CategoryUpdate,
    storage: FinanceStorageInterface = Depends(get_storage),
    validator: FinanceValidator = Depends(get_validator),
    audit: AuditLogger = Depends(get_audit_logger),
    correlation_id: Optional[UUID] = Depends(get_correlation_id),
):
    if await storage.get_category(category_id) is None:
        raise NotFoundError("category", category_id)

    await validator.validate_category_update(category_id, payload)
    category = await storage.update_category(category_id, payload)
    if category is None:
        raise NotFoundError("category", category_id)

    await audit.log_category_updated(
        category_id=category_id,
        fields=sorted(payload.changes()),
        correlation_id=correlation_id,
    )
    return category


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={409: {"description": "Category still has transactions or subcategories"}},
)
async def delete_category(
    category_id: int,
    storage: FinanceStorageInterface = Depends(get_storage),
    audit: AuditLogger = Depends(get_audit_logger),
    correlation_id: Optional[UUID] = Depends(get_correlation_id),
):
    outcome: DeleteOutcome = await storage.delete_category(category_id)

    if outcome.blocked:
        await audit.log_category_delete_blocked(
            category_id=category_id,
            reason=outcome.value,
            correlation_id=correlation_id,
        )
        raise ReferentialIntegrityError("category", category_id, outcome)

    if not outcome.deleted:
        raise NotFoundError("category", category_id)

    await audit.log_category_deleted(category_id, correlation_id=correlation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
