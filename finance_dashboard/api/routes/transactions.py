"""
FastAPI routes for transaction CRUD.
"""
from datetime import datetime
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
    Transaction,
    TransactionCreate,
    TransactionUpdate,
    to_naive_utc,
)
from finance_dashboard.services.storage import FinanceStorageInterface, NotFoundError
from finance_dashboard.validation import FinanceValidator

router = APIRouter(
    tags=["Transactions"],
    responses={404: {"description": "Transaction not found"}},
)


@router.get("", response_model=List[Transaction])
async def list_transactions(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    storage: FinanceStorageInterface = Depends(get_storage),
):
    """
    Lists transactions, newest business date first.

    start/end optionally restrict the list to an inclusive date window.
    """
    if start is None and end is None:
        return await storage.list_transactions()

    return await storage.list_transactions_by_date_range(
        to_naive_utc(start) if start else datetime.min,
        to_naive_utc(end) if end else datetime.max,
    )


@router.get("/{transaction_id}", response_model=Transaction)
async def get_transaction(
    transaction_id: int,
    storage: FinanceStorageInterface = Depends(get_storage),
):
    transaction = await storage.get_transaction(transaction_id)
    if transaction is None:
        raise NotFoundError("transaction", transaction_id)
    return transaction


@router.post("", response_model=Transaction, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: TransactionCreate,
    storage: FinanceStorageInterface = Depends(get_storage),
    validator: FinanceValidator = Depends(get_validator),
    audit: AuditLogger = Depends(get_audit_logger),
    correlation_id: Optional[UUID] = Depends(get_correlation_id),
):
    """
    Records a new transaction. id and createdAt are assigned by the server.
    """
    await validator.validate_transaction_create(payload)
    transaction = await storage.create_transaction(payload)
    await audit.log_transaction_created(
        transaction_id=transaction.id,
        transaction_type=transaction.type.value,
        amount=str(transaction.amount),
        correlation_id=correlation_id,
    )
    return transaction


@router.patch("/{transaction_id}", response_model=Transaction)
async def update_transaction(
    transaction_id: int,
    payload: TransactionUpdate,
    storage: FinanceStorageInterface = Depends(get_storage),
    validator: FinanceValidator = Depends(get_validator),
    audit: AuditLogger = Depends(get_audit_logger),
    correlation_id: Optional[UUID] = Depends(get_correlation_id),
):
    """
    Partial update: only the fields present in the body change.
    """
    if await storage.get_transaction(transaction_id) is None:
        raise NotFoundError("transaction", transaction_id)

    await validator.validate_transaction_update(payload)
    transaction = await storage.update_transaction(transaction_id, payload)
    if transaction is None:
        raise NotFoundError("transaction", transaction_id)

    await audit.log_transaction_updated(
        transaction_id=transaction_id,
        fields=sorted(payload.changes()),
        correlation_id=correlation_id,
    )
    return transaction


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: int,
    storage: FinanceStorageInterface = Depends(get_storage),
    audit: AuditLogger = Depends(get_audit_logger),
    correlation_id: Optional[UUID] = Depends(get_correlation_id),
):
    if not await storage.delete_transaction(transaction_id):
        raise NotFoundError("transaction", transaction_id)

    await audit.log_transaction_deleted(transaction_id, correlation_id=correlation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
