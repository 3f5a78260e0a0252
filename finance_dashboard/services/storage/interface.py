"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the in-memory store for a real database later
2. Give every test its own fresh store
3. Keep the HTTP layer decoupled from storage implementation

"Not found" is reported through return values (None / False /
DeleteOutcome), never by raising. The exceptions below are for the
callers that need to turn those results into errors.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from finance_dashboard.models.finance import (
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
)


class FinanceStorageInterface(ABC):
    """
    Abstract interface for transaction and category storage.

    Any storage implementation (in-memory, PostgreSQL, etc.)
    must implement these methods.
    """

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    @abstractmethod
    async def list_categories(self) -> list[Category]:
        """All categories, sorted by name."""
        pass

    @abstractmethod
    async def get_category(self, category_id: int) -> Optional[Category]:
        """
        Retrieve a category by its ID.

        Returns:
            The category if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_categories_by_type(
        self,
        category_type: TransactionType,
    ) -> list[Category]:
        """Active categories of one type, sorted by name."""
        pass

    @abstractmethod
    async def create_category(self, data: CategoryCreate) -> Category:
        """
        Store a new category.

        The storage assigns the id and the creation timestamp.
        """
        pass

    @abstractmethod
    async def update_category(
        self,
        category_id: int,
        patch: CategoryUpdate,
    ) -> Optional[Category]:
        """
        Apply a partial update.

        Returns:
            The merged category, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def delete_category(self, category_id: int) -> DeleteOutcome:
        """
        Delete a category unless something still depends on it.

        A category referenced by a transaction, or parent of another
        category, is left untouched. Nothing is cascaded.
        """
        pass

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @abstractmethod
    async def list_transactions(self) -> list[Transaction]:
        """All transactions, newest business date first."""
        pass

    @abstractmethod
    async def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """
        Retrieve a transaction by its ID.

        Returns:
            The transaction if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_transaction(self, data: TransactionCreate) -> Transaction:
        """
        Store a new transaction.

        The storage assigns the id and the creation timestamp.
        """
        pass

    @abstractmethod
    async def update_transaction(
        self,
        transaction_id: int,
        patch: TransactionUpdate,
    ) -> Optional[Transaction]:
        """
        Apply a partial update.

        Returns:
            The merged transaction, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def delete_transaction(self, transaction_id: int) -> bool:
        """
        Delete a transaction.

        Returns:
            True if a transaction was removed
        """
        pass

    @abstractmethod
    async def list_transactions_by_date_range(
        self,
        start: datetime,
        end: datetime,
    ) -> list[Transaction]:
        """Transactions with start <= date <= end, newest first."""
        pass

    # -------------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------------

    @abstractmethod
    async def get_financial_summary(self) -> FinancialSummary:
        """Total revenue, total expenses and balance over all transactions."""
        pass

    @abstractmethod
    async def get_monthly_revenue_expenses(
        self,
        months: int = 6,
        reference: Optional[date] = None,
    ) -> list[MonthlyRevenueExpense]:
        """
        Revenue and expenses for each of the trailing months.

        Args:
            months: Number of calendar months, current month included
            reference: Month to count back from (default: today)

        Returns:
            One entry per month, oldest first
        """
        pass

    @abstractmethod
    async def get_expenses_by_category(self) -> list[CategoryExpense]:
        """Expenses grouped by category name, largest first."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""

    def __init__(self, entity_type: str, entity_id: int):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type.capitalize()} not found")


class ReferentialIntegrityError(StorageError):
    """A delete was refused because other records still depend on the entity."""

    def __init__(self, entity_type: str, entity_id: int, outcome: DeleteOutcome):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.outcome = outcome
        if outcome == DeleteOutcome.HAS_TRANSACTIONS:
            reason = "it is used by one or more transactions"
        else:
            reason = "it has subcategories"
        super().__init__(f"{entity_type.capitalize()} cannot be deleted: {reason}")
