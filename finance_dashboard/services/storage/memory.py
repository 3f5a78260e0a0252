"""
In-Memory Storage Implementation

DESIGN DECISION: Records live in two dicts keyed by integer id, with
one monotonic counter per dict. The whole store is a plain object
constructed at startup and handed to the API, so tests get isolation
by building a fresh instance.

TRADEOFFS:
- Nothing survives a restart
- No locking: the server handles one request at a time against the
  store, and no method awaits anything mid-mutation
- Aggregates scan every transaction on each call (fine for personal use)
"""

import unicodedata
from datetime import date, datetime
from typing import Iterable, Optional

from finance_dashboard.analytics import aggregations
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
from finance_dashboard.services.storage.interface import FinanceStorageInterface
from finance_dashboard.services.storage.seed import SAMPLE_CATEGORIES, SAMPLE_TRANSACTIONS


def name_sort_key(name: str) -> tuple[str, str]:
    """
    Locale-aware ordering key for names.

    Accents and case are ignored first ("Saúde" sorts with "Saude"),
    the raw name breaks ties so the order is total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), name


def sort_categories(categories: Iterable[Category]) -> list[Category]:
    return sorted(categories, key=lambda c: name_sort_key(c.name))


def sort_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    # reverse=True keeps the sort stable: equal dates stay in insertion order
    return sorted(transactions, key=lambda t: t.date, reverse=True)


class MemoryFinanceStorage(FinanceStorageInterface):
    """
    Finance storage backed by process memory.

    The storage exclusively owns both maps; callers only ever receive
    copies-by-value (pydantic models are replaced, never mutated).
    """

    def __init__(self, seed: bool = False):
        self._transactions: dict[int, Transaction] = {}
        self._categories: dict[int, Category] = {}
        self._next_transaction_id = 1
        self._next_category_id = 1

        if seed:
            self._load_sample_data()

    def _load_sample_data(self) -> None:
        for category in SAMPLE_CATEGORIES:
            self._insert_category(category)
        for transaction in SAMPLE_TRANSACTIONS:
            self._insert_transaction(transaction)

    def _insert_category(self, data: CategoryCreate) -> Category:
        category = Category(
            id=self._next_category_id,
            created_at=datetime.now(),
            **data.model_dump(),
        )
        self._next_category_id += 1
        self._categories[category.id] = category
        return category

    def _insert_transaction(self, data: TransactionCreate) -> Transaction:
        transaction = Transaction(
            id=self._next_transaction_id,
            created_at=datetime.now(),
            **data.model_dump(),
        )
        self._next_transaction_id += 1
        self._transactions[transaction.id] = transaction
        return transaction

    @property
    def transaction_count(self) -> int:
        return len(self._transactions)

    @property
    def category_count(self) -> int:
        return len(self._categories)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    async def list_categories(self) -> list[Category]:
        return sort_categories(self._categories.values())

    async def get_category(self, category_id: int) -> Optional[Category]:
        return self._categories.get(category_id)

    async def list_categories_by_type(
        self,
        category_type: TransactionType,
    ) -> list[Category]:
        return sort_categories(
            c for c in self._categories.values()
            if c.type == category_type and c.is_active
        )

    async def create_category(self, data: CategoryCreate) -> Category:
        return self._insert_category(data)

    async def update_category(
        self,
        category_id: int,
        patch: CategoryUpdate,
    ) -> Optional[Category]:
        category = self._categories.get(category_id)
        if category is None:
            return None

        updated = category.model_copy(update=patch.changes())
        self._categories[category_id] = updated
        return updated

    async def delete_category(self, category_id: int) -> DeleteOutcome:
        if category_id not in self._categories:
            return DeleteOutcome.NOT_FOUND

        if any(t.category_id == category_id for t in self._transactions.values()):
            return DeleteOutcome.HAS_TRANSACTIONS

        if any(c.parent_id == category_id for c in self._categories.values()):
            return DeleteOutcome.HAS_SUBCATEGORIES

        del self._categories[category_id]
        return DeleteOutcome.DELETED

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    async def list_transactions(self) -> list[Transaction]:
        return sort_transactions(self._transactions.values())

    async def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    async def create_transaction(self, data: TransactionCreate) -> Transaction:
        return self._insert_transaction(data)

    async def update_transaction(
        self,
        transaction_id: int,
        patch: TransactionUpdate,
    ) -> Optional[Transaction]:
        transaction = self._transactions.get(transaction_id)
        if transaction is None:
            return None

        updated = transaction.model_copy(update=patch.changes())
        self._transactions[transaction_id] = updated
        return updated

    async def delete_transaction(self, transaction_id: int) -> bool:
        return self._transactions.pop(transaction_id, None) is not None

    async def list_transactions_by_date_range(
        self,
        start: datetime,
        end: datetime,
    ) -> list[Transaction]:
        return sort_transactions(
            t for t in self._transactions.values()
            if aggregations.in_window(t, start, end)
        )

    # -------------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------------

    async def get_financial_summary(self) -> FinancialSummary:
        return aggregations.financial_summary(self._transactions.values())

    async def get_monthly_revenue_expenses(
        self,
        months: int = 6,
        reference: Optional[date] = None,
    ) -> list[MonthlyRevenueExpense]:
        return aggregations.monthly_revenue_expenses(
            await self.list_transactions(),
            months=months,
            reference=reference,
        )

    async def get_expenses_by_category(self) -> list[CategoryExpense]:
        names = {c.id: c.name for c in self._categories.values()}
        return aggregations.expenses_by_category(
            await self.list_transactions(),
            names,
        )
