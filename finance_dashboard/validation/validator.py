"""
Two-Stage Validation Pipeline

STAGE 1 - SCHEMA VALIDATION:
- Types, required fields, enums, amount format
- Done by the pydantic models before a request reaches a route

STAGE 2 - SEMANTIC VALIDATION:
- Relational checks that need the store
- A transaction must point at an existing category
- A subcategory must hang off an existing root category
  (the category tree is two levels deep)

IMPORTANT: Validation NEVER silently fixes issues.
It reports them back to the caller as field-level errors.
"""

from typing import Optional

from finance_dashboard.models.finance import (
    CategoryCreate,
    CategoryUpdate,
    TransactionCreate,
    TransactionUpdate,
    ValidationIssue,
    ValidationResult,
)
from finance_dashboard.services.storage import FinanceStorageInterface


class FinanceValidationError(Exception):
    """Raised when a write fails semantic validation."""

    def __init__(self, entity_type: str, result: ValidationResult):
        self.entity_type = entity_type
        self.result = result
        super().__init__(f"Invalid {entity_type} data")

    @property
    def issues(self) -> list[ValidationIssue]:
        return self.result.issues


class FinanceValidator:
    """
    Validates writes against the current contents of the store.

    Schema validation already happened in the models; this class only
    runs the checks that need to look other records up.
    """

    def __init__(self, storage: FinanceStorageInterface):
        self._storage = storage

    async def _check_category_reference(
        self,
        category_id: Optional[int],
    ) -> list[ValidationIssue]:
        if category_id is None:
            return []
        if await self._storage.get_category(category_id) is None:
            return [ValidationIssue(
                field="categoryId",
                issue_type="missing_reference",
                message=f"Category {category_id} does not exist",
            )]
        return []

    async def _check_parent(
        self,
        parent_id: Optional[int],
        category_id: Optional[int] = None,
    ) -> list[ValidationIssue]:
        if parent_id is None:
            return []

        if category_id is not None and parent_id == category_id:
            return [ValidationIssue(
                field="parentId",
                issue_type="self_reference",
                message="A category cannot be its own parent",
            )]

        parent = await self._storage.get_category(parent_id)
        if parent is None:
            return [ValidationIssue(
                field="parentId",
                issue_type="missing_reference",
                message=f"Parent category {parent_id} does not exist",
            )]

        if not parent.is_root:
            return [ValidationIssue(
                field="parentId",
                issue_type="too_deep",
                message=f"Category {parent_id} is already a subcategory",
            )]

        return []

    async def _check_has_no_children(self, category_id: int) -> list[ValidationIssue]:
        categories = await self._storage.list_categories()
        if any(c.parent_id == category_id for c in categories):
            return [ValidationIssue(
                field="parentId",
                issue_type="too_deep",
                message="A category with subcategories cannot become a subcategory",
            )]
        return []

    @staticmethod
    def _raise_if_invalid(entity_type: str, issues: list[ValidationIssue]) -> ValidationResult:
        result = ValidationResult(issues=issues)
        if result.has_errors:
            raise FinanceValidationError(entity_type, result)
        return result

    async def validate_transaction_create(self, data: TransactionCreate) -> ValidationResult:
        issues = await self._check_category_reference(data.category_id)
        return self._raise_if_invalid("transaction", issues)

    async def validate_transaction_update(self, patch: TransactionUpdate) -> ValidationResult:
        issues = await self._check_category_reference(patch.category_id)
        return self._raise_if_invalid("transaction", issues)

    async def validate_category_create(self, data: CategoryCreate) -> ValidationResult:
        issues = await self._check_parent(data.parent_id)
        return self._raise_if_invalid("category", issues)

    async def validate_category_update(
        self,
        category_id: int,
        patch: CategoryUpdate,
    ) -> ValidationResult:
        issues = await self._check_parent(patch.parent_id, category_id)
        if not issues and patch.parent_id is not None:
            issues = await self._check_has_no_children(category_id)
        return self._raise_if_invalid("category", issues)
