"""
Tests for semantic validation.

The validator reads the store, so every test runs against the seeded
sample data: roots 1-8, subcategories 9-14 under Moradia (4) and
Alimentação (5).
"""

import pytest
from datetime import datetime
from decimal import Decimal

from finance_dashboard.models import (
    CategoryCreate,
    CategoryUpdate,
    TransactionCreate,
    TransactionUpdate,
)
from finance_dashboard.validation import FinanceValidationError, FinanceValidator


@pytest.fixture
def validator(seeded_storage):
    return FinanceValidator(seeded_storage)


def new_transaction(category_id: int) -> TransactionCreate:
    return TransactionCreate(
        type="despesa",
        amount=Decimal("10.00"),
        category_id=category_id,
        description="Café",
        date=datetime(2024, 12, 16),
    )


class TestTransactionValidation:
    """Tests for transaction writes."""

    @pytest.mark.asyncio
    async def test_existing_category_passes(self, validator):
        result = await validator.validate_transaction_create(new_transaction(12))
        assert result.is_valid

    @pytest.mark.asyncio
    async def test_missing_category_rejected(self, validator):
        """Test that a transaction must point at a real category."""
        with pytest.raises(FinanceValidationError) as exc_info:
            await validator.validate_transaction_create(new_transaction(99))

        (issue,) = exc_info.value.issues
        assert issue.field == "categoryId"
        assert issue.issue_type == "missing_reference"
        assert str(exc_info.value) == "Invalid transaction data"

    @pytest.mark.asyncio
    async def test_patch_without_category_passes(self, validator):
        result = await validator.validate_transaction_update(TransactionUpdate(amount="5"))
        assert result.is_valid

    @pytest.mark.asyncio
    async def test_patch_to_missing_category_rejected(self, validator):
        with pytest.raises(FinanceValidationError):
            await validator.validate_transaction_update(TransactionUpdate(category_id=99))


class TestCategoryValidation:
    """Tests for category writes and the two-level tree."""

    @pytest.mark.asyncio
    async def test_root_category_passes(self, validator):
        result = await validator.validate_category_create(CategoryCreate(name="Pets", type="despesa"))
        assert result.is_valid

    @pytest.mark.asyncio
    async def test_subcategory_of_root_passes(self, validator):
        data = CategoryCreate(name="Luz", type="despesa", parent_id=4)
        assert (await validator.validate_category_create(data)).is_valid

    @pytest.mark.asyncio
    async def test_missing_parent_rejected(self, validator):
        data = CategoryCreate(name="Luz", type="despesa", parent_id=99)
        with pytest.raises(FinanceValidationError) as exc_info:
            await validator.validate_category_create(data)
        assert exc_info.value.issues[0].issue_type == "missing_reference"
        assert exc_info.value.issues[0].field == "parentId"

    @pytest.mark.asyncio
    async def test_third_level_rejected(self, validator):
        """Test that a subcategory cannot itself have children."""
        data = CategoryCreate(name="Quitinete", type="despesa", parent_id=9)
        with pytest.raises(FinanceValidationError) as exc_info:
            await validator.validate_category_create(data)
        assert exc_info.value.issues[0].issue_type == "too_deep"

    @pytest.mark.asyncio
    async def test_self_parent_rejected(self, validator):
        with pytest.raises(FinanceValidationError) as exc_info:
            await validator.validate_category_update(8, CategoryUpdate(parent_id=8))
        assert exc_info.value.issues[0].issue_type == "self_reference"

    @pytest.mark.asyncio
    async def test_parent_with_children_cannot_be_nested(self, validator):
        """Test that moving Moradia under another root is refused."""
        with pytest.raises(FinanceValidationError) as exc_info:
            await validator.validate_category_update(4, CategoryUpdate(parent_id=6))
        assert exc_info.value.issues[0].issue_type == "too_deep"

    @pytest.mark.asyncio
    async def test_leaf_can_be_nested(self, validator):
        result = await validator.validate_category_update(8, CategoryUpdate(parent_id=4))
        assert result.is_valid

    @pytest.mark.asyncio
    async def test_promote_to_root_passes(self, validator):
        result = await validator.validate_category_update(9, CategoryUpdate(parent_id=None))
        assert result.is_valid

    @pytest.mark.asyncio
    async def test_rename_passes(self, validator):
        result = await validator.validate_category_update(4, CategoryUpdate(name="Casa"))
        assert result.is_valid
