"""
Core Data Models for Finance Dashboard

These models define the strict schemas for every record flowing
through the system. They are designed to:
1. Enforce type safety at runtime
2. Provide field-level validation error messages
3. Serialize to the camelCase JSON the dashboard consumes
4. Keep money exact (Decimal, never float)

DESIGN DECISION: Insert, patch and stored shapes are separate models.
A patch model only carries what the caller explicitly sent, so a
partial update can never clobber a field by accident.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


TWO_PLACES = Decimal("0.01")

# Aggregates are computed in Decimal and leave the API as JSON numbers.
AggregateAmount = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


def quantize_money(value: Decimal) -> Decimal:
    """Normalize a money value to exactly two fractional digits."""
    return value.quantize(TWO_PLACES)


def to_naive_utc(value: datetime) -> datetime:
    """Drop timezone info so every stored date compares with every other."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class FinanceModel(BaseModel):
    """Base model: camelCase aliases on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """
    Direction of a transaction.

    receita adds to the balance, despesa subtracts from it.
    Amounts are always stored as non-negative magnitudes.
    """
    RECEITA = "receita"
    DESPESA = "despesa"


class DeleteOutcome(str, Enum):
    """
    Result of a guarded category delete.

    Distinguishes a missing category from one that is still referenced.
    """
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    HAS_TRANSACTIONS = "has_transactions"
    HAS_SUBCATEGORIES = "has_subcategories"

    @property
    def deleted(self) -> bool:
        return self is DeleteOutcome.DELETED

    @property
    def blocked(self) -> bool:
        return self in (DeleteOutcome.HAS_TRANSACTIONS, DeleteOutcome.HAS_SUBCATEGORIES)


# =============================================================================
# CATEGORIES
# =============================================================================

class CategoryCreate(FinanceModel):
    """Insert shape for a category."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Category name"
    )
    type: TransactionType = Field(
        ...,
        description="Whether the category groups revenue or expenses"
    )
    parent_id: Optional[int] = Field(
        default=None,
        ge=1,
        description="Root category this one is nested under"
    )
    color: str = Field(
        default="#6b7280",
        max_length=20,
        description="Display color"
    )
    icon: str = Field(
        default="tag",
        max_length=30,
        description="Display icon name"
    )
    is_active: bool = Field(
        default=True,
        description="Inactive categories are hidden from the by-type listing"
    )

    @field_serializer("is_active", when_used="json")
    def serialize_is_active(self, value: bool) -> str:
        return "true" if value else "false"


class Category(CategoryCreate):
    """A stored category."""

    id: int
    created_at: datetime

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class CategoryUpdate(FinanceModel):
    """
    Partial update for a category.

    Only fields present in the request are applied.
    parentId may be explicitly set to null to promote a subcategory.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    type: Optional[TransactionType] = None
    parent_id: Optional[int] = Field(default=None, ge=1)
    color: Optional[str] = Field(default=None, max_length=20)
    icon: Optional[str] = Field(default=None, max_length=30)
    is_active: Optional[bool] = None

    @model_validator(mode='after')
    def reject_null_required(self) -> 'CategoryUpdate':
        for field in ("name", "type", "color", "icon", "is_active"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly supplied by the caller."""
        return self.model_dump(exclude_unset=True)


# =============================================================================
# TRANSACTIONS
# =============================================================================

class TransactionCreate(FinanceModel):
    """Insert shape for a transaction."""

    type: TransactionType = Field(
        ...,
        description="receita or despesa"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        max_digits=12,
        decimal_places=2,
        description="Non-negative magnitude; the sign comes from type"
    )
    category_id: int = Field(
        ...,
        ge=1,
        description="Category this transaction belongs to"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Free text description"
    )
    payment_method: Optional[str] = Field(
        default=None,
        max_length=30,
        description="PIX, card, transfer..."
    )
    date: datetime = Field(
        ...,
        description="Business date of the transaction"
    )

    @field_validator('amount')
    @classmethod
    def normalize_amount(cls, v: Decimal) -> Decimal:
        return quantize_money(v)

    @field_validator('date')
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by type."""
        if self.type == TransactionType.DESPESA:
            return -self.amount
        return self.amount


class Transaction(TransactionCreate):
    """A stored transaction."""

    id: int
    created_at: datetime


class TransactionUpdate(FinanceModel):
    """Partial update for a transaction. Only supplied fields change."""

    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        max_digits=12,
        decimal_places=2,
    )
    category_id: Optional[int] = Field(default=None, ge=1)
    description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    payment_method: Optional[str] = Field(default=None, max_length=30)
    date: Optional[datetime] = None

    @field_validator('amount')
    @classmethod
    def normalize_amount(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return quantize_money(v) if v is not None else v

    @field_validator('date')
    @classmethod
    def normalize_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v) if v is not None else v

    @model_validator(mode='after')
    def reject_null_required(self) -> 'TransactionUpdate':
        for field in ("type", "amount", "category_id", "description", "date"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly supplied by the caller."""
        return self.model_dump(exclude_unset=True)


# =============================================================================
# ANALYTICS
# =============================================================================

class FinancialSummary(FinanceModel):
    """All-time totals. saldo is always total_receitas - total_despesas."""

    total_receitas: AggregateAmount
    total_despesas: AggregateAmount
    saldo: AggregateAmount


class MonthlyRevenueExpense(FinanceModel):
    """Revenue and expenses of one calendar month."""

    month: str = Field(..., description="Three-letter month label")
    receitas: AggregateAmount
    despesas: AggregateAmount


class CategoryExpense(FinanceModel):
    """Share of total expenses spent in one category."""

    category: str
    amount: AggregateAmount
    percentage: AggregateAmount


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing_reference', 'too_deep')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Outcome of semantic validation for one write."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def is_valid(self) -> bool:
        return not self.has_errors


# =============================================================================
# USERS (schema only, no authentication is enforced)
# =============================================================================

class UserCreate(FinanceModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class User(FinanceModel):
    id: int
    username: str
