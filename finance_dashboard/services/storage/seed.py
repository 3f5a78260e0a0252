"""
Sample data for the demo dashboard.

Category ids are assigned in list order starting at 1, so the
parent_id and category_id references below are positional.
"""

from datetime import datetime
from decimal import Decimal

from finance_dashboard.models.finance import (
    CategoryCreate,
    TransactionCreate,
    TransactionType,
)


RECEITA = TransactionType.RECEITA
DESPESA = TransactionType.DESPESA

SAMPLE_CATEGORIES = [
    # Revenue (1-3)
    CategoryCreate(name="Salário", type=RECEITA, color="#22c55e", icon="banknote"),
    CategoryCreate(name="Freelance", type=RECEITA, color="#16a34a", icon="laptop"),
    CategoryCreate(name="Investimentos", type=RECEITA, color="#15803d", icon="trendingUp"),
    # Expenses (4-8)
    CategoryCreate(name="Moradia", type=DESPESA, color="#ef4444", icon="home"),
    CategoryCreate(name="Alimentação", type=DESPESA, color="#f97316", icon="utensils"),
    CategoryCreate(name="Transporte", type=DESPESA, color="#eab308", icon="car"),
    CategoryCreate(name="Entretenimento", type=DESPESA, color="#a855f7", icon="gamepad2"),
    CategoryCreate(name="Saúde", type=DESPESA, color="#06b6d4", icon="heart"),
    # Moradia (9-11)
    CategoryCreate(name="Aluguel", type=DESPESA, parent_id=4, color="#dc2626", icon="key"),
    CategoryCreate(name="Condomínio", type=DESPESA, parent_id=4, color="#b91c1c", icon="building"),
    CategoryCreate(name="IPTU", type=DESPESA, parent_id=4, color="#991b1b", icon="fileText"),
    # Alimentação (12-14)
    CategoryCreate(name="Supermercado", type=DESPESA, parent_id=5, color="#ea580c", icon="shoppingCart"),
    CategoryCreate(name="Restaurante", type=DESPESA, parent_id=5, color="#c2410c", icon="chefHat"),
    CategoryCreate(name="Delivery", type=DESPESA, parent_id=5, color="#9a3412", icon="bike"),
]

SAMPLE_TRANSACTIONS = [
    TransactionCreate(
        type=RECEITA,
        amount=Decimal("4500.00"),
        category_id=1,
        description="Salário Dezembro",
        payment_method="Transferência",
        date=datetime(2024, 12, 14, 9, 0),
    ),
    TransactionCreate(
        type=DESPESA,
        amount=Decimal("187.50"),
        category_id=12,
        description="Supermercado Extra",
        payment_method="Cartão de Débito",
        date=datetime(2024, 12, 15, 14, 30),
    ),
    TransactionCreate(
        type=DESPESA,
        amount=Decimal("98.40"),
        category_id=6,
        description="Posto Shell",
        payment_method="PIX",
        date=datetime(2024, 12, 13, 16, 20),
    ),
    TransactionCreate(
        type=DESPESA,
        amount=Decimal("1200.00"),
        category_id=9,
        description="Aluguel Apartamento",
        payment_method="Transferência",
        date=datetime(2024, 12, 12, 10, 0),
    ),
    TransactionCreate(
        type=DESPESA,
        amount=Decimal("45.00"),
        category_id=7,
        description="Cinema Cinemark",
        payment_method="Cartão de Crédito",
        date=datetime(2024, 12, 10, 19, 30),
    ),
]
