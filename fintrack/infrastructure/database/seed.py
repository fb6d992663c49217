"""Sample records loaded into empty registries for demos and local development"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional
from sqlalchemy.orm import Session
from fintrack.infrastructure.database.repositories import (
    AssetRepository,
    BudgetRepository,
    DebtRepository,
    GoalRepository,
    TransactionRepository,
)

logger = logging.getLogger(__name__)


def sample_transactions(today: date) -> list[dict]:
    """Five transactions dated relative to today, one of them last month"""
    last_month = (today.replace(day=1) - timedelta(days=1)).replace(day=15)
    return [
        {"date": today - timedelta(days=2), "description": "Groceries from SuperMart", "amount": Decimal("75.50"), "type": "expense", "category": "Groceries"},
        {"date": today - timedelta(days=1), "description": "Monthly Salary", "amount": Decimal("3500.00"), "type": "income", "category": "Salary"},
        {"date": today, "description": "Coffee with a friend", "amount": Decimal("12.00"), "type": "expense", "category": "Dining Out"},
        {"date": today - timedelta(days=5), "description": "Electricity Bill", "amount": Decimal("120.00"), "type": "expense", "category": "Utilities"},
        {"date": last_month, "description": "Old Internet Bill", "amount": Decimal("60.00"), "type": "expense", "category": "Utilities"},
    ]


SAMPLE_BUDGETS = [
    {"name": "Monthly Groceries", "amount": Decimal("400"), "category": "Groceries", "period": "monthly"},
    {"name": "Entertainment Fund", "amount": Decimal("150"), "category": "Entertainment", "period": "monthly"},
    {"name": "Weekly Transport", "amount": Decimal("50"), "category": "Transport", "period": "weekly"},
]

SAMPLE_ASSETS = [
    {"name": "Savings Account", "type": "bank", "value": Decimal("15000")},
    {"name": "Tech Stocks", "type": "stock", "value": Decimal("25000")},
    {"name": "Bitcoin Wallet", "type": "crypto", "value": Decimal("8000")},
    {"name": "Rental Property", "type": "property", "value": Decimal("250000")},
]

SAMPLE_DEBTS = [
    {"name": "Student Loan - Great Lakes", "total_amount": Decimal("25000"), "amount_paid": Decimal("5000"), "interest_rate": 4.5, "minimum_payment": Decimal("250")},
    {"name": "Chase Sapphire Card", "total_amount": Decimal("3200"), "amount_paid": Decimal("1200"), "interest_rate": 19.99},
    {"name": "Car Loan - Ally Financial", "total_amount": Decimal("18000"), "amount_paid": Decimal("17500"), "minimum_payment": Decimal("350")},
]

SAMPLE_GOALS = [
    {"name": "Emergency Fund", "target_amount": Decimal("10000"), "current_amount": Decimal("2500"), "target_date": date(2025, 12, 31), "icon": "ShieldCheck"},
    {"name": "Vacation to Japan", "target_amount": Decimal("5000"), "current_amount": Decimal("1200"), "target_date": date(2025, 6, 1), "icon": "Plane"},
]


def seed_sample_data(db: Session, today: Optional[date] = None) -> bool:
    """
    Load sample records when every registry is empty.

    Returns True when data was written. Existing data is never touched.
    """
    today = today or date.today()
    registries = [
        TransactionRepository(db),
        BudgetRepository(db),
        AssetRepository(db, today=today),
        DebtRepository(db),
        GoalRepository(db),
    ]
    if any(r.count() for r in registries):
        logger.info("Sample data skipped, registries not empty", extra={"step": "seed"})
        return False

    transactions, budgets, assets, debts, goals = registries
    transactions.add_batch(sample_transactions(today))
    for fields in SAMPLE_BUDGETS:
        budgets.create(fields)
    for fields in SAMPLE_ASSETS:
        assets.create(fields)
    for fields in SAMPLE_DEBTS:
        debts.create(fields)
    for fields in SAMPLE_GOALS:
        goals.create(fields)

    db.commit()
    logger.info("Sample data loaded", extra={"step": "seed"})
    return True
