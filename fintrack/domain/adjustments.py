"""Capped balance adjustments for debts and savings goals"""

from dataclasses import replace
from decimal import Decimal

from fintrack.domain.exceptions import InvalidRecordError
from fintrack.domain.models import Debt, Goal


def apply_debt_payment(debt: Debt, payment: Decimal) -> Debt:
    """Record a payment; amount_paid never exceeds total_amount."""
    if payment <= 0:
        raise InvalidRecordError("Payment amount must be positive")
    return replace(debt, amount_paid=min(debt.amount_paid + payment, debt.total_amount))


def apply_goal_contribution(goal: Goal, contribution: Decimal) -> Goal:
    """Record a contribution; current_amount never exceeds target_amount."""
    if contribution <= 0:
        raise InvalidRecordError("Contribution amount must be positive")
    return replace(goal, current_amount=min(goal.current_amount + contribution, goal.target_amount))
