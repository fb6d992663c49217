"""Budget aggregation engine - spend against budgets and progress tiers"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from fintrack.domain.models import Budget, BudgetProgress, SpendResult, Transaction
from fintrack.domain.periods import resolve_period

# Severity thresholds in percent (strictly greater than)
CRITICAL_THRESHOLD = 90
WARNING_THRESHOLD = 70


def calculate_spent(
    budget: Budget,
    transactions: Iterable[Transaction],
    reference_date: date,
) -> SpendResult:
    """
    Sum expenses attributable to a budget for its current cycle.

    Requirements:
    - Unresolved period (bi-weekly/custom): spent 0, not auto-calculated.
      This is a "no automatic figure" sentinel, not a claim nothing was spent.
    - Otherwise only expenses whose category equals the budget category
      exactly (case-sensitive) and whose date falls inside the window count.
    - An empty match set is 0 *with* is_auto_calculated=True.
    """
    interval = resolve_period(budget.period, reference_date)
    if interval is None:
        return SpendResult(spent_amount=Decimal("0"), is_auto_calculated=False)

    spent = sum(
        (
            Decimal(t.amount)
            for t in transactions
            if t.type == "expense" and t.category == budget.category and t.date in interval
        ),
        Decimal("0"),
    )

    return SpendResult(spent_amount=spent, is_auto_calculated=True, interval=interval)


def normalize_progress(
    spent_amount: Decimal,
    budget_amount: Decimal,
    is_auto_calculated: bool = True,
) -> Tuple[Optional[float], str]:
    """
    Convert spent/budget into a clamped percentage and a severity tier.

    percentage = min(spent / budget * 100, 100); the size of any overspend is
    discarded here, callers compare spent_amount > budget.amount themselves.

    Tier precedence (first match wins):
    - not auto-calculated -> manual
    - > 90 -> critical
    - > 70 -> warning
    - otherwise -> normal

    A non-positive budget amount gives an undefined percentage (None) and the
    manual tier instead of a division by zero.
    """
    if budget_amount <= 0:
        return None, "manual"

    percentage = min(float(Decimal(spent_amount) / Decimal(budget_amount) * 100), 100.0)
    return percentage, severity_for(percentage, is_auto_calculated)


def severity_for(percentage: float, is_auto_calculated: bool = True) -> str:
    if not is_auto_calculated:
        return "manual"
    if percentage > CRITICAL_THRESHOLD:
        return "critical"
    if percentage > WARNING_THRESHOLD:
        return "warning"
    return "normal"


def evaluate_budget(
    budget: Budget,
    transactions: Iterable[Transaction],
    reference_date: date,
) -> BudgetProgress:
    """Main entry point: aggregate spend and normalize it for one budget."""
    result = calculate_spent(budget, transactions, reference_date)
    percentage, severity = normalize_progress(
        result.spent_amount, budget.amount, result.is_auto_calculated
    )

    return BudgetProgress(
        budget=budget,
        spent_amount=result.spent_amount,
        is_auto_calculated=result.is_auto_calculated,
        percentage=percentage,
        severity=severity,
        interval=result.interval,
    )


def evaluate_budgets(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    reference_date: date,
) -> List[BudgetProgress]:
    """Evaluate every budget against the same transaction snapshot."""
    snapshot = list(transactions)
    return [evaluate_budget(b, snapshot, reference_date) for b in budgets]
