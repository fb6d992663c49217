"""Reporting aggregations over the transaction ledger and registries"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List

from fintrack.domain.models import (
    Asset,
    CashFlow,
    CategoryTotal,
    DateInterval,
    Debt,
    Goal,
    NetWorthSummary,
    ProgressItem,
    SpendingReport,
    Transaction,
)
from fintrack.utils.date_utils import month_bounds, month_of

ZERO = Decimal("0")


def transactions_in_month(transactions: Iterable[Transaction], year: int, month: int) -> List[Transaction]:
    """Transactions dated inside the given calendar month"""
    start, end = month_of(year, month)
    window = DateInterval(start=start, end=end)
    return [t for t in transactions if t.date in window]


def spending_by_category(transactions: Iterable[Transaction], reference_date: date) -> SpendingReport:
    """
    Group the reference month's expenses by category.

    Categories are sorted by total, largest first. Each carries its share of
    the month's total expenses (0 when nothing was spent).
    """
    start, end = month_bounds(reference_date)
    window = DateInterval(start=start, end=end)

    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for t in transactions:
        if t.type == "expense" and t.date in window:
            totals[t.category] += Decimal(t.amount)

    grand_total = sum(totals.values(), ZERO)
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)

    categories = [
        CategoryTotal(
            category=category,
            total=total,
            share=float(total / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for category, total in ordered
    ]

    return SpendingReport(interval=window, total=grand_total, categories=categories)


def monthly_cash_flow(transactions: Iterable[Transaction], year: int, month: int) -> CashFlow:
    """Income vs expenses for one calendar month"""
    in_month = transactions_in_month(transactions, year, month)
    start, end = month_of(year, month)

    income = sum((Decimal(t.amount) for t in in_month if t.type == "income"), ZERO)
    expenses = sum((Decimal(t.amount) for t in in_month if t.type == "expense"), ZERO)

    return CashFlow(interval=DateInterval(start=start, end=end), income=income, expenses=expenses)


def _progress_percentage(current: Decimal, target: Decimal) -> float:
    if target <= 0:
        return 0.0
    return min(float(Decimal(current) / Decimal(target) * 100), 100.0)


def net_worth_summary(
    assets: Iterable[Asset],
    debts: Iterable[Debt],
    goals: Iterable[Goal],
) -> NetWorthSummary:
    """Dashboard totals: assets by type, remaining debt and goal progress"""
    assets_by_type: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for asset in assets:
        assets_by_type[asset.type] += Decimal(asset.value)

    debts = list(debts)
    debt_items = [
        ProgressItem(
            id=d.id,
            name=d.name,
            current=d.amount_paid,
            target=d.total_amount,
            percentage=_progress_percentage(d.amount_paid, d.total_amount),
        )
        for d in debts
    ]

    goal_items = [
        ProgressItem(
            id=g.id,
            name=g.name,
            current=g.current_amount,
            target=g.target_amount,
            percentage=_progress_percentage(g.current_amount, g.target_amount),
        )
        for g in goals
    ]

    return NetWorthSummary(
        total_assets=sum(assets_by_type.values(), ZERO),
        assets_by_type=dict(assets_by_type),
        total_debt_remaining=sum((d.remaining for d in debts), ZERO),
        debts=debt_items,
        goals=goal_items,
    )
