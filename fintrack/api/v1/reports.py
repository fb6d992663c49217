"""/v1/reports - Spending, cash flow and net worth reports"""

from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fintrack.api.v1.schemas import (
    CashFlowResponse,
    CategoryTotalSchema,
    NetWorthResponse,
    ProgressItemSchema,
    SpendingByCategoryResponse,
)
from fintrack.api.dependencies import get_reference_date
from fintrack.infrastructure.database.session import get_db
from fintrack.infrastructure.database.repositories import (
    AssetRepository,
    DebtRepository,
    GoalRepository,
    TransactionRepository,
)
from fintrack.domain.reports import monthly_cash_flow, net_worth_summary, spending_by_category
from fintrack.utils.date_utils import month_bounds

router = APIRouter()


@router.get("/reports/spending-by-category", response_model=SpendingByCategoryResponse)
def get_spending_by_category(
    reference_date: date = Depends(get_reference_date),
    db: Session = Depends(get_db),
):
    """Expenses of the reference month grouped by category, largest first"""
    start, end = month_bounds(reference_date)
    report = spending_by_category(TransactionRepository(db).list_between(start, end), reference_date)

    return SpendingByCategoryResponse(
        period_start=report.interval.start,
        period_end=report.interval.end,
        total=report.total,
        categories=[CategoryTotalSchema.model_validate(c) for c in report.categories],
    )


@router.get("/reports/cash-flow", response_model=CashFlowResponse)
def get_cash_flow(
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    flow = monthly_cash_flow(TransactionRepository(db).list_by_month(year, month), year, month)
    return CashFlowResponse(
        year=year,
        month=month,
        income=flow.income,
        expenses=flow.expenses,
        net=flow.net,
    )


@router.get("/reports/net-worth", response_model=NetWorthResponse)
def get_net_worth(db: Session = Depends(get_db)):
    """Asset totals, remaining debt and goal progress"""
    summary = net_worth_summary(
        AssetRepository(db).list_all(),
        DebtRepository(db).list_all(),
        GoalRepository(db).list_all(),
    )

    return NetWorthResponse(
        total_assets=summary.total_assets,
        assets_by_type=summary.assets_by_type,
        total_debt_remaining=summary.total_debt_remaining,
        net_worth=summary.net_worth,
        debts=[ProgressItemSchema.model_validate(d) for d in summary.debts],
        goals=[ProgressItemSchema.model_validate(g) for g in summary.goals],
    )
