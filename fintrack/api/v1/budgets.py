"""/v1/budgets - Budget registry and progress endpoints"""

from datetime import date
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from fintrack.api.v1.schemas import (
    BudgetIn,
    BudgetOptionsResponse,
    BudgetProgressResponse,
    BudgetProgressSchema,
    BudgetReplaceItem,
    BudgetSchema,
    PeriodOption,
)
from fintrack.api.dependencies import get_reference_date, get_request_id
from fintrack.api.errors import http_error
from fintrack.infrastructure.database.session import get_db
from fintrack.infrastructure.database.repositories import BudgetRepository, TransactionRepository
from fintrack.infrastructure.observability.logging import log_budget_evaluation
from fintrack.infrastructure.observability.metrics import record_budget_progress
from fintrack.domain.budgeting import evaluate_budget, evaluate_budgets
from fintrack.domain.exceptions import InvalidRecordError, RecordNotFoundError
from fintrack.domain.models import BUDGET_CATEGORIES, BUDGET_PERIOD_LABELS, BudgetProgress
from fintrack.domain.periods import is_manual_period

router = APIRouter()


def _to_progress_schema(progress: BudgetProgress) -> BudgetProgressSchema:
    return BudgetProgressSchema(
        budget=BudgetSchema.model_validate(progress.budget),
        spent_amount=progress.spent_amount,
        is_auto_calculated=progress.is_auto_calculated,
        percentage=progress.percentage,
        severity=progress.severity,
        overspent=progress.overspent,
        period_start=progress.interval.start if progress.interval else None,
        period_end=progress.interval.end if progress.interval else None,
    )


@router.get("/budgets", response_model=List[BudgetSchema])
def list_budgets(db: Session = Depends(get_db)):
    return BudgetRepository(db).list_all()


@router.post("/budgets", response_model=BudgetSchema, status_code=201)
def create_budget(request_body: BudgetIn, db: Session = Depends(get_db)):
    budget = BudgetRepository(db).create(request_body.model_dump())
    db.commit()
    return budget


@router.put("/budgets", response_model=List[BudgetSchema])
def replace_all_budgets(request_body: List[BudgetReplaceItem], request: Request, db: Session = Depends(get_db)):
    try:
        budgets = BudgetRepository(db).replace_all(b.model_dump() for b in request_body)
    except InvalidRecordError as e:
        db.rollback()
        raise http_error(request, 422, e)

    db.commit()
    return budgets


@router.get("/budgets/options", response_model=BudgetOptionsResponse)
def get_budget_options():
    """Period choices (bi-weekly and custom are tracked manually) and suggested categories"""
    periods = [
        PeriodOption(value=value, label=label, auto_calculated=not is_manual_period(value))
        for value, label in BUDGET_PERIOD_LABELS.items()
    ]
    return BudgetOptionsResponse(periods=periods, categories=BUDGET_CATEGORIES)


@router.get("/budgets/progress", response_model=BudgetProgressResponse)
def get_budgets_progress(
    request: Request,
    reference_date: date = Depends(get_reference_date),
    db: Session = Depends(get_db),
):
    """
    Spend and progress for every budget in its current period.

    Bi-weekly and custom budgets come back with is_auto_calculated=false and
    the manual tier; their spent_amount of 0 means "not tracked automatically".
    """
    budgets = BudgetRepository(db).list_all()
    transactions = TransactionRepository(db).list_all()
    progress = evaluate_budgets(budgets, transactions, reference_date)

    record_budget_progress(progress)
    log_budget_evaluation(get_request_id(request), reference_date, progress)

    return BudgetProgressResponse(
        reference_date=reference_date,
        budgets=[_to_progress_schema(p) for p in progress],
    )


@router.get("/budgets/{budget_id}", response_model=BudgetSchema)
def get_budget(budget_id: str, request: Request, db: Session = Depends(get_db)):
    try:
        return BudgetRepository(db).get(budget_id)
    except RecordNotFoundError as e:
        raise http_error(request, 404, e)


@router.get("/budgets/{budget_id}/progress", response_model=BudgetProgressSchema)
def get_budget_progress(
    budget_id: str,
    request: Request,
    reference_date: date = Depends(get_reference_date),
    db: Session = Depends(get_db),
):
    try:
        budget = BudgetRepository(db).get(budget_id)
    except RecordNotFoundError as e:
        raise http_error(request, 404, e)

    progress = evaluate_budget(budget, TransactionRepository(db).list_all(), reference_date)
    record_budget_progress([progress])
    return _to_progress_schema(progress)


@router.put("/budgets/{budget_id}", response_model=BudgetSchema)
def update_budget(budget_id: str, request_body: BudgetIn, request: Request, db: Session = Depends(get_db)):
    try:
        budget = BudgetRepository(db).update(budget_id, request_body.model_dump())
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)

    db.commit()
    return budget


@router.delete("/budgets/{budget_id}", status_code=204)
def delete_budget(budget_id: str, request: Request, db: Session = Depends(get_db)):
    """Deleting a budget leaves its transactions untouched"""
    try:
        BudgetRepository(db).delete(budget_id)
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)

    db.commit()
