"""/v1/debts - Debt registry and payment endpoints"""

from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from fintrack.api.v1.schemas import AmountRequest, DebtIn, DebtReplaceItem, DebtSchema
from fintrack.api.errors import http_error
from fintrack.infrastructure.database.session import get_db
from fintrack.infrastructure.database.repositories import DebtRepository
from fintrack.domain.adjustments import apply_debt_payment
from fintrack.domain.exceptions import InvalidRecordError, RecordNotFoundError

router = APIRouter()


@router.get("/debts", response_model=List[DebtSchema])
def list_debts(db: Session = Depends(get_db)):
    return DebtRepository(db).list_all()


@router.post("/debts", response_model=DebtSchema, status_code=201)
def create_debt(request_body: DebtIn, db: Session = Depends(get_db)):
    debt = DebtRepository(db).create(request_body.model_dump())
    db.commit()
    return debt


@router.put("/debts", response_model=List[DebtSchema])
def replace_all_debts(request_body: List[DebtReplaceItem], request: Request, db: Session = Depends(get_db)):
    try:
        debts = DebtRepository(db).replace_all(d.model_dump() for d in request_body)
    except InvalidRecordError as e:
        db.rollback()
        raise http_error(request, 422, e)

    db.commit()
    return debts


@router.put("/debts/{debt_id}", response_model=DebtSchema)
def update_debt(debt_id: str, request_body: DebtIn, request: Request, db: Session = Depends(get_db)):
    try:
        debt = DebtRepository(db).update(debt_id, request_body.model_dump())
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)

    db.commit()
    return debt


@router.post("/debts/{debt_id}/payments", response_model=DebtSchema)
def make_payment(debt_id: str, request_body: AmountRequest, request: Request, db: Session = Depends(get_db)):
    """Apply a payment; amount_paid is capped at total_amount"""
    repo = DebtRepository(db)
    try:
        debt = repo.save(apply_debt_payment(repo.get(debt_id), request_body.amount))
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)
    except InvalidRecordError as e:
        db.rollback()
        raise http_error(request, 422, e)

    db.commit()
    return debt


@router.delete("/debts/{debt_id}", status_code=204)
def delete_debt(debt_id: str, request: Request, db: Session = Depends(get_db)):
    try:
        DebtRepository(db).delete(debt_id)
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)

    db.commit()
