"""/v1/transactions - Transaction ledger endpoints"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from fintrack.api.v1.schemas import (
    TransactionBatchRequest,
    TransactionIn,
    TransactionReplaceItem,
    TransactionSchema,
)
from fintrack.api.dependencies import get_request_id
from fintrack.api.errors import http_error
from fintrack.infrastructure.database.session import get_db
from fintrack.infrastructure.database.repositories import TransactionRepository
from fintrack.domain.exceptions import InvalidRecordError, RecordNotFoundError

router = APIRouter()


@router.get("/transactions", response_model=List[TransactionSchema])
def list_transactions(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db),
):
    """
    Current ledger snapshot, newest first.

    Passing both year and month limits the result to that calendar month.
    """
    if (year is None) != (month is None):
        raise HTTPException(status_code=400, detail="year and month must be given together")

    repo = TransactionRepository(db)
    if year is not None:
        return repo.list_by_month(year, month)
    return repo.list_all()


@router.post("/transactions/batch", response_model=List[TransactionSchema], status_code=201)
def add_transaction_batch(
    request_body: TransactionBatchRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Append a batch of transactions; returns the created records"""
    created = TransactionRepository(db).add_batch(t.model_dump() for t in request_body.transactions)
    db.commit()

    logging.info(
        "Transactions added",
        extra={"request_id": get_request_id(request), "step": "transaction_batch", "count": len(created)},
    )
    return created


@router.put("/transactions", response_model=List[TransactionSchema])
def replace_all_transactions(
    request_body: List[TransactionReplaceItem],
    request: Request,
    db: Session = Depends(get_db),
):
    """Replace the whole ledger"""
    try:
        transactions = TransactionRepository(db).replace_all(t.model_dump() for t in request_body)
    except InvalidRecordError as e:
        db.rollback()
        raise http_error(request, 422, e)

    db.commit()

    logging.info(
        "Ledger replaced",
        extra={"request_id": get_request_id(request), "step": "transaction_replace_all", "count": len(transactions)},
    )
    return transactions


@router.put("/transactions/{transaction_id}", response_model=TransactionSchema)
def update_transaction(
    transaction_id: str,
    request_body: TransactionIn,
    request: Request,
    db: Session = Depends(get_db),
):
    """Full-record replacement of one transaction"""
    try:
        transaction = TransactionRepository(db).update(transaction_id, request_body.model_dump())
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)

    db.commit()
    return transaction


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(transaction_id: str, request: Request, db: Session = Depends(get_db)):
    try:
        TransactionRepository(db).delete(transaction_id)
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)

    db.commit()
