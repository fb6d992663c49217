"""/v1/goals - Savings goal endpoints"""

from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from fintrack.api.v1.schemas import AmountRequest, GoalIn, GoalReplaceItem, GoalSchema
from fintrack.api.errors import http_error
from fintrack.infrastructure.database.session import get_db
from fintrack.infrastructure.database.repositories import GoalRepository
from fintrack.domain.adjustments import apply_goal_contribution
from fintrack.domain.exceptions import InvalidRecordError, RecordNotFoundError

router = APIRouter()


@router.get("/goals", response_model=List[GoalSchema])
def list_goals(db: Session = Depends(get_db)):
    return GoalRepository(db).list_all()


@router.post("/goals", response_model=GoalSchema, status_code=201)
def create_goal(request_body: GoalIn, db: Session = Depends(get_db)):
    goal = GoalRepository(db).create(request_body.model_dump())
    db.commit()
    return goal


@router.put("/goals", response_model=List[GoalSchema])
def replace_all_goals(request_body: List[GoalReplaceItem], request: Request, db: Session = Depends(get_db)):
    try:
        goals = GoalRepository(db).replace_all(g.model_dump() for g in request_body)
    except InvalidRecordError as e:
        db.rollback()
        raise http_error(request, 422, e)

    db.commit()
    return goals


@router.put("/goals/{goal_id}", response_model=GoalSchema)
def update_goal(goal_id: str, request_body: GoalIn, request: Request, db: Session = Depends(get_db)):
    try:
        goal = GoalRepository(db).update(goal_id, request_body.model_dump())
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)

    db.commit()
    return goal


@router.post("/goals/{goal_id}/contributions", response_model=GoalSchema)
def add_contribution(goal_id: str, request_body: AmountRequest, request: Request, db: Session = Depends(get_db)):
    """Add to a goal; current_amount is capped at target_amount"""
    repo = GoalRepository(db)
    try:
        goal = repo.save(apply_goal_contribution(repo.get(goal_id), request_body.amount))
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)
    except InvalidRecordError as e:
        db.rollback()
        raise http_error(request, 422, e)

    db.commit()
    return goal


@router.delete("/goals/{goal_id}", status_code=204)
def delete_goal(goal_id: str, request: Request, db: Session = Depends(get_db)):
    try:
        GoalRepository(db).delete(goal_id)
    except RecordNotFoundError as e:
        db.rollback()
        raise http_error(request, 404, e)

    db.commit()
