"""POST /v1/insights/* - AI savings opportunities and financial health score"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from fintrack.api.v1.schemas import (
    HealthScoreRequest,
    HealthScoreResponse,
    SavingsOpportunitiesRequest,
    SavingsOpportunitiesResponse,
    SavingsOpportunitySchema,
)
from fintrack.api.dependencies import get_insight_client, get_request_id
from fintrack.config import settings
from fintrack.infrastructure.database.session import get_db
from fintrack.infrastructure.database.repositories import (
    AssetRepository,
    DebtRepository,
    TransactionRepository,
)
from fintrack.infrastructure.clients.insights import InsightClient
from fintrack.infrastructure.observability.logging import log_insight_request
from fintrack.infrastructure.observability.metrics import insight_request_counter
from fintrack.domain.exceptions import (
    InsightNotConfiguredError,
    InsightServiceError,
    InvalidInsightResponseError,
)
from fintrack.domain.summaries import summarize_assets, summarize_debts, summarize_transactions

router = APIRouter()


def _finish(kind: str, outcome: str, request_id: str, start_time: float) -> None:
    insight_request_counter.labels(kind=kind, outcome=outcome).inc()
    log_insight_request(request_id, kind, outcome, (time.time() - start_time) * 1000)


def _translate_error(kind: str, error: Exception, request_id: str, start_time: float) -> HTTPException:
    """Map insight failures onto HTTP errors, recording the outcome"""
    if isinstance(error, InsightNotConfiguredError):
        _finish(kind, "unconfigured", request_id, start_time)
        logging.warning(f"Insight service not configured: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=503, detail="Insight service not configured")

    if isinstance(error, InvalidInsightResponseError):
        _finish(kind, "invalid", request_id, start_time)
        logging.error(f"Invalid insight response: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=502, detail="Insight service returned an invalid response")

    _finish(kind, "error", request_id, start_time)
    logging.error(f"Insight API error: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=503, detail="Insight service unavailable")


@router.post("/insights/savings-opportunities", response_model=SavingsOpportunitiesResponse)
async def get_savings_opportunities(
    request_body: SavingsOpportunitiesRequest,
    request: Request,
    db: Session = Depends(get_db),
    insight_client: InsightClient = Depends(get_insight_client),
):
    """
    Savings and optimization ideas from the language model.

    Flow:
    1. Use the supplied transaction history / asset summary, building any
       omitted part from stored records
    2. Forward to the model and validate its structured reply
    """
    start_time = time.time()
    request_id = get_request_id(request)
    currency = settings.default_currency

    transaction_history = request_body.transaction_history
    if transaction_history is None:
        transaction_history = summarize_transactions(TransactionRepository(db).list_all(), currency)

    asset_summary = request_body.asset_summary
    if asset_summary is None:
        asset_summary = summarize_assets(AssetRepository(db).list_all(), currency)

    try:
        opportunities = await insight_client.get_savings_opportunities(transaction_history, asset_summary)
    except (InsightServiceError, InvalidInsightResponseError) as e:
        raise _translate_error("savings_opportunities", e, request_id, start_time)

    _finish("savings_opportunities", "ok", request_id, start_time)
    return SavingsOpportunitiesResponse(
        opportunities=[SavingsOpportunitySchema.model_validate(o) for o in opportunities],
    )


@router.post("/insights/health-score", response_model=HealthScoreResponse)
async def get_health_score(
    request_body: HealthScoreRequest,
    request: Request,
    db: Session = Depends(get_db),
    insight_client: InsightClient = Depends(get_insight_client),
):
    """0-1000 financial health score with positive factors and improvement areas"""
    start_time = time.time()
    request_id = get_request_id(request)
    currency = settings.default_currency

    asset_summary = request_body.asset_summary
    if asset_summary is None:
        asset_summary = summarize_assets(AssetRepository(db).list_all(), currency)

    debt_summary = request_body.debt_summary
    if debt_summary is None:
        debt_summary = summarize_debts(DebtRepository(db).list_all(), currency)

    try:
        health = await insight_client.get_financial_health_score(
            asset_summary,
            debt_summary,
            request_body.average_monthly_income,
            request_body.average_monthly_expenses,
        )
    except (InsightServiceError, InvalidInsightResponseError) as e:
        raise _translate_error("health_score", e, request_id, start_time)

    _finish("health_score", "ok", request_id, start_time)
    return HealthScoreResponse.model_validate(health)
