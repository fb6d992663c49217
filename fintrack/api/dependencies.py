"""Dependency injection for FastAPI endpoints"""

from datetime import date
from typing import AsyncIterator, Optional
from fastapi import Query, Request
from fintrack.infrastructure.clients.insights import InsightClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_reference_date(
    reference_date: Optional[date] = Query(None, description="Evaluation date, defaults to today"),
) -> date:
    """Wall-clock today unless the caller pins a date"""
    return reference_date or date.today()


async def get_insight_client() -> AsyncIterator[InsightClient]:
    """Provide language model client instance, closed once the request finishes"""
    async with InsightClient() as client:
        yield client
