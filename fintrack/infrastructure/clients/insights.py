"""Language model client for the AI insight features"""

import json
import logging
from decimal import Decimal
from typing import Any, Dict, List, Type, TypeVar

import httpx
from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI
from pydantic import BaseModel, Field, ValidationError

from fintrack.config import settings
from fintrack.domain.exceptions import (
    InsightNotConfiguredError,
    InsightServiceError,
    InvalidInsightResponseError,
)
from fintrack.domain.models import FinancialHealthScore, SavingsOpportunity
from fintrack.infrastructure.observability.metrics import insight_latency_histogram

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class OpportunityPayload(BaseModel):
    category: str = Field(..., description="Opportunity category, e.g. Fee Reduction or Better Savings Vehicle.")
    description: str = Field(..., description="Detailed description of the opportunity.")
    potential_savings: str = Field(..., description="Estimated savings or financial benefit.")


class SavingsOpportunitiesPayload(BaseModel):
    """Expected tool-call arguments for the savings prompt"""

    opportunities: List[OpportunityPayload]


class HealthScorePayload(BaseModel):
    """Expected tool-call arguments for the health score prompt"""

    score: float = Field(..., ge=0, le=1000, description="Financial health score, 0 (very poor) to 1000 (excellent).")
    assessment: str = Field(..., description="Excellent, Good, Fair, Needs Improvement or Critical.")
    positive_factors: List[str] = Field(..., description="2-3 concise positive factors.")
    areas_for_improvement: List[str] = Field(..., description="2-3 concise, actionable improvements.")


SAVINGS_SYSTEM_PROMPT = """You are a personal finance expert. Analyze the user's transactions and asset holdings and identify savings opportunities or financial optimizations.

Opportunities can cover recurring spending that could be reduced, fees, returns on idle cash, rebalancing, or better alternatives for the listed assets. Each opportunity needs a category (e.g. Spending Reduction, Fee Reduction, Investment Optimization, Better Savings Vehicle), a detailed description, and the estimated potential savings or benefit.

Return structured JSON matching the provided function schema exactly."""

SAVINGS_USER_TEMPLATE = """## Transaction History
{transaction_history}

## Asset Summary
{asset_summary}"""

HEALTH_SYSTEM_PROMPT = """You are an expert financial advisor assessing a user's overall financial health.

Consider assets vs. debts (net worth), income vs. expenses (cash flow), emergency fund adequacy, debt load relative to income, and investment diversity where it can be inferred.

No debts is a positive factor. Assets heavily outweighing debts is a strong positive. Positive cash flow is crucial. Lack of liquid emergency savings relative to monthly expenses is a key area for improvement. High debt relative to income is a concern.

Be encouraging and constructive. Return structured JSON matching the provided function schema exactly."""

HEALTH_USER_TEMPLATE = """Asset Summary: {asset_summary}
Debt Summary: {debt_summary}
Average Monthly Income: {average_monthly_income}
Average Monthly Expenses: {average_monthly_expenses}"""


class InsightClient:
    """Client for an OpenAI-compatible chat completions API"""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ):
        self.api_key = api_key or settings.insights_api_key
        self.base_url = base_url or settings.insights_api_base
        self.model = model or settings.insights_model
        self.timeout = timeout or settings.insights_timeout_seconds
        self.temperature = settings.insights_temperature

        self._client = None
        if self.api_key:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=settings.insights_max_retries,
                http_client=httpx.AsyncClient(timeout=self.timeout),
            )

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def close(self) -> None:
        """Release the underlying HTTP connection pool"""
        if self._client is not None:
            await self._client.close()

    async def __aenter__(self) -> "InsightClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def get_savings_opportunities(self, transaction_history: str, asset_summary: str) -> List[SavingsOpportunity]:
        """
        Ask the model for personalized savings opportunities.

        Raises:
            InsightServiceError: On timeout, API errors, or missing configuration
            InvalidInsightResponseError: When the reply fails schema validation
        """
        payload = await self._call_tool(
            kind="savings_opportunities",
            system_prompt=SAVINGS_SYSTEM_PROMPT,
            user_prompt=SAVINGS_USER_TEMPLATE.format(
                transaction_history=transaction_history or "None provided.",
                asset_summary=asset_summary or "None provided.",
            ),
            tool_name="report_savings_opportunities",
            tool_description="Report a list of personalized savings or optimization opportunities.",
            payload_model=SavingsOpportunitiesPayload,
        )
        return [
            SavingsOpportunity(
                category=o.category,
                description=o.description,
                potential_savings=o.potential_savings,
            )
            for o in payload.opportunities
        ]

    async def get_financial_health_score(
        self,
        asset_summary: str,
        debt_summary: str,
        average_monthly_income: Decimal,
        average_monthly_expenses: Decimal,
    ) -> FinancialHealthScore:
        """
        Ask the model for a 0-1000 financial health score with its reasoning.

        Raises:
            InsightServiceError: On timeout, API errors, or missing configuration
            InvalidInsightResponseError: When the reply fails schema validation
        """
        payload = await self._call_tool(
            kind="health_score",
            system_prompt=HEALTH_SYSTEM_PROMPT,
            user_prompt=HEALTH_USER_TEMPLATE.format(
                asset_summary=asset_summary or "No assets recorded.",
                debt_summary=debt_summary or "No debts.",
                average_monthly_income=average_monthly_income,
                average_monthly_expenses=average_monthly_expenses,
            ),
            tool_name="report_financial_health",
            tool_description="Report the financial health assessment.",
            payload_model=HealthScorePayload,
        )
        return FinancialHealthScore(
            score=payload.score,
            assessment=payload.assessment,
            positive_factors=list(payload.positive_factors),
            areas_for_improvement=list(payload.areas_for_improvement),
        )

    async def _call_tool(
        self,
        kind: str,
        system_prompt: str,
        user_prompt: str,
        tool_name: str,
        tool_description: str,
        payload_model: Type[PayloadT],
    ) -> PayloadT:
        if not self._client:
            raise InsightNotConfiguredError("Insight service not configured. Set INSIGHTS_API_KEY.")

        logger.info("Requesting insight", extra={"insight_kind": kind, "model": self.model})

        try:
            with insight_latency_histogram.labels(kind=kind).time():
                response = await self._client.chat.completions.create(
                    model=self.model,
                    temperature=self.temperature,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    tools=[
                        {
                            "type": "function",
                            "function": {
                                "name": tool_name,
                                "description": tool_description,
                                "parameters": payload_model.model_json_schema(),
                            },
                        }
                    ],
                    tool_choice={"type": "function", "function": {"name": tool_name}},
                )
        except APITimeoutError as e:
            raise InsightServiceError(f"Insight API timeout after {self.timeout}s") from e
        except APIStatusError as e:
            raise InsightServiceError(f"Insight API error: {e.status_code}") from e
        except APIConnectionError as e:
            raise InsightServiceError("Insight API unreachable") from e

        return self._parse_tool_arguments(response, payload_model)

    @staticmethod
    def _parse_tool_arguments(response: Any, payload_model: Type[PayloadT]) -> PayloadT:
        try:
            tool_calls = response.choices[0].message.tool_calls
        except (AttributeError, IndexError) as e:
            raise InvalidInsightResponseError("Insight response has no choices") from e

        if not tool_calls:
            raise InvalidInsightResponseError("Insight response did not include a tool call")

        try:
            arguments: Dict[str, Any] = json.loads(tool_calls[0].function.arguments)
            return payload_model.model_validate(arguments)
        except json.JSONDecodeError as e:
            raise InvalidInsightResponseError(f"Insight response is not valid JSON: {e}") from e
        except ValidationError as e:
            raise InvalidInsightResponseError(f"Insight response failed validation: {e}") from e
