"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from fintrack.domain.models import AssetType, BudgetPeriod, Severity, TransactionType


class _FromDomain(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Transactions


class TransactionIn(BaseModel):
    """Transaction fields supplied by the client"""

    date: date
    description: str = ""
    amount: Decimal = Field(
        ..., ge=0, max_digits=14, decimal_places=2, description="Non-negative amount; direction comes from type"
    )
    type: TransactionType
    category: str = Field(..., min_length=1)


class TransactionReplaceItem(TransactionIn):
    """Ledger replacement entry; ids are kept when supplied"""

    id: Optional[str] = None


class TransactionBatchRequest(BaseModel):
    """Request body for POST /v1/transactions/batch"""

    transactions: List[TransactionIn] = Field(..., min_length=1)


class TransactionSchema(_FromDomain):
    id: str
    date: date
    description: str
    amount: Decimal
    type: TransactionType
    category: str


# Budgets


class BudgetIn(BaseModel):
    """Budget fields supplied by the client"""

    name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2, description="Allotted cap for one period")
    category: str = Field(..., min_length=1)
    period: BudgetPeriod = "monthly"
    custom_period_details: Optional[str] = None

    @model_validator(mode="after")
    def _custom_period_needs_details(self):
        if self.period == "custom" and not (self.custom_period_details or "").strip():
            raise ValueError("custom_period_details is required when period is 'custom'")
        return self


class BudgetReplaceItem(BudgetIn):
    id: Optional[str] = None


class BudgetSchema(_FromDomain):
    id: str
    name: str
    amount: Decimal
    category: str
    period: BudgetPeriod
    custom_period_details: Optional[str] = None


class PeriodOption(BaseModel):
    value: BudgetPeriod
    label: str
    auto_calculated: bool


class BudgetOptionsResponse(BaseModel):
    """Response for GET /v1/budgets/options"""

    periods: List[PeriodOption]
    categories: List[str]


class BudgetProgressSchema(BaseModel):
    """Derived progress for one budget"""

    budget: BudgetSchema
    spent_amount: Decimal
    is_auto_calculated: bool
    percentage: Optional[float] = None
    severity: Severity
    overspent: bool
    period_start: Optional[date] = None
    period_end: Optional[date] = None


class BudgetProgressResponse(BaseModel):
    """Response for GET /v1/budgets/progress"""

    reference_date: date
    budgets: List[BudgetProgressSchema]


# Assets, debts, goals


class AssetIn(BaseModel):
    name: str = Field(..., min_length=1)
    type: AssetType
    value: Decimal = Field(..., ge=0, max_digits=16, decimal_places=2)


class AssetSchema(_FromDomain):
    id: str
    name: str
    type: AssetType
    value: Decimal
    last_updated: date


class DebtIn(BaseModel):
    name: str = Field(..., min_length=1)
    total_amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    amount_paid: Decimal = Field(Decimal("0"), ge=0, max_digits=14, decimal_places=2)
    interest_rate: Optional[float] = Field(None, ge=0)
    minimum_payment: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)

    @model_validator(mode="after")
    def _paid_within_total(self):
        if self.amount_paid > self.total_amount:
            raise ValueError("amount_paid cannot exceed total_amount")
        return self


class DebtReplaceItem(DebtIn):
    id: Optional[str] = None


class DebtSchema(_FromDomain):
    id: str
    name: str
    total_amount: Decimal
    amount_paid: Decimal
    interest_rate: Optional[float] = None
    minimum_payment: Optional[Decimal] = None


class GoalIn(BaseModel):
    name: str = Field(..., min_length=1)
    target_amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    current_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=14, decimal_places=2)
    target_date: Optional[date] = None
    icon: Optional[str] = None

    @model_validator(mode="after")
    def _current_within_target(self):
        if self.current_amount > self.target_amount:
            raise ValueError("current_amount cannot exceed target_amount")
        return self


class GoalReplaceItem(GoalIn):
    id: Optional[str] = None


class GoalSchema(_FromDomain):
    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    target_date: Optional[date] = None
    icon: Optional[str] = None


class AmountRequest(BaseModel):
    """Request body for debt payments and goal contributions"""

    amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)


# Reports


class CategoryTotalSchema(_FromDomain):
    category: str
    total: Decimal
    share: float


class SpendingByCategoryResponse(BaseModel):
    """Response for GET /v1/reports/spending-by-category"""

    period_start: date
    period_end: date
    total: Decimal
    categories: List[CategoryTotalSchema]


class CashFlowResponse(BaseModel):
    """Response for GET /v1/reports/cash-flow"""

    year: int
    month: int
    income: Decimal
    expenses: Decimal
    net: Decimal


class ProgressItemSchema(_FromDomain):
    id: str
    name: str
    current: Decimal
    target: Decimal
    percentage: float


class NetWorthResponse(BaseModel):
    """Response for GET /v1/reports/net-worth"""

    total_assets: Decimal
    assets_by_type: Dict[str, Decimal]
    total_debt_remaining: Decimal
    net_worth: Decimal
    debts: List[ProgressItemSchema]
    goals: List[ProgressItemSchema]


# Insights


class SavingsOpportunitiesRequest(BaseModel):
    """Request body for POST /v1/insights/savings-opportunities; omitted parts come from stored records"""

    transaction_history: Optional[str] = None
    asset_summary: Optional[str] = None


class SavingsOpportunitySchema(_FromDomain):
    category: str
    description: str
    potential_savings: str


class SavingsOpportunitiesResponse(BaseModel):
    opportunities: List[SavingsOpportunitySchema]


class HealthScoreRequest(BaseModel):
    """Request body for POST /v1/insights/health-score"""

    average_monthly_income: Decimal = Field(..., gt=0)
    average_monthly_expenses: Decimal = Field(..., ge=0)
    asset_summary: Optional[str] = None
    debt_summary: Optional[str] = None


class HealthScoreResponse(_FromDomain):
    score: float = Field(..., ge=0, le=1000)
    assessment: str
    positive_factors: List[str]
    areas_for_improvement: List[str]
