"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Literal, Optional

TransactionType = Literal["income", "expense"]
BudgetPeriod = Literal["monthly", "weekly", "bi-weekly", "custom"]
Severity = Literal["normal", "warning", "critical", "manual"]
AssetType = Literal["bank", "stock", "crypto", "property", "mutualfund"]

BUDGET_PERIOD_LABELS = {
    "monthly": "Monthly",
    "bi-weekly": "Bi-Weekly (Manual Tracking)",
    "weekly": "Weekly",
    "custom": "Custom (Manual Tracking)",
}

BUDGET_CATEGORIES = [
    "Groceries",
    "Dining Out",
    "Transport",
    "Entertainment",
    "Utilities",
    "Shopping",
    "Health",
    "Other",
]


@dataclass
class Transaction:
    """Manually recorded ledger entry"""

    id: str
    date: date
    description: str
    amount: Decimal  # always >= 0, direction is carried by type
    type: str  # "income" or "expense"
    category: str


@dataclass
class Budget:
    """Spending cap for one category over a recurring period"""

    id: str
    name: str
    amount: Decimal
    category: str
    period: str  # "monthly", "weekly", "bi-weekly" or "custom"
    custom_period_details: Optional[str] = None


@dataclass(frozen=True)
class DateInterval:
    """Inclusive calendar-date window"""

    start: date
    end: date

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass
class SpendResult:
    """Amount spent against a budget for its current cycle"""

    spent_amount: Decimal
    is_auto_calculated: bool
    interval: Optional[DateInterval] = None


@dataclass
class BudgetProgress:
    """Derived per-evaluation view of a budget, never stored"""

    budget: Budget
    spent_amount: Decimal
    is_auto_calculated: bool
    percentage: Optional[float]
    severity: str
    interval: Optional[DateInterval] = None

    @property
    def overspent(self) -> bool:
        return self.is_auto_calculated and self.spent_amount > self.budget.amount


@dataclass
class Asset:
    id: str
    name: str
    type: str
    value: Decimal
    last_updated: date


@dataclass
class Debt:
    id: str
    name: str
    total_amount: Decimal
    amount_paid: Decimal
    interest_rate: Optional[float] = None
    minimum_payment: Optional[Decimal] = None

    @property
    def remaining(self) -> Decimal:
        return self.total_amount - self.amount_paid


@dataclass
class Goal:
    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    target_date: Optional[date] = None
    icon: Optional[str] = None


@dataclass
class CategoryTotal:
    """Expense total for one category within a report window"""

    category: str
    total: Decimal
    share: float  # percent of the window's total expenses


@dataclass
class SpendingReport:
    interval: DateInterval
    total: Decimal
    categories: List[CategoryTotal] = field(default_factory=list)


@dataclass
class CashFlow:
    interval: DateInterval
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass
class ProgressItem:
    """Completion of a debt payoff or savings goal"""

    id: str
    name: str
    current: Decimal
    target: Decimal
    percentage: float


@dataclass
class NetWorthSummary:
    total_assets: Decimal
    assets_by_type: dict
    total_debt_remaining: Decimal
    debts: List[ProgressItem]
    goals: List[ProgressItem]

    @property
    def net_worth(self) -> Decimal:
        return self.total_assets - self.total_debt_remaining


@dataclass
class SavingsOpportunity:
    category: str
    description: str
    potential_savings: str


@dataclass
class FinancialHealthScore:
    score: float
    assessment: str
    positive_factors: List[str]
    areas_for_improvement: List[str]
