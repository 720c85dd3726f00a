"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

CREDIT_CARD = "credit_card"
LOAN = "loan"
DEBT_ACCOUNT_TYPES = (CREDIT_CARD, LOAN)


@dataclass
class DebtAccount:
    """Interest-bearing balance owed on a credit card or loan"""

    id: str
    name: str
    type: str  # "credit_card" or "loan"
    current_balance: float
    interest_rate: Optional[float] = None  # APR percent, e.g. 18.99
    credit_limit: Optional[float] = None  # credit_card only
    minimum_payment: Optional[float] = None
    min_payment_percentage: Optional[float] = None  # credit_card only
    currency: Optional[str] = None

    @property
    def rate(self) -> float:
        """APR with an absent rate treated as 0"""
        return self.interest_rate or 0.0


@dataclass
class AccountPayoff:
    """Projected payoff for a single account"""

    account: DebtAccount
    months_to_payoff: int
    monthly_payment: float
    total_interest: float
    minimum_payment: float = 0.0


@dataclass
class PayoffPlan:
    """Month-by-month payoff projection across all accounts"""

    total_months: int
    monthly_payment: float
    account_payoffs: List[AccountPayoff] = field(default_factory=list)
    mode: str = "parallel"  # "parallel" or "waterfall"
    total_interest: float = 0.0
    minimum_payment: float = 0.0
    strategy: str = "avalanche"  # "avalanche" or "snowball"
    timeline: List[float] = field(default_factory=list)  # total balance after each month, index 0 = start


@dataclass
class Recommendation:
    """Actionable advice derived from the current account snapshot"""

    type: str  # high_interest | minimum_payment | balance_transfer | debt_to_income
    priority: str  # high | medium | low
    title: str
    description: str
    accounts: List[str]
    created_at: datetime
    potential_savings: Optional[float] = None


@dataclass
class SpendingRecord:
    """Categorized outflow used to size discretionary spending"""

    amount: float
    category: str
    date: date


@dataclass
class SavingsOpportunity:
    """Estimated yearly saving from acting on a debt insight"""

    category: str  # consolidation | spending | balance_transfer
    title: str
    description: str
    potential_savings: float
    priority: int  # 1 is most urgent


@dataclass
class DebtSummary:
    """Headline figures for the debt dashboard"""

    total_debt: float
    average_interest_rate: float
    weighted_average_interest_rate: float
    total_minimum_payment: float
    recommended_payment: float
    projected_months: int
    total_interest: float
    account_count: int
