"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from debt_advisor.domain.models import (
    AccountPayoff,
    DebtAccount,
    DebtSummary,
    PayoffPlan,
    Recommendation,
    SavingsOpportunity,
    SpendingRecord,
)
from debt_advisor.utils.date_utils import add_months, projected_payoff_date

PayoffMode = Literal["parallel", "waterfall"]
PayoffStrategy = Literal["avalanche", "snowball"]


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case, emits camelCase"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DebtAccountSchema(CamelModel):
    """Debt account as supplied by the caller"""

    id: str = Field(..., min_length=1)
    name: str
    type: Literal["credit_card", "loan"]
    current_balance: float = Field(..., ge=0, description="Amount owed")
    interest_rate: Optional[float] = Field(None, ge=0, description="APR percent, e.g. 18.99")
    credit_limit: Optional[float] = None
    minimum_payment: Optional[float] = Field(
        None,
        validation_alias=AliasChoices(
            "minimumPayment", "minimum_payment", "minPaymentAmount", "min_payment_amount"
        ),
        serialization_alias="minimumPayment",
    )
    min_payment_percentage: Optional[float] = None
    currency: Optional[str] = None

    def to_domain(self) -> DebtAccount:
        return DebtAccount(**self.model_dump())

    @classmethod
    def from_domain(cls, account: DebtAccount) -> "DebtAccountSchema":
        return cls(**vars(account))


class SpendingRecordSchema(CamelModel):
    """Categorized outflow"""

    amount: float
    category: str
    date: date

    def to_domain(self) -> SpendingRecord:
        return SpendingRecord(amount=self.amount, category=self.category, date=self.date)


class PayoffRequest(CamelModel):
    """Request body for POST /v1/payoff"""

    accounts: List[DebtAccountSchema]
    monthly_budget: Optional[float] = Field(None, description="Defaults to 3% of total debt")
    mode: Optional[PayoffMode] = None
    strategy: Optional[PayoffStrategy] = None


class AccountPayoffSchema(CamelModel):
    account: DebtAccountSchema
    months_to_payoff: int
    monthly_payment: float
    minimum_payment: float
    total_interest: float

    @classmethod
    def from_domain(cls, payoff: AccountPayoff) -> "AccountPayoffSchema":
        return cls(
            account=DebtAccountSchema.from_domain(payoff.account),
            months_to_payoff=payoff.months_to_payoff,
            monthly_payment=payoff.monthly_payment,
            minimum_payment=payoff.minimum_payment,
            total_interest=payoff.total_interest,
        )


class BalancePointSchema(CamelModel):
    """Total balance left at the start of a projected month"""

    month: int
    date: date
    balance: float


class PayoffPlanResponse(CamelModel):
    """Response for POST /v1/payoff"""

    total_months: int
    monthly_payment: float
    minimum_payment: float
    total_interest: float
    mode: PayoffMode
    strategy: PayoffStrategy
    payoff_date: date
    account_payoffs: List[AccountPayoffSchema]
    timeline: List[BalancePointSchema]

    @classmethod
    def from_domain(cls, plan: PayoffPlan, start: date) -> "PayoffPlanResponse":
        """Dates in the response count calendar months from start"""
        return cls(
            total_months=plan.total_months,
            monthly_payment=plan.monthly_payment,
            minimum_payment=plan.minimum_payment,
            total_interest=plan.total_interest,
            mode=plan.mode,
            strategy=plan.strategy,
            payoff_date=projected_payoff_date(plan, start),
            account_payoffs=[AccountPayoffSchema.from_domain(p) for p in plan.account_payoffs],
            timeline=[
                BalancePointSchema(month=month, date=add_months(start, month), balance=balance)
                for month, balance in enumerate(plan.timeline)
            ],
        )


class RecommendationRequest(CamelModel):
    """Request body for POST /v1/recommendations"""

    accounts: List[DebtAccountSchema]


class RefreshRequest(CamelModel):
    """Request body for POST /v1/recommendations/refresh"""

    user_id: str = Field(..., min_length=1, description="User identifier")


class RecommendationSchema(CamelModel):
    """Single recommendation"""

    type: Literal["high_interest", "minimum_payment", "balance_transfer", "debt_to_income"]
    priority: Literal["high", "medium", "low"]
    title: str
    description: str
    accounts: List[str]
    created_at: datetime
    potential_savings: Optional[float] = None
    implemented: bool = False

    @classmethod
    def from_domain(cls, rec: Recommendation) -> "RecommendationSchema":
        return cls(**vars(rec))


class RecommendationListResponse(CamelModel):
    recommendations: List[RecommendationSchema]


class SavingsOpportunitySchema(CamelModel):
    category: str
    title: str
    description: str
    potential_savings: float
    priority: int

    @classmethod
    def from_domain(cls, opportunity: SavingsOpportunity) -> "SavingsOpportunitySchema":
        return cls(**vars(opportunity))


class SummaryRequest(CamelModel):
    """Request body for POST /v1/summary"""

    accounts: List[DebtAccountSchema]
    monthly_budget: Optional[float] = None
    mode: Optional[PayoffMode] = None
    strategy: Optional[PayoffStrategy] = None
    spending: List[SpendingRecordSchema] = Field(default_factory=list)


class SummarySchema(CamelModel):
    total_debt: float
    average_interest_rate: float
    weighted_average_interest_rate: float
    total_minimum_payment: float
    recommended_payment: float
    projected_months: int
    total_interest: float
    account_count: int
    payoff_duration: str

    @classmethod
    def from_domain(cls, summary: DebtSummary, payoff_duration: str) -> "SummarySchema":
        return cls(**vars(summary), payoff_duration=payoff_duration)


class SummaryResponse(CamelModel):
    """Response for POST /v1/summary"""

    summary: SummarySchema
    savings_opportunities: List[SavingsOpportunitySchema]
    total_potential_savings: float


class DashboardResponse(CamelModel):
    """Response for GET /v1/dashboard"""

    user_id: str
    currency: str
    summary: SummarySchema
    plan: PayoffPlanResponse
    recommendations: List[RecommendationSchema]


class HistoryEntryRequest(CamelModel):
    """Request body for POST /v1/accounts/{account_id}/history"""

    user_id: str = Field(..., min_length=1)
    balance: float = Field(..., ge=0)


class HistoryItem(CamelModel):
    date: datetime
    balance: float


class HistoryResponse(CamelModel):
    """Response for GET /v1/accounts/{account_id}/history"""

    user_id: str
    account_id: str
    history: List[HistoryItem]
