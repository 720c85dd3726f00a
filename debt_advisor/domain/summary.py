"""Dashboard summary roll-up"""

from typing import Optional, Sequence
from debt_advisor.domain.models import DebtAccount, DebtSummary, PayoffPlan
from debt_advisor.domain.aggregation import (
    average_interest_rate,
    total_debt,
    total_minimum_payment,
    weighted_average_interest_rate,
)
from debt_advisor.domain.payoff import AVALANCHE, PARALLEL, DEFAULT_MAX_MONTHS, calculate_debt_payoff


def build_debt_summary(
    accounts: Sequence[DebtAccount],
    monthly_budget: Optional[float] = None,
    mode: str = PARALLEL,
    max_months: int = DEFAULT_MAX_MONTHS,
    strategy: str = AVALANCHE,
    plan: Optional[PayoffPlan] = None,
) -> DebtSummary:
    """
    Combine aggregates and the payoff plan into headline figures.

    A plan already computed for the same accounts can be passed in; the
    budget, mode, horizon and strategy arguments are then ignored.

    Empty input reports zeros instead of raising, since there is nothing to show.
    """
    if plan is None:
        plan = calculate_debt_payoff(
            accounts, monthly_budget, mode=mode, max_months=max_months, strategy=strategy
        )

    if not accounts:
        return DebtSummary(
            total_debt=0.0,
            average_interest_rate=0.0,
            weighted_average_interest_rate=0.0,
            total_minimum_payment=0.0,
            recommended_payment=plan.monthly_payment,
            projected_months=0,
            total_interest=0.0,
            account_count=0,
        )

    return DebtSummary(
        total_debt=total_debt(accounts),
        average_interest_rate=average_interest_rate(accounts),
        weighted_average_interest_rate=weighted_average_interest_rate(accounts),
        total_minimum_payment=total_minimum_payment(accounts),
        recommended_payment=plan.monthly_payment,
        projected_months=plan.total_months,
        total_interest=plan.total_interest,
        account_count=len(accounts),
    )
