"""Savings opportunities from consolidation, spending cuts and balance transfers"""

import math
from typing import Dict, Iterable, List, Sequence
from debt_advisor.domain.models import DebtAccount, SavingsOpportunity, SpendingRecord, CREDIT_CARD
from debt_advisor.domain.aggregation import total_minimum_payment

CONSOLIDATION_APR_THRESHOLD = 15.0
TRANSFER_FEE_RATE = 3.0
TRANSFER_MIN_SAVINGS = 500.0
DISCRETIONARY_CATEGORIES = ("entertainment", "dining", "shopping")
SPENDING_CUT_RATIO = 0.2  # suggest trimming discretionary spend by a fifth


def _usable(account: DebtAccount) -> bool:
    return (
        account.current_balance is not None
        and math.isfinite(account.current_balance)
        and math.isfinite(account.rate)
    )


def monthly_spending_by_category(
    spending: Iterable[SpendingRecord], months: int = 3
) -> Dict[str, float]:
    """Average monthly spend per category over the window"""
    totals: Dict[str, float] = {}
    for record in spending:
        if record.amount is None or not math.isfinite(record.amount):
            continue
        totals[record.category] = totals.get(record.category, 0.0) + record.amount
    return {category: total / months for category, total in totals.items()}


def generate_savings_opportunities(
    accounts: Sequence[DebtAccount],
    spending: Iterable[SpendingRecord] = (),
    months: int = 3,
) -> List[SavingsOpportunity]:
    """
    Estimate what the user could save by acting on their debts.

    Rules:
    - Consolidation: APR above 15% could be refinanced down to 15%
    - Spending: discretionary spend above half the minimum payments, cut by 20%
    - Balance transfer: card interest above a 3% transfer fee, when worth over $500
    """
    if months <= 0:
        raise ValueError("months must be positive")

    usable = [a for a in accounts if _usable(a)]
    opportunities: List[SavingsOpportunity] = []

    high_interest = [a for a in usable if a.rate > CONSOLIDATION_APR_THRESHOLD]
    if high_interest:
        opportunities.append(
            SavingsOpportunity(
                category="consolidation",
                title="Consider Debt Consolidation",
                description=(
                    "You have high-interest debts that could be consolidated at a lower rate, "
                    "potentially saving you money on interest."
                ),
                potential_savings=math.fsum(
                    a.current_balance * (a.rate - CONSOLIDATION_APR_THRESHOLD) / 100
                    for a in high_interest
                ),
                priority=1,
            )
        )

    monthly_payments = total_minimum_payment(usable)
    by_category = monthly_spending_by_category(spending, months)
    discretionary = math.fsum(by_category.get(c, 0.0) for c in DISCRETIONARY_CATEGORIES)
    if discretionary > monthly_payments * 0.5:
        opportunities.append(
            SavingsOpportunity(
                category="spending",
                title="Reduce Discretionary Spending",
                description=(
                    "Your discretionary spending is high relative to your debt payments. Consider "
                    "reducing non-essential expenses to accelerate debt payoff."
                ),
                potential_savings=discretionary * SPENDING_CUT_RATIO,
                priority=2,
            )
        )

    cards = [a for a in usable if a.type == CREDIT_CARD]
    if cards:
        transfer_savings = math.fsum(
            c.current_balance * (c.rate - TRANSFER_FEE_RATE) / 100 for c in cards
        )
        if transfer_savings > TRANSFER_MIN_SAVINGS:
            opportunities.append(
                SavingsOpportunity(
                    category="balance_transfer",
                    title="Balance Transfer Opportunity",
                    description=(
                        "You could save money by transferring high-interest credit card balances "
                        "to a card with a 0% introductory rate."
                    ),
                    potential_savings=transfer_savings,
                    priority=1,
                )
            )

    return sorted(opportunities, key=lambda o: o.priority)


def total_potential_savings(opportunities: Iterable[SavingsOpportunity]) -> float:
    return math.fsum(o.potential_savings for o in opportunities)
