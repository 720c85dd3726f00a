"""Debt recommendation rules - advisory output that never blocks the dashboard"""

import logging
import math
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence
from debt_advisor.domain.models import DebtAccount, Recommendation, CREDIT_CARD

logger = logging.getLogger(__name__)

HIGH_INTEREST = "high_interest"
MINIMUM_PAYMENT = "minimum_payment"
BALANCE_TRANSFER = "balance_transfer"
DEBT_TO_INCOME = "debt_to_income"  # reserved, no rule produces it yet
RECOMMENDATION_TYPES = (HIGH_INTEREST, MINIMUM_PAYMENT, BALANCE_TRANSFER, DEBT_TO_INCOME)

PRIORITIES = ("high", "medium", "low")

UTILIZATION_THRESHOLD = 30.0  # percent of limit
TRANSFER_APR_THRESHOLD = 15.0
TRANSFER_FEE_RATE = 3.0  # typical balance-transfer cost, percent
TRANSFER_MIN_SAVINGS = 500.0

Rule = Callable[[Sequence[DebtAccount], datetime], List[Recommendation]]


def _finite(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def _safe_rate(account: DebtAccount) -> float:
    """APR for rule evaluation; malformed rates count as 0 so they never win"""
    rate = account.interest_rate
    return rate if _finite(rate) else 0.0


def _format_rate(rate: float) -> str:
    return f"{rate:g}"


def high_interest_rule(accounts: Sequence[DebtAccount], now: datetime) -> List[Recommendation]:
    """Point at the single highest-APR account"""
    if not accounts:
        return []
    top = sorted(accounts, key=_safe_rate, reverse=True)[0]
    rate = _safe_rate(top)
    if rate <= 0:
        return []
    return [
        Recommendation(
            type=HIGH_INTEREST,
            priority="high",
            title="Focus on High Interest Debt",
            description=(
                f"Prioritize paying off {top.name} first as it has the highest "
                f"interest rate at {_format_rate(rate)}%."
            ),
            accounts=[top.id],
            created_at=now,
        )
    ]


def utilization_rule(accounts: Sequence[DebtAccount], now: datetime) -> List[Recommendation]:
    """One warning per credit card above 30% of its limit"""
    recommendations = []
    for card in accounts:
        if card.type != CREDIT_CARD or card.credit_limit is None:
            continue
        if not _finite(card.credit_limit) or card.credit_limit <= 0 or not _finite(card.current_balance):
            logger.debug("Skipping utilization check for malformed account", extra={"account_id": card.id})
            continue

        utilization = card.current_balance / card.credit_limit * 100
        if utilization > UTILIZATION_THRESHOLD:
            recommendations.append(
                Recommendation(
                    type=MINIMUM_PAYMENT,
                    priority="high",
                    title="High Credit Utilization",
                    description=(
                        f"Your {card.name} is at {utilization:.1f}% utilization. Try to keep it "
                        f"below 30% to maintain a good credit score."
                    ),
                    accounts=[card.id],
                    created_at=now,
                )
            )
    return recommendations


def balance_transfer_rule(accounts: Sequence[DebtAccount], now: datetime) -> List[Recommendation]:
    """
    Suggest moving high-APR card balances to an intro-rate card.

    Requires more than one credit card overall, at least one above 15% APR,
    and estimated savings over the transfer fee above $500.
    """
    cards = [a for a in accounts if a.type == CREDIT_CARD]
    if len(cards) <= 1:
        return []

    high_rate_cards = [
        c for c in cards if _finite(c.current_balance) and _safe_rate(c) > TRANSFER_APR_THRESHOLD
    ]
    if not high_rate_cards:
        return []

    potential_savings = math.fsum(
        c.current_balance * (_safe_rate(c) - TRANSFER_FEE_RATE) / 100 for c in high_rate_cards
    )
    if potential_savings <= TRANSFER_MIN_SAVINGS:
        return []

    return [
        Recommendation(
            type=BALANCE_TRANSFER,
            priority="medium",
            title="Consider Balance Transfer",
            description=(
                "You may save money by transferring balances from high-interest cards "
                "to a card with a 0% intro APR."
            ),
            accounts=[c.id for c in high_rate_cards],
            created_at=now,
            potential_savings=round(potential_savings, 2),
        )
    ]


# Evaluation order is the output order
DEFAULT_RULES: tuple[Rule, ...] = (
    high_interest_rule,
    utilization_rule,
    balance_transfer_rule,
)


def generate_debt_recommendations(
    accounts: Sequence[DebtAccount],
    now: datetime | None = None,
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> List[Recommendation]:
    """
    Main entry point: evaluate every rule against the account snapshot.

    Rules are stateless and independent; the same accounts always yield the
    same recommendations in the same order. Every recommendation from one
    call shares a single created_at.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    recommendations: List[Recommendation] = []
    for rule in rules:
        recommendations.extend(rule(accounts, now))
    return recommendations
