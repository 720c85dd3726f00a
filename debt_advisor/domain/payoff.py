"""Debt payoff projection - avalanche or snowball ordering with parallel or waterfall allocation"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Tuple
from debt_advisor.domain.models import AccountPayoff, DebtAccount, PayoffPlan
from debt_advisor.domain.exceptions import InvalidBudgetError, PayoffNotConvergingError
from debt_advisor.domain.aggregation import minimum_payment, total_debt, total_minimum_payment

PARALLEL = "parallel"
WATERFALL = "waterfall"
PAYOFF_MODES = (PARALLEL, WATERFALL)

AVALANCHE = "avalanche"  # highest APR first
SNOWBALL = "snowball"  # smallest balance first
PAYOFF_STRATEGIES = (AVALANCHE, SNOWBALL)

# Stand-in for a realistic minimum when the caller gives no budget
DEFAULT_PAYMENT_RATIO = 0.03
DEFAULT_MAX_MONTHS = 600


def _round_cents(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _check_budget(monthly_budget: float) -> None:
    if monthly_budget is None or not math.isfinite(monthly_budget) or monthly_budget <= 0:
        raise InvalidBudgetError(f"Monthly budget must be a positive amount, got {monthly_budget!r}")


def prioritize_accounts(
    accounts: Sequence[DebtAccount], strategy: str = AVALANCHE
) -> List[DebtAccount]:
    """
    Order accounts for repayment. Ties keep their input order.

    avalanche: APR, highest first
    snowball: balance, smallest first
    """
    if strategy == SNOWBALL:
        return sorted(accounts, key=lambda a: a.current_balance)
    return sorted(accounts, key=lambda a: a.rate, reverse=True)


def _parallel_payoffs(
    ordered: List[DebtAccount], budget: float, max_months: int
) -> Tuple[List[AccountPayoff], List[float]]:
    """
    Each account is paid the full budget independently.

    This is an estimate, not an allocation: the budget is not split or rolled
    over between accounts, and interest is simple (non-compounding). The
    timeline tracks remaining principal only.

    Raises:
        PayoffNotConvergingError: Budget too small to clear an account within max_months
    """
    payoffs = []
    for account in ordered:
        periods = account.current_balance / budget
        if not math.isfinite(periods) or periods > max_months:
            raise PayoffNotConvergingError(
                f"{account.name} would not be cleared within {max_months} months "
                f"at {budget!r} per month"
            )
        months = math.ceil(periods)
        payoffs.append(
            AccountPayoff(
                account=account,
                months_to_payoff=months,
                monthly_payment=budget,
                total_interest=account.rate * account.current_balance * (months / 12),
                minimum_payment=minimum_payment(account),
            )
        )

    horizon = max((p.months_to_payoff for p in payoffs), default=0)
    timeline = [
        math.fsum(max(a.current_balance - budget * month, 0.0) for a in ordered)
        for month in range(horizon + 1)
    ]
    return payoffs, timeline


def _waterfall_payoffs(
    ordered: List[DebtAccount], budget: float, max_months: int
) -> Tuple[List[AccountPayoff], List[float]]:
    """
    Simulate month-by-month repayment in priority order.

    Every open account accrues monthly interest and receives its minimum; the
    rest of the budget goes to the first open account in the order given. Once
    an account clears, its share flows down to the next one.

    Returns:
        Per-account payoffs and the total balance left after each month,
        starting with the opening balance

    Raises:
        InvalidBudgetError: Budget does not cover the minimum payments
        PayoffNotConvergingError: Balances stop shrinking or outlive max_months
    """
    minimums = [minimum_payment(a) for a in ordered]
    required = math.fsum(minimums)
    if budget + 0.005 < required:
        raise InvalidBudgetError(
            f"Monthly budget {budget:.2f} does not cover minimum payments of {required:.2f}"
        )

    balances = [a.current_balance for a in ordered]
    interest = [0.0] * len(ordered)
    months = [0] * len(ordered)
    first_payments = [0.0] * len(ordered)

    month = 0
    previous_total = math.fsum(balances)
    timeline = [_round_cents(previous_total)]
    stagnant_periods = 0

    while any(b > 0 for b in balances):
        month += 1
        if month > max_months:
            raise PayoffNotConvergingError(f"Debts not cleared within {max_months} months")

        open_accounts = [i for i, b in enumerate(balances) if b > 0]
        payments = [0.0] * len(ordered)

        for i in open_accounts:
            accrued = _round_cents(balances[i] * ordered[i].rate / 1200)
            interest[i] += accrued
            balances[i] += accrued

        pool = budget
        for i in open_accounts:
            paid = max(min(minimums[i], balances[i], pool), 0.0)
            balances[i] -= paid
            payments[i] += paid
            pool -= paid

        # Extra goes down the priority list until it runs out
        for i in open_accounts:
            if pool <= 0:
                break
            paid = min(pool, balances[i])
            balances[i] -= paid
            payments[i] += paid
            pool -= paid

        for i in open_accounts:
            balances[i] = _round_cents(balances[i])
            if balances[i] <= 0:
                balances[i] = 0.0
                months[i] = month

        if month == 1:
            first_payments = [_round_cents(p) for p in payments]

        # Progress guard: a budget that only services interest never finishes
        total_balance = math.fsum(balances)
        timeline.append(_round_cents(total_balance))
        if total_balance >= previous_total - 0.01:
            stagnant_periods += 1
        else:
            stagnant_periods = 0
        if stagnant_periods >= 3:
            raise PayoffNotConvergingError("Payoff schedule did not converge; payments too low")
        previous_total = total_balance

    payoffs = [
        AccountPayoff(
            account=account,
            months_to_payoff=months[i],
            monthly_payment=first_payments[i],
            total_interest=_round_cents(interest[i]),
            minimum_payment=minimums[i],
        )
        for i, account in enumerate(ordered)
    ]
    return payoffs, timeline


def calculate_debt_payoff(
    accounts: Sequence[DebtAccount],
    monthly_budget: Optional[float] = None,
    mode: str = PARALLEL,
    max_months: int = DEFAULT_MAX_MONTHS,
    strategy: str = AVALANCHE,
) -> PayoffPlan:
    """
    Main entry point: project how long the accounts take to pay off.

    Args:
        accounts: Debt accounts to project; the caller selects the subset
        monthly_budget: Total monthly payment (default: 3% of total debt)
        mode: "parallel" gives every account the flat budget independently;
            "waterfall" splits the budget across accounts month by month
        max_months: Projection horizon in months
        strategy: "avalanche" (highest APR first) or "snowball"
            (smallest balance first)

    Returns:
        PayoffPlan with account payoffs in repayment order and the
        month-by-month balance timeline

    Raises:
        InvalidBudgetError: Explicit budget is zero, negative, or not finite
        PayoffNotConvergingError: Debts cannot be cleared within max_months
        InvalidAccountDataError: A balance is negative or a number is not finite
    """
    if mode not in PAYOFF_MODES:
        raise ValueError(f"Invalid debt payoff mode: {mode!r}")
    if strategy not in PAYOFF_STRATEGIES:
        raise ValueError(f"Invalid debt payoff strategy: {strategy!r}")
    if monthly_budget is not None:
        _check_budget(monthly_budget)

    if not accounts:
        return PayoffPlan(
            total_months=0,
            monthly_payment=monthly_budget if monthly_budget is not None else 0.0,
            account_payoffs=[],
            mode=mode,
            strategy=strategy,
        )

    debt = total_debt(accounts)
    ordered = prioritize_accounts(accounts, strategy)
    required = total_minimum_payment(accounts)

    if monthly_budget is None:
        if debt == 0:
            # Nothing owed: settled plan rather than a zero-budget error
            return PayoffPlan(
                total_months=0,
                monthly_payment=0.0,
                account_payoffs=[
                    AccountPayoff(a, 0, 0.0, 0.0, minimum_payment(a)) for a in ordered
                ],
                mode=mode,
                minimum_payment=required,
                strategy=strategy,
                timeline=[0.0],
            )
        monthly_budget = DEFAULT_PAYMENT_RATIO * debt
        if mode == WATERFALL:
            monthly_budget = max(monthly_budget, required)

    if mode == WATERFALL:
        payoffs, timeline = _waterfall_payoffs(ordered, monthly_budget, max_months)
    else:
        payoffs, timeline = _parallel_payoffs(ordered, monthly_budget, max_months)

    return PayoffPlan(
        total_months=max(p.months_to_payoff for p in payoffs),
        monthly_payment=monthly_budget,
        account_payoffs=payoffs,
        mode=mode,
        total_interest=math.fsum(p.total_interest for p in payoffs),
        minimum_payment=required,
        strategy=strategy,
        timeline=timeline,
    )
