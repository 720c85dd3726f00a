"""Debt aggregation - totals, average rates and minimum payments"""

import math
from typing import List, Sequence
from debt_advisor.domain.models import DebtAccount, CREDIT_CARD
from debt_advisor.domain.exceptions import EmptyInputError, InvalidAccountDataError


def validate_accounts(accounts: Sequence[DebtAccount]) -> None:
    """
    Reject balances and rates that would poison downstream arithmetic.

    Raises:
        InvalidAccountDataError: On a negative or non-finite balance, or a non-finite rate
    """
    for account in accounts:
        balance = account.current_balance
        if balance is None or not math.isfinite(balance) or balance < 0:
            raise InvalidAccountDataError(
                f"Account {account.id} has invalid balance: {balance!r}"
            )
        if not math.isfinite(account.rate):
            raise InvalidAccountDataError(
                f"Account {account.id} has invalid interest rate: {account.interest_rate!r}"
            )


def total_debt(accounts: Sequence[DebtAccount]) -> float:
    """Sum of current balances. Callers pass only the accounts they want counted."""
    validate_accounts(accounts)
    return math.fsum(a.current_balance for a in accounts)


def average_interest_rate(accounts: Sequence[DebtAccount]) -> float:
    """
    Arithmetic mean APR, absent rates counting as 0.

    Raises:
        EmptyInputError: The mean of no accounts is undefined
    """
    if not accounts:
        raise EmptyInputError("Cannot average interest rate over zero accounts")
    validate_accounts(accounts)
    return math.fsum(a.rate for a in accounts) / len(accounts)


def weighted_average_interest_rate(accounts: Sequence[DebtAccount]) -> float:
    """
    Balance-weighted mean APR.

    A set with zero outstanding balance accrues nothing, so its weighted rate is 0.

    Raises:
        EmptyInputError: The mean of no accounts is undefined
    """
    if not accounts:
        raise EmptyInputError("Cannot average interest rate over zero accounts")
    debt = total_debt(accounts)
    if debt == 0:
        return 0.0
    return math.fsum(a.rate * a.current_balance for a in accounts) / debt


def minimum_payment(account: DebtAccount) -> float:
    """
    Contractual minimum for one account.

    Credit cards with a percentage minimum pay the larger of that share of the
    balance and the fixed minimum amount.
    """
    fixed = account.minimum_payment or 0.0
    if account.type == CREDIT_CARD and account.min_payment_percentage:
        return max(account.min_payment_percentage / 100 * account.current_balance, fixed)
    return fixed


def total_minimum_payment(accounts: Sequence[DebtAccount]) -> float:
    return math.fsum(minimum_payment(a) for a in accounts)


def filter_by_currency(
    accounts: Sequence[DebtAccount], currency: str, default_currency: str = "USD"
) -> List[DebtAccount]:
    """Keep accounts denominated in currency; untagged accounts count as default_currency"""
    return [a for a in accounts if (a.currency or default_currency) == currency]
