"""Date manipulation utilities"""

from datetime import date
from debt_advisor.domain.models import PayoffPlan


def add_months(from_date: date, months: int) -> date:
    """First day of the month `months` after from_date"""
    month_index = from_date.month - 1 + months
    return date(from_date.year + month_index // 12, month_index % 12 + 1, 1)


def projected_payoff_date(plan: PayoffPlan, start: date | None = None) -> date:
    """Month in which the last account in the plan clears"""
    if start is None:
        start = date.today()
    return add_months(start, plan.total_months)


def format_payoff_duration(months: int) -> str:
    """Human-readable payoff horizon, e.g. "2 years, 3 months" """
    if months <= 0:
        return "No payment needed"

    years, remaining_months = divmod(months, 12)
    if years == 0:
        return f"{remaining_months} months"
    if remaining_months == 0:
        return f"{years} years"
    return f"{years} years, {remaining_months} months"
