"""Debt summary endpoints - headline figures, savings and the full dashboard"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from debt_advisor.api.v1.schemas import (
    DashboardResponse,
    PayoffPlanResponse,
    RecommendationSchema,
    SavingsOpportunitySchema,
    SummaryRequest,
    SummaryResponse,
    SummarySchema,
)
from debt_advisor.api.dependencies import get_request_id, get_settings
from debt_advisor.config import Settings
from debt_advisor.domain.aggregation import filter_by_currency
from debt_advisor.domain.exceptions import DomainException
from debt_advisor.domain.payoff import calculate_debt_payoff
from debt_advisor.domain.recommendations import generate_debt_recommendations
from debt_advisor.domain.savings import generate_savings_opportunities, total_potential_savings
from debt_advisor.domain.summary import build_debt_summary
from debt_advisor.infrastructure.database.session import get_db
from debt_advisor.infrastructure.database.repositories import AccountRepository
from debt_advisor.infrastructure.observability.metrics import record_payoff_plan, record_recommendations
from debt_advisor.utils.date_utils import format_payoff_duration

router = APIRouter()


@router.post("/summary", response_model=SummaryResponse)
def create_summary(
    request_body: SummaryRequest,
    request: Request,
    app_settings: Settings = Depends(get_settings),
):
    """Aggregate the supplied accounts and size their savings opportunities"""
    accounts = [a.to_domain() for a in request_body.accounts]
    spending = [s.to_domain() for s in request_body.spending]

    try:
        summary = build_debt_summary(
            accounts,
            request_body.monthly_budget,
            mode=request_body.mode or app_settings.default_payoff_mode,
            max_months=app_settings.max_projection_months,
            strategy=request_body.strategy or app_settings.default_payoff_strategy,
        )
    except DomainException as e:
        logging.warning(f"Summary rejected: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    opportunities = generate_savings_opportunities(accounts, spending)

    return SummaryResponse(
        summary=SummarySchema.from_domain(summary, format_payoff_duration(summary.projected_months)),
        savings_opportunities=[SavingsOpportunitySchema.from_domain(o) for o in opportunities],
        total_potential_savings=total_potential_savings(opportunities),
    )


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    currency: str | None = Query(None, description="Only accounts in this currency"),
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
):
    """
    Build the debt dashboard from a user's stored accounts.

    Accounts in other currencies are left out so totals stay in one unit.
    """
    currency = currency or app_settings.default_currency
    accounts = AccountRepository(db).get_debt_accounts(user_id)
    accounts = filter_by_currency(accounts, currency, app_settings.default_currency)
    mode = app_settings.default_payoff_mode

    try:
        plan = calculate_debt_payoff(
            accounts,
            mode=mode,
            max_months=app_settings.max_projection_months,
            strategy=app_settings.default_payoff_strategy,
        )
        summary = build_debt_summary(accounts, plan=plan)
    except DomainException as e:
        logging.warning(
            f"Dashboard projection failed: {e}",
            extra={"request_id": get_request_id(request), "user_id": user_id},
        )
        raise HTTPException(status_code=422, detail=str(e))

    recommendations = generate_debt_recommendations(accounts)
    record_payoff_plan(plan)
    record_recommendations(recommendations)

    return DashboardResponse(
        user_id=user_id,
        currency=currency,
        summary=SummarySchema.from_domain(summary, format_payoff_duration(summary.projected_months)),
        plan=PayoffPlanResponse.from_domain(plan, date.today()),
        recommendations=[RecommendationSchema.from_domain(r) for r in recommendations],
    )
