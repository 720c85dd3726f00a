"""POST /v1/payoff - Debt payoff projection endpoint"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from debt_advisor.api.v1.schemas import PayoffRequest, PayoffPlanResponse
from debt_advisor.api.dependencies import get_request_id, get_settings
from debt_advisor.config import Settings
from debt_advisor.domain.payoff import calculate_debt_payoff
from debt_advisor.domain.exceptions import InvalidAccountDataError, InvalidBudgetError
from debt_advisor.infrastructure.observability.metrics import record_payoff_plan, rejected_budget_counter
from debt_advisor.infrastructure.observability.logging import log_payoff_plan

router = APIRouter()


@router.post("/payoff", response_model=PayoffPlanResponse)
def create_payoff_plan(
    request_body: PayoffRequest,
    request: Request,
    app_settings: Settings = Depends(get_settings),
):
    """
    Project how long the supplied debts take to pay off.

    Flow:
    1. Default the budget to 3% of total debt when none is given
    2. Order accounts by APR (avalanche) or balance (snowball)
    3. Estimate months and interest per account in the requested mode
    """
    start_time = time.time()
    request_id = get_request_id(request)
    mode = request_body.mode or app_settings.default_payoff_mode

    try:
        plan = calculate_debt_payoff(
            [a.to_domain() for a in request_body.accounts],
            request_body.monthly_budget,
            mode=mode,
            max_months=app_settings.max_projection_months,
            strategy=request_body.strategy or app_settings.default_payoff_strategy,
        )
    except InvalidBudgetError as e:
        rejected_budget_counter.inc()
        logging.warning(f"Rejected budget: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except InvalidAccountDataError as e:
        logging.warning(f"Invalid account data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_payoff_plan(plan)
    log_payoff_plan(request_id, plan, duration_ms)

    return PayoffPlanResponse.from_domain(plan, date.today())
