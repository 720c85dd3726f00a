"""Debt recommendation endpoints - stateless generation and per-user refresh"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from debt_advisor.api.v1.schemas import (
    RecommendationListResponse,
    RecommendationRequest,
    RecommendationSchema,
    RefreshRequest,
)
from debt_advisor.api.dependencies import get_request_id
from debt_advisor.domain.recommendations import generate_debt_recommendations
from debt_advisor.infrastructure.database.session import get_db
from debt_advisor.infrastructure.database.models import DebtRecommendationRecord
from debt_advisor.infrastructure.database.repositories import AccountRepository, RecommendationRepository
from debt_advisor.infrastructure.observability.metrics import record_recommendations
from debt_advisor.infrastructure.observability.logging import log_recommendations

router = APIRouter()


def _from_records(records: List[DebtRecommendationRecord]) -> List[RecommendationSchema]:
    return [
        RecommendationSchema(
            type=r.type,
            priority=r.priority,
            title=r.title,
            description=r.description,
            accounts=r.accounts,
            created_at=r.created_at,
            potential_savings=r.potential_savings,
            implemented=r.implemented,
        )
        for r in records
    ]


@router.post("/recommendations", response_model=RecommendationListResponse)
def create_recommendations(request_body: RecommendationRequest, request: Request):
    """Evaluate recommendation rules against the supplied accounts"""
    recommendations = generate_debt_recommendations([a.to_domain() for a in request_body.accounts])

    record_recommendations(recommendations)
    log_recommendations(get_request_id(request), recommendations)

    return RecommendationListResponse(
        recommendations=[RecommendationSchema.from_domain(r) for r in recommendations]
    )


@router.post("/recommendations/refresh", response_model=RecommendationListResponse)
def refresh_recommendations(
    request_body: RefreshRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Regenerate a user's recommendations from their stored accounts.

    Flow:
    1. Load active credit card and loan accounts
    2. Evaluate recommendation rules
    3. Replace stored recommendations (delete existing, insert new)
    """
    request_id = get_request_id(request)

    try:
        accounts = AccountRepository(db).get_debt_accounts(request_body.user_id)
        recommendations = generate_debt_recommendations(accounts)
        records = RecommendationRepository(db).replace_for_user(request_body.user_id, recommendations)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_recommendations(recommendations)
    log_recommendations(request_id, recommendations, user_id=request_body.user_id)

    return RecommendationListResponse(recommendations=_from_records(records))


@router.get("/recommendations", response_model=RecommendationListResponse)
def get_recommendations(
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """Retrieve the recommendations last stored for a user"""
    records = RecommendationRepository(db).list_for_user(user_id)
    return RecommendationListResponse(recommendations=_from_records(records))
