"""GET/POST /v1/accounts/{account_id}/history - Debt balance history"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from debt_advisor.api.v1.schemas import HistoryEntryRequest, HistoryItem, HistoryResponse
from debt_advisor.infrastructure.database.session import get_db
from debt_advisor.infrastructure.database.repositories import AccountRepository, PayoffHistoryRepository

router = APIRouter()


def _history_response(repo: PayoffHistoryRepository, user_id: str, account_id: str) -> HistoryResponse:
    entries = repo.get_history(user_id, account_id)
    return HistoryResponse(
        user_id=user_id,
        account_id=account_id,
        history=[HistoryItem(date=e.date, balance=e.balance) for e in entries],
    )


@router.get("/accounts/{account_id}/history", response_model=HistoryResponse)
def get_payoff_history(
    account_id: str,
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """
    Retrieve balance snapshots for one debt account.

    Returns:
        Snapshots ordered oldest first, for charting payoff progress
    """
    return _history_response(PayoffHistoryRepository(db), user_id, account_id)


@router.post("/accounts/{account_id}/history", response_model=HistoryResponse, status_code=201)
def track_payoff(
    account_id: str,
    request_body: HistoryEntryRequest,
    db: Session = Depends(get_db),
):
    """Record the account's current balance and return the updated history"""
    if AccountRepository(db).get_account(request_body.user_id, account_id) is None:
        raise HTTPException(status_code=404, detail="Account not found")

    repo = PayoffHistoryRepository(db)
    repo.track(request_body.user_id, account_id, request_body.balance)
    db.commit()
    return _history_response(repo, request_body.user_id, account_id)
