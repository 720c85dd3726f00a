"""Data access layer for debt accounts, recommendations and payoff history"""

from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session
from debt_advisor.infrastructure.database.models import (
    AccountRecord,
    DebtPayoffHistory,
    DebtRecommendationRecord,
)
from debt_advisor.domain.models import DebtAccount, Recommendation, DEBT_ACCOUNT_TYPES


class AccountRepository:
    """Repository for user accounts"""

    def __init__(self, db: Session):
        self.db = db

    def create_account(
        self,
        user_id: str,
        name: str,
        type: str,
        current_balance: float,
        interest_rate: Optional[float] = None,
        credit_limit: Optional[float] = None,
        min_payment_amount: Optional[float] = None,
        min_payment_percentage: Optional[float] = None,
        currency: Optional[str] = None,
        is_active: bool = True,
    ) -> AccountRecord:
        """Persist an account row"""
        record = AccountRecord(
            user_id=user_id,
            name=name,
            type=type,
            current_balance=current_balance,
            interest_rate=interest_rate,
            credit_limit=credit_limit,
            min_payment_amount=min_payment_amount,
            min_payment_percentage=min_payment_percentage,
            currency=currency,
            is_active=is_active,
        )
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        return record

    def get_account(self, user_id: str, account_id: str) -> Optional[AccountRecord]:
        """Account row by ID, only if it belongs to the user"""
        return (
            self.db.query(AccountRecord)
            .filter(AccountRecord.id == account_id)
            .filter(AccountRecord.user_id == user_id)
            .first()
        )

    def get_debt_accounts(self, user_id: str) -> List[DebtAccount]:
        """
        Fetch a user's active credit cards and loans as domain accounts.

        Stored balances may be negative (liability sign convention); the engine
        works on amounts owed, so they are taken as absolute values.
        """
        records = (
            self.db.query(AccountRecord)
            .filter(AccountRecord.user_id == user_id)
            .filter(AccountRecord.type.in_(DEBT_ACCOUNT_TYPES))
            .filter(AccountRecord.is_active.is_(True))
            .order_by(AccountRecord.name)
            .all()
        )
        return [
            DebtAccount(
                id=r.id,
                name=r.name,
                type=r.type,
                current_balance=abs(r.current_balance or 0.0),
                interest_rate=r.interest_rate or 0.0,
                credit_limit=r.credit_limit,
                minimum_payment=r.min_payment_amount,
                min_payment_percentage=r.min_payment_percentage,
                currency=r.currency,
            )
            for r in records
        ]


class RecommendationRepository:
    """Repository for generated debt recommendations"""

    def __init__(self, db: Session):
        self.db = db

    def replace_for_user(
        self, user_id: str, recommendations: List[Recommendation]
    ) -> List[DebtRecommendationRecord]:
        """
        Swap a user's stored recommendations for a fresh set.

        Delete and insert share the caller's transaction, so concurrent
        refreshes resolve as last writer wins.
        """
        self.db.query(DebtRecommendationRecord).filter(
            DebtRecommendationRecord.user_id == user_id
        ).delete(synchronize_session=False)

        records = [
            DebtRecommendationRecord(
                user_id=user_id,
                type=rec.type,
                priority=rec.priority,
                title=rec.title,
                description=rec.description,
                accounts=list(rec.accounts),
                potential_savings=rec.potential_savings,
                created_at=rec.created_at,
            )
            for rec in recommendations
        ]
        self.db.add_all(records)
        self.db.flush()
        return records

    def list_for_user(self, user_id: str) -> List[DebtRecommendationRecord]:
        """Stored recommendations, most urgent first"""
        records = (
            self.db.query(DebtRecommendationRecord)
            .filter(DebtRecommendationRecord.user_id == user_id)
            .all()
        )
        rank = {"high": 0, "medium": 1, "low": 2}
        return sorted(records, key=lambda r: rank.get(r.priority, len(rank)))


class PayoffHistoryRepository:
    """Repository for balance snapshots"""

    def __init__(self, db: Session):
        self.db = db

    def track(self, user_id: str, account_id: str, balance: float) -> DebtPayoffHistory:
        """Record the account's balance as of now"""
        entry = DebtPayoffHistory(
            user_id=user_id,
            account_id=account_id,
            balance=balance,
            date=datetime.now(timezone.utc),
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def get_history(self, user_id: str, account_id: str) -> List[DebtPayoffHistory]:
        """Balance snapshots for one account, oldest first"""
        return (
            self.db.query(DebtPayoffHistory)
            .filter(DebtPayoffHistory.user_id == user_id)
            .filter(DebtPayoffHistory.account_id == account_id)
            .order_by(DebtPayoffHistory.date.asc())
            .all()
        )
