"""SQLAlchemy ORM models for accounts, stored recommendations and balance history"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class AccountRecord(Base):
    """Financial account owned by a user; credit cards and loans carry debt"""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False)
    current_balance = Column(Float, nullable=False, default=0.0)
    interest_rate = Column(Float, nullable=True)
    credit_limit = Column(Float, nullable=True)
    min_payment_amount = Column(Float, nullable=True)
    min_payment_percentage = Column(Float, nullable=True)
    currency = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class DebtRecommendationRecord(Base):
    """Recommendation as last generated for a user"""

    __tablename__ = "debt_recommendations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    type = Column(Text, nullable=False)
    priority = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    accounts = Column(JSON, nullable=False)
    potential_savings = Column(Float, nullable=True)
    implemented = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)


class DebtPayoffHistory(Base):
    """Balance snapshot for charting payoff progress"""

    __tablename__ = "debt_payoff_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    account_id = Column(String(36), nullable=False, index=True)
    balance = Column(Float, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
