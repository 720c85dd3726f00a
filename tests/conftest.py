"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from debt_advisor.api.main import create_app
from debt_advisor.infrastructure.database.models import Base
from debt_advisor.infrastructure.database.session import get_db
from debt_advisor.domain.models import DebtAccount


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_accounts() -> list[DebtAccount]:
    """Typical mix: two credit cards and a car loan"""
    return [
        DebtAccount(
            id="card_rewards",
            name="Rewards Card",
            type="credit_card",
            current_balance=4000.0,
            interest_rate=22.99,
            credit_limit=5000.0,
            minimum_payment=40.0,
            min_payment_percentage=2.0,
        ),
        DebtAccount(
            id="card_store",
            name="Store Card",
            type="credit_card",
            current_balance=1200.0,
            interest_rate=18.0,
            credit_limit=6000.0,
            minimum_payment=25.0,
        ),
        DebtAccount(
            id="loan_car",
            name="Car Loan",
            type="loan",
            current_balance=9000.0,
            interest_rate=6.5,
            minimum_payment=250.0,
        ),
    ]


def account_payload(**overrides) -> dict:
    """JSON body for a single debt account in the API's camelCase shape"""
    payload = {
        "id": "acct_1",
        "name": "Visa",
        "type": "credit_card",
        "currentBalance": 1000.0,
        "interestRate": 20.0,
        "creditLimit": 5000.0,
        "minimumPayment": 25.0,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_account_payload():
    return account_payload
