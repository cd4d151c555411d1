"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from household_budget.api.main import create_app
from household_budget.infrastructure.database.models import Base
from household_budget.infrastructure.database.session import get_db
from household_budget.domain.models import BudgetCategory, CategoryType, Earner, Financing, MonthSnapshot
from household_budget.domain.store import InMemoryBudgetPeriodStore


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def cost(id, amount, account=None, financing=Financing.RECURRING, subs=None):
    """Cost category helper"""
    return BudgetCategory(
        id=id,
        name=f"Cost {id}",
        amount=amount,
        type=CategoryType.COST,
        account=account,
        financing=financing,
        sub_categories=subs or [],
    )


def savings(id, amount, account=None):
    """Savings category helper"""
    return BudgetCategory(id=id, name=f"Savings {id}", amount=amount, type=CategoryType.SAVINGS, account=account)


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
def store() -> InMemoryBudgetPeriodStore:
    return InMemoryBudgetPeriodStore()


@pytest.fixture
def household_month() -> MonthSnapshot:
    """
    Reference household in öre: A earns 45 000 kr, B 40 000 kr + 5 000 kr benefit,
    shared costs 25 000 kr, 300 kr per weekday and 540 kr extra on Fridays.
    """
    return MonthSnapshot(
        earner_a=Earner(salary=4_500_000, name="Andreas"),
        earner_b=Earner(salary=4_000_000, government_benefit=500_000, name="Susanna"),
        shared_costs=[
            cost("rent", 1_500_000),
            cost("food", 0, subs=[cost("groceries", 600_000), cost("clothes", 200_000)]),
            cost("transport", 200_000),
        ],
        daily_rate=30_000,
        friday_rate=54_000,
    )
