"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fintrack.api.main import create_app
from fintrack.infrastructure.database.models import Base
from fintrack.infrastructure.database.session import get_db
from fintrack.domain.models import Transaction
from factories import make_transaction


# Test database, one shared in-memory connection
TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
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
def july_groceries() -> list[Transaction]:
    """Two July expenses, one June expense and one July income row"""
    return [
        make_transaction(date(2024, 7, 5), "40"),
        make_transaction(date(2024, 7, 20), "60"),
        make_transaction(date(2024, 6, 28), "999"),
        make_transaction(date(2024, 7, 10), "500", type="income"),
    ]
