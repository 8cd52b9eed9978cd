"""Pytest fixtures for testing"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("API_ACCESS_TOKEN", "test-access-token")

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from loan_intake.api.main import create_app
from loan_intake.config import settings
from loan_intake.domain.exceptions import CustomerAlreadyExistsError
from loan_intake.domain.models import Customer, LoanApplication, Page
from loan_intake.domain.repositories import CustomerRepository, LoanApplicationRepository
from loan_intake.infrastructure.database.models import Base
from loan_intake.infrastructure.database.session import create_db_engine, get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_db_engine(TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

FIXED_NOW = datetime(2024, 5, 17, 12, 0, tzinfo=timezone.utc)


class InMemoryCustomerRepository(CustomerRepository):
    """Dict-backed customer store that hands out copies, like a real database"""

    def __init__(self):
        self.rows: Dict[uuid.UUID, Customer] = {}
        self.save_calls: List[Customer] = []
        self.delete_calls: List[uuid.UUID] = []

    def add(self, customer: Customer) -> Customer:
        stored = replace(customer, id=customer.id or uuid.uuid4())
        self.rows[stored.id] = stored
        return replace(stored)

    def find_by_id(self, customer_id: uuid.UUID) -> Optional[Customer]:
        customer = self.rows.get(customer_id)
        return replace(customer) if customer else None

    def find_by_email(self, email: str) -> Optional[Customer]:
        for customer in self.rows.values():
            if customer.email == email:
                return replace(customer)
        return None

    def save(self, customer: Customer) -> Customer:
        self.save_calls.append(customer)
        for other in self.rows.values():
            if other.email == customer.email and other.id != customer.id:
                raise CustomerAlreadyExistsError(customer.email)
        return self.add(customer)

    def find_all(self, skip: int = 0, take: int = 10) -> Page[Customer]:
        newest_first = list(reversed(list(self.rows.values())))
        return Page(items=[replace(c) for c in newest_first[skip : skip + take]], total=len(newest_first))

    def delete(self, customer_id: uuid.UUID) -> None:
        self.delete_calls.append(customer_id)
        self.rows.pop(customer_id, None)


class InMemoryLoanApplicationRepository(LoanApplicationRepository):
    """Dict-backed loan application store"""

    def __init__(self):
        self.rows: Dict[uuid.UUID, LoanApplication] = {}
        self.save_calls: List[LoanApplication] = []

    def add(self, loan_application: LoanApplication) -> LoanApplication:
        stored = replace(loan_application, id=loan_application.id or uuid.uuid4())
        self.rows[stored.id] = stored
        return stored

    def find_by_id(self, loan_application_id: uuid.UUID) -> Optional[LoanApplication]:
        return self.rows.get(loan_application_id)

    def save(self, loan_application: LoanApplication) -> LoanApplication:
        self.save_calls.append(loan_application)
        return self.add(loan_application)

    def find_all(self, skip: int = 0, take: int = 10) -> Page[LoanApplication]:
        newest_first = list(reversed(list(self.rows.values())))
        return Page(items=newest_first[skip : skip + take], total=len(newest_first))

    def find_by_customer_id(self, customer_id: uuid.UUID, skip: int = 0, take: int = 10) -> Page[LoanApplication]:
        matching = [a for a in reversed(list(self.rows.values())) if a.customer_id == customer_id]
        return Page(items=matching[skip : skip + take], total=len(matching))

    def delete(self, loan_application_id: uuid.UUID) -> None:
        self.rows.pop(loan_application_id, None)


@pytest.fixture
def customer_repository() -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository()


@pytest.fixture
def loan_application_repository() -> InMemoryLoanApplicationRepository:
    return InMemoryLoanApplicationRepository()


@pytest.fixture
def existing_customer(customer_repository: InMemoryCustomerRepository) -> Customer:
    """A persisted customer named John Doe"""
    return customer_repository.add(Customer(full_name="John Doe", email="john@example.com", created_at=FIXED_NOW))


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


def _app_with_test_db(db: Session):
    app = create_app()

    def override_get_db():
        try:
            yield db
        except Exception:
            db.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(db: Session) -> TestClient:
    """Authenticated FastAPI test client with test database"""
    client = TestClient(_app_with_test_db(db))
    client.headers.update({"x-access-token": settings.api_access_token})
    return client


@pytest.fixture
def anonymous_client(db: Session) -> TestClient:
    """Test client that sends no access token"""
    return TestClient(_app_with_test_db(db))


@pytest.fixture
def created_customer(client: TestClient) -> dict:
    """Customer created through the API"""
    response = client.post("/api/v1/customers", json={"fullName": "John Doe", "email": "john@example.com"})
    assert response.status_code == 201
    return response.json()["data"]
