"""Dependency injection for FastAPI endpoints"""

import secrets
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from loan_intake.config import settings
from loan_intake.domain.exceptions import UnauthorizedError
from loan_intake.infrastructure.database.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyLoanApplicationRepository,
)
from loan_intake.infrastructure.database.session import get_db

ACCESS_TOKEN_HEADER = "x-access-token"


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def require_access_token(x_access_token: Optional[str] = Header(default=None, alias=ACCESS_TOKEN_HEADER)) -> None:
    """Reject requests without the shared API access token"""
    if not x_access_token:
        raise UnauthorizedError("Authentication token is required")
    if not secrets.compare_digest(x_access_token, settings.api_access_token):
        raise UnauthorizedError("Invalid authentication token")


def get_customer_repository(db: Session = Depends(get_db)) -> SqlAlchemyCustomerRepository:
    """Provide customer repository bound to the request session"""
    return SqlAlchemyCustomerRepository(db)


def get_loan_application_repository(db: Session = Depends(get_db)) -> SqlAlchemyLoanApplicationRepository:
    """Provide loan application repository bound to the request session"""
    return SqlAlchemyLoanApplicationRepository(db)
