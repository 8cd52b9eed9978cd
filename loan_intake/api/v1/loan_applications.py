"""/api/v1/loan-applications - loan application endpoints"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from loan_intake.api.dependencies import get_customer_repository, get_loan_application_repository
from loan_intake.api.v1.schemas import (
    LoanApplicationListResponse,
    LoanApplicationResponse,
    LoanApplicationSchema,
    PaginationSchema,
)
from loan_intake.application.use_cases.loan_applications import (
    CreateLoanApplicationUseCase,
    GetLoanApplicationByIdUseCase,
    GetLoanApplicationsByCustomerIdUseCase,
    ListLoanApplicationsUseCase,
)
from loan_intake.domain.models import Paginated
from loan_intake.infrastructure.database.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyLoanApplicationRepository,
)
from loan_intake.infrastructure.database.session import get_db
from loan_intake.infrastructure.observability.metrics import record_loan_application

router = APIRouter()


def _list_response(result: Paginated) -> LoanApplicationListResponse:
    return LoanApplicationListResponse(
        data=[LoanApplicationSchema.from_entity(a) for a in result.items],
        pagination=PaginationSchema.from_result(result),
    )


@router.post("/loan-applications", response_model=LoanApplicationResponse, status_code=201)
def create_loan_application(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    loan_applications: SqlAlchemyLoanApplicationRepository = Depends(get_loan_application_repository),
    customers: SqlAlchemyCustomerRepository = Depends(get_customer_repository),
):
    """
    Open a loan application.

    The monthly payment is computed from amount, term, and rate; it cannot be
    supplied by the caller.
    """
    loan_application = CreateLoanApplicationUseCase(loan_applications, customers).execute(payload)
    db.commit()

    record_loan_application(loan_application)
    return LoanApplicationResponse(data=LoanApplicationSchema.from_entity(loan_application))


@router.get("/loan-applications", response_model=LoanApplicationListResponse)
def list_loan_applications(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    loan_applications: SqlAlchemyLoanApplicationRepository = Depends(get_loan_application_repository),
):
    result = ListLoanApplicationsUseCase(loan_applications).execute({"page": page, "pageSize": page_size})
    return _list_response(result)


@router.get("/loan-applications/{loan_application_id}", response_model=LoanApplicationResponse)
def get_loan_application(
    loan_application_id: str,
    loan_applications: SqlAlchemyLoanApplicationRepository = Depends(get_loan_application_repository),
):
    loan_application = GetLoanApplicationByIdUseCase(loan_applications).execute(loan_application_id)
    return LoanApplicationResponse(data=LoanApplicationSchema.from_entity(loan_application))


@router.get("/customers/{customer_id}/loan-applications", response_model=LoanApplicationListResponse)
def list_customer_loan_applications(
    customer_id: str,
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    loan_applications: SqlAlchemyLoanApplicationRepository = Depends(get_loan_application_repository),
    customers: SqlAlchemyCustomerRepository = Depends(get_customer_repository),
):
    """List one customer's loan applications; 404 if the customer does not exist"""
    result = GetLoanApplicationsByCustomerIdUseCase(loan_applications, customers).execute(
        customer_id, {"page": page, "pageSize": page_size}
    )
    return _list_response(result)
