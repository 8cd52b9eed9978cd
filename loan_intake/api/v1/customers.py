"""/api/v1/customers - customer CRUD endpoints"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.orm import Session

from loan_intake.api.dependencies import get_customer_repository
from loan_intake.api.v1.schemas import (
    CustomerListResponse,
    CustomerResponse,
    CustomerSchema,
    PaginationSchema,
)
from loan_intake.application.use_cases.customers import (
    CreateCustomerUseCase,
    DeleteCustomerUseCase,
    GetCustomerByIdUseCase,
    ListCustomersUseCase,
    UpdateCustomerUseCase,
)
from loan_intake.infrastructure.database.repositories import SqlAlchemyCustomerRepository
from loan_intake.infrastructure.database.session import get_db
from loan_intake.infrastructure.observability.metrics import record_customer_created

router = APIRouter()


@router.post("/customers", response_model=CustomerResponse, status_code=201)
def create_customer(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    customers: SqlAlchemyCustomerRepository = Depends(get_customer_repository),
):
    """Register a customer; 409 if the email is already taken"""
    customer = CreateCustomerUseCase(customers).execute(payload)
    db.commit()

    record_customer_created()
    return CustomerResponse(data=CustomerSchema.from_entity(customer))


@router.get("/customers", response_model=CustomerListResponse)
def list_customers(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    customers: SqlAlchemyCustomerRepository = Depends(get_customer_repository),
):
    """List customers, newest first"""
    result = ListCustomersUseCase(customers).execute({"page": page, "pageSize": page_size})

    return CustomerListResponse(
        data=[CustomerSchema.from_entity(c) for c in result.items],
        pagination=PaginationSchema.from_result(result),
    )


@router.get("/customers/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: str,
    customers: SqlAlchemyCustomerRepository = Depends(get_customer_repository),
):
    customer = GetCustomerByIdUseCase(customers).execute(customer_id)
    return CustomerResponse(data=CustomerSchema.from_entity(customer))


@router.patch("/customers/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: str,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    customers: SqlAlchemyCustomerRepository = Depends(get_customer_repository),
):
    """Update full name and/or email"""
    customer = UpdateCustomerUseCase(customers).execute(customer_id, payload)
    db.commit()

    return CustomerResponse(data=CustomerSchema.from_entity(customer))


@router.delete("/customers/{customer_id}", status_code=204)
def delete_customer(
    customer_id: str,
    db: Session = Depends(get_db),
    customers: SqlAlchemyCustomerRepository = Depends(get_customer_repository),
):
    """Delete a customer; 409 while loan applications still reference it"""
    DeleteCustomerUseCase(customers).execute(customer_id)
    db.commit()

    return Response(status_code=204)
