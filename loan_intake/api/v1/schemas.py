"""Pydantic schemas for API responses"""

from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from loan_intake.domain.models import Customer, LoanApplication, Paginated


class ApiModel(BaseModel):
    """Serialized with camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomerSchema(ApiModel):
    id: str
    full_name: str
    email: str
    created_at: str

    @classmethod
    def from_entity(cls, customer: Customer) -> "CustomerSchema":
        return cls(
            id=str(customer.id),
            full_name=customer.full_name,
            email=customer.email,
            created_at=customer.created_at.isoformat(),
        )


class LoanApplicationSchema(ApiModel):
    """Money and rate values are fixed two-decimal strings, e.g. "25000.00" """

    id: str
    customer_id: str
    amount: str
    term_months: int
    annual_interest_rate: str
    monthly_payment: str
    created_at: str

    @classmethod
    def from_entity(cls, loan_application: LoanApplication) -> "LoanApplicationSchema":
        return cls(
            id=str(loan_application.id),
            customer_id=str(loan_application.customer_id),
            amount=f"{loan_application.amount.amount:.2f}",
            term_months=loan_application.term_months,
            annual_interest_rate=f"{loan_application.annual_interest_rate:.2f}",
            monthly_payment=f"{loan_application.monthly_payment.amount:.2f}",
            created_at=loan_application.created_at.isoformat(),
        )


class PaginationSchema(ApiModel):
    page: int
    page_size: int
    total: int
    total_pages: int

    @classmethod
    def from_result(cls, result: Paginated) -> "PaginationSchema":
        return cls(
            page=result.page,
            page_size=result.page_size,
            total=result.total,
            total_pages=result.total_pages,
        )


class CustomerResponse(ApiModel):
    """Response for a single customer"""

    data: CustomerSchema


class CustomerListResponse(ApiModel):
    """Response for GET /customers"""

    data: List[CustomerSchema]
    pagination: PaginationSchema


class LoanApplicationResponse(ApiModel):
    """Response for a single loan application"""

    data: LoanApplicationSchema


class LoanApplicationListResponse(ApiModel):
    """Response for loan application listings"""

    data: List[LoanApplicationSchema]
    pagination: PaginationSchema
