"""Loan application use cases: create, get, list, list by customer"""

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional

from loan_intake.application.validation import (
    LoanApplicationCreateInput,
    PaginationInput,
    parse_identifier,
    validate,
)
from loan_intake.domain.exceptions import CustomerNotFoundError, LoanApplicationNotFoundError
from loan_intake.domain.models import LoanApplication, Paginated
from loan_intake.domain.money import MoneyAmount
from loan_intake.domain.pagination import normalize_pagination, paginate
from loan_intake.domain.repositories import CustomerRepository, LoanApplicationRepository

logger = logging.getLogger(__name__)


class CreateLoanApplicationUseCase:
    """
    Open a loan application for an existing customer.

    Flow:
    1. Validate input
    2. Verify the customer exists
    3. Compute the monthly payment
    4. Persist the application
    """

    def __init__(
        self,
        loan_application_repository: LoanApplicationRepository,
        customer_repository: CustomerRepository,
    ):
        self.loan_application_repository = loan_application_repository
        self.customer_repository = customer_repository

    def execute(self, data: Mapping[str, Any]) -> LoanApplication:
        """
        Raises:
            ValidationFailedError: Any field out of bounds or malformed
            CustomerNotFoundError: customerId does not reference a customer
        """
        logger.info("Creating new loan application")
        valid = validate(LoanApplicationCreateInput, data)

        if self.customer_repository.find_by_id(valid.customer_id) is None:
            logger.warning("Customer not found", extra={"customer_id": str(valid.customer_id)})
            raise CustomerNotFoundError(valid.customer_id)

        # str() keeps the submitted decimal digits instead of the float's binary expansion
        loan_application = LoanApplication.create(
            customer_id=valid.customer_id,
            amount=MoneyAmount(valid.amount),
            term_months=valid.term_months,
            annual_interest_rate=Decimal(str(valid.annual_interest_rate)),
        )

        saved = self.loan_application_repository.save(loan_application)
        logger.info(
            "Loan application created",
            extra={
                "loan_application_id": str(saved.id),
                "customer_id": str(saved.customer_id),
                "monthly_payment": str(saved.monthly_payment.amount),
            },
        )
        return saved


class GetLoanApplicationByIdUseCase:
    def __init__(self, loan_application_repository: LoanApplicationRepository):
        self.loan_application_repository = loan_application_repository

    def execute(self, loan_application_id: Any) -> LoanApplication:
        application_uuid = parse_identifier(loan_application_id, "id")
        logger.debug("Getting loan application by ID", extra={"loan_application_id": str(application_uuid)})

        loan_application = self.loan_application_repository.find_by_id(application_uuid)
        if loan_application is None:
            raise LoanApplicationNotFoundError(application_uuid)
        return loan_application


class ListLoanApplicationsUseCase:
    def __init__(self, loan_application_repository: LoanApplicationRepository):
        self.loan_application_repository = loan_application_repository

    def execute(self, params: Optional[Mapping[str, Any]] = None) -> Paginated[LoanApplication]:
        valid = validate(PaginationInput, params)
        request = normalize_pagination(valid.page, valid.page_size)
        logger.debug("Listing loan applications", extra={"page": request.page, "page_size": request.page_size})

        return paginate(self.loan_application_repository.find_all(request.skip, request.take), request)


class GetLoanApplicationsByCustomerIdUseCase:
    """List one customer's loan applications; the customer must exist"""

    def __init__(
        self,
        loan_application_repository: LoanApplicationRepository,
        customer_repository: CustomerRepository,
    ):
        self.loan_application_repository = loan_application_repository
        self.customer_repository = customer_repository

    def execute(self, customer_id: Any, params: Optional[Mapping[str, Any]] = None) -> Paginated[LoanApplication]:
        customer_uuid = parse_identifier(customer_id, "customerId")
        valid = validate(PaginationInput, params)
        logger.debug("Getting loan applications by customer ID", extra={"customer_id": str(customer_uuid)})

        if self.customer_repository.find_by_id(customer_uuid) is None:
            raise CustomerNotFoundError(customer_uuid)

        request = normalize_pagination(valid.page, valid.page_size)
        result = self.loan_application_repository.find_by_customer_id(customer_uuid, request.skip, request.take)
        return paginate(result, request)
