"""Customer use cases: create, update, get, delete, list"""

import logging
from typing import Any, Mapping, Optional

from loan_intake.application.validation import (
    CustomerCreateInput,
    CustomerUpdateInput,
    PaginationInput,
    parse_identifier,
    validate,
)
from loan_intake.domain.exceptions import CustomerAlreadyExistsError, CustomerNotFoundError
from loan_intake.domain.models import Customer, Paginated
from loan_intake.domain.pagination import normalize_pagination, paginate
from loan_intake.domain.repositories import CustomerRepository

logger = logging.getLogger(__name__)


class CreateCustomerUseCase:
    """Register a new customer with a unique email"""

    def __init__(self, customer_repository: CustomerRepository):
        self.customer_repository = customer_repository

    def execute(self, data: Mapping[str, Any]) -> Customer:
        """
        Raises:
            ValidationFailedError: Invalid name or email
            CustomerAlreadyExistsError: Email already registered
        """
        logger.info("Creating new customer")
        valid = validate(CustomerCreateInput, data)

        if self.customer_repository.find_by_email(valid.email):
            raise CustomerAlreadyExistsError(valid.email)

        customer = self.customer_repository.save(Customer(full_name=valid.full_name, email=valid.email))
        logger.info("Customer created", extra={"customer_id": str(customer.id)})
        return customer


class UpdateCustomerUseCase:
    """Change a customer's name and/or email"""

    def __init__(self, customer_repository: CustomerRepository):
        self.customer_repository = customer_repository

    def execute(self, customer_id: Any, data: Mapping[str, Any]) -> Customer:
        """
        Raises:
            ValidationFailedError: Bad id, no fields, or invalid values
            CustomerNotFoundError: No customer with this id
            CustomerAlreadyExistsError: New email belongs to another customer
        """
        customer_uuid = parse_identifier(customer_id, "id")
        logger.info("Updating customer", extra={"customer_id": str(customer_uuid)})
        valid = validate(CustomerUpdateInput, data)

        customer = self.customer_repository.find_by_id(customer_uuid)
        if customer is None:
            raise CustomerNotFoundError(customer_uuid)

        if valid.email is not None and valid.email != customer.email:
            existing = self.customer_repository.find_by_email(valid.email)
            if existing is not None and existing.id != customer.id:
                raise CustomerAlreadyExistsError(valid.email)
            customer.update_email(valid.email)

        if valid.full_name is not None:
            customer.update_full_name(valid.full_name)

        saved = self.customer_repository.save(customer)
        logger.info("Customer updated", extra={"customer_id": str(saved.id)})
        return saved


class GetCustomerByIdUseCase:
    def __init__(self, customer_repository: CustomerRepository):
        self.customer_repository = customer_repository

    def execute(self, customer_id: Any) -> Customer:
        customer_uuid = parse_identifier(customer_id, "id")
        logger.debug("Getting customer by ID", extra={"customer_id": str(customer_uuid)})

        customer = self.customer_repository.find_by_id(customer_uuid)
        if customer is None:
            raise CustomerNotFoundError(customer_uuid)
        return customer


class DeleteCustomerUseCase:
    def __init__(self, customer_repository: CustomerRepository):
        self.customer_repository = customer_repository

    def execute(self, customer_id: Any) -> None:
        customer_uuid = parse_identifier(customer_id, "id")
        logger.info("Deleting customer", extra={"customer_id": str(customer_uuid)})

        if self.customer_repository.find_by_id(customer_uuid) is None:
            logger.warning("Customer not found for deletion", extra={"customer_id": str(customer_uuid)})
            raise CustomerNotFoundError(customer_uuid)

        self.customer_repository.delete(customer_uuid)


class ListCustomersUseCase:
    def __init__(self, customer_repository: CustomerRepository):
        self.customer_repository = customer_repository

    def execute(self, params: Optional[Mapping[str, Any]] = None) -> Paginated[Customer]:
        valid = validate(PaginationInput, params)
        request = normalize_pagination(valid.page, valid.page_size)
        logger.debug("Listing customers", extra={"page": request.page, "page_size": request.page_size})

        return paginate(self.customer_repository.find_all(request.skip, request.take), request)
