"""Persistence interfaces the use cases depend on

Implementations live in loan_intake.infrastructure.database.repositories.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Optional

from loan_intake.domain.models import Customer, LoanApplication, Page


class CustomerRepository(ABC):
    """Repository for customers"""

    @abstractmethod
    def find_by_id(self, customer_id: uuid.UUID) -> Optional[Customer]:
        """Return the customer or None"""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Customer]:
        """Return the customer owning this email or None"""

    @abstractmethod
    def save(self, customer: Customer) -> Customer:
        """
        Insert (id is None) or update a customer.

        Returns:
            The persisted customer with its id assigned

        Raises:
            CustomerAlreadyExistsError: If the email is taken by another row
        """

    @abstractmethod
    def find_all(self, skip: int = 0, take: int = 10) -> Page[Customer]:
        """Return a page of customers, newest first"""

    @abstractmethod
    def delete(self, customer_id: uuid.UUID) -> None:
        """Delete a customer by id"""


class LoanApplicationRepository(ABC):
    """Repository for loan applications"""

    @abstractmethod
    def find_by_id(self, loan_application_id: uuid.UUID) -> Optional[LoanApplication]:
        """Return the loan application or None"""

    @abstractmethod
    def save(self, loan_application: LoanApplication) -> LoanApplication:
        """Insert (id is None) or update a loan application"""

    @abstractmethod
    def find_all(self, skip: int = 0, take: int = 10) -> Page[LoanApplication]:
        """Return a page of loan applications, newest first"""

    @abstractmethod
    def find_by_customer_id(self, customer_id: uuid.UUID, skip: int = 0, take: int = 10) -> Page[LoanApplication]:
        """Return a page of one customer's loan applications, newest first"""

    @abstractmethod
    def delete(self, loan_application_id: uuid.UUID) -> None:
        """Delete a loan application by id"""
