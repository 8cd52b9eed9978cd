"""Domain-specific exceptions

Every exception carries an ErrorKind so the API layer can map failures to
transport codes without inspecting message text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    """Transport-independent failure categories"""

    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class FieldIssue:
    """A single invalid field reported by validation"""

    field: str
    message: str
    code: str = "invalid"

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "code": self.code}


class DomainException(Exception):
    """Base exception for domain layer"""

    kind = ErrorKind.UNEXPECTED
    default_message = "Unexpected error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# Validation


class ValidationFailedError(DomainException):
    """One or more input fields violate their constraints"""

    kind = ErrorKind.VALIDATION_FAILED
    default_message = "Validation failed"

    def __init__(self, message: Optional[str] = None, issues: Optional[List[FieldIssue]] = None):
        super().__init__(message)
        self.issues: List[FieldIssue] = list(issues or [])


class InvalidEmailError(ValidationFailedError):
    def __init__(self, email: str):
        message = f"Invalid email format: {email}"
        super().__init__(message, [FieldIssue("email", message, "invalid_email")])


class InvalidNameError(ValidationFailedError):
    def __init__(self, message: str = "Invalid name format"):
        super().__init__(message, [FieldIssue("fullName", message, "invalid_name")])


class InvalidTermError(ValidationFailedError):
    def __init__(self, term_months):
        message = f"Invalid loan term: {term_months} months (must be between 1 and 360)"
        super().__init__(message, [FieldIssue("termMonths", message, "invalid_term")])


class InvalidLoanAmountError(ValidationFailedError):
    def __init__(self, amount):
        message = f"Invalid loan amount: {amount} (must be between 0.01 and 999999999999.99)"
        super().__init__(message, [FieldIssue("amount", message, "invalid_amount")])


class InvalidInterestRateError(ValidationFailedError):
    def __init__(self, rate):
        message = f"Invalid interest rate: {rate}% (must be between 0 and 100)"
        super().__init__(message, [FieldIssue("annualInterestRate", message, "invalid_interest_rate")])


# Not found


class NotFoundError(DomainException):
    """Referenced entity does not exist"""

    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"


class CustomerNotFoundError(NotFoundError):
    def __init__(self, customer_id):
        self.customer_id = customer_id
        super().__init__(f"Customer with ID {customer_id} not found")


class LoanApplicationNotFoundError(NotFoundError):
    def __init__(self, loan_application_id):
        self.loan_application_id = loan_application_id
        super().__init__(f"Loan application with ID {loan_application_id} not found")


# Conflict


class ConflictError(DomainException):
    """Uniqueness or referential constraint violated"""

    kind = ErrorKind.CONFLICT
    default_message = "Conflict"


class CustomerAlreadyExistsError(ConflictError):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Customer with email {email} already exists")


class CustomerHasLoanApplicationsError(ConflictError):
    def __init__(self, customer_id):
        self.customer_id = customer_id
        super().__init__(f"Customer with ID {customer_id} still has loan applications")


# Authentication / authorization (raised by the API layer)


class UnauthorizedError(DomainException):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(DomainException):
    kind = ErrorKind.FORBIDDEN
    default_message = "Forbidden"


# Money


class MoneyError(DomainException):
    """Money value invariant violated"""

    pass


class InvalidAmountError(MoneyError):
    default_message = "Money amount cannot be negative"


class InvalidCurrencyError(MoneyError):
    def __init__(self, currency_code):
        super().__init__(f"Invalid currency code: {currency_code!r}")


class CurrencyMismatchError(MoneyError):
    def __init__(self, left: str, right: str):
        super().__init__(f"Cannot combine money amounts with different currencies: {left} and {right}")


class NegativeResultError(MoneyError):
    default_message = "Money amount cannot be negative"


class NegativeFactorError(MoneyError):
    default_message = "Cannot multiply by a negative factor"
