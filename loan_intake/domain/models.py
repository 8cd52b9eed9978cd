"""Domain models - pure Python dataclasses representing business entities"""

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar, Union

from loan_intake.domain.amortization import calculate_monthly_payment
from loan_intake.domain.exceptions import (
    InvalidEmailError,
    InvalidInterestRateError,
    InvalidLoanAmountError,
    InvalidNameError,
    InvalidTermError,
)
from loan_intake.domain.money import MoneyAmount, to_decimal

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100
MIN_TERM_MONTHS = 1
MAX_TERM_MONTHS = 360
MIN_INTEREST_RATE = Decimal("0")
MAX_INTEREST_RATE = Decimal("100")
MIN_LOAN_AMOUNT = Decimal("0.01")
MAX_LOAN_AMOUNT = Decimal("999999999999.99")  # NUMERIC(14,2)

T = TypeVar("T")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def validate_email(email: str) -> None:
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        raise InvalidEmailError(email)


def validate_full_name(full_name: str) -> None:
    if not isinstance(full_name, str) or len(full_name.strip()) < MIN_NAME_LENGTH:
        raise InvalidNameError(f"Full name must be at least {MIN_NAME_LENGTH} characters long")
    if len(full_name.strip()) > MAX_NAME_LENGTH:
        raise InvalidNameError(f"Full name must be at most {MAX_NAME_LENGTH} characters long")


def validate_term_months(term_months: int) -> None:
    if (
        isinstance(term_months, bool)
        or not isinstance(term_months, int)
        or not MIN_TERM_MONTHS <= term_months <= MAX_TERM_MONTHS
    ):
        raise InvalidTermError(term_months)


def validate_loan_amount(amount: MoneyAmount) -> None:
    if not MIN_LOAN_AMOUNT <= amount.amount <= MAX_LOAN_AMOUNT:
        raise InvalidLoanAmountError(amount.amount)


def validate_interest_rate(rate) -> Decimal:
    value = to_decimal(rate)
    if not MIN_INTEREST_RATE <= value <= MAX_INTEREST_RATE:
        raise InvalidInterestRateError(rate)
    return value


@dataclass
class Customer:
    """Loan applicant. id is None until the repository assigns one."""

    full_name: str
    email: str
    id: Optional[uuid.UUID] = None
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        validate_email(self.email)
        validate_full_name(self.full_name)

    def update_full_name(self, full_name: str) -> None:
        validate_full_name(full_name)
        self.full_name = full_name

    def update_email(self, email: str) -> None:
        validate_email(email)
        self.email = email


@dataclass(frozen=True)
class LoanApplication:
    """
    A customer's request for a loan.

    monthly_payment is derived from (amount, annual_interest_rate, term_months)
    when the application is created; rehydrated instances carry the stored
    value unchanged.
    """

    customer_id: uuid.UUID
    amount: MoneyAmount
    term_months: int
    annual_interest_rate: Decimal
    monthly_payment: MoneyAmount
    id: Optional[uuid.UUID] = None
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        validate_loan_amount(self.amount)
        validate_term_months(self.term_months)
        object.__setattr__(self, "annual_interest_rate", validate_interest_rate(self.annual_interest_rate))

    @classmethod
    def create(
        cls,
        customer_id: uuid.UUID,
        amount: MoneyAmount,
        term_months: int,
        annual_interest_rate: Union[Decimal, float, int],
        created_at: Optional[datetime] = None,
    ) -> "LoanApplication":
        """Build a new, unsaved application with its monthly payment computed"""
        validate_loan_amount(amount)
        validate_term_months(term_months)
        rate = validate_interest_rate(annual_interest_rate)

        return cls(
            customer_id=customer_id,
            amount=amount,
            term_months=term_months,
            annual_interest_rate=rate,
            monthly_payment=calculate_monthly_payment(amount, rate, term_months),
            created_at=created_at or utc_now(),
        )


@dataclass
class Page(Generic[T]):
    """Slice of records returned by a repository"""

    items: List[T]
    total: int


@dataclass
class Paginated(Generic[T]):
    """Paginated use case result"""

    items: List[T]
    total: int
    page: int
    page_size: int
    total_pages: int
