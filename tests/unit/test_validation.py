"""Unit tests for input schemas and the validate() helper"""

import uuid

import pytest

from loan_intake.application.validation import (
    CustomerCreateInput,
    CustomerUpdateInput,
    LoanApplicationCreateInput,
    PaginationInput,
    parse_identifier,
    validate,
)
from loan_intake.domain.exceptions import ErrorKind, ValidationFailedError
from loan_intake.domain.pagination import MAX_PAGE, MAX_PAGE_SIZE


def _fields(error: ValidationFailedError) -> list:
    return sorted(issue.field for issue in error.issues)


def test_customer_create_valid():
    valid = validate(CustomerCreateInput, {"fullName": "John Doe", "email": "john@example.com"})
    assert valid.full_name == "John Doe"
    assert valid.email == "john@example.com"


def test_customer_create_accepts_snake_case():
    valid = validate(CustomerCreateInput, {"full_name": "John Doe", "email": "john@example.com"})
    assert valid.full_name == "John Doe"


def test_customer_create_reports_every_invalid_field():
    """Test short name and malformed email yield exactly two issues"""
    with pytest.raises(ValidationFailedError) as exc_info:
        validate(CustomerCreateInput, {"fullName": "J", "email": "not-an-email"})

    error = exc_info.value
    assert error.kind is ErrorKind.VALIDATION_FAILED
    assert len(error.issues) == 2
    assert _fields(error) == ["email", "fullName"]


def test_customer_create_missing_fields():
    with pytest.raises(ValidationFailedError) as exc_info:
        validate(CustomerCreateInput, {})
    assert _fields(exc_info.value) == ["email", "fullName"]


def test_customer_create_name_too_long():
    with pytest.raises(ValidationFailedError) as exc_info:
        validate(CustomerCreateInput, {"fullName": "x" * 101, "email": "john@example.com"})
    assert _fields(exc_info.value) == ["fullName"]


def test_customer_update_single_field():
    valid = validate(CustomerUpdateInput, {"email": "new@example.com"})
    assert valid.email == "new@example.com"
    assert valid.full_name is None


def test_customer_update_requires_a_field():
    with pytest.raises(ValidationFailedError) as exc_info:
        validate(CustomerUpdateInput, {})

    assert exc_info.value.message == "At least one field must be provided for update"
    assert len(exc_info.value.issues) == 1


def test_customer_update_validates_present_fields():
    with pytest.raises(ValidationFailedError) as exc_info:
        validate(CustomerUpdateInput, {"fullName": "J", "email": "broken"})
    assert _fields(exc_info.value) == ["email", "fullName"]


def test_loan_application_valid():
    customer_id = str(uuid.uuid4())
    valid = validate(
        LoanApplicationCreateInput,
        {"customerId": customer_id, "amount": 25000, "termMonths": 48, "annualInterestRate": 4.5},
    )
    assert valid.customer_id == uuid.UUID(customer_id)
    assert valid.term_months == 48


def test_loan_application_reports_all_violations():
    with pytest.raises(ValidationFailedError) as exc_info:
        validate(
            LoanApplicationCreateInput,
            {"customerId": "nope", "amount": 0, "termMonths": 361, "annualInterestRate": 100.5},
        )
    assert _fields(exc_info.value) == ["amount", "annualInterestRate", "customerId", "termMonths"]


@pytest.mark.parametrize("term", [0, 12.5, "twelve"])
def test_loan_application_term_must_be_integer_in_range(term):
    with pytest.raises(ValidationFailedError) as exc_info:
        validate(
            LoanApplicationCreateInput,
            {"customerId": str(uuid.uuid4()), "amount": 1000, "termMonths": term, "annualInterestRate": 5},
        )
    assert _fields(exc_info.value) == ["termMonths"]


def test_loan_application_negative_rate():
    with pytest.raises(ValidationFailedError) as exc_info:
        validate(
            LoanApplicationCreateInput,
            {"customerId": str(uuid.uuid4()), "amount": 1000, "termMonths": 12, "annualInterestRate": -1},
        )
    assert _fields(exc_info.value) == ["annualInterestRate"]


def test_loan_amount_rounding_to_zero_rejected():
    """Test an amount that rounds to 0.00 cents fails validation"""
    with pytest.raises(ValidationFailedError) as exc_info:
        validate(
            LoanApplicationCreateInput,
            {"customerId": str(uuid.uuid4()), "amount": 0.001, "termMonths": 12, "annualInterestRate": 5},
        )
    assert _fields(exc_info.value) == ["amount"]
    assert exc_info.value.issues[0].code == "amount_too_small"


def test_loan_amount_half_cent_rounds_up():
    valid = validate(
        LoanApplicationCreateInput,
        {"customerId": str(uuid.uuid4()), "amount": 0.005, "termMonths": 12, "annualInterestRate": 5},
    )
    assert valid.amount == 0.005


@pytest.mark.parametrize("amount", [1e12, 1e27])
def test_loan_amount_above_column_precision_rejected(amount):
    with pytest.raises(ValidationFailedError) as exc_info:
        validate(
            LoanApplicationCreateInput,
            {"customerId": str(uuid.uuid4()), "amount": amount, "termMonths": 12, "annualInterestRate": 5},
        )
    assert _fields(exc_info.value) == ["amount"]


def test_pagination_coerces_strings():
    valid = validate(PaginationInput, {"page": "2", "pageSize": "25"})
    assert (valid.page, valid.page_size) == (2, 25)


def test_pagination_optional():
    valid = validate(PaginationInput, None)
    assert valid.page is None
    assert valid.page_size is None


@pytest.mark.parametrize(
    "params",
    [
        {"page": "0"},
        {"pageSize": "101"},
        {"pageSize": "0"},
        {"page": "abc"},
        {"page": str(MAX_PAGE + 1)},
        {"page": "99999999999999999999"},
    ],
)
def test_pagination_bounds(params):
    with pytest.raises(ValidationFailedError):
        validate(PaginationInput, params)


def test_pagination_largest_page_accepted():
    assert validate(PaginationInput, {"page": MAX_PAGE, "pageSize": MAX_PAGE_SIZE}).page == MAX_PAGE


def test_parse_identifier():
    value = uuid.uuid4()
    assert parse_identifier(str(value)) == value
    assert parse_identifier(value) is value


def test_parse_identifier_malformed():
    with pytest.raises(ValidationFailedError) as exc_info:
        parse_identifier("invalid-id", "customerId")
    assert exc_info.value.issues[0].field == "customerId"
