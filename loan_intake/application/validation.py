"""Pydantic schemas for use case input validation

Every use case validates its raw input here before touching a repository.
Failures are reported as a single ValidationFailedError listing every
invalid field, never just the first one.
"""

import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from loan_intake.domain.exceptions import FieldIssue, ValidationFailedError
from loan_intake.domain.models import (
    EMAIL_PATTERN,
    MAX_LOAN_AMOUNT,
    MAX_NAME_LENGTH,
    MIN_LOAN_AMOUNT,
    MIN_NAME_LENGTH,
)
from loan_intake.domain.money import CENT
from loan_intake.domain.pagination import MAX_PAGE, MAX_PAGE_SIZE

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class InputSchema(BaseModel):
    """Accepts camelCase keys (wire format) as well as snake_case names"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _check_email(value: Optional[str]) -> Optional[str]:
    if value is not None and not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("invalid_email", "Invalid email address")
    return value


class CustomerCreateInput(InputSchema):
    """Input for CreateCustomer"""

    full_name: str = Field(..., min_length=MIN_NAME_LENGTH, max_length=MAX_NAME_LENGTH)
    email: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _check_email(value)


class CustomerUpdateInput(InputSchema):
    """Input for UpdateCustomer - both fields optional, at least one required"""

    full_name: Optional[str] = Field(default=None, min_length=MIN_NAME_LENGTH, max_length=MAX_NAME_LENGTH)
    email: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _check_email(value)

    @model_validator(mode="after")
    def require_any_field(self) -> "CustomerUpdateInput":
        if self.full_name is None and self.email is None:
            raise PydanticCustomError("missing_fields", "At least one field must be provided for update")
        return self


class LoanApplicationCreateInput(InputSchema):
    """Input for CreateLoanApplication"""

    customer_id: uuid.UUID
    amount: float = Field(..., gt=0, le=float(MAX_LOAN_AMOUNT), allow_inf_nan=False)
    term_months: int = Field(..., ge=1, le=360)
    annual_interest_rate: float = Field(..., ge=0, le=100, allow_inf_nan=False)

    @field_validator("amount")
    @classmethod
    def check_amount_in_cents(cls, value):
        # amounts are stored in cents; 0.004 would become 0.00
        if Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP) < MIN_LOAN_AMOUNT:
            raise PydanticCustomError("amount_too_small", "Amount must be at least 0.01")
        return value


class PaginationInput(InputSchema):
    """Query parameters for list use cases"""

    page: Optional[int] = Field(default=None, ge=1, le=MAX_PAGE)
    page_size: Optional[int] = Field(default=None, ge=1, le=MAX_PAGE_SIZE)


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc)


def validate(schema: Type[SchemaT], data: Any) -> SchemaT:
    """
    Validate raw input against a schema.

    Raises:
        ValidationFailedError: Carrying one FieldIssue per violation
    """
    if data is None:
        data = {}

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        issues = [
            FieldIssue(field=_field_path(error["loc"]), message=error["msg"], code=error["type"])
            for error in e.errors()
        ]
        # A lone model-level issue is the whole story: surface it as the message
        if len(issues) == 1 and not issues[0].field:
            raise ValidationFailedError(issues[0].message, issues) from e
        raise ValidationFailedError("Validation failed", issues) from e


def parse_identifier(value: Any, field: str = "id") -> uuid.UUID:
    """Parse a UUID identifier, reporting a malformed one as a validation failure"""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError) as e:
        raise ValidationFailedError(
            f"Invalid {field} format",
            [FieldIssue(field=field, message="Invalid identifier format", code="invalid_identifier")],
        ) from e
