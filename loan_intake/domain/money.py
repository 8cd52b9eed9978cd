"""Money value object - immutable non-negative amount with a currency code"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from loan_intake.domain.exceptions import (
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidCurrencyError,
    NegativeFactorError,
    NegativeResultError,
)

Number = Union[Decimal, float, int, str]

CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert a numeric value to Decimal without float representation noise"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a monetary value")
    return Decimal(str(value))


@dataclass(frozen=True)
class MoneyAmount:
    """
    Immutable amount of money in a single currency.

    The amount is rounded half-up to cents on construction and is never
    negative. Arithmetic returns new instances.
    """

    amount: Decimal
    currency_code: str = "USD"

    def __init__(self, amount: Number, currency_code: str = "USD"):
        try:
            value = to_decimal(amount)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise InvalidAmountError(f"Invalid amount format: {amount!r}") from e

        if not value.is_finite():
            raise InvalidAmountError(f"Invalid amount format: {amount!r}")
        if value < 0:
            raise InvalidAmountError()

        try:
            value = value.quantize(CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise InvalidAmountError(f"Amount out of range: {amount!r}") from e

        if not isinstance(currency_code, str) or len(currency_code) != 3 or not currency_code.isalpha():
            raise InvalidCurrencyError(currency_code)

        # frozen=True: bypass the generated __setattr__
        object.__setattr__(self, "amount", value)
        object.__setattr__(self, "currency_code", currency_code.upper())

    def _check_currency(self, other: "MoneyAmount") -> None:
        if self.currency_code != other.currency_code:
            raise CurrencyMismatchError(self.currency_code, other.currency_code)

    def add(self, other: "MoneyAmount") -> "MoneyAmount":
        self._check_currency(other)
        return MoneyAmount(self.amount + other.amount, self.currency_code)

    def subtract(self, other: "MoneyAmount") -> "MoneyAmount":
        self._check_currency(other)
        difference = self.amount - other.amount
        if difference < 0:
            raise NegativeResultError()
        return MoneyAmount(difference, self.currency_code)

    def multiply(self, factor: Number) -> "MoneyAmount":
        factor = to_decimal(factor)
        if factor < 0:
            raise NegativeFactorError()
        return MoneyAmount(self.amount * factor, self.currency_code)

    def equals(self, other: "MoneyAmount") -> bool:
        return self.amount == other.amount and self.currency_code == other.currency_code

    def __add__(self, other: "MoneyAmount") -> "MoneyAmount":
        return self.add(other)

    def __sub__(self, other: "MoneyAmount") -> "MoneyAmount":
        return self.subtract(other)

    def __mul__(self, factor: Number) -> "MoneyAmount":
        return self.multiply(factor)

    def format(self) -> str:
        return f"{self.amount:,.2f} {self.currency_code}"

    def to_dict(self) -> dict:
        return {"amount": str(self.amount), "currency_code": self.currency_code}

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    def __repr__(self) -> str:
        return f"MoneyAmount('{self.amount}', '{self.currency_code}')"
