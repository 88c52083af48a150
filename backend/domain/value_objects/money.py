"""
Money Value Object

Immutable monetary amount in a single currency.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from constants import CURRENCY_CODE_LENGTH

_CURRENCY_PATTERN = re.compile(rf"^[A-Z]{{{CURRENCY_CODE_LENGTH}}}$")


@dataclass(frozen=True)
class Money:
    """
    Immutable money value object.

    The amount is never negative and arithmetic only combines amounts that
    share a currency code. Every operation returns a new instance.
    """

    amount: Decimal
    currency_code: str

    def __post_init__(self):
        """Normalize and validate amount and currency."""
        if self.amount is None or self.currency_code is None:
            raise ValueError("Amount and currency must not be null")

        if not isinstance(self.amount, Decimal):
            try:
                # str() keeps floats like 19.99 from dragging binary noise along
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except InvalidOperation:
                raise ValueError(f"Invalid amount: {self.amount!r}")

        if not self.amount.is_finite():
            raise ValueError(f"Amount must be a finite number: {self.amount}")
        if self.amount < 0:
            raise ValueError(f"Amount must not be negative: {self.amount}")

        code = str(self.currency_code).strip().upper()
        if not _CURRENCY_PATTERN.match(code):
            raise ValueError(f"Invalid ISO currency code: {self.currency_code!r}")
        object.__setattr__(self, "currency_code", code)

    @classmethod
    def of(cls, amount, currency_code: str) -> "Money":
        """Create Money from any numeric or string amount."""
        return cls(amount=amount, currency_code=currency_code)

    @classmethod
    def zero(cls, currency_code: str) -> "Money":
        return cls(amount=Decimal("0"), currency_code=currency_code)

    def add(self, other: "Money") -> "Money":
        """Add an amount in the same currency."""
        self._require_same_currency(other)
        return Money(self.amount + other.amount, self.currency_code)

    def subtract(self, other: "Money") -> "Money":
        """
        Subtract an amount in the same currency.

        Raises:
            ValueError: If currencies differ or the result would be negative
        """
        self._require_same_currency(other)
        return Money(self.amount - other.amount, self.currency_code)

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def _require_same_currency(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot combine Money and {type(other)}")
        if other.currency_code != self.currency_code:
            raise ValueError(f"Currencies must match: {self.currency_code} != {other.currency_code}")

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency_code}"
