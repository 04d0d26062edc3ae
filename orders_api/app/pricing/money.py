"""Exact decimal money arithmetic for order pricing.

Amounts keep full :class:`~decimal.Decimal` precision through chained
operations. Rounding to cents (half-up) only happens when a caller asks for
it via :meth:`Money.round_to_cents`, i.e. at display and submission time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

logger = logging.getLogger("pricing")

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")

Amount = Union["Money", Decimal, int, float, str]


def to_decimal(value: Amount) -> Decimal:
    """Convert ``value`` to :class:`Decimal` without binary float drift."""

    if isinstance(value, Money):
        return value.amount
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@dataclass(frozen=True, order=True)
class Money:
    """Immutable currency amount."""

    amount: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", to_decimal(self.amount))

    @classmethod
    def of(cls, value: Amount) -> "Money":
        if isinstance(value, Money):
            return value
        return cls(to_decimal(value))

    @classmethod
    def zero(cls) -> "Money":
        return cls(Decimal("0"))

    @classmethod
    def sum(cls, values: Iterable["Money"]) -> "Money":
        total = Decimal("0")
        for value in values:
            total += value.amount
        return cls(total)

    def add(self, other: Amount) -> "Money":
        return Money(self.amount + to_decimal(other))

    def subtract(self, other: Amount) -> "Money":
        return Money(self.amount - to_decimal(other))

    def multiply_by_quantity(self, quantity: int) -> "Money":
        return Money(self.amount * quantity)

    def percent_of(self, percent: Amount) -> "Money":
        """Return ``percent`` % of this amount, unrounded."""

        return Money(self.amount * to_decimal(percent) / HUNDRED)

    def round_to_cents(self) -> "Money":
        return Money(self.amount.quantize(CENTS, rounding=ROUND_HALF_UP))

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def clamp_non_negative(self, label: str = "amount") -> "Money":
        """Return zero in place of a negative amount and flag the anomaly."""

        if self.amount < 0:
            logger.warning("clamped negative %s %s to zero", label, self.amount)
            return Money.zero()
        return self

    def to_float(self) -> float:
        """Cent-rounded float for JSON payloads."""

        return float(self.round_to_cents().amount)

    def __add__(self, other: Amount) -> "Money":
        return self.add(other)

    def __sub__(self, other: Amount) -> "Money":
        return self.subtract(other)

    def __str__(self) -> str:
        return f"{self.round_to_cents().amount:.2f}"


def min_money(a: Money, b: Money) -> Money:
    return a if a <= b else b


def max_money(a: Money, b: Money) -> Money:
    return a if a >= b else b
