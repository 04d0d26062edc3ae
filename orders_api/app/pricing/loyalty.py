"""Loyalty point balance and point/currency conversion.

``redeem_rate`` points are worth ``redeem_value`` in currency, so a program
advertising "200 points = $5" is configured with ``redeem_rate=200`` and
``redeem_value=5.00``. Points are earned on the charged subtotal at
``earn_rate`` points per currency unit.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Mapping

from .errors import BelowMinimumError, InsufficientPointsError, LoyaltyDisabledError
from .money import Amount, Money, to_decimal


@dataclass(frozen=True)
class LoyaltySettings:
    enabled: bool = True
    min_redeem_points: int = 0
    redeem_rate: Decimal = Decimal("1")
    redeem_value: Money = Money(Decimal("1"))
    earn_rate: Decimal = Decimal("0")
    min_order_subtotal: Money = Money(Decimal("0.01"))

    def __post_init__(self) -> None:
        object.__setattr__(self, "redeem_rate", to_decimal(self.redeem_rate))
        object.__setattr__(self, "redeem_value", Money.of(self.redeem_value))
        object.__setattr__(self, "earn_rate", to_decimal(self.earn_rate))
        object.__setattr__(
            self, "min_order_subtotal", Money.of(self.min_order_subtotal)
        )
        if self.redeem_rate <= 0:
            raise ValueError("redeem_rate must be positive")
        if self.redeem_value.amount <= 0:
            raise ValueError("redeem_value must be positive")
        if self.min_redeem_points < 0:
            raise ValueError("min_redeem_points must be non-negative")
        if self.earn_rate < 0:
            raise ValueError("earn_rate must be non-negative")

    @classmethod
    def from_settings(cls, data: Mapping[str, object] | None) -> "LoyaltySettings":
        """Parse ``{enabled, minRedeemPoints, redeemRate, redeemValue, earnRate}``."""

        if not data:
            return cls(enabled=False)
        kwargs = {
            "enabled": bool(data.get("enabled", False)),
            "min_redeem_points": int(data.get("minRedeemPoints", 0)),
            "redeem_rate": to_decimal(data.get("redeemRate", 1)),
            "redeem_value": Money.of(data.get("redeemValue", 1)),
            "earn_rate": to_decimal(data.get("earnRate", 0)),
        }
        if data.get("minOrderSubtotal") is not None:
            kwargs["min_order_subtotal"] = Money.of(data["minOrderSubtotal"])
        return cls(**kwargs)


@dataclass(frozen=True)
class LoyaltyLedger:
    """A customer's redeemable balance under a given program."""

    available_points: int
    settings: LoyaltySettings

    def points_to_currency(self, points: int) -> Money:
        value = self.settings.redeem_value.amount
        return Money(Decimal(points) * value / self.settings.redeem_rate)

    def max_redeemable_points(self, subtotal: Amount) -> int:
        """Most points the order can absorb as discount."""

        subtotal = Money.of(subtotal)
        if not self.settings.enabled or subtotal.amount <= 0:
            return 0
        absorbable = (
            subtotal.amount * self.settings.redeem_rate / self.settings.redeem_value.amount
        ).to_integral_value(rounding=ROUND_FLOOR)
        return max(0, min(self.available_points, int(absorbable)))

    def validate_redeem(self, points: int) -> None:
        if not self.settings.enabled:
            raise LoyaltyDisabledError()
        if points < self.settings.min_redeem_points:
            raise BelowMinimumError(points, self.settings.min_redeem_points)
        if points > self.available_points:
            raise InsufficientPointsError(points, self.available_points)

    def points_earned(self, subtotal: Amount) -> int:
        subtotal = Money.of(subtotal)
        if not self.settings.enabled or subtotal.amount <= 0:
            return 0
        earned = (subtotal.amount * self.settings.earn_rate).to_integral_value(
            rounding=ROUND_FLOOR
        )
        return int(earned)
