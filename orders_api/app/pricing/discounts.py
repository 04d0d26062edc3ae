"""Discount mechanisms.

An order carries at most one active mechanism. ``FreeItemComp`` is never
chosen directly: it is the projection of the items that are comped, see
:func:`effective_discount`.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Sequence, Union

from .errors import DiscountAlreadyActiveError, InvalidPercentError
from .line_items import LineItem, comp_value
from .loyalty import LoyaltyLedger
from .money import Money, min_money, to_decimal


class DiscountType(str, Enum):
    """Wire names used by the order API."""

    NONE = "none"
    FLAT = "flat"
    LOYALTY = "loyalty"
    FREE = "free"


@dataclass(frozen=True)
class NoDiscount:
    type = DiscountType.NONE

    def amount(self, subtotal: Money, items, ledger=None) -> Money:
        return Money.zero()


@dataclass(frozen=True)
class FlatPercent:
    percent: Decimal
    type = DiscountType.FLAT

    def __post_init__(self) -> None:
        try:
            percent = to_decimal(self.percent)
        except (ArithmeticError, TypeError, ValueError) as exc:
            raise InvalidPercentError(self.percent) from exc
        if not percent.is_finite() or not Decimal("0") <= percent <= Decimal("100"):
            raise InvalidPercentError(self.percent)
        object.__setattr__(self, "percent", percent)

    def amount(self, subtotal: Money, items, ledger=None) -> Money:
        return subtotal.percent_of(self.percent)


@dataclass(frozen=True)
class LoyaltyRedemption:
    points: int
    type = DiscountType.LOYALTY

    def __post_init__(self) -> None:
        if self.points < 0:
            raise ValueError("points must be non-negative")

    def amount(
        self, subtotal: Money, items, ledger: LoyaltyLedger | None = None
    ) -> Money:
        if ledger is None:
            raise ValueError("a loyalty ledger is required to price a redemption")
        value = ledger.points_to_currency(self.points)
        return min_money(value, subtotal.clamp_non_negative("subtotal"))


@dataclass(frozen=True)
class FreeItemComp:
    type = DiscountType.FREE

    def amount(self, subtotal: Money, items: Iterable[LineItem], ledger=None) -> Money:
        return comp_value(items)


DiscountMechanism = Union[NoDiscount, FlatPercent, LoyaltyRedemption, FreeItemComp]

NO_DISCOUNT = NoDiscount()
FREE_ITEM_COMP = FreeItemComp()


def effective_discount(
    chosen: DiscountMechanism | None, items: Sequence[LineItem]
) -> DiscountMechanism:
    """Resolve the mechanism that actually applies to ``items``.

    Comped items always project to :class:`FreeItemComp`; a stored
    ``FreeItemComp`` with nothing comped collapses to :class:`NoDiscount`.
    Comped items alongside a flat or loyalty discount are rejected.
    """

    if any(item.is_comped for item in items):
        if isinstance(chosen, (FlatPercent, LoyaltyRedemption)):
            raise DiscountAlreadyActiveError(chosen.type.value)
        return FREE_ITEM_COMP
    if chosen is None or isinstance(chosen, FreeItemComp):
        return NO_DISCOUNT
    return chosen
