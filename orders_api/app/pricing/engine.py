from __future__ import annotations

"""Order pricing: subtotal, discount, tax breakup and payable total.

:func:`compute` is pure. It takes a full snapshot of the order (items, tax
schedule, chosen discount and optional loyalty ledger) and returns a fresh
:class:`PriceBreakdown`; nothing passed in is modified.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from .discounts import (
    DiscountMechanism,
    DiscountType,
    FlatPercent,
    LoyaltyRedemption,
    effective_discount,
)
from .line_items import LineItem, comped_items, order_subtotal
from .loyalty import LoyaltyLedger
from .money import Money
from .tax import TaxLine, TaxSchedule

logger = logging.getLogger("pricing")


def _frozen(data: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True)
class DiscountLine:
    type: DiscountType
    amount: Money
    meta: Mapping[str, Any] = field(default_factory=_frozen)

    @property
    def points(self) -> int:
        return int(self.meta.get("points", 0))

    def to_dict(self) -> dict:
        """Shape stored by the order API as ``discountPercentage``."""

        return {
            "amount": self.amount.to_float(),
            "type": self.type.value,
            "points": self.points,
        }


@dataclass(frozen=True)
class PriceBreakdown:
    """Immutable result of pricing one order; money fields are cent-rounded."""

    subtotal: Money
    tax_lines: tuple[TaxLine, ...]
    total_tax: Money
    discount: DiscountLine
    total: Money
    points_earned: int = 0

    @property
    def deducted(self) -> Money:
        """Amount taken off the total. Comps are already out of the subtotal."""

        if self.discount.type is DiscountType.FREE:
            return Money.zero()
        return self.discount.amount

    def to_dict(self) -> dict:
        return {
            "subtotal": self.subtotal.to_float(),
            "taxLines": [line.to_dict() for line in self.tax_lines],
            "tax": self.total_tax.to_float(),
            "discount": self.deducted.to_float(),
            "discountUsed": self.discount.to_dict(),
            "total": self.total.to_float(),
            "pointsEarned": self.points_earned,
        }


def _discount_meta(
    mechanism: DiscountMechanism, items: tuple[LineItem, ...]
) -> Mapping[str, Any]:
    if isinstance(mechanism, FlatPercent):
        return _frozen({"percent": mechanism.percent})
    if isinstance(mechanism, LoyaltyRedemption):
        return _frozen({"points": mechanism.points})
    if mechanism.type is DiscountType.FREE:
        return _frozen({"items": tuple(item.id for item in comped_items(items))})
    return _frozen()


def compute(
    items: Iterable[LineItem],
    tax_schedule: TaxSchedule | None = None,
    discount: DiscountMechanism | None = None,
    ledger: LoyaltyLedger | None = None,
) -> PriceBreakdown:
    """Price ``items`` and return the breakdown shown to and charged to guests.

    Tax is levied on the charged subtotal before any discount. Comped items
    are already absent from the subtotal, so their value is reported as the
    discount line without being deducted a second time.

    Examples
    --------
    >>> from orders_api.app.pricing.tax import TaxComponent
    >>> items = [LineItem(name="Burger", unit_price=Money.of("12.00"), quantity=2)]
    >>> gst = TaxSchedule.of([TaxComponent("GST", 5)])
    >>> str(compute(items, gst, FlatPercent(10)).total)
    '22.80'
    """

    items = tuple(items)
    tax_schedule = tax_schedule or TaxSchedule()
    mechanism = effective_discount(discount, items)

    subtotal = order_subtotal(items).clamp_non_negative("subtotal")
    discount_amount = mechanism.amount(subtotal, items, ledger).clamp_non_negative(
        "discount"
    )
    tax = tax_schedule.compute_tax(subtotal)

    subtotal_cents = subtotal.round_to_cents()
    discount_cents = discount_amount.round_to_cents()
    deduction = Money.zero() if mechanism.type is DiscountType.FREE else discount_cents
    total = (subtotal_cents + tax.total - deduction).clamp_non_negative("total")

    points_earned = ledger.points_earned(subtotal) if ledger is not None else 0

    breakdown = PriceBreakdown(
        subtotal=subtotal_cents,
        tax_lines=tax.lines,
        total_tax=tax.total,
        discount=DiscountLine(
            type=mechanism.type,
            amount=discount_cents,
            meta=_discount_meta(mechanism, items),
        ),
        total=total,
        points_earned=points_earned,
    )
    logger.debug(
        "priced order",
        extra={
            "items": len(items),
            "discount_type": mechanism.type.value,
            "total": str(total),
        },
    )
    return breakdown
