"""Order pricing and discount reconciliation."""

from .discounts import (
    DiscountMechanism,
    DiscountType,
    FlatPercent,
    FreeItemComp,
    LoyaltyRedemption,
    NoDiscount,
)
from .engine import DiscountLine, PriceBreakdown, compute
from .errors import *  # noqa: F401,F403
from .errors import __all__ as _error_names
from .line_items import AddOn, LineItem, line_total, order_subtotal
from .loyalty import LoyaltyLedger, LoyaltySettings
from .money import Money
from .session import OrderPricingSession, OrderSnapshot
from .tax import TaxComponent, TaxLine, TaxSchedule

__all__ = [
    "AddOn",
    "DiscountLine",
    "DiscountMechanism",
    "DiscountType",
    "FlatPercent",
    "FreeItemComp",
    "LineItem",
    "LoyaltyLedger",
    "LoyaltyRedemption",
    "LoyaltySettings",
    "Money",
    "NoDiscount",
    "OrderPricingSession",
    "OrderSnapshot",
    "PriceBreakdown",
    "TaxComponent",
    "TaxLine",
    "TaxSchedule",
    "compute",
    "line_total",
    "order_subtotal",
    *_error_names,
]
