"""Business-rule errors raised by pricing mutations.

Every error carries a stable ``code`` and an optional ``hint`` so the HTTP
layer can render the standard error envelope. None of these are fatal: the
operation that raised leaves the pricing session exactly as it was.
"""

from __future__ import annotations


class PricingError(ValueError):
    """Base class for recoverable pricing failures."""

    code = "PRICING_ERROR"

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class InvalidPercentError(PricingError):
    code = "INVALID_PERCENT"

    def __init__(self, percent: object) -> None:
        super().__init__(
            f"Discount percent {percent} is outside 0-100",
            hint="Enter a percentage between 0 and 100",
        )
        self.percent = percent


class DiscountAlreadyActiveError(PricingError):
    code = "DISCOUNT_ACTIVE"

    _LABELS = {
        "flat": "Flat discount",
        "loyalty": "Loyalty points",
        "free": "Free item",
    }

    def __init__(self, active_type: str) -> None:
        label = self._LABELS.get(active_type, active_type)
        super().__init__(
            f"Discount already applied as {label}",
            hint="Remove the current discount first",
        )
        self.active_type = active_type


class BelowMinimumError(PricingError):
    code = "BELOW_MINIMUM"

    def __init__(self, points: int, minimum: int) -> None:
        super().__init__(
            f"At least {minimum} points are required to redeem, got {points}"
        )
        self.points = points
        self.minimum = minimum


class InsufficientPointsError(PricingError):
    code = "INSUFFICIENT_POINTS"

    def __init__(self, points: int, available: int) -> None:
        super().__init__(f"Cannot redeem {points} points, only {available} available")
        self.points = points
        self.available = available


class ExceedsOrderValueError(PricingError):
    code = "POINTS_EXCEED_ORDER"

    def __init__(self, points: int, redeemable: int) -> None:
        super().__init__(
            f"Cannot redeem {points} points, this order can absorb {redeemable}",
            hint=f"Redeem at most {redeemable} points",
        )
        self.points = points
        self.redeemable = redeemable


class InsufficientSubtotalError(PricingError):
    code = "INSUFFICIENT_SUBTOTAL"

    def __init__(self) -> None:
        super().__init__(
            "Order subtotal is too low to redeem points",
            hint="Please select items to redeem points",
        )


class LoyaltyDisabledError(PricingError):
    code = "LOYALTY_DISABLED"

    def __init__(self) -> None:
        super().__init__("Loyalty program is not enabled")


class AllItemsFreeError(PricingError):
    code = "ALL_ITEMS_FREE"

    def __init__(self) -> None:
        super().__init__(
            "At least one item in the order must be paid",
            hint="Keep at least one paid item",
        )


class InvalidTaxRateError(PricingError):
    code = "INVALID_TAX_RATE"

    def __init__(self, name: str, rate: object) -> None:
        super().__init__(f"Tax rate {rate} for {name} is outside 0-100")


class InvalidQuantityError(PricingError):
    code = "INVALID_QUANTITY"

    def __init__(self, quantity: object) -> None:
        super().__init__(f"Quantity must be at least 1, got {quantity}")


class ItemNotFoundError(PricingError):
    code = "ITEM_NOT_FOUND"

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Item {item_id} is not in the order")
        self.item_id = item_id


class SubmissionInProgressError(PricingError):
    code = "SUBMISSION_IN_PROGRESS"

    def __init__(self) -> None:
        super().__init__(
            "Order is being submitted",
            hint="Wait for the current submission to finish",
        )


__all__ = [
    "PricingError",
    "InvalidPercentError",
    "DiscountAlreadyActiveError",
    "BelowMinimumError",
    "InsufficientPointsError",
    "ExceedsOrderValueError",
    "InsufficientSubtotalError",
    "LoyaltyDisabledError",
    "AllItemsFreeError",
    "InvalidTaxRateError",
    "InvalidQuantityError",
    "ItemNotFoundError",
    "SubmissionInProgressError",
]
