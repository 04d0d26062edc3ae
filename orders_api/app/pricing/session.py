"""Caller-owned pricing state for one order.

A checkout page or POS terminal creates one :class:`OrderPricingSession` per
order. All state changes go through its mutation methods, which validate the
change against the discount rules before committing it: a failed call raises
a :class:`~.errors.PricingError` and leaves the session untouched.

While :meth:`OrderPricingSession.submission` is open every mutation is
refused, so the snapshot sent to the order API is the one that was priced.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Iterator

from .discounts import (
    NO_DISCOUNT,
    DiscountMechanism,
    DiscountType,
    FlatPercent,
    LoyaltyRedemption,
    effective_discount,
)
from .engine import PriceBreakdown, compute
from .errors import (
    AllItemsFreeError,
    DiscountAlreadyActiveError,
    ExceedsOrderValueError,
    InsufficientSubtotalError,
    ItemNotFoundError,
    LoyaltyDisabledError,
    PricingError,
    SubmissionInProgressError,
)
from .line_items import LineItem, order_subtotal, paid_items
from .loyalty import LoyaltyLedger
from .tax import TaxSchedule

logger = logging.getLogger("pricing")


@dataclass(frozen=True)
class OrderSnapshot:
    """Everything needed to submit an order, captured in one read."""

    items: tuple[LineItem, ...]
    discount: DiscountMechanism
    breakdown: PriceBreakdown


class OrderPricingSession:
    def __init__(
        self,
        tax_schedule: TaxSchedule | None = None,
        ledger: LoyaltyLedger | None = None,
        items: Iterable[LineItem] = (),
    ) -> None:
        self.tax_schedule = tax_schedule or TaxSchedule()
        self.ledger = ledger
        self._items: tuple[LineItem, ...] = ()
        self._chosen: DiscountMechanism = NO_DISCOUNT
        self._submitting = False
        for item in items:
            self.add_item(item)

    # ------------------------------------------------------------------ state

    @property
    def items(self) -> tuple[LineItem, ...]:
        return self._items

    @property
    def discount(self) -> DiscountMechanism:
        """Active mechanism; comped items always read as ``FreeItemComp``."""

        return effective_discount(self._chosen, self._items)

    @property
    def active_type(self) -> DiscountType:
        return self.discount.type

    @property
    def submitting(self) -> bool:
        return self._submitting

    def breakdown(self) -> PriceBreakdown:
        return compute(self._items, self.tax_schedule, self._chosen, self.ledger)

    def max_redeemable_points(self) -> int:
        if self.ledger is None:
            return 0
        return self.ledger.max_redeemable_points(order_subtotal(self._items))

    # -------------------------------------------------------------- internals

    def _guard(self) -> None:
        if self._submitting:
            raise SubmissionInProgressError()

    def _index(self, item_id: str) -> int:
        for idx, item in enumerate(self._items):
            if item.id == item_id:
                return idx
        raise ItemNotFoundError(item_id)

    def _ensure_free_slot(self, wanted: DiscountType) -> None:
        active = self.active_type
        if active is not DiscountType.NONE and active is not wanted:
            logger.info(
                "discount rejected",
                extra={"wanted": wanted.value, "active": active.value},
            )
            raise DiscountAlreadyActiveError(active.value)

    def _fit_redemption(
        self, items: tuple[LineItem, ...], chosen: DiscountMechanism
    ) -> DiscountMechanism:
        """Shrink a stored redemption to what ``items`` can still absorb."""

        if not isinstance(chosen, LoyaltyRedemption) or self.ledger is None:
            return chosen
        cap = self.ledger.max_redeemable_points(order_subtotal(items))
        if chosen.points <= cap:
            return chosen
        if cap < max(self.ledger.settings.min_redeem_points, 1):
            logger.info("redemption dropped", extra={"points": chosen.points})
            return NO_DISCOUNT
        logger.info("redemption reduced", extra={"points": cap})
        return LoyaltyRedemption(cap)

    def _commit(
        self,
        items: tuple[LineItem, ...] | None = None,
        chosen: DiscountMechanism | None = None,
    ) -> PriceBreakdown:
        """Price the candidate state and adopt it only if pricing succeeds."""

        new_items = self._items if items is None else items
        new_chosen = self._chosen if chosen is None else chosen
        new_chosen = self._fit_redemption(new_items, new_chosen)
        breakdown = compute(new_items, self.tax_schedule, new_chosen, self.ledger)
        self._items = new_items
        self._chosen = new_chosen
        return breakdown

    # ------------------------------------------------------------- mutations

    def add_item(self, item: LineItem) -> PriceBreakdown:
        self._guard()
        if any(existing.id == item.id for existing in self._items):
            raise PricingError(f"Item {item.id} is already in the order")
        if item.is_comped:
            self._ensure_free_slot(DiscountType.FREE)
            if not paid_items(self._items):
                raise AllItemsFreeError()
        return self._commit(items=self._items + (item,))

    def replace_item(self, item: LineItem) -> PriceBreakdown:
        """Swap the item with the same id for ``item`` (whole-item update)."""

        self._guard()
        idx = self._index(item.id)
        current = self._items[idx]
        if item.is_comped and not current.is_comped:
            return self.toggle_comp(item.id, replacement=item)
        items = self._items[:idx] + (item,) + self._items[idx + 1 :]
        if not paid_items(items):
            raise AllItemsFreeError()
        return self._commit(items=items)

    def change_quantity(self, item_id: str, quantity: int) -> PriceBreakdown:
        self._guard()
        idx = self._index(item_id)
        updated = self._items[idx].with_quantity(quantity)
        return self._commit(
            items=self._items[:idx] + (updated,) + self._items[idx + 1 :]
        )

    def remove_item(self, item_id: str) -> PriceBreakdown:
        """Remove an item; the comp discount is re-derived from what remains."""

        self._guard()
        idx = self._index(item_id)
        items = self._items[:idx] + self._items[idx + 1 :]
        if items and not paid_items(items):
            raise AllItemsFreeError()
        return self._commit(items=items)

    def toggle_comp(
        self, item_id: str, *, replacement: LineItem | None = None
    ) -> PriceBreakdown:
        """Flip the comped flag of ``item_id``.

        Comping is refused while a flat or loyalty discount is active and when
        it would leave the order without a paid item.
        """

        self._guard()
        idx = self._index(item_id)
        current = self._items[idx]
        comping = not current.is_comped
        updated = (replacement or current).with_comped(comping)
        items = self._items[:idx] + (updated,) + self._items[idx + 1 :]
        if comping:
            self._ensure_free_slot(DiscountType.FREE)
            if not paid_items(items):
                logger.info("comp rejected", extra={"item_id": item_id})
                raise AllItemsFreeError()
        logger.debug("comp toggled", extra={"item_id": item_id, "comped": comping})
        return self._commit(items=items)

    def set_flat_discount(self, percent: Decimal | int | float | str) -> PriceBreakdown:
        self._guard()
        mechanism = FlatPercent(percent)
        self._ensure_free_slot(DiscountType.FLAT)
        return self._commit(chosen=mechanism)

    def redeem_points(self, points: int) -> PriceBreakdown:
        self._guard()
        if self.ledger is None:
            raise LoyaltyDisabledError()
        self._ensure_free_slot(DiscountType.LOYALTY)
        self.ledger.validate_redeem(points)
        subtotal = order_subtotal(self._items)
        if subtotal < self.ledger.settings.min_order_subtotal:
            raise InsufficientSubtotalError()
        redeemable = self.max_redeemable_points()
        if points > redeemable:
            raise ExceedsOrderValueError(points, redeemable)
        logger.debug("points redeemed", extra={"points": points})
        return self._commit(chosen=LoyaltyRedemption(points))

    def clear_discount(self) -> PriceBreakdown:
        """Drop the active mechanism; comped items become paid again."""

        self._guard()
        items = tuple(
            item.with_comped(False) if item.is_comped else item
            for item in self._items
        )
        return self._commit(items=items, chosen=NO_DISCOUNT)

    def reset(self) -> None:
        self._guard()
        self._items = ()
        self._chosen = NO_DISCOUNT

    # ------------------------------------------------------------ submission

    def snapshot(self) -> OrderSnapshot:
        items = self._items
        discount = self.discount
        return OrderSnapshot(
            items=items,
            discount=discount,
            breakdown=compute(items, self.tax_schedule, discount, self.ledger),
        )

    @contextmanager
    def submission(self) -> Iterator[OrderSnapshot]:
        """Freeze the session for the duration of an order submission.

        The window is released on success, failure and cancellation alike.
        """

        self._guard()
        self._submitting = True
        try:
            yield self.snapshot()
        finally:
            self._submitting = False
