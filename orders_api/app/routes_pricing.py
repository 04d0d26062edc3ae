"""Order pricing routes.

These endpoints let the checkout page, POS and kitchen POS share a single
pricing implementation. Each request is priced from scratch: the payload
carries the cart, the comped items and the requested discount, and the same
rules the in-process :class:`OrderPricingSession` enforces apply here.
"""

from __future__ import annotations

from fastapi import APIRouter

from config import get_settings

from .pricing.loyalty import LoyaltyLedger, LoyaltySettings
from .pricing.session import OrderPricingSession
from .pricing.tax import TaxSchedule
from .receipt import render_receipt
from .schemas import LoyaltySettingsIn, QuoteIn, ReceiptIn, RedeemableIn
from .utils.responses import ok

router = APIRouter()


def _loyalty_settings(payload: LoyaltySettingsIn | None) -> LoyaltySettings:
    if payload is None:
        return LoyaltySettings.from_settings(get_settings().loyalty_settings)
    return LoyaltySettings.from_settings(payload.model_dump())


def _build_session(payload: QuoteIn) -> OrderPricingSession:
    if payload.taxSettings is None:
        tax = TaxSchedule.from_settings(get_settings().tax_settings)
    else:
        tax = TaxSchedule.from_settings(
            {k: v.model_dump() for k, v in payload.taxSettings.items()}
        )
    ledger = LoyaltyLedger(
        available_points=payload.availablePoints,
        settings=_loyalty_settings(payload.loyaltySettings),
    )
    session = OrderPricingSession(tax_schedule=tax, ledger=ledger)
    for item in payload.items:
        session.add_item(item.to_line_item())
    # listing an id twice must not toggle it back off
    for item_id in dict.fromkeys(payload.compedItemIds):
        session.toggle_comp(item_id)

    discount = payload.discount
    if discount.type == "flat":
        session.set_flat_discount(discount.percent if discount.percent is not None else 0)
    elif discount.type == "loyalty":
        session.redeem_points(discount.points or 0)
    return session


@router.post("/quote")
async def quote(payload: QuoteIn) -> dict:
    """Price a cart and return the breakdown to display and submit."""

    session = _build_session(payload)
    return ok(session.breakdown().to_dict())


@router.post("/receipt")
async def receipt(payload: ReceiptIn) -> dict:
    """Price a cart and render the receipt text alongside the breakdown."""

    session = _build_session(payload)
    breakdown = session.breakdown()
    symbol = payload.currencySymbol or get_settings().currency_symbol
    text = render_receipt(breakdown, session.items, symbol, title=payload.title)
    return ok({"breakdown": breakdown.to_dict(), "text": text})


@router.post("/loyalty/redeemable")
async def redeemable(payload: RedeemableIn) -> dict:
    """Return how many points an order of ``subtotal`` can absorb."""

    ledger = LoyaltyLedger(
        available_points=payload.availablePoints,
        settings=_loyalty_settings(payload.loyaltySettings),
    )
    points = ledger.max_redeemable_points(payload.subtotal)
    return ok(
        {
            "points": points,
            "value": ledger.points_to_currency(points).to_float(),
            "minRedeemPoints": ledger.settings.min_redeem_points,
        }
    )
