from __future__ import annotations

"""Order-creation payloads and submission to the order API."""

import json
import logging
from typing import Any, Literal

import httpx

from config import get_settings

from ..pricing.discounts import DiscountType
from ..pricing.session import OrderPricingSession, OrderSnapshot

OrderType = Literal["dine-in", "pickup", "delivery", "takeaway"]

logger = logging.getLogger("pricing.submission")


class OrderSubmissionError(RuntimeError):
    """Raised when the order API rejects or fails an order."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Order API returned {status_code}")
        self.status_code = status_code
        self.body = body


def build_order_payload(
    snapshot: OrderSnapshot,
    *,
    customer_id: str | None = None,
    order_type: OrderType = "dine-in",
    table_id: str | None = None,
    status: str = "preparing",
) -> dict[str, Any]:
    """Serialise ``snapshot`` into the order API's creation body.

    Money fields come straight from the snapshot's breakdown; nothing is
    recomputed here.
    """

    breakdown = snapshot.breakdown
    discount = breakdown.discount
    if discount.type is DiscountType.LOYALTY:
        loyalty = {"points": discount.points, "type": "redeem"}
    else:
        loyalty = {"points": breakdown.points_earned, "type": "earn"}

    return {
        "customerId": customer_id,
        "items": [
            {
                "menuItemId": item.menu_item_id,
                "name": item.name,
                "quantity": item.quantity,
                "price": item.unit_price.to_float(),
                "isFree": item.is_comped,
                "selectedAddons": [
                    {
                        "id": addon.id,
                        "name": addon.name,
                        "quantity": addon.quantity,
                        "price": addon.unit_price.to_float(),
                    }
                    for addon in item.add_ons
                ],
                "notes": item.notes,
            }
            for item in snapshot.items
        ],
        "status": status,
        "type": order_type,
        "tableId": table_id if order_type == "dine-in" else None,
        "subtotal": breakdown.subtotal.to_float(),
        "tax": breakdown.total_tax.to_float(),
        "taxLines": [line.to_dict() for line in breakdown.tax_lines],
        "discount": breakdown.deducted.to_float(),
        "total": breakdown.total.to_float(),
        "discountPercentage": json.dumps(discount.to_dict()),
        "loyaltyPoints": loyalty,
    }


async def submit_order(
    session: OrderPricingSession,
    *,
    client: httpx.AsyncClient | None = None,
    url: str | None = None,
    customer_id: str | None = None,
    order_type: OrderType = "dine-in",
    table_id: str | None = None,
) -> dict[str, Any]:
    """Submit the priced order and return the API's JSON response.

    The session is frozen from the moment the snapshot is taken until the
    request finishes, fails or is cancelled (``task.cancel()``), so the body
    on the wire always matches what the guest was shown.
    """

    settings = get_settings()
    url = url or settings.order_api_url
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=settings.order_api_timeout_secs)
    try:
        with session.submission() as snapshot:
            payload = build_order_payload(
                snapshot,
                customer_id=customer_id,
                order_type=order_type,
                table_id=table_id,
            )
            logger.info(
                "submitting order",
                extra={
                    "order_type": order_type,
                    "total": payload["total"],
                    "discount_type": snapshot.discount.type.value,
                },
            )
            resp = await client.post(url, json=payload)
        if resp.status_code >= 400:
            logger.warning("order rejected", extra={"status": resp.status_code})
            raise OrderSubmissionError(resp.status_code, resp.text)
        return resp.json()
    finally:
        if owns_client:
            await client.aclose()


__all__ = ["OrderSubmissionError", "build_order_payload", "submit_order"]
