"""Plain-text receipt rendering."""

# receipt.py

from __future__ import annotations

from typing import Iterable

from .pricing.discounts import DiscountType
from .pricing.engine import PriceBreakdown
from .pricing.line_items import LineItem, precomp_total
from .pricing.money import Money

WIDTH = 32

DISCOUNT_LABELS = {
    DiscountType.FLAT: "Discount",
    DiscountType.LOYALTY: "Loyalty",
    DiscountType.FREE: "Free items",
}


def _fmt(symbol: str, amount: Money) -> str:
    return f"{symbol}{amount}"


def _row(label: str, value: str) -> str:
    pad = max(WIDTH - len(label) - len(value), 1)
    return f"{label}{' ' * pad}{value}"


def _rate(rate) -> str:
    return f"{rate.normalize():f}"


def render_receipt(
    breakdown: PriceBreakdown,
    items: Iterable[LineItem],
    currency_symbol: str = "$",
    title: str | None = None,
) -> str:
    """Render an 80mm receipt.

    Tax lines and totals are printed exactly as the engine computed them.
    """

    lines = [title] if title else []
    for item in items:
        price = "Free" if item.is_comped else _fmt(currency_symbol, precomp_total(item))
        lines.append(_row(f"{item.name} x{item.quantity}", price))
        for addon in item.add_ons:
            lines.append(f"  + {addon.name} x{addon.quantity}")
    lines.append("-" * WIDTH)
    lines.append(_row("Subtotal", _fmt(currency_symbol, breakdown.subtotal)))
    for tax in breakdown.tax_lines:
        lines.append(
            _row(f"{tax.name} ({_rate(tax.rate)}%)", _fmt(currency_symbol, tax.amount))
        )
    discount = breakdown.discount
    label = DISCOUNT_LABELS.get(discount.type)
    if discount.type is DiscountType.FREE:
        # informational, comped lines never reached the subtotal
        lines.append(_row(label, f"({_fmt(currency_symbol, discount.amount)})"))
    elif label:
        lines.append(_row(label, "-" + _fmt(currency_symbol, breakdown.deducted)))
    lines.append(_row("Total", _fmt(currency_symbol, breakdown.total)))
    return "\n".join(lines)
