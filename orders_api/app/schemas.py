# schemas.py

"""Pydantic models for API payloads."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .pricing.line_items import AddOn, LineItem
from .pricing.money import Money


class AddOnIn(BaseModel):
    """Priced add-on selected for a cart item."""

    id: Optional[str] = None
    name: str
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(1, ge=1)


class ItemIn(BaseModel):
    """Cart item as sent by the checkout page or POS."""

    id: Optional[str] = None
    menuItemId: Optional[str] = None
    name: str = ""
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    addOns: list[AddOnIn] = []
    notes: Optional[str] = None

    def to_line_item(self) -> LineItem:
        kwargs = {"id": self.id} if self.id else {}
        return LineItem(
            name=self.name,
            unit_price=Money.of(self.price),
            quantity=self.quantity,
            add_ons=tuple(
                AddOn(a.name, Money.of(a.price), a.quantity, a.id) for a in self.addOns
            ),
            menu_item_id=self.menuItemId,
            notes=self.notes,
            **kwargs,
        )


class TaxComponentIn(BaseModel):
    enabled: bool = False
    taxRate: Decimal = Field(0, ge=0, le=100)


class LoyaltySettingsIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    enabled: bool = False
    minRedeemPoints: int = Field(0, ge=0)
    redeemRate: Decimal = Field(1, gt=0)
    redeemValue: Decimal = Field(1, gt=0)
    earnRate: Decimal = Field(0, ge=0)


class DiscountIn(BaseModel):
    """Discount requested for the order.

    ``free`` is not accepted here: comped items are listed in
    :attr:`QuoteIn.compedItemIds` and the free-item discount follows from them.
    """

    type: Literal["none", "flat", "loyalty"] = "none"
    percent: Optional[Decimal] = None
    points: Optional[int] = None


class QuoteIn(BaseModel):
    items: list[ItemIn] = []
    compedItemIds: list[str] = []
    taxSettings: Optional[dict[str, TaxComponentIn]] = None
    loyaltySettings: Optional[LoyaltySettingsIn] = None
    availablePoints: int = Field(0, ge=0)
    discount: DiscountIn = DiscountIn()


class ReceiptIn(QuoteIn):
    title: Optional[str] = None
    currencySymbol: Optional[str] = None


class RedeemableIn(BaseModel):
    subtotal: Decimal = Field(..., ge=0)
    availablePoints: int = Field(0, ge=0)
    loyaltySettings: Optional[LoyaltySettingsIn] = None
