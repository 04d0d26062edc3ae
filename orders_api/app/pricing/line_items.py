"""Cart/order line items and their pricing."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Iterable, Mapping

from .errors import InvalidQuantityError
from .money import Money


@dataclass(frozen=True)
class AddOn:
    """Priced customisation attached to a line item (e.g. extra cheese)."""

    name: str
    unit_price: Money
    quantity: int = 1
    id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit_price", Money.of(self.unit_price))
        if self.quantity < 1:
            raise InvalidQuantityError(self.quantity)

    def total(self) -> Money:
        return self.unit_price.multiply_by_quantity(self.quantity)


@dataclass(frozen=True)
class LineItem:
    """Single priced entry in an order.

    Instances are immutable; state changes (comping, quantity) produce a new
    item through :meth:`with_comped` / :meth:`with_quantity`.
    """

    name: str
    unit_price: Money
    quantity: int = 1
    add_ons: tuple[AddOn, ...] = ()
    is_comped: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    menu_item_id: str | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit_price", Money.of(self.unit_price))
        object.__setattr__(self, "add_ons", tuple(self.add_ons))
        if self.quantity < 1:
            raise InvalidQuantityError(self.quantity)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "LineItem":
        """Build an item from a POS cart entry mapping."""

        add_ons = tuple(
            AddOn(
                name=str(a.get("name", "")),
                unit_price=Money.of(a["price"]),
                quantity=int(a.get("quantity", 1)),
                id=a.get("id"),
            )
            for a in data.get("addOns", data.get("selectedAddons", [])) or []
        )
        kwargs = {}
        if data.get("id") is not None:
            kwargs["id"] = str(data["id"])
        return cls(
            name=str(data.get("name", "")),
            unit_price=Money.of(data["price"]),
            quantity=int(data.get("quantity", 1)),
            add_ons=add_ons,
            is_comped=bool(data.get("isFree", False)),
            menu_item_id=data.get("menuItemId"),
            notes=data.get("notes"),
            **kwargs,
        )

    def with_comped(self, is_comped: bool) -> "LineItem":
        return replace(self, is_comped=is_comped)

    def with_quantity(self, quantity: int) -> "LineItem":
        return replace(self, quantity=quantity)


def precomp_total(item: LineItem) -> Money:
    """Price of ``item`` as if it were not comped."""

    per_unit = item.unit_price + Money.sum(a.total() for a in item.add_ons)
    return per_unit.multiply_by_quantity(item.quantity)


def line_total(item: LineItem) -> Money:
    """Amount charged for ``item``; comped items contribute nothing."""

    if item.is_comped:
        return Money.zero()
    return precomp_total(item)


def order_subtotal(items: Iterable[LineItem]) -> Money:
    return Money.sum(line_total(item) for item in items)


def comp_value(items: Iterable[LineItem]) -> Money:
    """Sum of the pre-comp price of every comped item."""

    return Money.sum(precomp_total(item) for item in items if item.is_comped)


def paid_items(items: Iterable[LineItem]) -> list[LineItem]:
    return [item for item in items if not item.is_comped]


def comped_items(items: Iterable[LineItem]) -> list[LineItem]:
    return [item for item in items if item.is_comped]
