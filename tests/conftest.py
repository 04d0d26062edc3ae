import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from orders_api.app.pricing import (  # noqa: E402
    LineItem,
    LoyaltyLedger,
    LoyaltySettings,
    Money,
    OrderPricingSession,
    TaxComponent,
    TaxSchedule,
)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def gst5() -> TaxSchedule:
    return TaxSchedule.of([TaxComponent("GST", 5, True)])


@pytest.fixture
def loyalty_settings() -> LoyaltySettings:
    return LoyaltySettings(
        enabled=True,
        min_redeem_points=100,
        redeem_rate=200,
        redeem_value=Money.of("5.00"),
        earn_rate=1,
    )


@pytest.fixture
def ledger(loyalty_settings) -> LoyaltyLedger:
    return LoyaltyLedger(available_points=500, settings=loyalty_settings)


@pytest.fixture
def burger() -> LineItem:
    return LineItem(id="burger", name="Burger", unit_price=Money.of("12.00"), quantity=2)


@pytest.fixture
def session(gst5, ledger, burger) -> OrderPricingSession:
    """Scenario order: two burgers at 12.00 with GST 5%."""
    return OrderPricingSession(tax_schedule=gst5, ledger=ledger, items=[burger])


@pytest.fixture
def two_item_session(gst5, ledger) -> OrderPricingSession:
    items = [
        LineItem(id="a", name="Pasta", unit_price=Money.of("10.00")),
        LineItem(id="b", name="Salad", unit_price=Money.of("5.00")),
    ]
    return OrderPricingSession(tax_schedule=gst5, ledger=ledger, items=items)
