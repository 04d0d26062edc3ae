import pytest

from orders_api.app.pricing import (
    DiscountAlreadyActiveError,
    DiscountType,
    FlatPercent,
    FreeItemComp,
    InvalidPercentError,
    LineItem,
    LoyaltyRedemption,
    Money,
    NoDiscount,
    TaxComponent,
    TaxSchedule,
    compute,
)


def test_no_discount(burger, gst5):
    breakdown = compute([burger], gst5)
    assert breakdown.subtotal == Money.of("24.00")
    assert breakdown.total_tax == Money.of("1.20")
    assert breakdown.discount.type is DiscountType.NONE
    assert breakdown.total == Money.of("25.20")


def test_flat_percent(burger, gst5):
    breakdown = compute([burger], gst5, FlatPercent(10))
    assert breakdown.discount.amount == Money.of("2.40")
    assert breakdown.total == Money.of("22.80")


def test_loyalty_redemption(burger, gst5, ledger):
    breakdown = compute([burger], gst5, LoyaltyRedemption(100), ledger)
    assert breakdown.discount.amount == Money.of("2.50")
    assert breakdown.discount.points == 100
    assert breakdown.total == Money.of("22.70")


def test_loyalty_discount_clamped_to_subtotal(gst5, ledger):
    item = LineItem(name="Coffee", unit_price=Money.of("3.00"))
    breakdown = compute([item], gst5, LoyaltyRedemption(500), ledger)
    # 500 points are worth 12.50 but the order only has 3.00 to absorb
    assert breakdown.discount.amount == Money.of("3.00")
    assert breakdown.total == Money.of("0.15")


def test_loyalty_needs_ledger(burger, gst5):
    with pytest.raises(ValueError):
        compute([burger], gst5, LoyaltyRedemption(100))


def test_comped_items_project_to_free_discount(gst5):
    items = [
        LineItem(id="a", name="Pasta", unit_price=Money.of("10.00"), is_comped=True),
        LineItem(id="b", name="Salad", unit_price=Money.of("5.00")),
    ]
    breakdown = compute(items, gst5, NoDiscount())
    assert breakdown.subtotal == Money.of("5.00")
    assert breakdown.discount.type is DiscountType.FREE
    assert breakdown.discount.amount == Money.of("10.00")
    assert breakdown.discount.meta["items"] == ("a",)
    assert breakdown.total_tax == Money.of("0.25")
    # comped value is already out of the subtotal and is not deducted again
    assert breakdown.total == Money.of("5.25")


def test_free_comp_without_comped_items_is_no_discount(burger, gst5):
    breakdown = compute([burger], gst5, FreeItemComp())
    assert breakdown.discount.type is DiscountType.NONE
    assert breakdown.total == Money.of("25.20")


def test_comped_items_with_flat_discount_rejected(gst5):
    items = [
        LineItem(name="Pasta", unit_price=Money.of("10.00"), is_comped=True),
        LineItem(name="Salad", unit_price=Money.of("5.00")),
    ]
    with pytest.raises(DiscountAlreadyActiveError) as exc:
        compute(items, gst5, FlatPercent(10))
    assert exc.value.active_type == "flat"


def test_empty_order_is_all_zero(gst5):
    breakdown = compute([], gst5, FlatPercent(50))
    assert breakdown.subtotal == Money.zero()
    assert breakdown.total_tax == Money.zero()
    assert breakdown.discount.amount == Money.zero()
    assert breakdown.total == Money.zero()


def test_flat_zero_is_active_but_free(burger, gst5):
    breakdown = compute([burger], gst5, FlatPercent(0))
    assert breakdown.discount.type is DiscountType.FLAT
    assert breakdown.total == Money.of("25.20")


@pytest.mark.parametrize("percent", [-0.01, 100.01, "ten", float("nan"), "-Infinity"])
def test_flat_percent_out_of_range_rejected(percent):
    with pytest.raises(InvalidPercentError):
        FlatPercent(percent)


def test_full_discount_never_goes_negative(burger):
    breakdown = compute([burger], None, FlatPercent(100))
    assert breakdown.total == Money.zero()


def test_compute_is_idempotent_and_does_not_mutate(burger):
    schedule = TaxSchedule.of(
        [
            TaxComponent("GST", 5),
            TaxComponent("PST", 7),
            TaxComponent("HST", 13, enabled=False),
        ]
    )
    items = [burger]
    first = compute(items, schedule, FlatPercent(15))
    second = compute(items, schedule, FlatPercent(15))
    assert first == second
    assert [line.name for line in first.tax_lines] == ["GST", "PST"]
    assert items == [burger]


def test_tax_on_pre_discount_subtotal(burger, gst5):
    with_discount = compute([burger], gst5, FlatPercent(50))
    without = compute([burger], gst5)
    assert with_discount.total_tax == without.total_tax


def test_points_earned_on_charged_subtotal(burger, gst5, ledger):
    assert compute([burger], gst5, None, ledger).points_earned == 24
    assert compute([burger], gst5).points_earned == 0


def test_breakdown_to_dict(burger, gst5):
    data = compute([burger], gst5, FlatPercent(10)).to_dict()
    assert data == {
        "subtotal": 24.0,
        "taxLines": [{"name": "GST", "rate": 5.0, "amount": 1.2}],
        "tax": 1.2,
        "discount": 2.4,
        "discountUsed": {"amount": 2.4, "type": "flat", "points": 0},
        "total": 22.8,
        "pointsEarned": 0,
    }


def test_free_comp_is_not_reported_as_deducted(gst5):
    items = [
        LineItem(id="a", name="Pasta", unit_price=Money.of("10.00"), is_comped=True),
        LineItem(id="b", name="Salad", unit_price=Money.of("5.00")),
    ]
    breakdown = compute(items, gst5)
    assert breakdown.deducted == Money.zero()
    data = breakdown.to_dict()
    assert data["discount"] == 0.0
    assert data["discountUsed"]["amount"] == 10.0
    assert data["subtotal"] + data["tax"] - data["discount"] == data["total"]
