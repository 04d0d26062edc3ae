import pathlib
import sys

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from fastapi.testclient import TestClient  # noqa: E402

from orders_api.app.main import app  # noqa: E402

client = TestClient(app)

GST_ONLY = {
    "gst": {"enabled": True, "taxRate": 5},
    "pst": {"enabled": False, "taxRate": 7},
    "hst": {"enabled": False, "taxRate": 13},
}
LOYALTY = {
    "enabled": True,
    "minRedeemPoints": 100,
    "redeemRate": 200,
    "redeemValue": 5,
    "earnRate": 0,
}
BURGERS = [{"id": "burger", "name": "Burger", "price": 12.0, "quantity": 2}]


def _quote(**payload):
    body = {"items": BURGERS, "taxSettings": GST_ONLY, **payload}
    return client.post("/pricing/quote", json=body)


def test_quote_without_discount():
    resp = _quote()
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["subtotal"] == 24.0
    assert data["tax"] == 1.2
    assert data["total"] == 25.2
    assert data["discountUsed"]["type"] == "none"


def test_quote_flat_discount():
    data = _quote(discount={"type": "flat", "percent": 10}).json()["data"]
    assert data["discount"] == 2.4
    assert data["total"] == 22.8


def test_quote_loyalty_redemption():
    resp = _quote(
        loyaltySettings=LOYALTY,
        availablePoints=500,
        discount={"type": "loyalty", "points": 100},
    )
    data = resp.json()["data"]
    assert data["discount"] == 2.5
    assert data["total"] == 22.7
    assert data["discountUsed"] == {"amount": 2.5, "type": "loyalty", "points": 100}


def test_quote_below_minimum_returns_envelope():
    resp = _quote(
        loyaltySettings=LOYALTY,
        availablePoints=500,
        discount={"type": "loyalty", "points": 50},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["ok"] is False
    assert body["error"]["code"] == "BELOW_MINIMUM"
    assert resp.headers["X-Request-ID"] == body["request_id"]


def test_quote_comped_items():
    items = [
        {"id": "a", "name": "Pasta", "price": 10},
        {"id": "b", "name": "Salad", "price": 5},
    ]
    data = _quote(items=items, compedItemIds=["a"]).json()["data"]
    assert data["subtotal"] == 5.0
    assert data["discountUsed"]["type"] == "free"
    assert data["discount"] == 0.0
    assert data["discountUsed"]["amount"] == 10.0
    assert data["total"] == 5.25


def test_quote_repeated_comp_id_stays_comped():
    items = [
        {"id": "a", "name": "Pasta", "price": 10},
        {"id": "b", "name": "Salad", "price": 5},
    ]
    data = _quote(items=items, compedItemIds=["a", "a"]).json()["data"]
    assert data["discountUsed"]["type"] == "free"
    assert data["subtotal"] == 5.0


def test_quote_points_capped_to_order_value():
    resp = _quote(
        loyaltySettings=LOYALTY,
        availablePoints=5000,
        discount={"type": "loyalty", "points": 1000},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "POINTS_EXCEED_ORDER"


def test_quote_all_items_free_rejected():
    resp = _quote(compedItemIds=["burger"])
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "ALL_ITEMS_FREE"


def test_quote_comp_with_flat_rejected():
    items = [
        {"id": "a", "name": "Pasta", "price": 10},
        {"id": "b", "name": "Salad", "price": 5},
    ]
    resp = _quote(items=items, compedItemIds=["a"], discount={"type": "flat", "percent": 5})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "DISCOUNT_ACTIVE"
    assert error["details"] == {"active_type": "free"}


def test_quote_invalid_percent():
    resp = _quote(discount={"type": "flat", "percent": 150})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_PERCENT"


def test_quote_rejects_negative_price():
    resp = _quote(items=[{"name": "Bad", "price": -1}])
    assert resp.status_code == 422


def test_quote_falls_back_to_configured_tax():
    resp = client.post("/pricing/quote", json={"items": BURGERS})
    assert resp.status_code == 200
    assert resp.json()["data"]["taxLines"][0]["name"] == "GST"


def test_redeemable_points():
    resp = client.post(
        "/pricing/loyalty/redeemable",
        json={"subtotal": 3.0, "availablePoints": 500, "loyaltySettings": LOYALTY},
    )
    data = resp.json()["data"]
    assert data == {"points": 120, "value": 3.0, "minRedeemPoints": 100}


def test_receipt_route():
    resp = client.post(
        "/pricing/receipt",
        json={
            "items": BURGERS,
            "taxSettings": GST_ONLY,
            "discount": {"type": "flat", "percent": 10},
            "currencySymbol": "C$",
            "title": "Table 4",
        },
    )
    assert resp.status_code == 200
    text = resp.json()["data"]["text"]
    assert text.splitlines()[0] == "Table 4"
    assert "C$1.20" in text
    assert "C$22.80" in text
