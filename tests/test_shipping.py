"""Tests for shipping options and the free-shipping rule."""

import pytest

from app.services.shipping import ShippingService, qualifies_for_free_shipping
from conftest import add_to_cart, product_by_name


def test_shipping_options(client):
    response = client.get("/api/shipping/options")

    assert response.status_code == 200
    assert [o["code"] for o in response.json()] == ["standard", "express", "pickup"]


@pytest.mark.parametrize(
    "subtotal, expected",
    [(0.0, False), (299.99, False), (300.0, False), (300.01, True), (5000.0, True)],
)
def test_free_shipping_applies_only_above_threshold(subtotal, expected):
    assert qualifies_for_free_shipping(subtotal) is expected


def test_small_cart_gets_standard_delivery(client, session):
    product = product_by_name(session, "Bluetooth Headphones")  # 299.99
    item = add_to_cart(client, product.id)

    response = client.post("/api/shipping/calculate", json={"cart_id": item["cart_id"], "zipcode": "01001-000"})

    assert response.status_code == 200
    data = response.json()
    assert len(data["options"]) == 3
    assert data["best_option"]["code"] == "standard"
    assert data["best_option"]["price"] == 19.9


def test_large_cart_gets_free_express_delivery(client, session):
    product = product_by_name(session, "Running Shoes")  # 329.99
    item = add_to_cart(client, product.id)

    data = client.post("/api/shipping/calculate", json={"cart_id": item["cart_id"], "zipcode": "01001-000"}).json()

    assert data["best_option"]["code"] == "express"
    assert data["best_option"]["price"] == 0.0
    assert data["best_option"]["name"] == "Express Delivery (Free)"
    # The listed options keep their regular prices
    express = next(o for o in data["options"] if o["code"] == "express")
    assert express["price"] == 39.9


def test_calculate_requires_cart_and_zipcode(client):
    assert client.post("/api/shipping/calculate", json={"zipcode": "01001-000"}).status_code == 400
    assert client.post("/api/shipping/calculate", json={"cart_id": 1}).status_code == 400
    assert client.post("/api/shipping/calculate", json={"cart_id": 1, "zipcode": ""}).status_code == 400


def test_calculate_for_unknown_cart_returns_404(client):
    response = client.post("/api/shipping/calculate", json={"cart_id": 9999, "zipcode": "01001-000"})

    assert response.status_code == 404


def test_shipping_cost_for_chosen_option(session):
    service = ShippingService(session)

    assert service.shipping_cost("express", 300.0) == 39.9
    assert service.shipping_cost("express", 300.5) == 0.0
    assert service.shipping_cost("standard", 1000.0) == 19.9
    assert service.shipping_cost("pickup", 10.0) == 0.0


def test_get_single_shipping_option(client):
    assert client.get("/api/shipping/options/2").json()["code"] == "express"
    assert client.get("/api/shipping/options/99").status_code == 404
