"""Tests for the cart endpoints and the cart service."""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlmodel import select

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.main import app
from app.models.cart import Cart, CartItem
from app.models.order import Order
from app.services.cart import CartService
from conftest import add_to_cart, checkout, product_by_name, register


def test_get_cart_creates_an_empty_cart(client):
    response = client.get("/api/cart")

    assert response.status_code == 200
    data = response.json()
    assert data["items"] == []
    assert data["total"] == 0
    assert data["cart"]["user_id"] is None


def test_anonymous_session_keeps_its_cart(client):
    first = client.get("/api/cart").json()["cart"]["id"]
    second = client.get("/api/cart").json()["cart"]["id"]

    assert first == second


def test_add_item_copies_current_price(client, session):
    product = product_by_name(session, "Polo Shirt")

    item = add_to_cart(client, product.id, 2)

    assert item["product_id"] == product.id
    assert item["quantity"] == 2
    assert item["price"] == 129.99


def test_adding_same_product_increments_quantity(client, session):
    product = product_by_name(session, "Polo Shirt")

    first = add_to_cart(client, product.id, 1)
    second = add_to_cart(client, product.id, 3)

    assert first["id"] == second["id"]
    assert second["quantity"] == 4
    rows = session.exec(select(CartItem).where(CartItem.cart_id == first["cart_id"])).all()
    assert len(rows) == 1


def test_cart_total_is_sum_of_price_times_quantity(client, session):
    shirt = product_by_name(session, "Basic T-Shirt")
    book = product_by_name(session, "The Power of Habit")
    add_to_cart(client, shirt.id, 3)
    add_to_cart(client, book.id, 2)

    data = client.get("/api/cart").json()

    expected = round(sum(i["price"] * i["quantity"] for i in data["items"]), 2)
    assert data["total"] == expected == round(89.99 * 3 + 49.99 * 2, 2)
    assert {i["product"]["name"] for i in data["items"]} == {"Basic T-Shirt", "The Power of Habit"}


def test_add_unknown_product_returns_404(client):
    response = client.post("/api/cart/items", json={"product_id": 9999, "quantity": 1})

    assert response.status_code == 404


def test_add_with_invalid_quantity_returns_400(client):
    response = client.post("/api/cart/items", json={"product_id": 1, "quantity": 0})

    assert response.status_code == 400


def test_add_without_product_id_returns_400(client):
    response = client.post("/api/cart/items", json={"quantity": 1})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request"


def test_update_quantity(client, session):
    product = product_by_name(session, "Smartwatch")
    item = add_to_cart(client, product.id)

    response = client.put(f"/api/cart/items/{item['id']}", json={"quantity": 5})

    assert response.status_code == 200
    assert response.json()["quantity"] == 5


@pytest.mark.parametrize("quantity", [0, -2])
def test_update_quantity_below_one_returns_400(client, session, quantity):
    product = product_by_name(session, "Smartwatch")
    item = add_to_cart(client, product.id)

    response = client.put(f"/api/cart/items/{item['id']}", json={"quantity": quantity})

    assert response.status_code == 400


def test_update_unknown_item_returns_404(client):
    response = client.put("/api/cart/items/9999", json={"quantity": 1})

    assert response.status_code == 404


def test_remove_item(client, session):
    product = product_by_name(session, "Smartwatch")
    item = add_to_cart(client, product.id)

    response = client.delete(f"/api/cart/items/{item['id']}")

    assert response.status_code == 204
    assert client.get("/api/cart").json()["items"] == []
    assert client.delete(f"/api/cart/items/{item['id']}").status_code == 404


def test_malformed_item_id_returns_400(client):
    response = client.delete("/api/cart/items/not-a-number")

    assert response.status_code == 400


def test_clear_cart_deletes_cart_and_items(client, session):
    product = product_by_name(session, "Smartwatch")
    item = add_to_cart(client, product.id, 2)
    cart_id = item["cart_id"]

    response = client.delete("/api/cart", params={"cart_id": cart_id})

    assert response.status_code == 204
    session.expire_all()
    assert session.get(Cart, cart_id) is None
    assert session.exec(select(CartItem).where(CartItem.cart_id == cart_id)).all() == []
    # A new cart is created lazily afterwards
    assert client.get("/api/cart").json()["cart"]["id"] != cart_id


def test_clear_cart_requires_cart_id(client):
    response = client.delete("/api/cart")

    assert response.status_code == 400


def test_clear_someone_elses_cart_returns_404(client, session):
    service = CartService(session)
    other = service.get_or_create_cart(None)

    response = client.delete("/api/cart", params={"cart_id": other.id})

    assert response.status_code == 404


def test_logged_in_user_cart_is_tied_to_user(client):
    user = register(client, "bob")

    cart = client.get("/api/cart").json()["cart"]

    assert cart["user_id"] == user["id"]


def test_service_get_or_create_ignores_user_owned_cart_id(session):
    service = CartService(session)
    owned = Cart(user_id=None)
    session.add(owned)
    session.commit()
    owned.user_id = 42
    session.add(owned)
    session.commit()

    cart = service.get_or_create_cart(None, owned.id)

    assert cart.id != owned.id
    assert cart.user_id is None


def test_service_rejects_item_from_another_cart(session):
    service = CartService(session)
    first = service.get_or_create_cart(None)
    second = service.get_or_create_cart(None)
    item = service.add_item(first.id, 1, 1)

    with pytest.raises(NotFoundError):
        service.update_item_quantity(second.id, item.id, 3)
    with pytest.raises(NotFoundError):
        service.remove_item(second.id, item.id)


def test_service_validation_errors(session):
    service = CartService(session)
    cart = service.get_or_create_cart(None)

    with pytest.raises(ValidationError):
        service.add_item(cart.id, 1, 0)
    with pytest.raises(NotFoundError):
        service.clear_cart(9999)


def test_stale_session_cookie_does_not_reach_another_guests_cart(client, session):
    item = add_to_cart(client, product_by_name(session, "Smartwatch").id)
    stale_cookie = client.cookies.get(settings.SESSION_COOKIE_NAME)
    assert checkout(client, item["cart_id"]).status_code == 201

    other_guest = TestClient(app)
    other_item = add_to_cart(other_guest, product_by_name(session, "Polo Shirt").id)
    replayed = TestClient(app, cookies={settings.SESSION_COOKIE_NAME: stale_cookie})
    cart = replayed.get("/api/cart").json()

    assert other_item["cart_id"] != item["cart_id"]
    assert cart["cart"]["id"] not in (item["cart_id"], other_item["cart_id"])
    assert cart["items"] == []


def test_new_rows_get_timezone_aware_timestamps():
    cart = Cart()
    order = Order()

    assert cart.created_at.utcoffset() == timedelta(0)
    assert cart.updated_at.utcoffset() == timedelta(0)
    assert order.created_at.utcoffset() == timedelta(0)
