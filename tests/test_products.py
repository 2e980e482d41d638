"""Tests for the catalog endpoints."""

from sqlmodel import select

from app.db.seed import seed_catalog
from app.models.product import Product
from conftest import product_by_name


def test_ping_endpoint(client):
    response = client.get("/ping")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_products_returns_seeded_catalog(client):
    response = client.get("/api/products")

    assert response.status_code == 200
    products = response.json()
    assert len(products) == 18
    assert {"id", "name", "description", "price", "image_url", "category", "stock", "rating"} <= set(products[0])


def test_filter_by_category(client):
    response = client.get("/api/products", params={"category": "Sports"})

    assert response.status_code == 200
    names = {p["name"] for p in response.json()}
    assert names == {"Running Shoes", "Performance Running Shoes"}


def test_search_is_case_insensitive_over_name_and_description(client):
    by_name = client.get("/api/products", params={"search": "NOTEBOOK"}).json()
    by_description = client.get("/api/products", params={"search": "cushioning"}).json()

    assert {p["name"] for p in by_name} == {"Ultrathin Notebook", "Student Notebook", "Gaming Notebook"}
    assert [p["name"] for p in by_description] == ["Running Shoes"]


def test_category_takes_precedence_over_search(client):
    response = client.get("/api/products", params={"category": "Books", "search": "notebook"})

    assert [p["name"] for p in response.json()] == ["The Power of Habit"]


def test_get_product(client, session):
    product = product_by_name(session, "Smartwatch")

    response = client.get(f"/api/products/{product.id}")

    assert response.status_code == 200
    assert response.json()["name"] == "Smartwatch"
    assert response.json()["price"] == 999.99


def test_get_missing_product_returns_404(client):
    response = client.get("/api/products/9999")

    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


def test_malformed_product_id_returns_400(client):
    response = client.get("/api/products/abc")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request"


def test_categories_are_unique_in_catalog_order(client):
    response = client.get("/api/categories")

    assert response.status_code == 200
    assert response.json() == ["Electronics", "Clothing", "Sports", "Books", "Home & Garden"]


NEW_PRODUCT = {
    "name": "Yoga Mat",
    "description": "Non-slip mat",
    "price": 79.9,
    "image_url": "/images/yoga-mat.webp",
    "category": "Sports",
    "stock": 40,
    "rating": 4.1,
}


def test_create_product_requires_login(client):
    response = client.post("/api/products", json=NEW_PRODUCT)

    assert response.status_code == 401


def test_create_product_requires_superuser(user_client):
    response = user_client.post("/api/products", json=NEW_PRODUCT)

    assert response.status_code == 403


def test_superuser_can_create_and_update_product(admin_client):
    created = admin_client.post("/api/products", json=NEW_PRODUCT)
    assert created.status_code == 201
    product_id = created.json()["id"]

    updated = admin_client.patch(f"/api/products/{product_id}", json={"price": 69.9})

    assert updated.status_code == 200
    assert updated.json()["price"] == 69.9
    assert updated.json()["name"] == "Yoga Mat"
    assert "Sports" in admin_client.get("/api/categories").json()


def test_update_missing_product_returns_404(admin_client):
    response = admin_client.patch("/api/products/9999", json={"price": 1.0})

    assert response.status_code == 404


def test_seeding_twice_adds_nothing(session):
    assert seed_catalog(session) is False
    assert len(session.exec(select(Product)).all()) == 18
