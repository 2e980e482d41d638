"""Shared fixtures: an in-memory seeded database and a client bound to it."""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine, select
from sqlmodel.pool import StaticPool

from app.core.security import get_password_hash
from app.db.seed import seed_catalog
from app.db.session import get_session
from app.main import app
from app.models.product import Product
from app.models.user import User

PASSWORD = "s3cret-pass"


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        seed_catalog(session)
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def user_client(client: TestClient):
    """Client logged in as a freshly registered user."""
    register(client, "alice")
    return client


@pytest.fixture
def admin_client(client: TestClient, session: Session):
    session.add(User(
        username="admin",
        email="admin@example.com",
        name="Admin",
        password_hash=get_password_hash(PASSWORD),
        is_superuser=True,
    ))
    session.commit()
    response = client.post("/api/login", json={"username": "admin", "password": PASSWORD})
    assert response.status_code == 200
    return client


def register(client: TestClient, username: str):
    response = client.post("/api/register", json={
        "username": username,
        "password": PASSWORD,
        "email": f"{username}@example.com",
        "name": username.title(),
    })
    assert response.status_code == 201, response.text
    return response.json()


def product_by_name(session: Session, name: str) -> Product:
    return session.exec(select(Product).where(Product.name == name)).one()


def add_to_cart(client: TestClient, product_id: int, quantity: int = 1) -> dict:
    response = client.post("/api/cart/items", json={"product_id": product_id, "quantity": quantity})
    assert response.status_code == 201, response.text
    return response.json()


def checkout(client: TestClient, cart_id: int, shipping_method: str = "standard", payment_method: str = "credit"):
    return client.post("/api/orders", json={
        "cart_id": cart_id,
        "shipping_address": "221B Baker Street",
        "shipping_city": "London",
        "shipping_state": "LDN",
        "shipping_zipcode": "NW1 6XE",
        "shipping_method": shipping_method,
        "payment_method": payment_method,
    })
