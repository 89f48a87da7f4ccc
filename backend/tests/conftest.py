import os
import tempfile

# point the app at a throw-away database before homebite.config is imported
_TMP = tempfile.mkdtemp(prefix="homebite-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["LOCK_DIR"] = os.path.join(_TMP, "locks")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from homebite.db import SessionLocal, init_db
from homebite.main import app
from homebite.models.cook_profile import CookProfile
from homebite.models.menu_item import MenuItem
from homebite.models.user import User


@pytest.fixture(autouse=True)
def fresh_db():
    init_db(reset=True)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role="user", name=None):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=name or f"User {n}",
            email=f"user{n}-{role}@example.com",
            password_hash="not-a-real-hash",
            role=role,
        )
        db.add(user)
        db.commit()
        return user.id

    return _make


@pytest.fixture
def make_cook(db, make_user):
    def _make(business_name="Test Kitchen"):
        owner_id = make_user(role="cook")
        cook = CookProfile(
            user_id=owner_id,
            business_name=business_name,
            description="Home food",
            location="Pune",
            delivery_time="30-45 mins",
        )
        db.add(cook)
        db.commit()
        return cook.id

    return _make


@pytest.fixture
def make_menu_item(db):
    def _make(cook_id, name, price_cents, available=True, category="main-course"):
        item = MenuItem(
            cook_profile_id=cook_id,
            name=name,
            description=f"{name} made at home",
            price_cents=price_cents,
            category=category,
            available=available,
        )
        db.add(item)
        db.commit()
        return item.id

    return _make


@pytest.fixture
def catalog(make_cook, make_menu_item):
    """Two cooks: A sells a ₹100 thali and a ₹50 dessert, B sells a ₹200 biryani."""
    cook_a = make_cook("Cook A")
    cook_b = make_cook("Cook B")
    return SimpleNamespace(
        cook_a=cook_a,
        cook_b=cook_b,
        thali=make_menu_item(cook_a, "Veg Thali", 10000),
        jamun=make_menu_item(cook_a, "Gulab Jamun", 5000, category="dessert"),
        biryani=make_menu_item(cook_b, "Chicken Biryani", 20000),
    )


@pytest.fixture
def address():
    return {
        "street": "12 MG Road",
        "city": "Pune",
        "state": "Maharashtra",
        "postal_code": "411001",
        "contact_number": "9876543210",
    }


@pytest.fixture
def filled_cart(client, catalog):
    """Scenario A cart for user 7: 2x thali + 1x jamun, total ₹250."""
    user_id = 7
    r = client.post("/api/cart", json={"user_id": user_id, "menu_item_id": catalog.thali, "quantity": 2})
    assert r.status_code == 200, r.text
    r = client.post("/api/cart", json={"user_id": user_id, "menu_item_id": catalog.jamun, "quantity": 1})
    assert r.status_code == 200, r.text
    return user_id


@pytest.fixture
def place_order(client, address):
    def _place(user_id, payment_method="cash", **extra):
        payload = {"user_id": user_id, "delivery_address": address, "payment_method": payment_method}
        payload.update(extra)
        return client.post("/api/orders", json=payload)

    return _place
