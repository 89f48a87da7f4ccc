import pytest

from homebite.errors import Conflict
from homebite.repositories.menu_repo import CookRepository
from homebite.services.catalog_service import CatalogService


def test_list_menu_items(client, catalog):
    res = client.get("/api/menu")
    assert res.status_code == 200
    names = {it["name"] for it in res.json()}
    assert names == {"Veg Thali", "Gulab Jamun", "Chicken Biryani"}


def test_menu_filters(client, catalog, make_menu_item):
    make_menu_item(catalog.cook_a, "Sold Out Samosa", 2000, available=False, category="snack")

    by_cook = client.get("/api/menu", params={"cook_profile_id": catalog.cook_a}).json()
    assert {it["name"] for it in by_cook} == {"Veg Thali", "Gulab Jamun", "Sold Out Samosa"}

    desserts = client.get("/api/menu", params={"category": "dessert"}).json()
    assert [it["id"] for it in desserts] == [catalog.jamun]

    available = client.get("/api/menu", params={"cook_profile_id": catalog.cook_a, "available": True}).json()
    assert "Sold Out Samosa" not in {it["name"] for it in available}


def test_featured_items_come_first(client, catalog):
    client.put(f"/api/menu/{catalog.jamun}", json={"featured": True})
    items = client.get("/api/menu", params={"cook_profile_id": catalog.cook_a}).json()
    assert items[0]["id"] == catalog.jamun


def test_menu_unknown_category(client, catalog):
    res = client.get("/api/menu", params={"category": "pizza"})
    assert res.status_code == 400
    assert res.json()["detail"]["kind"] == "ValidationError"


def test_get_menu_item(client, catalog):
    res = client.get(f"/api/menu/{catalog.thali}")
    assert res.status_code == 200
    body = res.json()
    assert body["price_cents"] == 10000
    assert body["cook_profile_id"] == catalog.cook_a

    assert client.get("/api/menu/9999").status_code == 404


def test_create_and_update_menu_item(client, catalog):
    res = client.post(
        "/api/menu",
        json={
            "cook_profile_id": catalog.cook_b,
            "name": "Masala Chai",
            "price_cents": 3000,
            "category": "beverage",
        },
    )
    assert res.status_code == 201, res.text
    item = res.json()
    assert item["available"] is True
    assert item["featured"] is False

    res = client.put(f"/api/menu/{item['id']}", json={"price_cents": 3500, "available": False})
    assert res.status_code == 200
    assert res.json()["price_cents"] == 3500
    assert res.json()["available"] is False
    assert res.json()["name"] == "Masala Chai"


@pytest.mark.parametrize(
    "changes",
    [{"category": "pizza"}, {"price_cents": -1}, {"cook_profile_id": 9999}],
)
def test_create_menu_item_rejects_bad_input(client, catalog, changes):
    payload = {
        "cook_profile_id": catalog.cook_a,
        "name": "Poha",
        "price_cents": 4000,
        "category": "snack",
    }
    payload.update(changes)
    res = client.post("/api/menu", json=payload)
    assert res.status_code in (400, 404)
    assert client.get("/api/menu", params={"category": "snack"}).json() == []


def test_update_unknown_menu_item(client):
    assert client.put("/api/menu/9999", json={"name": "Ghost"}).status_code == 404


def test_list_cooks_by_rating(client, catalog):
    client.post(
        "/api/reviews",
        json={
            "user_id": 1,
            "user_name": "Asha",
            "cook_id": catalog.cook_b,
            "rating": 5,
            "comment": "Best biryani in town",
        },
    )
    cooks = client.get("/api/cooks").json()
    assert [c["id"] for c in cooks] == [catalog.cook_b, catalog.cook_a]
    assert cooks[0]["rating"] == 5.0


def test_cook_detail_includes_menu(client, catalog):
    res = client.get(f"/api/cooks/{catalog.cook_a}")
    assert res.status_code == 200
    body = res.json()
    assert body["business_name"] == "Cook A"
    assert {it["id"] for it in body["menu_items"]} == {catalog.thali, catalog.jamun}


def test_unknown_cook(client):
    res = client.get("/api/cooks/9999")
    assert res.status_code == 404
    assert res.json()["detail"]["message"] == "Cook not found"


def _cook_payload(user_id):
    return {
        "user_id": user_id,
        "business_name": "Nani's Kitchen",
        "location": "Bandra, Mumbai",
        "delivery_time": "45-60 mins",
    }


def test_create_cook_profile(client, make_user):
    owner = make_user(role="cook")
    res = client.post("/api/cooks", json=_cook_payload(owner))
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["user_id"] == owner
    assert body["rating"] == 0.0
    assert body["total_orders"] == 0


def test_create_cook_profile_requires_cook_role(client, make_user):
    customer = make_user(role="user")
    res = client.post("/api/cooks", json=_cook_payload(customer))
    assert res.status_code == 403
    assert res.json()["detail"]["code"] == "NotACook"


def test_one_profile_per_cook(client, make_user):
    owner = make_user(role="cook")
    assert client.post("/api/cooks", json=_cook_payload(owner)).status_code == 201
    res = client.post("/api/cooks", json=_cook_payload(owner))
    assert res.status_code == 409


def test_create_cook_profile_unknown_user(client):
    assert client.post("/api/cooks", json=_cook_payload(4242)).status_code == 404


def test_menu_item_detail_fields(client, catalog):
    res = client.post(
        "/api/menu",
        json={
            "cook_profile_id": catalog.cook_a,
            "name": "Paneer Paratha",
            "price_cents": 9000,
            "category": "main-course",
            "ingredients": ["wheat flour", "paneer", " ", "paneer"],
            "allergens": ["gluten", "dairy"],
            "dietary_info": ["vegetarian"],
            "cooking_time": "20 mins",
            "serving_size": "2 parathas",
        },
    )
    assert res.status_code == 201, res.text
    item = res.json()
    assert item["ingredients"] == ["wheat flour", "paneer"]
    assert item["allergens"] == ["gluten", "dairy"]
    assert item["cooking_time"] == "20 mins"
    assert item["serving_size"] == "2 parathas"

    res = client.put(f"/api/menu/{item['id']}", json={"dietary_info": ["vegetarian", "high-protein"]})
    assert res.json()["dietary_info"] == ["vegetarian", "high-protein"]
    assert res.json()["allergens"] == ["gluten", "dairy"]


@pytest.mark.parametrize("field,value", [("allergens", ["peanut-butter"]), ("dietary_info", ["carnivore"])])
def test_menu_item_tags_must_be_known(client, catalog, field, value):
    res = client.post(
        "/api/menu",
        json={
            "cook_profile_id": catalog.cook_a,
            "name": "Mystery Dish",
            "price_cents": 1000,
            "category": "snack",
            field: value,
        },
    )
    assert res.status_code == 400
    assert client.put(f"/api/menu/{catalog.thali}", json={field: value}).status_code == 400


def test_delete_menu_item(client, catalog):
    res = client.delete(f"/api/menu/{catalog.jamun}")
    assert res.status_code == 200
    assert res.json() == {"ok": True}
    assert client.get(f"/api/menu/{catalog.jamun}").status_code == 404
    assert client.delete(f"/api/menu/{catalog.jamun}").status_code == 404


def test_deleting_menu_item_updates_carts_holding_it(client, catalog):
    client.post("/api/cart", json={"user_id": 1, "menu_item_id": catalog.thali, "quantity": 1})
    client.post("/api/cart", json={"user_id": 1, "menu_item_id": catalog.jamun, "quantity": 2})
    client.post("/api/cart", json={"user_id": 2, "menu_item_id": catalog.jamun, "quantity": 1})

    assert client.delete(f"/api/menu/{catalog.jamun}").status_code == 200

    cart = client.get("/api/cart", params={"user_id": 1}).json()
    assert [l["menu_item_id"] for l in cart["lines"]] == [catalog.thali]
    assert cart["total_cents"] == 10000
    assert client.get("/api/cart", params={"user_id": 2}).json() is None


def test_ordered_menu_item_cannot_be_deleted(client, catalog, filled_cart, place_order):
    assert place_order(filled_cart).status_code == 201
    res = client.delete(f"/api/menu/{catalog.thali}")
    assert res.status_code == 400
    assert res.json()["detail"]["kind"] == "StateConflict"
    assert client.get(f"/api/menu/{catalog.thali}").status_code == 200


def test_get_cook_profile_by_owner(client, make_user):
    owner = make_user(role="cook")
    created = client.post(
        "/api/cooks",
        json=dict(
            _cook_payload(owner),
            cuisine=["Maharashtrian"],
            specialties=["Puran Poli"],
            price_range="$",
            availability={"days": ["saturday", "sunday"], "hours": {"start": "10:00", "end": "20:00"}},
        ),
    ).json()

    res = client.get("/api/cooks/profile", params={"user_id": owner})
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == created["id"]
    assert body["cuisine"] == ["Maharashtrian"]
    assert body["price_range"] == "$"
    assert body["availability"]["days"] == ["saturday", "sunday"]

    assert client.get("/api/cooks/profile", params={"user_id": 4242}).status_code == 404
    assert client.get("/api/cooks/profile").status_code == 400


@pytest.mark.parametrize(
    "changes",
    [
        {"price_range": "$$$$$"},
        {"availability": {"days": ["someday"], "hours": {"start": "09:00", "end": "17:00"}}},
        {"availability": {"days": [], "hours": {"start": "09:00", "end": "17:00"}}},
    ],
)
def test_create_cook_profile_validation(client, make_user, changes):
    owner = make_user(role="cook")
    res = client.post("/api/cooks", json=dict(_cook_payload(owner), **changes))
    assert res.status_code == 400
    assert client.get("/api/cooks/profile", params={"user_id": owner}).status_code == 404


def test_cook_detail_includes_reviews(client, catalog):
    for user_id, rating in [(1, 5), (2, 4)]:
        client.post(
            "/api/reviews",
            json={
                "user_id": user_id,
                "user_name": f"Customer {user_id}",
                "cook_id": catalog.cook_a,
                "rating": rating,
                "comment": "Generous portions and hot food",
            },
        )
    body = client.get(f"/api/cooks/{catalog.cook_a}").json()
    assert body["review_count"] == 2
    assert body["average_rating"] == 4.5
    assert {r["user_id"] for r in body["reviews"]} == {1, 2}

    other = client.get(f"/api/cooks/{catalog.cook_b}").json()
    assert other["review_count"] == 0
    assert other["reviews"] == []
    assert other["average_rating"] == 0.0


def test_concurrent_second_profile_is_a_conflict(db, make_user, monkeypatch):
    owner = make_user(role="cook")
    svc = CatalogService(db)
    svc.create_cook_profile(owner, "First", "Pune", "30 mins")

    # the other request's profile is not visible when the duplicate check runs
    monkeypatch.setattr(CookRepository, "get_by_user", lambda self, user_id: None)
    with pytest.raises(Conflict):
        svc.create_cook_profile(owner, "Second", "Pune", "30 mins")
    db.rollback()
    monkeypatch.undo()
    assert CatalogService(db).get_cook_by_user(owner).business_name == "First"
