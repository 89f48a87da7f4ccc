import pytest

from homebite.errors import NotFound
from homebite.services.user_service import UserService


def _register(client, email="asha@example.com", password="s3cret-pass", role="user", name="Asha"):
    return client.post(
        "/api/users",
        json={"name": name, "email": email, "password": password, "role": role},
    )


def test_register_and_fetch_user(client):
    res = _register(client)
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["name"] == "Asha"
    assert body["role"] == "user"
    assert "password" not in body and "password_hash" not in body

    fetched = client.get(f"/api/users/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == body


def test_register_cook(client):
    assert _register(client, role="cook").json()["role"] == "cook"


def test_duplicate_email_is_a_conflict(client):
    assert _register(client).status_code == 201
    res = _register(client, email="ASHA@example.com")
    assert res.status_code == 409
    assert res.json()["detail"]["kind"] == "Conflict"


@pytest.mark.parametrize(
    "overrides",
    [{"password": "short"}, {"role": "admin"}, {"email": "not-an-email"}, {"name": ""}],
)
def test_register_rejects_bad_input(client, overrides):
    res = _register(client, **overrides)
    assert res.status_code == 400
    assert res.json()["detail"]["kind"] == "ValidationError"


def test_unknown_user(client, db):
    assert client.get("/api/users/999").status_code == 404
    with pytest.raises(NotFound):
        UserService(db).get_user(999)


def test_login(client):
    user_id = _register(client, role="cook").json()["id"]
    res = client.post("/api/auth/login", json={"email": "Asha@Example.com", "password": "s3cret-pass"})
    assert res.status_code == 200
    assert res.json() == {"user_id": user_id, "role": "cook"}


@pytest.mark.parametrize(
    "email,password",
    [("asha@example.com", "wrong-pass"), ("nobody@example.com", "s3cret-pass"), ("", "")],
)
def test_login_with_bad_credentials(client, email, password):
    _register(client)
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 401
    assert res.json()["detail"]["code"] == "InvalidCredentials"


def test_password_is_hashed(client, db):
    user_id = _register(client).json()["id"]
    user = UserService(db).get_user(user_id)
    assert user.password_hash != "s3cret-pass"
    assert user.password_hash.startswith("$argon2")
