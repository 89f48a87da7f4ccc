from fastapi.testclient import TestClient

from homebite.main import app
from homebite.services.catalog_service import CatalogService


def test_unexpected_errors_keep_the_error_shape(monkeypatch):
    def boom(self):
        raise RuntimeError("lost the kitchen")

    monkeypatch.setattr(CatalogService, "list_cooks", boom)
    client = TestClient(app, raise_server_exceptions=False)

    res = client.get("/api/cooks")
    assert res.status_code == 500
    assert res.json() == {
        "detail": {"kind": "Internal", "code": "Internal", "message": "Internal error"}
    }


def test_oversized_user_id_is_a_validation_error(client):
    res = client.get(f"/api/users/{2**70}")
    assert res.status_code == 400
    assert res.json()["detail"]["kind"] == "ValidationError"
