import pytest
from fastapi.testclient import TestClient


@pytest.mark.smoke
def test_api_health_smoke():
    from despacho.main import app

    client = TestClient(app)
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json().get("status") == "healthy"


@pytest.mark.smoke
def test_api_root_lists_endpoints():
    from despacho.main import app

    resp = TestClient(app).get("/")
    assert resp.status_code == 200
    assert "/api/reportes" in resp.json()["endpoints"]
