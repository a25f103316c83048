# tests/api/test_admin_api.py
from fastapi.testclient import TestClient

from alliance_wars.core.config import settings
from alliance_wars.crud import crud_system

ADMIN_HEADERS = {"X-Admin-Token": settings.ADMIN_API_TOKEN}

def test_admin_routes_require_token(client: TestClient):
    assert client.post("/admin/restart").status_code == 403
    assert client.get("/admin/alerts", headers={"X-Admin-Token": "wrong"}).status_code == 403

def test_restart_recreates_web_client_admin(client: TestClient):
    client.post(f"{settings.API_V1_STR}/commands", json={"player_id": "p1", "text": "register Alice"})
    client.post(f"{settings.API_V1_STR}/commands", json={"player_id": "p2", "text": "register Bob"})

    response = client.post("/admin/restart", headers=ADMIN_HEADERS)
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["players_deleted"] == 2

    assert client.get(f"{settings.API_V1_STR}/players/p1").status_code == 404
    admin = client.get(f"{settings.API_V1_STR}/players/web-client").json()
    assert admin["name"] == "Admin"
    assert admin["isAdmin"] is True
    assert admin["resources"] == 1000
    assert admin["defensePoints"] == 100
    assert admin["attackPower"] == 100
    assert admin["level"] == 10

def test_alerts_listing(client: TestClient, db_session):
    crud_system.create_alert(db_session, "ERROR", "Something broke", details="trace")

    response = client.get("/admin/alerts", headers=ADMIN_HEADERS)
    assert response.status_code == 200
    alerts = response.json()
    assert alerts[0]["message"] == "Something broke"
    assert alerts[0]["level"] == "ERROR"
