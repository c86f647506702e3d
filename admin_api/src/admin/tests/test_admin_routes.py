from fastapi import FastAPI
from fastapi.testclient import TestClient

from ..routes import router


def test_admin_routes_require_authentication(client):
    for method, path in [
        ("get", "/admins"),
        ("get", "/admins/me"),
        ("get", "/admins/search?q=a&fields=name"),
        ("post", "/admins"),
        ("delete", "/admins/64b7f0c2a1b2c3d4e5f60718"),
    ]:
        resp = getattr(client, method)(path)
        assert resp.status_code == 401, path
        assert resp.json()["success"] is False


def test_invalid_token_is_rejected(client):
    resp = client.get("/admins", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_token_of_removed_admin_is_rejected(client, collection, auth_headers):
    collection.docs[0]["removed"] = True
    resp = client.get("/admins", headers=auth_headers)
    assert resp.status_code == 401


def test_health_is_public(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_list_over_http(client, auth_headers, make_admin):
    for _ in range(3):
        make_admin()
    resp = client.get("/admins", params={"page": 1, "items": 2}, headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert set(data) == {"success", "result", "pagination", "message"}
    assert len(data["result"]) == 2
    # root admin + 3 more
    assert data["pagination"] == {"page": 1, "pages": 2, "count": 4}


def test_profile_returns_the_authenticated_admin(client, auth_headers, current_admin):
    resp = client.get("/admins/me", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["result"] == {
        "_id": str(current_admin["_id"]),
        "enabled": True,
        "email": "root@example.com",
        "name": "Root",
        "surname": "User",
    }


def test_profile_without_auth_context_is_404(settings, database):
    # router mounted without the authentication middleware
    from admin_api.main import create_app
    base = create_app(settings, database)
    app = FastAPI()
    app.state.settings = base.state.settings
    app.state.admin_store = base.state.admin_store
    app.state.password_hasher = base.state.password_hasher
    app.include_router(router)

    resp = TestClient(app).get("/admins/me")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "result": None, "message": "Couldn't find admin profile."}


def test_create_read_update_delete_flow(client, auth_headers, collection):
    resp = client.post("/admins", json={
        "email": "a@x.com", "password": "longenough1", "name": "Ann", "surname": "Smith",
    }, headers=auth_headers)
    assert resp.status_code == 200, resp.text
    admin_id = resp.json()["result"]["_id"]
    assert "password" not in resp.json()["result"]

    resp = client.get(f"/admins/{admin_id}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["result"]["email"] == "a@x.com"

    resp = client.put(f"/admins/{admin_id}", json={"email": "b@x.com", "role": "owner", "name": "Bob"},
                      headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["result"]["name"] == "Ann"
    assert resp.json()["result"]["email"] == "b@x.com"

    resp = client.put(f"/admins/{admin_id}/password", json={"password": "1234567"}, headers=auth_headers)
    assert resp.status_code == 400

    resp = client.put(f"/admins/{admin_id}/password", json={"password": "12345678"}, headers=auth_headers)
    assert resp.status_code == 200

    resp = client.delete(f"/admins/{admin_id}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["result"]["removed"] is True

    resp = client.get(f"/admins/{admin_id}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["result"]["removed"] is True
    assert len(collection.docs) == 2


def test_create_without_body_is_400(client, auth_headers):
    resp = client.post("/admins", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email or password fields are missing."


def test_non_object_body_is_400_envelope(client, auth_headers, collection):
    resp = client.post("/admins", json=[1], headers=auth_headers)
    assert resp.status_code == 400
    body = resp.json()
    assert set(body) == {"success", "result", "message"}
    assert body["success"] is False
    assert len(collection.docs) == 1


def test_malformed_json_body_is_400_envelope(client, auth_headers, make_admin):
    admin_id = str(make_admin()["_id"])
    resp = client.put(
        f"/admins/{admin_id}",
        content="{bad",
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert set(body) == {"success", "result", "message"}
    assert body["success"] is False


def test_search_over_http(client, auth_headers, make_admin):
    make_admin(name="Anna", surname="Smith")
    resp = client.get("/admins/search", params={"q": "SMITH", "fields": "name,surname"}, headers=auth_headers)
    assert resp.status_code == 200
    assert [a["surname"] for a in resp.json()["result"]] == ["Smith"]

    resp = client.get("/admins/search", params={"fields": "name"}, headers=auth_headers)
    assert resp.status_code == 202
    assert resp.json()["result"] == []


def test_password_never_leaves_the_api(client, auth_headers, make_admin):
    admin = make_admin(name="Pat", surname="Smith")
    admin_id = str(admin["_id"])
    responses = [
        client.get("/admins", headers=auth_headers),
        client.get("/admins/me", headers=auth_headers),
        client.get(f"/admins/{admin_id}", headers=auth_headers),
        client.get("/admins/search", params={"q": "pat", "fields": "name"}, headers=auth_headers),
        client.put(f"/admins/{admin_id}", json={"role": "owner"}, headers=auth_headers),
        client.put(f"/admins/{admin_id}/password", json={"password": "another-secret"}, headers=auth_headers),
        client.delete(f"/admins/{admin_id}", headers=auth_headers),
    ]
    for resp in responses:
        assert resp.status_code == 200, resp.text
        assert "password" not in resp.text
