from pathlib import Path
import uuid

from fastapi.testclient import TestClient

from paper_review.main import create_app


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_admin_login(client):
    resp = client.post("/admin/login", json={"username": "admin", "password": "admin-secret"})

    assert resp.status_code == 200
    assert set(resp.json()) == {"token"}


def test_admin_login_with_wrong_password(client):
    resp = client.post("/admin/login", json={"username": "admin", "password": "nope"})

    assert resp.status_code == 400
    assert resp.json() == {"detail": "Invalid credentials"}


def test_login_with_missing_fields_is_bad_request(client):
    resp = client.post("/admin/login", json={"username": "admin"})

    assert resp.status_code == 400
    assert "password" in resp.json()["detail"]


def test_register_list_and_login_moderator(client, admin_token):
    resp = client.post(
        "/moderators", json={"username": "alice", "password": "pw"}, headers=auth(admin_token)
    )
    assert resp.status_code == 200
    assert resp.json() == {"username": "alice"}

    listed = client.get("/moderators", headers=auth(admin_token))
    assert listed.status_code == 200
    [alice] = listed.json()
    assert set(alice) == {"id", "username"}
    assert alice["username"] == "alice"

    login = client.post("/moderators/login", json={"username": "alice", "password": "pw"})
    assert login.status_code == 200
    assert login.json()["username"] == "alice"
    assert login.json()["token"]


def test_moderator_login_with_wrong_password(client, create_moderator):
    create_moderator("alice", "right")

    resp = client.post("/moderators/login", json={"username": "alice", "password": "wrong"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid username or password."


def test_duplicate_moderator_is_rejected(client, admin_token):
    body = {"username": "alice", "password": "pw"}
    client.post("/moderators", json=body, headers=auth(admin_token))

    resp = client.post("/moderators", json={"username": "alice", "password": "other"}, headers=auth(admin_token))

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Moderator already registered."
    assert len(client.get("/moderators", headers=auth(admin_token)).json()) == 1


def test_moderator_cannot_register_moderators(client, create_moderator):
    _, token = create_moderator("alice")

    resp = client.post("/moderators", json={"username": "eve", "password": "pw"}, headers=auth(token))
    assert resp.status_code == 403


def test_delete_unknown_moderator(client, admin_token):
    resp = client.delete(f"/moderators/{uuid.uuid4()}", headers=auth(admin_token))

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Moderator not found."


def test_delete_moderator_cascades_papers_and_files(client, admin_token, create_moderator):
    alice_id, _ = create_moderator("alice")
    bob_id, _ = create_moderator("bob")
    for owner in (alice_id, alice_id, bob_id):
        resp = client.post(
            "/papers",
            data={"moderator_id": owner, "title": "T", "note": "N"},
            files=[("files", ("f.txt", b"data", "text/plain"))],
            headers=auth(admin_token),
        )
        assert resp.status_code == 200, resp.text
    alice_locators = [
        a["locator"]
        for p in client.get(f"/papers/moderator/{alice_id}", headers=auth(admin_token)).json()
        for a in p["attachments"]
    ]

    resp = client.delete(f"/moderators/{alice_id}", headers=auth(admin_token))

    assert resp.status_code == 200
    assert resp.json() == {"message": "Moderator deleted successfully", "failed_attachments": []}
    assert client.get(f"/papers/moderator/{alice_id}", headers=auth(admin_token)).json() == []
    assert len(client.get(f"/papers/moderator/{bob_id}", headers=auth(admin_token)).json()) == 1
    assert [m["username"] for m in client.get("/moderators", headers=auth(admin_token)).json()] == ["bob"]
    assert alice_locators and not any(Path(loc).exists() for loc in alice_locators)


def test_delete_moderator_reports_blobs_left_behind(client, app, admin_token, create_moderator, store_factory):
    app.state.blob_store = store_factory(fail_delete={"-a.txt"})
    alice_id, _ = create_moderator("alice")
    ids = []
    for name in ("a.txt", "b.txt"):
        resp = client.post(
            "/papers",
            data={"moderator_id": alice_id, "title": "T", "note": "N"},
            files=[("files", (name, b"data", "text/plain"))],
            headers=auth(admin_token),
        )
        ids.append(resp.json()["attachments"][0]["id"])

    resp = client.delete(f"/moderators/{alice_id}", headers=auth(admin_token))

    assert resp.status_code == 200
    assert resp.json() == {"message": "Moderator deleted successfully", "failed_attachments": [ids[0]]}
    assert client.get("/moderators", headers=auth(admin_token)).json() == []


def test_routes_can_live_under_api_prefix(settings):
    app = create_app(settings.model_copy(update={"api_prefix": "/api/"}))

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        resp = client.post("/api/admin/login", json={"username": "admin", "password": "admin-secret"})
        assert resp.status_code == 200
        assert client.get("/api/moderators", headers=auth(resp.json()["token"])).status_code == 200
        assert client.post("/admin/login", json={"username": "admin", "password": "admin-secret"}).status_code == 404
