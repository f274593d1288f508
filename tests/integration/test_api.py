from __future__ import annotations

import json
from pathlib import Path

import pytest

pytest.importorskip("flask")

from backend.app import create_app
from core.logsink import MemorySink
from core.settings import Settings
from core.store import JsonFileStore, MemoryStore

ADA = {
    "name": "Ada",
    "email": "ada@x.com",
    "siteType": "Static",
    "budget": "500",
    "description": "short project",
}


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store, sink):
    settings = Settings(port=3999, admin_key="correct")
    app = create_app(settings, store=store, sink=sink)
    app.testing = True
    return app.test_client()


def _login(client, key="correct"):
    return client.post("/login", json={"key": key})


def test_contact_scenario(client, store):
    response = client.post("/api/contact", json=ADA)

    assert response.status_code == 201
    assert response.get_json() == {"message": "Submission saved"}
    head = store.list()[0].to_dict()
    assert {key: head[key] for key in ADA} == ADA
    assert head["via"] == "db"
    assert isinstance(head["ts"], int)


def test_contact_validation_errors(client, store):
    missing = client.post("/api/contact", json={"email": "ada@x.com"})
    assert missing.status_code == 400
    assert missing.get_json() == {"error": "Name and email are required"}

    bad_email = client.post("/api/contact", json={**ADA, "email": "not-an-email"})
    assert bad_email.status_code == 400
    assert bad_email.get_json() == {"error": "Invalid email"}

    too_long = client.post("/api/contact", json={**ADA, "description": " ".join(["word"] * 301)})
    assert too_long.status_code == 400
    assert too_long.get_json() == {"error": "Description must be 300 words or fewer"}

    assert store.list() == []


def test_contact_with_malformed_body_is_a_validation_error(client):
    response = client.post("/api/contact", data="{broken", content_type="application/json")
    assert response.status_code == 400
    assert response.get_json() == {"error": "Name and email are required"}


def test_storage_failure_is_reported_generically(tmp_path: Path, sink):
    data_file = tmp_path / "submissions.json"
    data_file.write_text("{corrupt")
    app = create_app(Settings(admin_key="correct"), store=JsonFileStore(data_file), sink=sink)
    client = app.test_client()

    response = client.post("/api/contact", json=ADA)

    assert response.status_code == 500
    assert response.get_json() == {"error": "Server error"}
    assert str(tmp_path) not in response.get_data(as_text=True)


def test_unexpected_error_is_reported_generically(sink):
    class ExplodingStore(MemoryStore):
        def append(self, submission):
            raise RuntimeError("disk on fire")

    app = create_app(Settings(admin_key="correct"), store=ExplodingStore(), sink=sink)

    response = app.test_client().post("/api/contact", json=ADA)

    assert response.status_code == 500
    assert response.get_json() == {"error": "Server error"}


def test_submissions_with_query_key(client):
    for index in range(3):
        client.post("/api/contact", json={**ADA, "name": f"client-{index}"})

    response = client.get("/api/submissions?key=correct")

    assert response.status_code == 200
    names = [item["name"] for item in response.get_json()["submissions"]]
    assert names == ["client-2", "client-1", "client-0"]


def test_submissions_with_body_key(client):
    response = client.get("/api/submissions", json={"key": "correct"})
    assert response.status_code == 200
    assert response.get_json() == {"submissions": []}


def test_submissions_without_key_is_unauthorized(client, sink):
    response = client.get("/api/submissions")

    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}
    assert sink.lines[-1] == "Unauthorized /api/submissions access from 127.0.0.1 (has_key:no)"


def test_login_sets_cookie_and_logout_clears_it(client):
    client.post("/api/contact", json=ADA)

    response = _login(client)
    assert response.status_code == 200
    assert response.get_json() == {"message": "ok"}
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("admin_key=correct")
    assert "HttpOnly" in cookie
    assert "Path=/" in cookie
    assert "SameSite=Lax" in cookie
    assert "Max-Age=604800" in cookie

    authorized = client.get("/api/submissions")
    assert authorized.status_code == 200
    assert len(authorized.get_json()["submissions"]) == 1

    logout = client.post("/logout")
    assert logout.status_code == 200
    assert logout.get_json() == {"message": "ok"}
    cleared = logout.headers["Set-Cookie"]
    assert cleared.startswith("admin_key=")
    assert "Max-Age=0" in cleared

    assert client.get("/api/submissions").status_code == 401


def test_wrong_login_is_rejected(client, sink):
    response = _login(client, key="wrong")

    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}
    assert "Set-Cookie" not in response.headers
    assert "Login FAILED for 127.0.0.1" in sink.lines
    assert not any("wrong" in line for line in sink.lines)


def test_gate_is_closed_without_admin_key(store, sink):
    app = create_app(Settings(admin_key=None), store=store, sink=sink)
    client = app.test_client()

    assert client.post("/login", json={"key": ""}).status_code == 401
    assert client.get("/api/submissions?key=").status_code == 401
    assert client.get("/api/submissions?key=anything").status_code == 401


def test_health(client):
    payload = client.get("/health").get_json()
    assert payload["status"] == "ok"
    assert payload["port"] == 3999
    assert isinstance(payload["pid"], int)


def test_operator_pages(client):
    login_page = client.get("/login")
    assert login_page.status_code == 200
    assert login_page.mimetype == "text/html"
    assert "Admin Login" in login_page.get_data(as_text=True)

    responses = client.get("/responses")
    assert "/api/submissions" in responses.get_data(as_text=True)

    css = client.get("/server/index.css")
    assert css.mimetype == "text/css"


def test_static_build_is_served(tmp_path: Path, store, sink):
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "index.html").write_text("<html>portfolio</html>")
    (dist / "app.js").write_text("console.log('hi')")
    app = create_app(Settings(static_dir=dist), store=store, sink=sink)
    client = app.test_client()

    assert "portfolio" in client.get("/").get_data(as_text=True)
    assert client.get("/app.js").status_code == 200
    assert client.get("/missing.js").status_code == 404
    assert client.get("/health").get_json()["status"] == "ok"


def test_unknown_route_is_404(client):
    assert client.get("/nope").status_code == 404


def test_file_backed_app_round_trip(tmp_path: Path, sink):
    data_file = tmp_path / "submissions.json"
    app = create_app(
        Settings(admin_key="correct", submissions_file=data_file, log_file=tmp_path / "server.log"),
        sink=sink,
    )
    client = app.test_client()

    assert client.post("/api/contact", json=ADA).status_code == 201
    stored = json.loads(data_file.read_text())
    assert stored[0]["email"] == "ada@x.com"
    listed = client.get("/api/submissions?key=correct").get_json()["submissions"]
    assert listed == stored
