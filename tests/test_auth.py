from conftest import ADMIN_PASSWORD, ADMIN_USER


def test_login_sets_session_and_unlocks_protected_routes(client):
    assert client.get("/orders").status_code == 401

    resp = client.post("/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Logged in", "username": ADMIN_USER}

    assert client.get("/orders").status_code == 200


def test_wrong_password_is_rejected_and_sets_nothing(client):
    resp = client.post("/login", json={"username": ADMIN_USER, "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Wrong password"}

    resp = client.get("/orders")
    assert resp.status_code == 401
    assert "error" in resp.get_json()


def test_unknown_user(client):
    resp = client.post("/login", json={"username": "ghost", "password": ADMIN_PASSWORD})
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "User not found"}


def test_form_login_from_browser_returns_admin_page(app):
    browser = app.test_client()
    resp = browser.post("/login", data={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    assert b"Store admin" in resp.data
    assert browser.get("/admin").status_code == 200


def test_browser_gets_html_rejection(app):
    browser = app.test_client()
    resp = browser.post("/categories", json={"name": "Hats"})
    assert resp.status_code == 401
    assert resp.mimetype == "text/html"
    assert b"<h2>" in resp.data

    resp = browser.get("/admin")
    assert resp.status_code == 401
    assert b"<h2>" in resp.data


def test_logout_ends_session(admin_client):
    resp = admin_client.post("/logout")
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Logged out"}
    assert admin_client.get("/orders").status_code == 401


def test_logout_without_session_is_fine(client):
    assert client.post("/logout").status_code == 200


def test_logout_store_failure_is_server_error(app, admin_client, monkeypatch):
    def broken(sid):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(app.session_interface.store, "delete", broken)
    resp = admin_client.post("/logout")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Logout failed"}


def test_landing_page_is_public(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Welcome" in resp.data


def test_admin_page_is_not_reachable_through_static(app):
    browser = app.test_client()
    resp = browser.get("/static/admin/admin.html")
    assert resp.status_code == 404
    assert b"Store admin" not in resp.data

    assert browser.get("/admin").status_code == 401


def test_malformed_login_matches_the_client(app, client):
    browser = app.test_client()
    resp = browser.post("/login", json={"username": ["admin"], "password": 5})
    assert resp.status_code == 400
    assert resp.mimetype == "text/html"
    assert b"<h2>" in resp.data

    resp = client.post("/login", json={"username": ["admin"], "password": 5})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Username and password must be text"}
    assert client.get("/orders").status_code == 401
