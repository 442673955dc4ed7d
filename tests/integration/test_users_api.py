def test_signup_returns_customer_without_password(client, signup):
    body = signup("kim", email="kim@mail.com", nickname="Kim")
    assert body["username"] == "kim"
    assert body["role"] == "CUSTOMER"
    assert "password" not in body and "password_hash" not in body


def test_signup_rejects_role_field(client):
    r = client.post(
        "/api/user/signup",
        json={"username": "x", "email": "x@mail.com", "password": "pw", "nickname": "x", "role": "MASTER"},
    )
    assert r.status_code == 400
    assert r.json()["code"] == "validation_error"


def test_signup_duplicate_username(client, signup):
    signup("kim")
    r = client.post(
        "/api/user/signup",
        json={"username": "kim", "email": "other@mail.com", "password": "pw", "nickname": "k"},
    )
    assert r.status_code == 409
    assert r.json()["message"] == "username already exists : kim"


def test_signup_invalid_email(client):
    r = client.post(
        "/api/user/signup",
        json={"username": "kim", "email": "not-an-email", "password": "pw", "nickname": "k"},
    )
    assert r.status_code == 400


def test_signin_and_bad_credentials(client, signup, signin):
    signup("kim")
    tokens = signin("kim")
    assert tokens["token_type"] == "Bearer"
    assert tokens["access_token"] and tokens["refresh_token"]

    for username, password in (("kim", "wrong"), ("ghost", "Passw0rd!")):
        r = client.post("/api/user/signin", json={"username": username, "password": password})
        assert r.status_code == 401
        assert r.json()["message"] == "Invalid username or password."


def test_password_whitespace_is_kept_verbatim(client, signup, signin):
    body = signup(" kim ", password=" pad me ", email="kim@mail.com", nickname="Kim")
    assert body["username"] == "kim"
    assert signin("kim", " pad me ")["access_token"]

    r = client.post("/api/user/signin", json={"username": "kim", "password": "pad me"})
    assert r.status_code == 401


def test_reissue_rotates(client, signup, signin):
    signup("kim")
    first = signin("kim")["refresh_token"]

    r = client.post("/api/user/reissue", json={"refresh_token": first})
    assert r.status_code == 200
    second = r.json()["refresh_token"]
    assert second != first

    r = client.post("/api/user/reissue", json={"refresh_token": first})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid refresh token."


def test_protected_routes_need_bearer(client):
    assert client.get("/api/user").status_code == 401
    r = client.get("/api/user", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401
    assert r.json()["code"] == "unauthorized"


def test_refresh_token_is_not_an_access_token(client, signup, signin):
    signup("kim")
    refresh = signin("kim")["refresh_token"]
    r = client.get("/api/user", headers={"Authorization": f"Bearer {refresh}"})
    assert r.status_code == 401


def test_get_by_id(client, signup, auth):
    account = signup("kim")
    headers = auth("kim")
    r = client.get(f"/api/user/{account['id']}", headers=headers)
    assert r.status_code == 200
    assert r.json()["username"] == "kim"

    missing = "00000000-0000-0000-0000-000000000000"
    r = client.get(f"/api/user/{missing}", headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == f"User Not Found By Id : {missing}"


def test_search(client, signup, auth):
    for name in ("kim1", "kim2", "lee"):
        signup(name, email=f"{name}@corp.com")
    headers = auth("kim1")

    r = client.get("/api/user", params={"username": "KIM", "sortBy": "createdAt", "order": "desc"}, headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 2
    assert [a["username"] for a in body["data"]] == ["kim2", "kim1"]

    r = client.get("/api/user", params={"email": "lee@"}, headers=headers)
    assert [a["username"] for a in r.json()["data"]] == ["lee"]

    r = client.get("/api/user", params={"size": 1, "page": 1}, headers=headers)
    body = r.json()
    assert body["total"] == 3 and body["page"] == 1 and body["total_pages"] == 3
    assert len(body["data"]) == 1


def test_search_errors(client, signup, auth):
    signup("kim")
    headers = auth("kim")
    r = client.get("/api/user", params={"sortBy": "username"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["message"].startswith("SortBy must be one of the allowed values")

    r = client.get("/api/user", params={"username": "nobody"}, headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Users Not Found"

    r = client.get("/api/user", params={"username": " "}, headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Users Not Found"


def test_update_profile(client, signup, auth):
    account = signup("kim", email="kim@mail.com")
    headers = auth("kim")

    r = client.patch(
        f"/api/user/{account['id']}",
        json={"current_password": "Passw0rd!", "nickname": "Kimmy", "new_password": "N3w-pass"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["nickname"] == "Kimmy"
    assert r.json()["email"] == "kim@mail.com"

    r = client.post("/api/user/signin", json={"username": "kim", "password": "N3w-pass"})
    assert r.status_code == 200


def test_update_profile_rules(client, signup, auth, master):
    kim = signup("kim")
    signup("lee")

    r = client.patch(f"/api/user/{kim['id']}", json={"current_password": "Passw0rd!", "nickname": "x"}, headers=auth("lee"))
    assert r.status_code == 403
    assert r.json()["message"] == "Access denied."

    r = client.patch(f"/api/user/{kim['id']}", json={"current_password": "nope", "nickname": "x"}, headers=auth("kim"))
    assert r.status_code == 403
    assert r.json()["message"] == "Incorrect password."

    r = client.patch(f"/api/user/{kim['id']}", json={"current_password": "Passw0rd!", "nickname": "byroot"}, headers=master)
    assert r.status_code == 200
    assert r.json()["nickname"] == "byroot"


def test_update_role(client, signup, auth, master):
    kim = signup("kim")
    r = client.patch(f"/api/user/{kim['id']}/role", json={"role": "MASTER"}, headers=auth("kim"))
    assert r.status_code == 403

    r = client.patch(f"/api/user/{kim['id']}/role", json={"role": "MANAGER"}, headers=master)
    assert r.status_code == 200
    assert r.json()["role"] == "MANAGER"

    r = client.patch(f"/api/user/{kim['id']}/role", json={"role": "EMPEROR"}, headers=master)
    assert r.status_code == 400


def test_soft_delete(client, signup, signin, auth, manager):
    kim = signup("kim")
    lee = signup("lee")
    refresh = signin("kim")["refresh_token"]

    r = client.patch(f"/api/user/{kim['id']}/delete", headers=auth("lee"))
    assert r.status_code == 403

    r = client.patch(f"/api/user/{kim['id']}/delete", headers=auth("kim"))
    assert r.status_code == 200

    assert client.get(f"/api/user/{kim['id']}", headers=auth("lee")).status_code == 404
    assert client.post("/api/user/signin", json={"username": "kim", "password": "Passw0rd!"}).status_code == 401
    assert client.post("/api/user/reissue", json={"refresh_token": refresh}).status_code == 401

    # the username stays taken
    r = client.post(
        "/api/user/signup",
        json={"username": "kim", "email": "kim@mail.com", "password": "pw", "nickname": "k"},
    )
    assert r.status_code == 409

    r = client.patch(f"/api/user/{lee['id']}/delete", headers=manager)
    assert r.status_code == 200
