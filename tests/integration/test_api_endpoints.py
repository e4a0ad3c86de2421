from petcare.infrastructure.api.dependencies import SESSION_COOKIE


def sign_in(client, account):
    return client.post("/auth/sign-in", json={"email": account["email"], "password": account["password"]})


def test_root_and_health(client):
    assert client.get("/").json()["service"] == "petcare-session"
    assert client.get("/health").json() == {"status": "healthy"}


def test_session_starts_signed_out(client):
    r = client.get("/session")
    assert r.status_code == 200
    assert r.json() == {"identity": None, "profile": None, "loading": False, "authenticated": False}


def test_dashboard_requires_sign_in(client):
    r = client.get("/dashboard")
    assert r.status_code == 401
    assert r.headers["location"] == "/login"


def test_sign_up_rejects_short_password(client):
    r = client.post("/auth/sign-up", json={"email": "a@example.com", "password": "123", "full_name": "A"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Password must be at least 6 characters"


def test_sign_up_duplicate(client, registered):
    r = client.post("/auth/sign-up", json=registered)
    assert r.status_code == 400
    assert r.json()["detail"] == "User already registered"


def test_sign_up_does_not_sign_in(client, registered):
    assert client.get("/session").json()["identity"] is None


def test_wrong_password(client, registered):
    r = sign_in(client, {**registered, "password": "nope-nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid login credentials"


def test_sign_in_flow(client, registered):
    r = sign_in(client, registered)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["authenticated"] is True
    assert data["identity"]["email"] == registered["email"]
    assert data["profile"]["full_name"] == "Jane Doe"
    assert data["profile"]["role"] == "admin"
    assert data["profile"]["id"] == data["identity"]["id"]

    dash = client.get("/dashboard")
    assert dash.status_code == 200
    body = dash.json()
    assert body["title"] == "Cat Care Tracker"
    assert body["welcome_name"] == "Jane Doe"
    assert body["household_name"] == "Jane Doe's Household"

    refreshed = client.post("/auth/profile/refresh")
    assert refreshed.status_code == 200
    assert refreshed.json()["household_id"] == body["household_id"]


def test_name_falls_back_when_not_given(client):
    account = {"email": "nameless@example.com", "password": "123456", "full_name": ""}
    assert client.post("/auth/sign-up", json=account).status_code == 201
    assert sign_in(client, account).status_code == 200

    body = client.get("/dashboard").json()
    assert body["name"] == "Not set"
    assert body["welcome_name"] == "nameless@example.com"


def test_sign_out_flow(client, registered):
    sign_in(client, registered)
    r = client.post("/auth/sign-out")
    assert r.status_code == 200
    assert r.json() == {"identity": None, "profile": None, "loading": False, "authenticated": False}
    assert client.get("/dashboard").status_code == 401


def test_refresh_profile_requires_sign_in(client):
    r = client.post("/auth/profile/refresh")
    assert r.status_code == 401
    assert r.headers["location"] == "/login"


def test_sign_in_sets_http_only_cookie(client, registered):
    r = sign_in(client, registered)
    cookie = r.headers["set-cookie"]
    assert cookie.startswith(f"{SESSION_COOKIE}=")
    assert "httponly" in cookie.lower()


def test_failed_sign_in_sets_no_cookie(client, registered):
    r = sign_in(client, {**registered, "password": "nope-nope"})
    assert "set-cookie" not in r.headers
    assert client.cookies.get(SESSION_COOKIE) is None


def test_other_clients_do_not_see_a_sign_in(client, registered):
    sign_in(client, registered)
    alice_cookie = client.cookies.get(SESSION_COOKIE)

    # a second browser: no cookie
    client.cookies.clear()
    assert client.get("/session").json()["identity"] is None
    assert client.get("/dashboard").status_code == 401
    r = client.post("/auth/sign-out")
    assert r.status_code == 401
    assert r.headers["location"] == "/login"

    # a forged cookie is no better
    client.cookies.set(SESSION_COOKIE, "forged")
    assert client.get("/dashboard").status_code == 401

    client.cookies.set(SESSION_COOKIE, alice_cookie)
    assert client.get("/session").json()["identity"]["email"] == registered["email"]
    assert client.get("/dashboard").json()["welcome_name"] == "Jane Doe"


def test_two_members_signed_in_side_by_side(client, registered):
    sign_in(client, registered)
    jane_cookie = client.cookies.get(SESSION_COOKIE)

    client.cookies.clear()
    bob = {"email": "bob@example.com", "password": "tabby123", "full_name": "Bob"}
    assert client.post("/auth/sign-up", json=bob).status_code == 201
    assert sign_in(client, bob).json()["identity"]["email"] == "bob@example.com"
    assert client.get("/dashboard").json()["welcome_name"] == "Bob"

    # bob signs out; jane's session is untouched
    assert client.post("/auth/sign-out").status_code == 200
    client.cookies.set(SESSION_COOKIE, jane_cookie)
    assert client.get("/dashboard").json()["welcome_name"] == "Jane Doe"


def test_error_responses_are_documented(client):
    schema = client.get("/openapi.json").json()
    error_ref = "#/components/schemas/ErrorResponse"
    sign_in_401 = schema["paths"]["/auth/sign-in"]["post"]["responses"]["401"]
    dashboard_503 = schema["paths"]["/dashboard"]["get"]["responses"]["503"]
    assert sign_in_401["content"]["application/json"]["schema"]["$ref"] == error_ref
    assert dashboard_503["content"]["application/json"]["schema"]["$ref"] == error_ref
