from conftest import auth


def test_register_defaults_to_student(client):
    r = client.post(
        "/auth/register",
        json={"name": "Ada", "email": "Ada@Campus.Example.com", "password": "secret123"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["data"]["token"]
    assert body["data"]["user"]["role"] == "STUDENT"
    assert body["data"]["user"]["email"] == "ada@campus.example.com"
    assert "hashedPassword" not in body["data"]["user"]


def test_register_duplicate_email(client, register):
    register("dup@campus.example.com")
    r = client.post(
        "/auth/register",
        json={"name": "Again", "email": "DUP@campus.example.com", "password": "secret123"},
    )
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Email already registered"}


def test_register_cannot_choose_admin(client):
    r = client.post(
        "/auth/register",
        json={"name": "Mallory", "email": "m@campus.example.com", "password": "secret123", "role": "ADMIN"},
    )
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation failed"
    assert "role" in body["errors"]


def test_register_validation_groups_errors_by_field(client):
    r = client.post("/auth/register", json={"name": "A", "email": "nope", "password": "123"})
    assert r.status_code == 400
    errors = r.json()["errors"]
    assert {"name", "email", "password"} <= set(errors)


def test_login_and_me(client, register):
    register("lola@campus.example.com", role="LANDLORD", name="Lola")
    r = client.post("/auth/login", json={"email": "lola@campus.example.com", "password": "secret123"})
    assert r.status_code == 200
    token = r.json()["data"]["token"]

    r = client.get("/auth/me", headers=auth(token))
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Lola"
    assert r.json()["data"]["role"] == "LANDLORD"


def test_login_wrong_password_and_unknown_email_look_the_same(client, register):
    register("sam@campus.example.com")
    wrong = client.post("/auth/login", json={"email": "sam@campus.example.com", "password": "bad-pass"})
    unknown = client.post("/auth/login", json={"email": "who@campus.example.com", "password": "bad-pass"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {
        "success": False,
        "message": "Invalid email or password",
    }


def test_me_requires_token(client):
    r = client.get("/auth/me")
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Unauthorized"}


def test_me_rejects_garbage_token(client):
    r = client.get("/auth/me", headers=auth("not-a-jwt"))
    assert r.status_code == 401
