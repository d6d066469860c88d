from laserworks.auth import EmailTokenCodec

REGISTER_PAYLOAD = {
    "username": "newbie",
    "password": "password1",
    "firstName": "New",
    "lastName": "Customer",
    "email": "newbie@example.com",
    "birthDate": "1995-04-12",
}


def test_register_returns_token_for_regular_user(client, codec):
    response = client.post("/auth/register", json={**REGISTER_PAYLOAD, "role": "admin"})

    assert response.status_code == 201
    identity = codec.decode(response.json()["token"])
    assert identity.username == "newbie"
    assert identity.is_admin is False
    assert identity.is_verified is False


def test_register_duplicate_username(client, seeded):
    response = client.post("/auth/register", json={**REGISTER_PAYLOAD, "username": "u1"})

    assert response.status_code == 400
    assert response.json() == {"error": {"message": "Duplicate username: u1", "status": 400}}


def test_register_invalid_payload(client):
    response = client.post("/auth/register", json={"username": "x"})

    body = response.json()
    assert response.status_code == 400
    assert body["error"]["status"] == 400
    assert isinstance(body["error"]["message"], list)


def test_login(client, seeded, codec):
    response = client.post("/auth/token", json={"username": "admin", "password": "password1"})

    assert response.status_code == 200
    identity = codec.decode(response.json()["token"])
    assert identity.username == "admin"
    assert identity.is_admin is True


def test_login_failures_are_uniform(client, seeded):
    wrong_password = client.post("/auth/token", json={"username": "u1", "password": "nope"})
    unknown_user = client.post("/auth/token", json={"username": "ghost", "password": "password1"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()


def test_email_confirmation(client, seeded, settings, tokens):
    token = EmailTokenCodec(settings).encode("u1")

    response = client.get(f"/auth/confirmation/{token}")

    assert response.status_code == 200
    assert response.json()["user"]["isVerified"] is True
    assert client.get("/users/u1", headers=tokens["u1"]).json()["user"]["isVerified"] is True


def test_email_confirmation_bad_token(client, seeded):
    response = client.get("/auth/confirmation/not-a-token")

    assert response.status_code == 400


def test_email_confirmation_unknown_user(client, settings):
    token = EmailTokenCodec(settings).encode("ghost")

    assert client.get(f"/auth/confirmation/{token}").status_code == 404


def test_send_verification(client, tokens):
    response = client.post("/auth/send-verification/u1", json={"email": "u1@example.com"}, headers=tokens["u1"])

    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_send_verification_for_someone_else(client, tokens):
    response = client.post("/auth/send-verification/u1", json={"email": "u1@example.com"}, headers=tokens["u2"])

    assert response.status_code == 401


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": {"message": "Not Found", "status": 404}}


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"
    assert client.get("/health").headers["X-Request-ID"]
