import re
from datetime import datetime, timedelta, timezone

import pytest

from conftest import STRONG_PASSWORD, bearer, register
from devfeed.adapters.outbound.security.token_codec import TokenCodec
from devfeed.shared.utils.input_validation import InputValidator

TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")


def assert_error(response, status_code: int, code: str, path: str):
    assert response.status_code == status_code, response.text
    body = response.json()
    assert body["error"] == code
    assert body["status"] == status_code
    assert body["path"] == path
    assert body["message"]
    assert TIMESTAMP.match(body["timestamp"])
    return body


# --- Scenarios ---


@pytest.mark.asyncio
async def test_register_then_me(async_client):
    response = await async_client.post(
        "/api/auth/register",
        json={"email": "a@b.c", "username": "alice", "password": "Str0ng!pw"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["tokenType"] == "Bearer"
    assert body["username"] == "alice"
    assert body["email"] == "a@b.c"
    assert body["expiresIn"] == 86400

    me = await async_client.get("/api/auth/me", headers=bearer(body["token"]))

    assert me.status_code == 200
    assert me.json()["username"] == "alice"
    assert me.json()["email"] == "a@b.c"
    assert "password" not in me.json()


@pytest.mark.asyncio
async def test_login_wrong_password(async_client):
    await register(async_client, "a@b.c", "alice", "Str0ng!pw")

    response = await async_client.post("/api/auth/login", json={"email": "a@b.c", "password": "nope1234"})

    assert_error(response, 401, "INVALID_CREDENTIALS", "/api/auth/login")


@pytest.mark.asyncio
async def test_logout_invalidates_token(async_client):
    token = (await register(async_client, "a@b.c", "alice"))["token"]

    logout = await async_client.post("/api/auth/logout", headers=bearer(token))
    assert logout.status_code == 200
    assert logout.json() == {"message": "Logout successful"}

    me = await async_client.get("/api/auth/me", headers=bearer(token))
    assert_error(me, 401, "INVALID_TOKEN", "/api/auth/me")


@pytest.mark.asyncio
async def test_register_duplicate_email(async_client):
    await register(async_client, "a@b.c", "alice")

    response = await async_client.post(
        "/api/auth/register",
        json={"email": "a@b.c", "username": "someone", "password": STRONG_PASSWORD},
    )

    body = assert_error(response, 409, "USER_ALREADY_EXISTS", "/api/auth/register")
    assert body["message"] == "Email is already in use"


@pytest.mark.asyncio
async def test_register_weak_password(async_client):
    response = await async_client.post(
        "/api/auth/register",
        json={"email": "a@b.c", "username": "alice", "password": "weakpass"},
    )

    body = assert_error(response, 400, "VALIDATION_ERROR", "/api/auth/register")
    assert body["message"] == "Validation failed"
    assert any(InputValidator.PASSWORD_RULE_MESSAGE in error for error in body["validationErrors"])


# --- Register / login ---


@pytest.mark.asyncio
async def test_login_token_carries_email_and_ttl(async_client, app_context):
    await register(async_client, "alice@example.com", "alice")

    response = await async_client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": STRONG_PASSWORD}
    )

    assert response.status_code == 200
    claims = app_context.codec.parse(response.json()["token"], app_context.clock())
    assert claims.subject == "alice@example.com"
    assert claims.expires_at - claims.issued_at == timedelta(days=1)


@pytest.mark.asyncio
async def test_login_unknown_email_looks_like_wrong_password(async_client):
    await register(async_client, "alice@example.com", "alice")

    unknown = await async_client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": STRONG_PASSWORD}
    )
    wrong = await async_client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "Wr0ng!pw"}
    )

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json()["error"] == wrong.json()["error"] == "INVALID_CREDENTIALS"
    assert unknown.json()["message"] == wrong.json()["message"]


@pytest.mark.asyncio
async def test_register_duplicate_username(async_client):
    await register(async_client, "alice@example.com", "alice")

    response = await async_client.post(
        "/api/auth/register",
        json={"email": "other@example.com", "username": "alice", "password": STRONG_PASSWORD},
    )

    body = assert_error(response, 409, "USER_ALREADY_EXISTS", "/api/auth/register")
    assert body["message"] == "Username is already in use"


@pytest.mark.asyncio
async def test_email_is_normalised(async_client):
    body = await register(async_client, "  Alice@Example.COM ", "alice")
    assert body["email"] == "alice@example.com"

    login = await async_client.post(
        "/api/auth/login", json={"email": "ALICE@example.com", "password": STRONG_PASSWORD}
    )
    assert login.status_code == 200

    duplicate = await async_client.post(
        "/api/auth/register",
        json={"email": "alice@EXAMPLE.com", "username": "alice2", "password": STRONG_PASSWORD},
    )
    assert duplicate.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload,field",
    [
        ({"email": "not-an-email", "username": "alice", "password": STRONG_PASSWORD}, "email"),
        ({"email": "alice@example.com", "username": "al", "password": STRONG_PASSWORD}, "username"),
        ({"email": "alice@example.com", "username": "alice", "password": "Sh0rt!"}, "password"),
        ({"email": "alice@example.com", "username": "alice", "password": "N0 spaces!"}, "password"),
        ({"email": "alice@example.com", "password": STRONG_PASSWORD}, "username"),
    ],
)
async def test_register_validation(async_client, payload, field):
    response = await async_client.post("/api/auth/register", json=payload)

    body = assert_error(response, 400, "VALIDATION_ERROR", "/api/auth/register")
    assert any(error.startswith(f"{field}:") for error in body["validationErrors"])


@pytest.mark.asyncio
async def test_login_empty_password_is_validation_error(async_client):
    response = await async_client.post("/api/auth/login", json={"email": "alice@example.com", "password": ""})

    assert_error(response, 400, "VALIDATION_ERROR", "/api/auth/login")


# --- Me / users ---


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer garbage"}, {"Authorization": "Basic YWxpY2U6cHc="}],
)
async def test_me_requires_valid_token(async_client, headers):
    response = await async_client.get("/api/auth/me", headers=headers)

    assert_error(response, 401, "INVALID_TOKEN", "/api/auth/me")


@pytest.mark.asyncio
async def test_token_signed_with_other_secret_rejected(async_client, alice):
    forged = TokenCodec("some-other-secret-0123456789abcdefghij").sign(
        "alice@example.com", datetime.now(timezone.utc), timedelta(hours=1)
    )

    response = await async_client.get("/api/auth/me", headers=bearer(forged))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_get_user_by_id(async_client, alice, bob):
    me = await async_client.get("/api/auth/me", headers=bearer(bob["token"]))
    bob_id = me.json()["id"]

    response = await async_client.get(f"/api/auth/users/{bob_id}", headers=bearer(alice["token"]))

    assert response.status_code == 200
    assert response.json()["username"] == "bob"


@pytest.mark.asyncio
async def test_get_unknown_user(async_client, alice):
    response = await async_client.get("/api/auth/users/9999", headers=bearer(alice["token"]))

    body = assert_error(response, 404, "USER_NOT_FOUND", "/api/auth/users/9999")
    assert "9999" in body["message"]


# --- Logout ---


@pytest.mark.asyncio
async def test_logout_twice_keeps_single_entry(async_client, app_context, alice):
    first = await async_client.post("/api/auth/logout", headers=bearer(alice["token"]))
    second = await async_client.post("/api/auth/logout", headers=bearer(alice["token"]))

    assert first.status_code == second.status_code == 200
    assert app_context.revocations.size() == 1


@pytest.mark.asyncio
async def test_logout_only_revokes_presented_token(async_client, alice):
    second = await async_client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": STRONG_PASSWORD}
    )
    await async_client.post("/api/auth/logout", headers=bearer(alice["token"]))

    response = await async_client.get("/api/auth/me", headers=bearer(second.json()["token"]))

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_after_logout_issues_working_token(async_client, alice):
    await async_client.post("/api/auth/logout", headers=bearer(alice["token"]))

    login = await async_client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": STRONG_PASSWORD}
    )
    response = await async_client.get("/api/auth/me", headers=bearer(login.json()["token"]))

    assert response.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"Authorization": "Basic YWxpY2U6cHc="}])
async def test_logout_without_bearer_header(async_client, headers):
    response = await async_client.post("/api/auth/logout", headers=headers)

    assert_error(response, 400, "INVALID_AUTHORIZATION_HEADER", "/api/auth/logout")


@pytest.mark.asyncio
async def test_logout_with_foreign_token(async_client):
    response = await async_client.post("/api/auth/logout", headers=bearer("not.a.token"))

    assert_error(response, 401, "INVALID_TOKEN", "/api/auth/logout")


# --- Update profile ---


@pytest.mark.asyncio
async def test_update_username(async_client, alice):
    response = await async_client.put(
        "/api/auth/update-profile", json={"username": "alicia"}, headers=bearer(alice["token"])
    )

    assert response.status_code == 200
    assert response.json()["username"] == "alicia"
    assert response.json()["email"] == "alice@example.com"


@pytest.mark.asyncio
async def test_update_to_taken_username_changes_nothing(async_client, alice, bob):
    response = await async_client.put(
        "/api/auth/update-profile", json={"username": "bob", "email": "new@example.com"},
        headers=bearer(alice["token"]),
    )

    assert_error(response, 409, "USER_ALREADY_EXISTS", "/api/auth/update-profile")
    me = await async_client.get("/api/auth/me", headers=bearer(alice["token"]))
    assert me.json()["username"] == "alice"
    assert me.json()["email"] == "alice@example.com"


@pytest.mark.asyncio
async def test_update_to_taken_email(async_client, alice, bob):
    response = await async_client.put(
        "/api/auth/update-profile", json={"email": "bob@example.com"}, headers=bearer(alice["token"])
    )

    assert_error(response, 409, "USER_ALREADY_EXISTS", "/api/auth/update-profile")


@pytest.mark.asyncio
async def test_update_email_orphans_old_token(async_client, alice):
    response = await async_client.put(
        "/api/auth/update-profile", json={"email": "alice.new@example.com"}, headers=bearer(alice["token"])
    )
    assert response.status_code == 200
    assert response.json()["email"] == "alice.new@example.com"

    me = await async_client.get("/api/auth/me", headers=bearer(alice["token"]))
    assert me.status_code == 401

    login = await async_client.post(
        "/api/auth/login", json={"email": "alice.new@example.com", "password": STRONG_PASSWORD}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_update_password(async_client, alice):
    response = await async_client.put(
        "/api/auth/update-profile", json={"password": "N3w!passw"}, headers=bearer(alice["token"])
    )
    assert response.status_code == 200

    old = await async_client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": STRONG_PASSWORD}
    )
    new = await async_client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "N3w!passw"}
    )
    assert old.status_code == 401
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_update_with_blank_fields_changes_nothing(async_client, alice):
    response = await async_client.put(
        "/api/auth/update-profile",
        json={"username": "  ", "email": "", "password": None},
        headers=bearer(alice["token"]),
    )

    assert response.status_code == 200
    assert response.json()["username"] == "alice"
    assert response.json()["email"] == "alice@example.com"


@pytest.mark.asyncio
async def test_update_with_weak_password(async_client, alice):
    response = await async_client.put(
        "/api/auth/update-profile", json={"password": "weakpass"}, headers=bearer(alice["token"])
    )

    body = assert_error(response, 400, "VALIDATION_ERROR", "/api/auth/update-profile")
    assert body["validationErrors"] == [f"password: {InputValidator.PASSWORD_RULE_MESSAGE}"]


@pytest.mark.asyncio
async def test_update_requires_token(async_client):
    response = await async_client.put("/api/auth/update-profile", json={"username": "alicia"})

    assert_error(response, 401, "INVALID_TOKEN", "/api/auth/update-profile")


# --- Health and framework errors ---


@pytest.mark.asyncio
async def test_health_is_public_plain_text(async_client):
    response = await async_client.get("/api/auth/health")

    assert response.status_code == 200
    assert response.text == "Authentication service is running"
    assert response.headers["content-type"].startswith("text/plain")


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(async_client):
    response = await async_client.get("/api/nothing-here")

    assert_error(response, 404, "NOT_FOUND", "/api/nothing-here")


@pytest.mark.asyncio
async def test_wrong_method_uses_error_envelope(async_client):
    response = await async_client.delete("/api/auth/login")

    assert_error(response, 405, "METHOD_NOT_ALLOWED", "/api/auth/login")


@pytest.mark.asyncio
async def test_malformed_json_is_validation_error(async_client):
    response = await async_client.post(
        "/api/auth/login", content="{not json", headers={"Content-Type": "application/json"}
    )

    assert_error(response, 400, "VALIDATION_ERROR", "/api/auth/login")
