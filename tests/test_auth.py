from datetime import timedelta

from app.domain.enums import Role
from app.domain.exceptions import ErrorCode
from app.services.auth_service import create_access_token, is_admin

from tests.conftest import auth_headers


def test_signup_creates_user_without_leaking_password(client):
    resp = client.post(
        "/auth/signup",
        json={"name": "Ann", "email": "ann@example.com", "password": "secret123"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "ann@example.com"
    assert body["role"] == Role.USER.value
    assert "password" not in body


def test_signup_duplicate_email_is_bad_request(client, user):
    resp = client.post(
        "/auth/signup",
        json={"name": "Again", "email": "user@example.com", "password": "secret123"},
    )
    assert resp.status_code == 400
    assert resp.json()["errorCode"] == ErrorCode.USER_ALREADY_EXISTS


def test_signup_short_password_is_validation_error(client):
    resp = client.post(
        "/auth/signup",
        json={"name": "Ann", "email": "ann@example.com", "password": "123"},
    )
    assert resp.status_code == 422
    body = resp.json()
    assert body["errorCode"] == ErrorCode.UNPROCESSABLE_ENTITY
    assert body["errors"]


def test_login_returns_token_usable_for_current_user(client, user):
    resp = client.post("/auth/login", json={"email": "user@example.com", "password": "secret123"})
    assert resp.status_code == 200
    token = resp.json()["token"]

    me = client.get("/auth/current-user", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["id"] == user.id


def test_login_wrong_password(client, user):
    resp = client.post("/auth/login", json={"email": "user@example.com", "password": "nope-nope"})
    assert resp.status_code == 400
    assert resp.json()["errorCode"] == ErrorCode.INCORRECT_PASSWORD


def test_login_unknown_user(client):
    resp = client.post("/auth/login", json={"email": "ghost@example.com", "password": "secret123"})
    assert resp.status_code == 404
    assert resp.json()["errorCode"] == ErrorCode.USER_NOT_FOUND


def test_missing_credentials_is_unauthorized(client):
    resp = client.get("/auth/current-user")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized", "errorCode": ErrorCode.UNAUTHORIZED, "errors": None}


def test_malformed_token_is_unauthorized(client):
    resp = client.get("/auth/current-user", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_expired_token_is_unauthorized(client, user):
    token = create_access_token(user.id, expires_delta=timedelta(seconds=-5))
    resp = client.get("/auth/current-user", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_token_for_deleted_user_is_unauthorized(client, session, user):
    headers = auth_headers(user)
    session.delete(user)
    session.commit()

    resp = client.get("/auth/current-user", headers=headers)
    assert resp.status_code == 401


def test_admin_route_forbidden_for_regular_user(client, user_headers):
    resp = client.get("/users/", headers=user_headers)
    assert resp.status_code == 403
    assert resp.json()["errorCode"] == ErrorCode.FORBIDDEN


def test_is_admin_checks_role(make_user):
    admin = make_user(email="boss@example.com", role=Role.ADMIN)
    regular = make_user(email="plain@example.com")
    assert is_admin(admin) is True
    assert is_admin(regular) is False
