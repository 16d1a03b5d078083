"""
Password hashing, session cookies and the /api/auth endpoints.
"""

from datetime import timedelta

from conftest import register

from stars.core.config_loader import settings
from stars.core.security import (
    create_session_token,
    decode_session_token,
    get_password_hash,
    verify_password,
)
from stars.services.session_service import open_session, resolve_session
from stars.utils.time_utils import utc_now


class TestSecurity:

    def test_password_hash_is_salted_and_verifiable(self):
        first = get_password_hash("secret123")
        second = get_password_hash("secret123")
        assert first != second
        assert first != "secret123"
        assert verify_password("secret123", first)
        assert not verify_password("wrong", first)

    def test_verify_against_non_hash_is_false(self):
        assert verify_password("password123", "password123") is False

    def test_session_token_round_trip(self):
        token = create_session_token("abc")
        assert decode_session_token(token) == "abc"

    def test_tampered_token_is_rejected(self):
        token = create_session_token("abc")
        assert decode_session_token(token + "x") is None
        assert decode_session_token("not-a-token") is None


class TestSessionService:

    def test_open_and_resolve(self, store):
        user = store.create_user(username="alice", hashed_password="h")
        token, ctx = open_session(store, user)
        assert resolve_session(store, token) == ctx
        assert ctx.username == "alice"

    def test_expired_session_is_dropped(self, store):
        user = store.create_user(username="alice", hashed_password="h")
        token, ctx = open_session(store, user)
        store.sessions[ctx.session_id]["expires_at"] = utc_now() - timedelta(seconds=1)

        assert resolve_session(store, token) is None
        assert store.get_session(ctx.session_id) is None

    def test_missing_token(self, store):
        assert resolve_session(store, None) is None


class TestRegister:

    def test_register_returns_user_without_password(self, client, store):
        response = register(client, "alice", email="alice@example.com", firstName="Alice")
        assert response.status_code == 201

        body = response.json()
        assert body["isAuthenticated"] is True
        assert body["user"]["username"] == "alice"
        assert body["user"]["firstName"] == "Alice"
        assert body["user"]["isVerified"] is True
        assert "password" not in body["user"]
        assert "hashedPassword" not in body["user"]
        assert settings.session_cookie_name in response.cookies

    def test_register_logs_the_user_in(self, client):
        register(client, "alice")
        me = client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.json()["username"] == "alice"

    def test_duplicate_username_is_400_and_creates_nothing(self, client, store):
        register(client, "alice")
        users_before = len(store.users)

        response = register(client, "alice", password="another-pass")
        assert response.status_code == 400
        assert response.json()["detail"] == "Username already exists"
        assert len(store.users) == users_before

    def test_duplicate_email_is_400(self, client):
        register(client, "alice", email="same@example.com")
        response = register(client, "bob", email="same@example.com")
        assert response.status_code == 400

    def test_invalid_payload_is_400_with_field_errors(self, client):
        response = client.post("/api/auth/register", json={"username": "al"})
        assert response.status_code == 400
        fields = {tuple(e["loc"])[-1] for e in response.json()["errors"]}
        assert {"username", "password"} <= fields

    def test_password_limit_counts_bytes(self, client, store):
        response = register(client, "alice", password="é" * 72)
        assert response.status_code == 400
        assert "password" in {tuple(e["loc"])[-1] for e in response.json()["errors"]}
        assert store.get_user_by_username("alice") is None

    def test_multibyte_password_at_the_limit(self, client):
        assert register(client, "alice", password="é" * 36).status_code == 201


class TestLogin:

    def test_login_sets_session_and_last_login(self, client, other_client, store):
        register(client, "alice")
        before = store.get_user_by_username("alice")["last_login"]

        response = other_client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})
        assert response.status_code == 200
        assert response.json()["isAuthenticated"] is True
        assert store.get_user_by_username("alice")["last_login"] >= before
        assert other_client.get("/api/auth/me").json()["username"] == "alice"

    def test_wrong_password_is_401(self, client, other_client):
        register(client, "alice")
        response = other_client.post("/api/auth/login", json={"username": "alice", "password": "nope-nope"})
        assert response.status_code == 401

    def test_overlong_password_is_401_not_500(self, client, other_client):
        register(client, "alice")
        response = other_client.post("/api/auth/login", json={"username": "alice", "password": "x" * 200})
        assert response.status_code == 401

    def test_unknown_user_is_401(self, client):
        response = client.post("/api/auth/login", json={"username": "ghost", "password": "whatever"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username or password"


class TestLogoutAndMe:

    def test_me_without_session_is_401(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_logout_destroys_session(self, client, store):
        register(client, "alice")
        assert len(store.sessions) == 1

        response = client.post("/api/auth/logout")
        assert response.status_code == 200
        assert response.json()["isAuthenticated"] is False
        assert store.sessions == {}
        assert client.get("/api/auth/me").status_code == 401

    def test_logout_without_session_still_ok(self, client):
        assert client.post("/api/auth/logout").status_code == 200
