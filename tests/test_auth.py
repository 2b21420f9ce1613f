"""Tests for login, registration and the role tiers."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from shop_admin.models.database import Role, User


class TestLogin:
    def test_login_returns_token_and_user(self, client, users):
        response = client.post("/login", json={"username": "testadmin", "password": "password123"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["token"]
        assert data["user"]["username"] == "testadmin"
        assert data["user"]["role"] == "admin"
        assert "password_hash" not in data["user"]

    def test_token_carries_identity_and_role(self, app, client, users):
        response = client.post("/login", json={"username": "testeditor", "password": "password123"})
        payload = jwt.decode(
            response.get_json()["token"], app.config["JWT_SECRET"], algorithms=["HS256"]
        )

        assert payload["username"] == "testeditor"
        assert payload["role"] == "editor"
        assert payload["exp"] > payload["iat"]

    @pytest.mark.parametrize("username,password", [
        ("testadmin", "wrong-password"),
        ("nobody", "password123"),
    ])
    def test_bad_credentials_are_unauthorized(self, client, users, username, password):
        response = client.post("/login", json={"username": username, "password": password})

        assert response.status_code == 401
        assert response.get_json()["error"] == "Invalid credentials"

    def test_missing_fields_are_rejected(self, client):
        response = client.post("/login", json={"username": "testadmin"})

        assert response.status_code == 400
        assert "password" in response.get_json()["errors"]


class TestRegister:
    def _payload(self, **overrides):
        payload = {
            "username": "newuser",
            "email": "new@example.com",
            "password": "secret1",
            "confirm_password": "secret1",
        }
        payload.update(overrides)
        return payload

    def test_register_creates_plain_user(self, client):
        response = client.post("/register", json=self._payload())

        assert response.status_code == 201
        data = response.get_json()
        assert data["token"]
        assert data["user"]["role"] == "user"
        user = User.query.filter_by(username="newuser").one()
        assert user.password_hash != "secret1"

    def test_registered_user_can_log_in(self, client):
        client.post("/register", json=self._payload())

        response = client.post("/login", json={"username": "newuser", "password": "secret1"})
        assert response.status_code == 200

    def test_password_mismatch(self, client):
        response = client.post("/register", json=self._payload(confirm_password="other1"))

        assert response.status_code == 400
        assert "confirm_password" in response.get_json()["errors"]

    def test_short_password(self, client):
        response = client.post("/register", json=self._payload(password="abc", confirm_password="abc"))

        assert response.status_code == 400
        assert "password" in response.get_json()["errors"]

    def test_invalid_email(self, client):
        response = client.post("/register", json=self._payload(email="not-an-email"))

        assert response.status_code == 400
        assert "email" in response.get_json()["errors"]

    @pytest.mark.parametrize("field", ["username", "email"])
    def test_duplicate_username_or_email(self, client, field):
        client.post("/register", json=self._payload())
        other = self._payload(username="another", email="another@example.com")
        other[field] = self._payload()[field]

        response = client.post("/register", json=other)

        assert response.status_code == 400
        assert response.get_json()["error"] == "Username or email already in use"


def _token(app, secret=None, **overrides):
    payload = {
        "user_id": 1,
        "username": "testadmin",
        "role": "admin",
        "iat": datetime.now(timezone.utc),
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    payload.update(overrides)
    return jwt.encode(payload, secret or app.config["JWT_SECRET"], algorithm="HS256")


PROTECTED = [
    ("post", "/products"),
    ("put", "/products/1"),
    ("delete", "/products/1"),
    ("get", "/orders"),
    ("post", "/orders"),
    ("delete", "/orders/1"),
    ("get", "/sales-charts"),
    ("get", "/users"),
]


class TestTokenVerification:
    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_missing_token_is_unauthorized(self, client, method, path):
        response = getattr(client, method)(path, json={})

        assert response.status_code == 401
        assert response.get_json()["error"] == "Authentication required"

    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_expired_token_is_forbidden(self, app, client, method, path):
        token = _token(app, exp=datetime.now(timezone.utc) - timedelta(minutes=1))

        response = getattr(client, method)(
            path, json={}, headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 403
        assert response.get_json()["error"] == "Invalid or expired token"

    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_malformed_token_is_forbidden(self, client, method, path):
        response = getattr(client, method)(
            path, json={}, headers={"Authorization": "Bearer not.a.jwt"}
        )

        assert response.status_code == 403

    def test_token_signed_with_other_secret_is_forbidden(self, app, client):
        token = _token(app, secret="some-other-secret-that-is-long-enough")

        response = client.get("/users", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_unknown_role_is_forbidden(self, app, client):
        token = _token(app, role="superuser")

        response = client.get("/users", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_non_bearer_scheme_counts_as_missing(self, app, client):
        response = client.get("/users", headers={"Authorization": f"Basic {_token(app)}"})

        assert response.status_code == 401


class TestRoleTiers:
    def test_user_cannot_reach_editor_endpoints(self, client, user_headers):
        response = client.get("/orders", headers=user_headers)

        assert response.status_code == 403
        assert response.get_json()["error"] == "Editor access required"

    def test_editor_can_reach_editor_endpoints(self, client, editor_headers):
        assert client.get("/orders", headers=editor_headers).status_code == 200
        assert client.get("/sales-charts", headers=editor_headers).status_code == 200

    def test_editor_cannot_delete_products(self, client, editor_headers, make_product):
        product_id = make_product()

        response = client.delete(f"/products/{product_id}", headers=editor_headers)

        assert response.status_code == 403
        assert response.get_json()["error"] == "Admin access required"

    def test_any_authenticated_user_lists_users(self, client, user_headers):
        assert client.get("/users", headers=user_headers).status_code == 200


class TestRole:
    @pytest.mark.parametrize("role,required,allowed", [
        (Role.ADMIN, Role.ADMIN, True),
        (Role.ADMIN, Role.EDITOR, True),
        (Role.ADMIN, Role.USER, True),
        (Role.EDITOR, Role.ADMIN, False),
        (Role.EDITOR, Role.EDITOR, True),
        (Role.EDITOR, Role.USER, True),
        (Role.USER, Role.ADMIN, False),
        (Role.USER, Role.EDITOR, False),
        (Role.USER, Role.USER, True),
    ])
    def test_allows(self, role, required, allowed):
        assert role.allows(required) is allowed

    def test_allows_accepts_plain_strings(self):
        assert Role.ADMIN.allows("editor")
