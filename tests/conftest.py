"""Shared fixtures: an in-memory app, a test client and per-role tokens."""

import pytest

from shop_admin.app import create_app
from shop_admin.config.settings import TestingConfig
from shop_admin.models.database import db, Product, Role
from shop_admin.services.auth_service import AuthService


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    """One user per role, all with the password ``password123``."""
    for role in Role:
        AuthService.ensure_user(
            f"test{role.value}", f"{role.value}@example.com", "password123", role
        )


def _login(client, username):
    response = client.post("/login", json={"username": username, "password": "password123"})
    assert response.status_code == 200, response.get_json()
    return response.get_json()["token"]


@pytest.fixture
def admin_headers(client, users):
    return {"Authorization": f"Bearer {_login(client, 'testadmin')}"}


@pytest.fixture
def editor_headers(client, users):
    return {"Authorization": f"Bearer {_login(client, 'testeditor')}"}


@pytest.fixture
def user_headers(client, users):
    return {"Authorization": f"Bearer {_login(client, 'testuser')}"}


@pytest.fixture
def make_product(app):
    def _make(name="Widget", price=100, stock=5, category="tools"):
        product = Product(name=name, price=price, stock=stock, category=category)
        db.session.add(product)
        db.session.commit()
        return product.id
    return _make


@pytest.fixture
def stock_of(app):
    def _stock(product_id):
        db.session.expire_all()
        return db.session.get(Product, product_id).stock
    return _stock
