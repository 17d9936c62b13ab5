"""
Shared pytest fixtures for the Voozea API tests.

This module provides:
- An application on a fresh in-memory SQLite database per test
- A Flask test client
- Factories for users, businesses, memberships, categories and products
- ``auth_headers`` to call the API as a given user

The ``app`` fixture keeps an application context pushed for the whole test,
so services can be called directly and share the session with requests
made through ``client``.
"""
import itertools

import pytest
from flask_jwt_extended import create_access_token

from voozea import create_app
from voozea.extension import db
from voozea.models import User, Business, BusinessMember, Category, Product
from voozea.models.membership import ROLE_MANAGER, STATUS_ACTIVE
from voozea.models.category import TYPE_BUSINESS, TYPE_PRODUCT
from voozea.service.business_service import slugify


TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "JWT_SECRET_KEY": "voozea-test-secret-key-0123456789abcdef",
    "LOG_LEVEL": "WARNING",
}


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = itertools.count(1)

    def _make(username=None, **kwargs):
        username = username or f"user{next(counter)}"
        user = User(
            email=kwargs.pop("email", f"{username}@example.com"),
            username=username,
            display_name=kwargs.pop("display_name", username.title()),
            **kwargs
        )
        user.set_password("secret123")
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def make_business(app):
    def _make(name="Corner Cafe", owner=None, **kwargs):
        business = Business(
            name=name,
            slug=kwargs.pop("slug", slugify(name)),
            owner_id=owner.id if owner else None,
            is_claimed=owner is not None,
            **kwargs
        )
        db.session.add(business)
        db.session.commit()
        return business

    return _make


@pytest.fixture
def make_manager(app):
    def _make(business, user, status=STATUS_ACTIVE):
        member = BusinessMember(
            business_id=business.id,
            user_id=user.id,
            role=ROLE_MANAGER,
            status=status,
            invited_by=business.owner_id,
        )
        db.session.add(member)
        db.session.commit()
        return member

    return _make


@pytest.fixture
def make_category(app):
    def _make(name, type=TYPE_PRODUCT, **kwargs):
        category = Category(name=name, slug=kwargs.pop("slug", slugify(name)), type=type, **kwargs)
        db.session.add(category)
        db.session.commit()
        return category

    return _make


@pytest.fixture
def make_product(app):
    def _make(business, name="House Blend", **kwargs):
        product = Product(
            business_id=business.id,
            name=name,
            slug=kwargs.pop("slug", slugify(name)),
            **kwargs
        )
        db.session.add(product)
        db.session.commit()
        return product

    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        token = create_access_token(identity=user.id, additional_claims={"is_admin": user.is_admin})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def business_type(make_category):
    return make_category("Cafe", type=TYPE_BUSINESS)
