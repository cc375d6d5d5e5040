"""
Shared fixtures: in-memory SQLite database, sessions and an API client
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["EVENTS_ENABLED"] = "false"

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from werkzeug.security import generate_password_hash

from storefront.database import Base, SessionLocal, engine, init_db
from storefront.main import app
from storefront.models import Category, Product
from storefront.models.user import SCOPE_AUTHENTICATION
from storefront.repositories import new_repositories
from storefront.schemas.user import UserCreate

PASSWORD = "pa55word-long"


@pytest.fixture(autouse=True)
def database():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repos(db):
    return new_repositories(db)


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db, email="alice@example.com", permissions=("products:read", "products:order"), activated=True):
    repos = new_repositories(db)
    user = repos.users.insert(
        UserCreate(first_name="Alice", last_name="Smith", phone_number="+15550100", email=email, password=PASSWORD),
        generate_password_hash(PASSWORD)
    )
    if activated:
        repos.users.update(user.id, user.version, activated=True)
    repos.permissions.add_for_user(user.id, *permissions)
    db.refresh(user)
    return user


def auth_headers(db, user):
    plaintext, _ = new_repositories(db).tokens.new(user.id, timedelta(hours=1), SCOPE_AUTHENTICATION)
    return {"Authorization": f"Bearer {plaintext}"}


def make_category(db, title="Shoes"):
    category = Category(title=title, image="")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def make_product(db, owner, title="Trail runner", quantity=3, price=10.0, categories=()):
    product = Product(
        title=title,
        description="Lightweight shoe for rough ground",
        owner_id=owner.id,
        quantity=quantity,
        price=price,
        colors=["red"],
        images=[]
    )
    product.categories = list(categories)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product
