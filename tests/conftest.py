"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database (a single connection
via StaticPool, so requests run in the app threadpool see the same data).
The app's get_session dependency is overridden to hand out the test session.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("IDENTITY_PROVIDERS", '{"github": "github-test-secret"}')
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from shopwave.core.security import create_access_token, hash_password
from shopwave.database import get_session
from shopwave.main import app
from shopwave.models.product import Product
from shopwave.models.user import User
from shopwave.repositories.cart_repo import CartRepository
from shopwave.repositories.product_repo import ProductRepository
from shopwave.services.cart_service import CartService

API = "/api/v1"
TEST_PASSWORD = "secret123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    """
    TestClient whose requests share the test's session.
    """

    def override_get_session():
        return session

    app.dependency_overrides[get_session] = override_get_session
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def cart_service():
    return CartService(CartRepository(), ProductRepository())


def make_user(session: Session, email: str = "alice@example.com", name: str = "Alice") -> User:
    user = User(name=name, email=email, password_hash=hash_password(TEST_PASSWORD))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def user(session):
    return make_user(session)


@pytest.fixture
def other_user(session):
    return make_user(session, email="bob@example.com", name="Bob")


def auth_headers_for(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}


@pytest.fixture
def auth_headers(user):
    return auth_headers_for(user)


@pytest.fixture
def products(session):
    """
    Three catalog entries with distinct prices and creation times.
    """
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    rows = [
        Product(
            name="Wireless Headphones",
            description="Noise-cancelling over-ear headphones",
            price=Decimal("199.99"),
            image_url="https://img.example.com/headphones.png",
            created_at=base,
            updated_at=base,
        ),
        Product(
            name="Mechanical Keyboard",
            description="Hot-swappable switches",
            price=Decimal("120.00"),
            image_url="https://img.example.com/keyboard.png",
            created_at=base + timedelta(minutes=1),
            updated_at=base + timedelta(minutes=1),
        ),
        Product(
            name="USB-C Cable",
            description="Braided cable, 2m",
            price=Decimal("9.50"),
            image_url="https://img.example.com/cable.png",
            created_at=base + timedelta(minutes=2),
            updated_at=base + timedelta(minutes=2),
        ),
    ]
    session.add_all(rows)
    session.commit()
    for row in rows:
        session.refresh(row)
    return rows
