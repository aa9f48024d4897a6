import os

os.environ.setdefault("POSTGRES_USER", "test")
os.environ.setdefault("POSTGRES_PASSWORD", "test")
os.environ.setdefault("POSTGRES_DB", "marketplace_test")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "rzp_test_secret")
os.environ.setdefault("PORT", "8000")
os.environ["ENV"] = "test"

from collections.abc import Generator
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app import models  # noqa: F401
from app.database import get_session
from app.dependencies.stores import get_payment_gateway
from app.errors import InvalidRequest, PaymentGatewayError
from app.main import app
from app.models.book import Book
from app.models.user import User
from app.utils.token import create_access_token


class FakeGateway:
    key_id = "rzp_test_key"

    def __init__(self):
        self.calls = []
        self.fail_with = None

    def create_intent(self, amount, currency="usd", receipt=None, notes=None):
        if amount is None or Decimal(amount) <= 0:
            raise InvalidRequest("Payment amount must be greater than zero")
        if self.fail_with is not None:
            raise PaymentGatewayError(self.fail_with)
        self.calls.append({"amount": Decimal(amount), "currency": currency, "receipt": receipt})
        return f"order_test_{len(self.calls)}"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        SQLModel.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture()
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def client(engine, gateway) -> Generator[TestClient, None, None]:
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_user(session: Session, email: str, role: str = "user", verified: bool = False) -> User:
    user = User(email=email, name=email.split("@")[0], role=role, verified=verified)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_book(
    session: Session,
    seller_email: str = "seller@x.com",
    price: str = "20.00",
    title: str = "Dune",
    category: str = "fiction",
    advertise: bool = False,
    sold: bool = False,
) -> Book:
    book = Book(
        title=title,
        seller_email=seller_email,
        category=category,
        price=Decimal(price),
        advertise=advertise,
        sold=sold,
    )
    session.add(book)
    session.commit()
    session.refresh(book)
    return book


def auth_header(email: str, role: str = "user") -> dict:
    token = create_access_token({"email": email, "role": role})
    return {"Authorization": f"Bearer {token}"}


def error_kind(response) -> str:
    payload = response.json()
    assert payload["ok"] is False
    return payload["error"]["kind"]
