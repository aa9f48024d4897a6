from decimal import Decimal

from sqlmodel import select

from app.models.book import Book
from app.models.booking import Booking
from app.models.payment import Payment
from app.models.payment_intent import PaymentIntent
from conftest import auth_header, error_kind, make_book


def test_booking_to_sale_end_to_end(client, session, gateway):
    signed_in = client.put("/user/a@x.com", json={"name": "Ann", "role": "user"})
    assert signed_in.status_code == 200
    headers = {"Authorization": f"Bearer {signed_in.json()['access_token']}"}
    book = make_book(session, title="B1", price="20.00")

    booking = client.post("/booking", json={"book_id": book.id}, headers=headers)
    assert booking.status_code == 200
    booking_id = booking.json()["id"]

    intent = client.post(
        "/create-payment-intent", json={"booking_id": booking_id, "price": "20.00"}, headers=headers
    )
    assert intent.status_code == 200
    assert intent.json()["client_secret"] == "order_test_1"
    assert Decimal(intent.json()["amount"]) == Decimal("20.00")
    assert gateway.calls[0]["amount"] == Decimal("20.00")

    paid = client.put(
        "/payments",
        json={"booking_id": booking_id, "transaction_id": "pay_123", "amount": "20.00"},
        headers=headers,
    )
    assert paid.status_code == 200
    assert paid.json()["booking_id"] == booking_id

    session.expire_all()
    assert session.get(Booking, booking_id).paid is True
    assert session.get(Book, book.id).sold is True
    assert len(session.exec(select(Payment)).all()) == 1

    mine = client.get("/bookings/a@x.com", headers=headers)
    assert mine.json()[0]["transaction_id"] == "pay_123"

    replay = client.put(
        "/payments",
        json={"booking_id": booking_id, "transaction_id": "pay_456", "amount": "20.00"},
        headers=headers,
    )
    assert replay.status_code == 409
    assert error_kind(replay) == "duplicate_payment"
    assert len(session.exec(select(Payment)).all()) == 1


def test_intent_price_must_match_booking(client, session, gateway):
    book = make_book(session, price="20.00")
    booking = client.post("/booking", json={"book_id": book.id}, headers=auth_header("a@x.com")).json()

    response = client.post(
        "/create-payment-intent", json={"booking_id": booking["id"], "price": "5.00"}, headers=auth_header("a@x.com")
    )

    assert response.status_code == 400
    assert gateway.calls == []


def test_gateway_failure_is_reported_to_caller(client, session, gateway):
    gateway.fail_with = "gateway unavailable"
    book = make_book(session)
    booking = client.post("/booking", json={"book_id": book.id}, headers=auth_header("a@x.com")).json()

    response = client.post(
        "/create-payment-intent", json={"booking_id": booking["id"]}, headers=auth_header("a@x.com")
    )

    assert response.status_code == 502
    assert error_kind(response) == "payment_gateway_error"
    assert session.exec(select(PaymentIntent)).all() == []


def test_booking_page_is_owner_only(client, session):
    book = make_book(session)
    booking = client.post("/booking", json={"book_id": book.id}, headers=auth_header("a@x.com")).json()

    own = client.get(f"/payment/{booking['id']}", headers=auth_header("a@x.com"))
    other = client.get(f"/payment/{booking['id']}", headers=auth_header("b@x.com"))

    assert own.status_code == 200
    assert other.status_code == 403


def test_payment_requires_authentication(client):
    response = client.put("/payments", json={"booking_id": 1, "transaction_id": "pay", "amount": "1.00"})

    assert response.status_code == 401
    assert error_kind(response) == "unauthenticated"
