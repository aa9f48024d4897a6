import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.errors import (
    ConsistencyError,
    DuplicatePayment,
    Forbidden,
    InvalidRequest,
    NotFound,
)
from app.models.book import Book
from app.models.booking import Booking
from app.models.payment import Payment
from app.models.payment_intent import PaymentIntent
from app.services.booking_service import BookingLedger
from app.services.inventory_service import InventoryStore
from app.services.payment_gateway import PaymentGatewayClient

logger = logging.getLogger(__name__)


class PaymentRecorder:
    """Payment intents and completed payments. Payments are never updated."""

    def __init__(self, session: Session):
        self.session = session

    def save_intent(self, booking: Booking, client_secret: str, amount: Decimal, currency: str) -> PaymentIntent:
        intent = PaymentIntent(
            booking_id=booking.id,
            client_secret=client_secret,
            amount=amount,
            currency=currency,
        )
        self.session.add(intent)
        self.session.commit()
        self.session.refresh(intent)
        return intent

    def latest_intent(self, booking_id: int) -> Optional[PaymentIntent]:
        return self.session.exec(
            select(PaymentIntent)
            .where(PaymentIntent.booking_id == booking_id)
            .order_by(PaymentIntent.id.desc())
        ).first()

    def add(self, booking: Booking, transaction_id: str, amount: Decimal) -> Payment:
        """Stage a payment row. Does not commit."""
        payment = Payment(
            booking_id=booking.id,
            book_id=booking.book_id,
            user_email=booking.user_email,
            transaction_id=transaction_id,
            amount=amount,
        )
        self.session.add(payment)
        return payment


def create_payment_intent(
    *,
    session: Session,
    gateway: PaymentGatewayClient,
    booking_id: int,
    user_email: str,
    currency: str,
    price: Optional[Decimal] = None,
) -> PaymentIntent:
    """Request a client secret for the booking's captured price.

    The captured amount is stored so the recorded payment can be checked
    against it.
    """
    booking = BookingLedger(session).get_owned(booking_id, user_email)
    if booking.paid:
        raise DuplicatePayment(f"Booking {booking_id} is already paid")
    if price is not None and Decimal(price) != booking.price:
        raise InvalidRequest(f"Price {price} does not match booking price {booking.price}")
    book = session.get(Book, booking.book_id)
    if book is None or book.sold:
        raise InvalidRequest(f"Book {booking.book_id} is no longer available")

    client_secret = gateway.create_intent(
        booking.price,
        currency=currency,
        receipt=f"booking_{booking.id}",
        notes={"booking_id": booking.id, "user_email": user_email},
    )
    return PaymentRecorder(session).save_intent(booking, client_secret, booking.price, currency)


class Reconciler:
    """Applies a completed payment to the booking and the book as one unit.

    Either the payment row, ``Booking.paid`` and ``Book.sold`` are all
    committed together, or nothing is.
    """

    def __init__(self, session: Session):
        self.session = session
        self.ledger = BookingLedger(session)
        self.inventory = InventoryStore(session)
        self.recorder = PaymentRecorder(session)

    def _lock_booking(self, booking_id: int) -> Booking:
        # row lock serializes reconciliations of one booking (no-op on SQLite)
        booking = self.session.exec(
            select(Booking)
            .where(Booking.id == booking_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).first()
        if booking is None:
            raise NotFound(f"Booking {booking_id} not found")
        return booking

    def reconcile(self, *, booking_id: int, transaction_id: str, amount: Decimal, payer_email: str) -> Payment:
        try:
            booking = self._lock_booking(booking_id)
            if booking.user_email != payer_email:
                raise Forbidden("This booking belongs to another user")
            if booking.paid:
                raise DuplicatePayment(f"Booking {booking_id} is already paid")

            intent = self.recorder.latest_intent(booking_id)
            if intent is None:
                raise InvalidRequest(f"No payment intent exists for booking {booking_id}")
            if Decimal(amount) != intent.amount:
                raise InvalidRequest(
                    f"Paid amount {amount} does not match intent amount {intent.amount}"
                )

            if not self.ledger.mark_paid(booking_id, transaction_id):
                raise DuplicatePayment(f"Booking {booking_id} is already paid")

            if not self.inventory.mark_sold(booking.book_id):
                raise ConsistencyError(
                    f"Book {booking.book_id} is missing or already sold; booking {booking_id} not settled"
                )

            payment = self.recorder.add(booking, transaction_id, intent.amount)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning(f"Duplicate payment rejected for booking {booking_id} txn {transaction_id}")
            raise DuplicatePayment(f"Payment for booking {booking_id} was already recorded") from e
        except Exception as e:
            self.session.rollback()
            logger.warning(f"Payment for booking {booking_id} rolled back: {e}")
            raise

        self.session.refresh(payment)
        logger.info(
            f"Payment {payment.id} reconciled: booking {booking_id} paid, book {booking.book_id} sold"
        )
        return payment
