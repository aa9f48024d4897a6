import logging
from typing import List, Optional, Sequence

from sqlalchemy import delete, or_, update
from sqlmodel import Session, select

from app.errors import Forbidden, InvalidRequest, NotFound
from app.models.book import Book
from app.models.booking import Booking
from app.models.payment_intent import PaymentIntent

logger = logging.getLogger(__name__)


class BookingLedger:
    """Reservation records linking a buyer to a book."""

    def __init__(self, session: Session):
        self.session = session

    def create_booking(
        self,
        *,
        book_id: int,
        user_email: str,
        meeting_location: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Booking:
        book = self.session.get(Book, book_id)
        if book is None:
            raise NotFound(f"Book {book_id} not found")
        if book.sold:
            raise InvalidRequest(f"Book {book_id} is already sold")
        if book.seller_email == user_email:
            raise InvalidRequest("Sellers cannot book their own listing")

        booking = Booking(
            book_id=book.id,
            user_email=user_email,
            book_title=book.title,
            price=book.price,
            meeting_location=meeting_location,
            phone=phone,
        )
        self.session.add(booking)
        self.session.commit()
        self.session.refresh(booking)

        logger.info(f"Booking {booking.id} created: {user_email} -> book {book_id} at {booking.price}")
        return booking

    def get(self, booking_id: int) -> Booking:
        booking = self.session.get(Booking, booking_id)
        if booking is None:
            raise NotFound(f"Booking {booking_id} not found")
        return booking

    def get_owned(self, booking_id: int, user_email: str) -> Booking:
        booking = self.get(booking_id)
        if booking.user_email != user_email:
            raise Forbidden("This booking belongs to another user")
        return booking

    def list_for_user(self, user_email: str) -> List[Booking]:
        return self.session.exec(
            select(Booking).where(Booking.user_email == user_email).order_by(Booking.id)
        ).all()

    def mark_paid(self, booking_id: int, transaction_id: str) -> bool:
        """Flip ``paid`` false -> true in one conditional UPDATE.

        Returns False when no unpaid booking matched; the caller owns the
        transaction.
        """
        result = self.session.exec(
            update(Booking)
            .where(Booking.id == booking_id, Booking.paid == False)  # noqa: E712
            .values(paid=True, transaction_id=transaction_id)
        )
        return result.rowcount == 1

    def delete_unpaid(
        self,
        *,
        book_ids: Sequence[int] = (),
        user_email: Optional[str] = None,
    ) -> int:
        """Delete unpaid bookings on the given books or by the given buyer.

        Payment intents of those bookings go with them. Does not commit.
        """
        conditions = []
        if book_ids:
            conditions.append(Booking.book_id.in_(list(book_ids)))
        if user_email:
            conditions.append(Booking.user_email == user_email)
        if not conditions:
            return 0

        booking_ids = self.session.exec(
            select(Booking.id).where(or_(*conditions), Booking.paid == False)  # noqa: E712
        ).all()
        if not booking_ids:
            return 0

        # re-check paid: a booking may have settled since the lookup
        still_unpaid = select(Booking.id).where(Booking.id.in_(booking_ids), Booking.paid == False)  # noqa: E712
        self.session.exec(delete(PaymentIntent).where(PaymentIntent.booking_id.in_(still_unpaid)))
        result = self.session.exec(
            delete(Booking).where(Booking.id.in_(booking_ids), Booking.paid == False)  # noqa: E712
        )
        return result.rowcount
