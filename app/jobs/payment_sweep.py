import logging
from typing import List

from sqlmodel import Session, select

from app.errors import ConsistencyError
from app.models.book import Book
from app.models.booking import Booking
from app.models.payment import Payment
from app.services.booking_service import BookingLedger
from app.services.inventory_service import InventoryStore

logger = logging.getLogger(__name__)


def _sold_through_other_payment(session: Session, payment: Payment) -> bool:
    other = session.exec(
        select(Payment.id).where(Payment.book_id == payment.book_id, Payment.id != payment.id)
    ).first()
    return other is not None


def sweep_payment_consistency(session: Session) -> List[int]:
    """Finish settlements whose payment row exists but whose booking or book lags.

    Repairs are conditional updates, so running the sweep twice is harmless.
    Returns the ids of the repaired payments.
    """
    ledger = BookingLedger(session)
    inventory = InventoryStore(session)
    repaired = []

    payments = session.exec(select(Payment).order_by(Payment.id)).all()
    for payment in payments:
        booking = session.get(Booking, payment.booking_id)
        book = session.get(Book, payment.book_id)

        if booking is None or book is None:
            logger.error(f"Payment {payment.id} references a missing booking or book")
            continue

        if booking.paid and book.sold:
            continue

        try:
            if book.sold and _sold_through_other_payment(session, payment):
                raise ConsistencyError(f"Book {book.id} was sold through another booking")
            booking_fixed = ledger.mark_paid(booking.id, payment.transaction_id)
            book_fixed = False
            if not book.sold:
                book_fixed = inventory.mark_sold(book.id)
                if not book_fixed:
                    raise ConsistencyError(f"Book {book.id} was sold while repairing payment {payment.id}")
            if not (booking_fixed or book_fixed):
                session.rollback()
                continue
            session.commit()
        except ConsistencyError as e:
            session.rollback()
            logger.error(f"Payment {payment.id} not repaired: {e.message}")
            continue
        except Exception:
            session.rollback()
            logger.exception(f"Could not repair payment {payment.id}")
            raise

        logger.warning(f"Repaired settlement for payment {payment.id} (booking {booking.id}, book {book.id})")
        repaired.append(payment.id)

    return repaired


def run():
    from app.config import settings
    from app.database import engine

    logging.basicConfig(level=settings.log_level)

    with Session(engine) as session:
        sweep_payment_consistency(session)


if __name__ == "__main__":
    run()
