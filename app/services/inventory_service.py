import logging
from typing import List

from sqlalchemy import delete, not_, update
from sqlmodel import Session, select

from app.errors import ConsistencyError, Forbidden, NotFound
from app.models.book import Book
from app.models.report import BookReport
from app.models.user import User
from app.services.booking_service import BookingLedger

logger = logging.getLogger(__name__)


class InventoryStore:
    """Book listings. Flag changes are single conditional UPDATEs, never read-then-write."""

    def __init__(self, session: Session):
        self.session = session

    def create_listing(self, seller_email: str, **fields) -> Book:
        book = Book(seller_email=seller_email, **fields)
        self.session.add(book)
        self.session.commit()
        self.session.refresh(book)
        logger.info(f"Listing {book.id} created by {seller_email}")
        return book

    def get(self, book_id: int) -> Book:
        book = self.session.get(Book, book_id)
        if book is None:
            raise NotFound(f"Book {book_id} not found")
        return book

    def list_by_seller(self, seller_email: str):
        return select(Book).where(Book.seller_email == seller_email).order_by(Book.id)

    def list_advertised(self, category: str) -> List[Book]:
        return self.session.exec(
            select(Book).where(
                Book.category == category,
                Book.sold == False,  # noqa: E712
                Book.advertise == True,  # noqa: E712
            ).order_by(Book.id)
        ).all()

    def ensure_can_manage(self, book: Book, email: str) -> None:
        if book.seller_email == email:
            return
        user = self.session.exec(select(User).where(User.email == email)).first()
        if user is None or user.role != "admin":
            raise Forbidden("Only the seller or an admin can change this listing")

    def toggle_advertise(self, book_id: int) -> bool:
        """Flip ``advertise`` atomically and return the new value."""
        try:
            result = self.session.exec(
                update(Book)
                .where(Book.id == book_id)
                .values(advertise=not_(Book.advertise))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFound(f"Book {book_id} not found")

            advertise = self.session.exec(
                select(Book.advertise).where(Book.id == book_id)
            ).one()
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(f"Book {book_id} advertise -> {advertise}")
        return advertise

    def mark_sold(self, book_id: int) -> bool:
        """Flip ``sold`` false -> true. Does not commit."""
        result = self.session.exec(
            update(Book)
            .where(Book.id == book_id, Book.sold == False)  # noqa: E712
            .values(sold=True)
        )
        return result.rowcount == 1

    def clear_reports(self, book_id: int) -> int:
        """Delete every report on a book. Does not commit."""
        result = self.session.exec(delete(BookReport).where(BookReport.book_id == book_id))
        return result.rowcount

    def purge_book(self, book_id: int) -> bool:
        """Delete a book with its unpaid bookings and reports. Does not commit.

        Reports are removed even when the book row is already gone. Returns
        whether a book row was deleted.
        """
        book = self.session.get(Book, book_id)
        if book is not None and book.sold:
            raise ConsistencyError(f"Book {book_id} is sold and kept as sales history")

        BookingLedger(self.session).delete_unpaid(book_ids=[book_id])
        self.clear_reports(book_id)
        if book is None:
            return False
        self.session.delete(book)
        return True

    def delete_listing(self, book_id: int, email: str) -> None:
        book = self.get(book_id)
        self.ensure_can_manage(book, email)

        try:
            self.purge_book(book_id)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(f"Listing {book_id} deleted by {email}")
