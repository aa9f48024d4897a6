import logging
from typing import Optional

from sqlmodel import Session, select

from app.models.book import Book
from app.models.report import BookReport
from app.services.inventory_service import InventoryStore

logger = logging.getLogger(__name__)


class ReportDesk:
    def __init__(self, session: Session):
        self.session = session

    def report(self, *, book_id: int, reporter_email: str, reason: Optional[str] = None) -> BookReport:
        book = InventoryStore(self.session).get(book_id)
        report = BookReport(
            book_id=book.id,
            book_title=book.title,
            reporter_email=reporter_email,
            reason=reason,
        )
        self.session.add(report)
        self.session.commit()
        self.session.refresh(report)
        logger.info(f"Book {book_id} reported by {reporter_email}")
        return report

    def list_reports(self):
        return select(BookReport).order_by(BookReport.id)

    def delete_reported_book(self, book_id: int) -> dict:
        """Delete a reported book and its reports in one transaction.

        If the book is already gone only its leftover reports are removed.
        A sold book stays as sales history; its reports are dismissed.
        """
        inventory = InventoryStore(self.session)
        book = self.session.get(Book, book_id)
        try:
            if book is not None and book.sold:
                inventory.clear_reports(book_id)
                deleted = False
            else:
                deleted = inventory.purge_book(book_id)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(f"Reported book {book_id} removed (book row deleted: {deleted})")
        return {"book_id": book_id, "book_deleted": deleted}
