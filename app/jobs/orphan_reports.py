import logging

from sqlalchemy import delete
from sqlmodel import Session, select

from app.models.book import Book
from app.models.report import BookReport

logger = logging.getLogger(__name__)


def purge_orphan_reports(session: Session) -> int:
    """Delete reports whose book no longer exists."""
    live_books = select(Book.id)
    result = session.exec(
        delete(BookReport)
        .where(BookReport.book_id.not_in(live_books))
        .execution_options(synchronize_session=False)
    )
    session.commit()

    if result.rowcount:
        logger.info(f"Purged {result.rowcount} orphaned book reports")
    return result.rowcount


def run():
    from app.config import settings
    from app.database import engine

    logging.basicConfig(level=settings.log_level)

    with Session(engine) as session:
        purge_orphan_reports(session)


if __name__ == "__main__":
    run()
