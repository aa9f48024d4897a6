import logging
from typing import Optional

from sqlmodel import Session, select

from app.errors import InvalidRequest, NotFound
from app.models.book import Book
from app.models.user import User
from app.services.booking_service import BookingLedger
from app.services.inventory_service import InventoryStore

logger = logging.getLogger(__name__)

SELF_ASSIGNABLE_ROLES = ("user", "seller")


class UserDirectory:
    """User records keyed by email: role, verification and admin moderation."""

    def __init__(self, session: Session):
        self.session = session

    def find_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def get_by_email(self, email: str) -> User:
        user = self.find_by_email(email)
        if user is None:
            raise NotFound(f"User {email} not found")
        return user

    def get(self, user_id: int) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        return user

    def upsert(self, email: str, name: Optional[str] = None, photo_url: Optional[str] = None, role: str = "user") -> User:
        """Create the user on first sign-in, otherwise refresh the profile.

        The role is fixed when the account is created; ``admin`` is never
        self-assigned.
        """
        if role not in SELF_ASSIGNABLE_ROLES:
            raise InvalidRequest(f"Role must be one of {', '.join(SELF_ASSIGNABLE_ROLES)}")

        user = self.find_by_email(email)
        if user is None:
            user = User(email=email, name=name, photo_url=photo_url, role=role)
            logger.info(f"Created {role} account {email}")
        else:
            if name:
                user.name = name
            if photo_url:
                user.photo_url = photo_url

        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def list_by_role(self, role: str):
        return select(User).where(User.role == role).order_by(User.id)

    def verify_user(self, user_id: int) -> User:
        user = self.get(user_id)
        user.verified = True
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        logger.info(f"Verified user {user.email}")
        return user

    def delete_user(self, user_id: int) -> dict:
        """Remove an account with its unsold listings and unpaid bookings.

        Paid bookings, payments and sold listings stay as sales history.
        Everything happens in one transaction.
        """
        user = self.get(user_id)
        email = user.email
        inventory = InventoryStore(self.session)

        try:
            unsold_ids = self.session.exec(
                select(Book.id).where(Book.seller_email == email, Book.sold == False)  # noqa: E712
            ).all()
            for book_id in unsold_ids:
                inventory.purge_book(book_id)

            removed_bookings = BookingLedger(self.session).delete_unpaid(user_email=email)

            self.session.delete(user)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(
            f"Deleted user {email} with {len(unsold_ids)} listings and {removed_bookings} bookings"
        )
        return {
            "deleted_user_id": user_id,
            "deleted_listings": len(unsold_ids),
            "deleted_bookings": removed_bookings,
        }
