from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone
from decimal import Decimal


class Booking(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    book_id: int = Field(foreign_key="book.id", index=True)
    user_email: str = Field(index=True)

    # snapshot of the listing at booking time
    book_title: str
    price: Decimal = Field(max_digits=10, decimal_places=2)

    meeting_location: Optional[str] = None
    phone: Optional[str] = None

    paid: bool = Field(default=False)
    transaction_id: Optional[str] = None
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
