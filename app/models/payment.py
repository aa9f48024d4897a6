from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone
from decimal import Decimal


class Payment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # one payment per booking, one booking per transaction
    booking_id: int = Field(foreign_key="booking.id", unique=True)
    transaction_id: str = Field(unique=True)

    book_id: int = Field(index=True)
    user_email: str = Field(index=True)

    amount: Decimal = Field(max_digits=10, decimal_places=2)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
