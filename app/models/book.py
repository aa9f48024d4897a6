from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone
from decimal import Decimal


class Book(SQLModel, table=True):
    #main info
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    author: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    #listing
    seller_email: str = Field(index=True)
    category: str = Field(index=True)
    price: Decimal = Field(max_digits=10, decimal_places=2)
    original_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    condition: Optional[str] = None  # excellent | good | fair
    years_of_use: Optional[int] = None
    location: Optional[str] = None
    phone: Optional[str] = None

    #flags, only changed through conditional updates
    sold: bool = Field(default=False, index=True)
    advertise: bool = Field(default=False, index=True)

    #timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
