from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from decimal import Decimal


class BookingCreate(BaseModel):
    book_id: int
    meeting_location: Optional[str] = None
    phone: Optional[str] = None


class BookingResponse(BaseModel):
    id: int
    book_id: int
    user_email: str
    book_title: str
    price: Decimal
    meeting_location: Optional[str]
    phone: Optional[str]
    paid: bool
    transaction_id: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
