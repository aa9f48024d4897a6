from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal


class PaymentIntentRequest(BaseModel):
    booking_id: int
    # optional client-side echo of the price, checked against the booking
    price: Optional[Decimal] = None


class PaymentIntentResponse(BaseModel):
    booking_id: int
    client_secret: str
    amount: Decimal
    currency: str
    key_id: str


class PaymentRecord(BaseModel):
    booking_id: int
    transaction_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)


class PaymentResponse(BaseModel):
    id: int
    booking_id: int
    book_id: int
    user_email: str
    amount: Decimal
    transaction_id: str
    created_at: datetime

    class Config:
        from_attributes = True
