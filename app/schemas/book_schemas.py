from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal


class BookCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    author: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    category: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    original_price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    condition: Optional[str] = None
    years_of_use: Optional[int] = Field(None, ge=0)
    location: Optional[str] = None
    phone: Optional[str] = None


class BookResponse(BaseModel):
    id: int
    title: str
    author: Optional[str]
    description: Optional[str]
    image_url: Optional[str]

    seller_email: str
    category: str
    price: Decimal
    original_price: Optional[Decimal]
    condition: Optional[str]
    years_of_use: Optional[int]
    location: Optional[str]
    phone: Optional[str]

    sold: bool
    advertise: bool
    created_at: datetime

    class Config:
        from_attributes = True


class AdvertiseResponse(BaseModel):
    book_id: int
    advertise: bool
