from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ReportCreate(BaseModel):
    book_id: int
    reason: Optional[str] = None


class ReportResponse(BaseModel):
    id: int
    book_id: int
    book_title: Optional[str]
    reporter_email: str
    reason: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
