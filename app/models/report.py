from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone


class BookReport(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    # no foreign key: reports may briefly outlive their book, see purge_orphan_reports
    book_id: int = Field(index=True)
    book_title: Optional[str] = None
    reporter_email: str
    reason: Optional[str] = None
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
