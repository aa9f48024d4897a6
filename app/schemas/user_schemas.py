from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UserUpsert(BaseModel):
    name: Optional[str] = None
    photo_url: Optional[str] = None
    role: str = "user"


class UserResponse(BaseModel):
    id: int
    email: str
    name: Optional[str]
    photo_url: Optional[str]
    role: str
    verified: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UserWithToken(BaseModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class SellerVerification(BaseModel):
    email: str
    role: str
    verified: bool
