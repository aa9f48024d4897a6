from typing import List

from fastapi import APIRouter, Depends

from app.dependencies.auth import get_current_claims, require_owner
from app.dependencies.stores import get_booking_ledger
from app.schemas.booking_schemas import BookingCreate, BookingResponse
from app.services.booking_service import BookingLedger
from app.utils.token import SessionClaims

router = APIRouter()


@router.post("/booking", response_model=BookingResponse)
def create_booking(
    payload: BookingCreate,
    claims: SessionClaims = Depends(get_current_claims),
    ledger: BookingLedger = Depends(get_booking_ledger),
):
    return ledger.create_booking(
        book_id=payload.book_id,
        user_email=claims.email,
        meeting_location=payload.meeting_location,
        phone=payload.phone,
    )


@router.get("/bookings/{email}", response_model=List[BookingResponse])
def list_my_bookings(
    email: str,
    _: SessionClaims = Depends(require_owner),
    ledger: BookingLedger = Depends(get_booking_ledger),
):
    return ledger.list_for_user(email)


# booking lookup for the payment page
@router.get("/payment/{booking_id}", response_model=BookingResponse)
def get_booking_for_payment(
    booking_id: int,
    claims: SessionClaims = Depends(get_current_claims),
    ledger: BookingLedger = Depends(get_booking_ledger),
):
    return ledger.get_owned(booking_id, claims.email)
