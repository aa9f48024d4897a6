from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.config import settings
from app.database import get_session
from app.dependencies.auth import get_current_claims
from app.dependencies.stores import get_payment_gateway, get_reconciler
from app.schemas.payment_schemas import (
    PaymentIntentRequest,
    PaymentIntentResponse,
    PaymentRecord,
    PaymentResponse,
)
from app.services.payment_gateway import PaymentGatewayClient
from app.services.payment_service import Reconciler, create_payment_intent
from app.utils.token import SessionClaims

router = APIRouter()


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
def create_intent(
    payload: PaymentIntentRequest,
    claims: SessionClaims = Depends(get_current_claims),
    session: Session = Depends(get_session),
    gateway: PaymentGatewayClient = Depends(get_payment_gateway),
):
    intent = create_payment_intent(
        session=session,
        gateway=gateway,
        booking_id=payload.booking_id,
        user_email=claims.email,
        currency=settings.currency,
        price=payload.price,
    )
    return PaymentIntentResponse(
        booking_id=intent.booking_id,
        client_secret=intent.client_secret,
        amount=intent.amount,
        currency=intent.currency,
        key_id=gateway.key_id,
    )


@router.put("/payments", response_model=PaymentResponse)
def record_payment(
    payload: PaymentRecord,
    claims: SessionClaims = Depends(get_current_claims),
    reconciler: Reconciler = Depends(get_reconciler),
):
    return reconciler.reconcile(
        booking_id=payload.booking_id,
        transaction_id=payload.transaction_id,
        amount=payload.amount,
        payer_email=claims.email,
    )
