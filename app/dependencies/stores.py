from functools import lru_cache

from fastapi import Depends
from sqlmodel import Session

from app.config import settings
from app.database import get_session
from app.services.booking_service import BookingLedger
from app.services.inventory_service import InventoryStore
from app.services.payment_gateway import PaymentGatewayClient
from app.services.payment_service import Reconciler
from app.services.report_service import ReportDesk
from app.services.user_service import UserDirectory


def get_user_directory(session: Session = Depends(get_session)) -> UserDirectory:
    return UserDirectory(session)


def get_inventory(session: Session = Depends(get_session)) -> InventoryStore:
    return InventoryStore(session)


def get_booking_ledger(session: Session = Depends(get_session)) -> BookingLedger:
    return BookingLedger(session)


def get_reconciler(session: Session = Depends(get_session)) -> Reconciler:
    return Reconciler(session)


def get_report_desk(session: Session = Depends(get_session)) -> ReportDesk:
    return ReportDesk(session)


@lru_cache
def get_payment_gateway() -> PaymentGatewayClient:
    return PaymentGatewayClient(settings.razorpay_key_id, settings.razorpay_key_secret)
