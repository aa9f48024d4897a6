import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

import razorpay
import requests

from app.errors import InvalidRequest, PaymentGatewayError

logger = logging.getLogger(__name__)

GATEWAY_ERRORS = (
    razorpay.errors.BadRequestError,
    razorpay.errors.GatewayError,
    razorpay.errors.ServerError,
    requests.RequestException,
)


def to_subunits(amount: Decimal) -> int:
    """Convert 20.00 -> 2000 (cents)."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentGatewayClient:
    """Creates payment intents (Razorpay orders) for the client to complete.

    The order id is the client-usable secret: checkout on the client side is
    opened with it and the public key id.
    """

    def __init__(self, key_id: str, key_secret: str, client: Optional[razorpay.Client] = None):
        self.key_id = key_id
        self.client = client or razorpay.Client(auth=(key_id, key_secret))

    def create_intent(
        self,
        amount: Decimal,
        currency: str = "usd",
        receipt: Optional[str] = None,
        notes: Optional[Dict[str, Any]] = None,
    ) -> str:
        if amount is None or Decimal(amount) <= 0:
            raise InvalidRequest("Payment amount must be greater than zero")

        payload = {
            "amount": to_subunits(amount),
            "currency": currency.upper(),
        }
        if receipt:
            payload["receipt"] = receipt
        if notes:
            payload["notes"] = notes

        try:
            order = self.client.order.create(payload)
        except GATEWAY_ERRORS as e:
            logger.exception(f"Payment intent creation failed for {payload['amount']} {payload['currency']}")
            raise PaymentGatewayError(f"Payment gateway rejected the request: {e}") from e

        client_secret = (order or {}).get("id")
        if not client_secret:
            logger.error(f"Payment gateway returned no order id: {order}")
            raise PaymentGatewayError("Payment gateway returned no client secret")

        logger.info(f"Payment intent {client_secret} created for {payload['amount']} {payload['currency']}")
        return client_secret
