"""Marketplace error taxonomy.

Every failure surfaced to a client is one of these, rendered by the handler
in ``app.main`` as ``{"ok": false, "error": {"kind": ..., "message": ...}}``.
"""

from typing import Any, Dict


class MarketplaceError(Exception):
    kind = "marketplace_error"
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class Unauthenticated(MarketplaceError):
    """No credential was presented."""

    kind = "unauthenticated"
    status_code = 401


class InvalidToken(MarketplaceError):
    """A credential was presented but its signature, shape or expiry is bad."""

    kind = "invalid_token"
    status_code = 403


class Forbidden(MarketplaceError):
    kind = "forbidden"
    status_code = 403


class NotFound(MarketplaceError):
    kind = "not_found"
    status_code = 404


class InvalidRequest(MarketplaceError):
    kind = "invalid_request"
    status_code = 400


class DuplicatePayment(MarketplaceError):
    """The booking is already paid or the transaction was already recorded."""

    kind = "duplicate_payment"
    status_code = 409


class ConsistencyError(MarketplaceError):
    """A multi-entity update could not be applied as a whole."""

    kind = "consistency_error"
    status_code = 409


class PaymentGatewayError(MarketplaceError):
    kind = "payment_gateway_error"
    status_code = 502
