from jose import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from pydantic import BaseModel
from app.config import settings
from app.errors import InvalidToken, Unauthenticated


class SessionClaims(BaseModel):
    email: str
    role: str = "user"
    iat: Optional[int] = None
    exp: int


def _timestamp(moment: datetime) -> int:
    return int(moment.replace(tzinfo=moment.tzinfo or timezone.utc).timestamp())


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    to_encode = data.copy()

    issued = now or datetime.now(timezone.utc)
    expire = issued + (
        expires_delta
        if expires_delta
        else timedelta(minutes=settings.access_token_expire_minutes)
    )

    to_encode.update({"iat": _timestamp(issued), "exp": _timestamp(expire)})

    encoded_jwt = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.algorithm
    )
    return encoded_jwt


def decode_access_token(token: Optional[str], now: Optional[datetime] = None) -> SessionClaims:
    """Verify a session token and return its claims.

    Raises ``Unauthenticated`` when no token is given and ``InvalidToken`` when
    the signature or payload is bad, or when ``now`` is at or past ``exp``.
    Expiry is checked here rather than by jose so the boundary is exact.
    """
    if not token:
        raise Unauthenticated("Missing access token")

    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"verify_exp": False},
        )
    except jwt.JWTError:
        raise InvalidToken("Could not validate credentials")

    if not payload.get("email") or not isinstance(payload.get("exp"), int):
        raise InvalidToken("Invalid token payload")

    if _timestamp(now or datetime.now(timezone.utc)) >= payload["exp"]:
        raise InvalidToken("Token has expired")

    return SessionClaims(**payload)
