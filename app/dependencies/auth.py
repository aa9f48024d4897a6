from typing import Optional

from fastapi import Depends, Header

from app.dependencies.stores import get_user_directory
from app.errors import Forbidden, InvalidToken, Unauthenticated
from app.models.user import User
from app.services.user_service import UserDirectory
from app.utils.token import SessionClaims, decode_access_token


def get_current_claims(authorization: Optional[str] = Header(default=None)) -> SessionClaims:
    if not authorization or not authorization.strip():
        raise Unauthenticated("Unauthorized access")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise InvalidToken("Authorization header must be 'Bearer <token>'")

    return decode_access_token(token.strip())


def require_owner(email: str, claims: SessionClaims = Depends(get_current_claims)) -> SessionClaims:
    if claims.email != email:
        raise Forbidden("Forbidden access")
    return claims


def require_admin(
    claims: SessionClaims = Depends(get_current_claims),
    users: UserDirectory = Depends(get_user_directory),
) -> User:
    # role comes from the store, not the token, so demotions apply immediately
    user = users.find_by_email(claims.email)
    if user is None or user.role != "admin":
        raise Forbidden("Admin access required")
    return user
