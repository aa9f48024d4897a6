from fastapi import APIRouter, Depends

from app.dependencies.auth import require_owner
from app.dependencies.stores import get_user_directory
from app.schemas.user_schemas import (
    SellerVerification,
    UserResponse,
    UserUpsert,
    UserWithToken,
)
from app.services.user_service import UserDirectory
from app.utils.token import SessionClaims, create_access_token

router = APIRouter()


# -------- SIGN-IN --------

@router.put("/user/{email}", response_model=UserWithToken)
def upsert_user(
    email: str,
    payload: UserUpsert,
    users: UserDirectory = Depends(get_user_directory),
):
    user = users.upsert(email, name=payload.name, photo_url=payload.photo_url, role=payload.role)
    token = create_access_token({"email": user.email, "role": user.role})
    return UserWithToken(user=UserResponse.model_validate(user), access_token=token)


# -------- PROFILE --------

@router.get("/user/{email}", response_model=UserResponse)
def get_user(
    email: str,
    _: SessionClaims = Depends(require_owner),
    users: UserDirectory = Depends(get_user_directory),
):
    return users.get_by_email(email)


@router.get("/verify-seller/{email}", response_model=SellerVerification)
def verify_seller(email: str, users: UserDirectory = Depends(get_user_directory)):
    user = users.get_by_email(email)
    return SellerVerification(email=user.email, role=user.role, verified=user.verified)
