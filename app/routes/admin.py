from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.database import get_session
from app.dependencies.auth import require_admin
from app.dependencies.stores import get_user_directory
from app.models.user import User
from app.schemas.user_schemas import UserResponse
from app.services.user_service import UserDirectory
from app.utils.pagination import paginate

router = APIRouter()


def _list_role(role: str, page: int, limit: int, session: Session, users: UserDirectory):
    result = paginate(session=session, query=users.list_by_role(role), page=page, limit=limit)
    result["results"] = [UserResponse.model_validate(u) for u in result["results"]]
    return result


# -------- USER LISTS --------

@router.get("/sellers")
def list_sellers(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    _: User = Depends(require_admin),
    session: Session = Depends(get_session),
    users: UserDirectory = Depends(get_user_directory),
):
    return _list_role("seller", page, limit, session, users)


@router.get("/buyers")
def list_buyers(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    _: User = Depends(require_admin),
    session: Session = Depends(get_session),
    users: UserDirectory = Depends(get_user_directory),
):
    return _list_role("user", page, limit, session, users)


# -------- MODERATION --------

@router.put("/admin/{user_id}", response_model=UserResponse)
def verify_user(
    user_id: int,
    _: User = Depends(require_admin),
    users: UserDirectory = Depends(get_user_directory),
):
    return users.verify_user(user_id)


@router.delete("/admin-delete/{user_id}")
def delete_user(
    user_id: int,
    _: User = Depends(require_admin),
    users: UserDirectory = Depends(get_user_directory),
):
    return users.delete_user(user_id)
