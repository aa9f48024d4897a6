from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.database import get_session
from app.dependencies.auth import get_current_claims, require_admin
from app.dependencies.stores import get_report_desk
from app.models.user import User
from app.schemas.report_schemas import ReportCreate, ReportResponse
from app.services.report_service import ReportDesk
from app.utils.pagination import paginate
from app.utils.token import SessionClaims

router = APIRouter()


@router.post("/reportbook", response_model=ReportResponse)
def report_book(
    payload: ReportCreate,
    claims: SessionClaims = Depends(get_current_claims),
    desk: ReportDesk = Depends(get_report_desk),
):
    return desk.report(book_id=payload.book_id, reporter_email=claims.email, reason=payload.reason)


@router.get("/reportbook")
def list_reports(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    _: User = Depends(require_admin),
    session: Session = Depends(get_session),
    desk: ReportDesk = Depends(get_report_desk),
):
    result = paginate(session=session, query=desk.list_reports(), page=page, limit=limit)
    result["results"] = [ReportResponse.model_validate(r) for r in result["results"]]
    return result


@router.delete("/reportbook/{book_id}")
def delete_reported_book(
    book_id: int,
    _: User = Depends(require_admin),
    desk: ReportDesk = Depends(get_report_desk),
):
    return desk.delete_reported_book(book_id)
