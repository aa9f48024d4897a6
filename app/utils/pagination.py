from sqlalchemy import func
from sqlmodel import select

MAX_LIMIT = 100


def paginate(*, session, query, page: int = 1, limit: int = 10):
    """Run ``query`` for one page and wrap the rows with paging metadata."""
    page = max(page, 1)
    limit = min(limit, MAX_LIMIT) if limit >= 1 else 10

    total = session.exec(select(func.count()).select_from(query.subquery())).one()
    rows = session.exec(query.offset((page - 1) * limit).limit(limit)).all()

    return {
        "total_items": total,
        "total_pages": (total + limit - 1) // limit,
        "current_page": page,
        "limit": limit,
        "results": rows,
    }
