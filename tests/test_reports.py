from sqlmodel import select

from app.jobs.orphan_reports import purge_orphan_reports
from app.models.book import Book
from app.models.report import BookReport
from conftest import auth_header, error_kind, make_book, make_user


def test_report_listing_and_admin_review(client, session):
    make_user(session, "root@x.com", role="admin")
    book = make_book(session)

    created = client.post(
        "/reportbook", json={"book_id": book.id, "reason": "counterfeit"}, headers=auth_header("a@x.com")
    )
    as_user = client.get("/reportbook", headers=auth_header("a@x.com"))
    as_admin = client.get("/reportbook", headers=auth_header("root@x.com"))

    assert created.status_code == 200
    assert created.json()["book_title"] == "Dune"
    assert as_user.status_code == 403
    assert as_admin.json()["total_items"] == 1
    assert as_admin.json()["results"][0]["reporter_email"] == "a@x.com"


def test_report_unknown_book(client):
    response = client.post("/reportbook", json={"book_id": 42}, headers=auth_header("a@x.com"))

    assert response.status_code == 404
    assert error_kind(response) == "not_found"


def test_delete_reported_book_removes_book_and_reports(client, session):
    make_user(session, "root@x.com", role="admin")
    book = make_book(session)
    keep = make_book(session, title="Emma")
    session.add(BookReport(book_id=book.id, reporter_email="a@x.com"))
    session.add(BookReport(book_id=book.id, reporter_email="b@x.com"))
    session.add(BookReport(book_id=keep.id, reporter_email="a@x.com"))
    session.commit()

    response = client.delete(f"/reportbook/{book.id}", headers=auth_header("root@x.com"))

    assert response.status_code == 200
    assert response.json() == {"book_id": book.id, "book_deleted": True}
    assert session.exec(select(Book).where(Book.id == book.id)).first() is None
    assert [r.book_id for r in session.exec(select(BookReport)).all()] == [keep.id]


def test_delete_reported_book_cleans_reports_of_missing_book(client, session):
    make_user(session, "root@x.com", role="admin")
    session.add(BookReport(book_id=77, reporter_email="a@x.com"))
    session.commit()

    response = client.delete("/reportbook/77", headers=auth_header("root@x.com"))

    assert response.status_code == 200
    assert response.json()["book_deleted"] is False
    assert session.exec(select(BookReport)).all() == []


def test_delete_reported_book_requires_admin(client, session):
    book = make_book(session)

    response = client.delete(f"/reportbook/{book.id}", headers=auth_header("seller@x.com"))

    assert response.status_code == 403


def test_purge_orphan_reports(session):
    book = make_book(session)
    session.add(BookReport(book_id=book.id, reporter_email="a@x.com"))
    session.add(BookReport(book_id=999, reporter_email="a@x.com"))
    session.commit()

    assert purge_orphan_reports(session) == 1
    assert purge_orphan_reports(session) == 0
    assert [r.book_id for r in session.exec(select(BookReport)).all()] == [book.id]


def test_reports_on_sold_book_are_dismissed_and_book_kept(client, session):
    make_user(session, "root@x.com", role="admin")
    book = make_book(session, sold=True)
    session.add(BookReport(book_id=book.id, reporter_email="a@x.com", reason="spam"))
    session.commit()

    response = client.delete(f"/reportbook/{book.id}", headers=auth_header("root@x.com"))

    assert response.status_code == 200
    assert response.json() == {"book_id": book.id, "book_deleted": False}
    assert session.exec(select(BookReport)).all() == []
    assert session.exec(select(Book).where(Book.id == book.id)).first() is not None
