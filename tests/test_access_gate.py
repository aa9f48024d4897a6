import pytest

from conftest import auth_header, error_kind, make_book, make_user


def test_missing_header_is_401(client):
    response = client.get("/user/a@x.com")

    assert response.status_code == 401
    assert error_kind(response) == "unauthenticated"


def test_empty_header_counts_as_missing(client):
    response = client.get("/user/a@x.com", headers={"Authorization": ""})

    assert response.status_code == 401
    assert error_kind(response) == "unauthenticated"


@pytest.mark.parametrize("header", ["Bearer not-a-token", "Basic YTpi", "Bearer", "token-without-scheme"])
def test_malformed_or_invalid_credentials_are_403(client, header):
    response = client.get("/user/a@x.com", headers={"Authorization": header})

    assert response.status_code == 403
    assert error_kind(response) == "invalid_token"


def test_owner_can_read_own_profile(client, session):
    make_user(session, "a@x.com", role="seller")

    response = client.get("/user/a@x.com", headers=auth_header("a@x.com"))

    assert response.status_code == 200
    assert response.json()["role"] == "seller"


@pytest.mark.parametrize("path", ["/user/b@x.com", "/bookings/b@x.com", "/products/b@x.com"])
def test_self_routes_reject_other_emails(client, session, path):
    make_user(session, "a@x.com")
    make_user(session, "b@x.com")

    response = client.get(path, headers=auth_header("a@x.com"))

    assert response.status_code == 403
    assert error_kind(response) == "forbidden"


def test_self_route_forbidden_even_if_token_claims_admin(client, session):
    make_user(session, "root@x.com", role="admin")

    response = client.get("/bookings/b@x.com", headers=auth_header("root@x.com", role="admin"))

    assert response.status_code == 403


def test_admin_route_requires_stored_admin_role(client, session):
    make_user(session, "a@x.com", role="user")

    # a stale role claim does not help: the role is read from the store
    response = client.get("/sellers", headers=auth_header("a@x.com", role="admin"))

    assert response.status_code == 403
    assert error_kind(response) == "forbidden"


def test_admin_route_with_unknown_user_is_forbidden(client):
    response = client.get("/buyers", headers=auth_header("ghost@x.com"))

    assert response.status_code == 403
    assert error_kind(response) == "forbidden"


def test_unauthenticated_admin_mutation_never_touches_store(client, session):
    target = make_user(session, "b@x.com")

    response = client.put(f"/admin/{target.id}")

    assert response.status_code == 401
    session.refresh(target)
    assert target.verified is False


def test_admin_lists_sellers_and_buyers(client, session):
    make_user(session, "root@x.com", role="admin")
    make_user(session, "s1@x.com", role="seller")
    make_user(session, "s2@x.com", role="seller")
    make_user(session, "b1@x.com", role="user")

    sellers = client.get("/sellers?limit=1", headers=auth_header("root@x.com"))
    buyers = client.get("/buyers", headers=auth_header("root@x.com"))

    assert sellers.status_code == 200
    assert sellers.json()["total_items"] == 2
    assert sellers.json()["total_pages"] == 2
    assert [u["email"] for u in sellers.json()["results"]] == ["s1@x.com"]
    assert [u["email"] for u in buyers.json()["results"]] == ["b1@x.com"]


def test_listing_can_only_be_deleted_by_seller_or_admin(client, session):
    make_user(session, "root@x.com", role="admin")
    book = make_book(session, seller_email="seller@x.com")
    other = make_book(session, seller_email="seller@x.com", title="Emma")

    denied = client.delete(f"/product/{book.id}", headers=auth_header("mallory@x.com"))
    by_seller = client.delete(f"/product/{book.id}", headers=auth_header("seller@x.com", role="seller"))
    by_admin = client.delete(f"/product/{other.id}", headers=auth_header("root@x.com", role="admin"))

    assert denied.status_code == 403
    assert by_seller.status_code == 200
    assert by_admin.status_code == 200
    assert client.get(f"/books/{book.id}").status_code == 404
