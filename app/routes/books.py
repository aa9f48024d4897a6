from typing import List

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from app.database import get_session
from app.dependencies.auth import get_current_claims, require_owner
from app.dependencies.stores import get_inventory
from app.models.category import Category
from app.schemas.book_schemas import AdvertiseResponse, BookCreate, BookResponse
from app.schemas.category_schemas import CategoryResponse
from app.services.inventory_service import InventoryStore
from app.utils.pagination import paginate
from app.utils.token import SessionClaims

router = APIRouter()


# -------- PUBLIC BROWSE --------

@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(session: Session = Depends(get_session)):
    return session.exec(select(Category).order_by(Category.name)).all()


@router.get("/categories/{name}", response_model=List[BookResponse])
def books_by_category(name: str, inventory: InventoryStore = Depends(get_inventory)):
    return inventory.list_advertised(name)


@router.get("/books/{book_id}", response_model=BookResponse)
def get_book(book_id: int, inventory: InventoryStore = Depends(get_inventory)):
    return inventory.get(book_id)


# -------- SELLER LISTINGS --------

@router.post("/products", response_model=BookResponse)
def create_product(
    payload: BookCreate,
    claims: SessionClaims = Depends(get_current_claims),
    inventory: InventoryStore = Depends(get_inventory),
):
    return inventory.create_listing(claims.email, **payload.model_dump())


@router.delete("/product/{book_id}")
def delete_product(
    book_id: int,
    claims: SessionClaims = Depends(get_current_claims),
    inventory: InventoryStore = Depends(get_inventory),
):
    inventory.delete_listing(book_id, claims.email)
    return {"message": "Listing deleted", "book_id": book_id}


@router.get("/products/{email}")
def list_my_products(
    email: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    _: SessionClaims = Depends(require_owner),
    session: Session = Depends(get_session),
    inventory: InventoryStore = Depends(get_inventory),
):
    result = paginate(session=session, query=inventory.list_by_seller(email), page=page, limit=limit)
    result["results"] = [BookResponse.model_validate(b) for b in result["results"]]
    return result


@router.put("/advertise/{book_id}", response_model=AdvertiseResponse)
def toggle_advertise(
    book_id: int,
    claims: SessionClaims = Depends(get_current_claims),
    inventory: InventoryStore = Depends(get_inventory),
):
    inventory.ensure_can_manage(inventory.get(book_id), claims.email)
    return AdvertiseResponse(book_id=book_id, advertise=inventory.toggle_advertise(book_id))
