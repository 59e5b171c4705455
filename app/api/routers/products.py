from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.data.database import get_db
from app.data.models.user import UserModel
from app.domain.schemas import ProductIn, ProductListOut, ProductOut, ProductUpdate
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


# publiczne wyszukiwanie, musi byc przed /{product_id}
@router.get("/search", response_model=List[ProductOut])
def search_products(q: str | None = Query(None), db: Session = Depends(get_db)):
    return ProductService(db).search_products(q)


@router.post("/", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductIn,
    _admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ProductService(db).create_product(payload)


@router.get("/", response_model=ProductListOut)
def list_products(
    skip: int = Query(0, ge=0),
    _admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ProductService(db).list_products(skip=skip)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: int,
    _admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ProductService(db).get_product(product_id)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    _admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ProductService(db).update_product(product_id, payload)


@router.delete("/{product_id}", response_model=ProductOut)
def delete_product(
    product_id: int,
    _admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ProductService(db).delete_product(product_id)
