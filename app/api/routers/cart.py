# app/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.data.database import get_db
from app.data.models.user import UserModel
from app.domain.schemas import ItemIn, ChangeQuantityIn, CartItemOut, CartOut
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("/", response_model=CartItemOut)
def add_item(
    payload: ItemIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CartService(db).add_item(user, payload.product_id, payload.quantity)


@router.get("/", response_model=CartOut)
def get_cart(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CartService(db).get_cart(user)


@router.put("/{item_id}", response_model=CartItemOut)
def change_quantity(
    item_id: int,
    payload: ChangeQuantityIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CartService(db).change_quantity(user, item_id, payload.quantity)


@router.delete("/{item_id}", response_model=CartItemOut)
def remove_item(
    item_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CartService(db).remove_item(user, item_id)
