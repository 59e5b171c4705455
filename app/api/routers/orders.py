# app/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.deps import get_current_user, get_order_service, require_admin
from app.data.models.user import UserModel
from app.domain.enums import OrderStatus
from app.domain.schemas import ChangeStatusIn, OrderDetailOut, OrderOut
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=OrderDetailOut, status_code=201)
def create_order(
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    """
    Checkout: tworzy zamowienie z koszyka usera.
    Pusty koszyk to nie blad - 200 z komunikatem, bez zapisow.
    """
    order = svc.checkout(user)
    if order is None:
        return JSONResponse(status_code=200, content={"message": "cart is empty"})
    return order


@router.get("/", response_model=List[OrderOut])
def list_orders(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_orders(user, skip=skip, limit=limit)


# trasy admina przed /{order_id}
@router.get("/all", response_model=List[OrderOut])
def list_all_orders(
    status: OrderStatus | None = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    _admin: UserModel = Depends(require_admin),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_all_orders(status=status, skip=skip, limit=limit)


@router.get("/users/{user_id}", response_model=List[OrderOut])
def list_user_orders(
    user_id: int,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    _admin: UserModel = Depends(require_admin),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_user_orders(user_id, skip=skip, limit=limit)


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: int,
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    return svc.get_order(order_id, user)


@router.put("/{order_id}/cancel", response_model=OrderDetailOut)
def cancel_order(
    order_id: int,
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    return svc.cancel_order(order_id, user)


@router.put("/{order_id}/status", response_model=OrderDetailOut)
def change_status(
    order_id: int,
    payload: ChangeStatusIn,
    admin: UserModel = Depends(require_admin),
    svc: OrderService = Depends(get_order_service),
):
    return svc.change_status(order_id, payload.status, admin)
