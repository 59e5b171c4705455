from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, require_admin
from app.data.database import get_db
from app.data.models.user import UserModel
from app.domain.schemas import (
    AddressIn,
    AddressOut,
    ChangeRoleIn,
    MessageOut,
    UpdateUserIn,
    UserDetailOut,
    UserListOut,
    UserRead,
)
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/address", response_model=AddressOut, status_code=201)
def add_address(
    payload: AddressIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).add_address(user, payload)


@router.get("/address", response_model=List[AddressOut])
def list_addresses(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).list_addresses(user)


@router.delete("/address/{address_id}", response_model=MessageOut)
def delete_address(
    address_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    UserService(db).delete_address(user, address_id)
    return {"message": "Address deleted"}


@router.put("/", response_model=UserRead)
def update_user(
    payload: UpdateUserIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).update_user(user, payload)


@router.get("/", response_model=UserListOut)
def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    _admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return UserService(db).list_users(skip=skip, limit=limit)


@router.get("/{user_id}", response_model=UserDetailOut)
def get_user(
    user_id: int,
    _admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return UserService(db).get_user(user_id)


@router.put("/{user_id}/role", response_model=UserRead)
def change_role(
    user_id: int,
    payload: ChangeRoleIn,
    _admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return UserService(db).change_role(user_id, payload.role)
