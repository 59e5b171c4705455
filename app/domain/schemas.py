# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr, field_validator
from typing import Any, List
from decimal import Decimal
from datetime import datetime

from app.domain.enums import OrderStatus, Role


# =====================================================
# AUTH / USERS
# =====================================================
class SignUpIn(BaseModel):
    """Schema dla rejestracji."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    """Schema dla uzytkownika (response). Haslo nigdy nie wychodzi na zewnatrz."""

    id: int
    name: str
    email: str
    role: Role
    default_shipping_address_id: int | None = None
    default_billing_address_id: int | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LoginOut(BaseModel):
    user: UserRead
    token: str


class UpdateUserIn(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    default_shipping_address_id: int | None = Field(None, gt=0)
    default_billing_address_id: int | None = Field(None, gt=0)


class ChangeRoleIn(BaseModel):
    role: Role


class AddressIn(BaseModel):
    line_one: str = Field(..., min_length=1)
    line_two: str | None = None
    city: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1, max_length=12)


class AddressOut(BaseModel):
    id: int
    line_one: str
    line_two: str | None = None
    city: str
    country: str
    zip_code: str
    user_id: int
    formatted_address: str

    model_config = ConfigDict(from_attributes=True)


class UserDetailOut(UserRead):
    addresses: List[AddressOut] = []


class UserListOut(BaseModel):
    count: int
    data: List[UserRead]


# =====================================================
# PRODUCTS
# =====================================================
def _check_tags(tags: List[str] | None) -> List[str] | None:
    # tagi zapisywane jako "a,b,c", przecinek w tagu by sie rozpadl
    if tags and any("," in t for t in tags):
        raise ValueError("Tags must not contain commas")
    return tags


class ProductIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    tags: List[str] = []

    @field_validator("tags")
    @classmethod
    def no_commas_in_tags(cls, v):
        return _check_tags(v)


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    tags: List[str] | None = None

    @field_validator("tags")
    @classmethod
    def no_commas_in_tags(cls, v):
        return _check_tags(v)


class ProductOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: Decimal
    tags: List[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductListOut(BaseModel):
    count: int
    data: List[ProductOut]


# =====================================================
# CART
# =====================================================
class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi byc > 0)")
    quantity: int = Field(..., gt=0, description="Ilosc produktu (musi byc > 0)")


class ChangeQuantityIn(BaseModel):
    quantity: int = Field(..., gt=0, description="Nowa ilosc (musi byc > 0)")


class CartItemOut(BaseModel):
    """Linia koszyka z danymi produktu (response)."""

    id: int
    user_id: int
    product_id: int
    quantity: int
    product: ProductOut

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    items: List[CartItemOut]
    total: Decimal


# =====================================================
# ORDERS
# =====================================================
class OrderItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class OrderEventOut(BaseModel):
    id: int
    status: OrderStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: int
    user_id: int
    net_amount: Decimal
    address: str
    status: OrderStatus
    created_at: datetime
    items: List[OrderItemOut] = []

    model_config = ConfigDict(from_attributes=True)


class OrderDetailOut(OrderOut):
    events: List[OrderEventOut] = []


class ChangeStatusIn(BaseModel):
    status: OrderStatus


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    message: str
    errorCode: int
    errors: Any = None
