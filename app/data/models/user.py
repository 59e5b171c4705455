from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.domain.enums import Role


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default=Role.USER.value)

    # use_alter: cykl users <-> addresses
    default_shipping_address_id = Column(
        Integer,
        ForeignKey("addresses.id", ondelete="SET NULL", use_alter=True, name="fk_users_default_shipping"),
        nullable=True,
    )
    default_billing_address_id = Column(
        Integer,
        ForeignKey("addresses.id", ondelete="SET NULL", use_alter=True, name="fk_users_default_billing"),
        nullable=True,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    addresses = relationship(
        "AddressModel",
        back_populates="user",
        foreign_keys="AddressModel.user_id",
        cascade="all, delete-orphan",
    )
    cart_items = relationship("CartItemModel", back_populates="user", cascade="all, delete-orphan")
    orders = relationship("OrderModel", back_populates="user")
