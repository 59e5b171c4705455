from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.data.models.address import AddressModel
from app.data.models.user import UserModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_address(self, address_id: int) -> AddressModel | None:
        return self.db.get(AddressModel, address_id)

    def get_user_address(self, address_id: int, user_id: int) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(
                AddressModel.id == address_id,
                AddressModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def list_user_addresses(self, user_id: int) -> list[AddressModel]:
        return list(
            self.db.execute(
                select(AddressModel)
                .where(AddressModel.user_id == user_id)
                .order_by(AddressModel.id)
            ).scalars()
        )

    def create_address(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.commit()
        self.db.refresh(address)
        return address

    def delete_address(self, address: AddressModel):
        # odepnij domyslne adresy wskazujace na usuwany rekord
        self.db.execute(
            update(UserModel)
            .where(UserModel.default_shipping_address_id == address.id)
            .values(default_shipping_address_id=None)
        )
        self.db.execute(
            update(UserModel)
            .where(UserModel.default_billing_address_id == address.id)
            .values(default_billing_address_id=None)
        )
        self.db.delete(address)
        self.db.commit()
