from sqlalchemy.orm import Session

from app.data.models.address import AddressModel
from app.data.models.user import UserModel
from app.domain.enums import Role
from app.domain.exceptions import BadRequestException, ErrorCode, NotFoundException
from app.domain.schemas import AddressIn, UpdateUserIn
from app.repos.address_repo import AddressRepo
from app.repos.user_repo import UserRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)
        self.address_repo = AddressRepo(db)

    # adresy
    def add_address(self, user: UserModel, payload: AddressIn) -> AddressModel:
        address = AddressModel(**payload.model_dump(), user_id=user.id)
        created = self.address_repo.create_address(address)
        logger.info(f"Address {created.id} added for user {user.id}")
        return created

    def list_addresses(self, user: UserModel) -> list[AddressModel]:
        return self.address_repo.list_user_addresses(user.id)

    def delete_address(self, user: UserModel, address_id: int):
        address = self.address_repo.get_user_address(address_id, user.id)
        if not address:
            raise NotFoundException("Address not found!", ErrorCode.ADDRESS_NOT_FOUND)

        self.address_repo.delete_address(address)
        logger.info(f"Address {address_id} deleted for user {user.id}")

    def _owned_address(self, user: UserModel, address_id: int, label: str) -> AddressModel:
        address = self.address_repo.get_address(address_id)
        if not address:
            raise NotFoundException(f"{label} address not found!", ErrorCode.ADDRESS_NOT_FOUND)
        if address.user_id != user.id:
            raise BadRequestException("Address does not belong to user!", ErrorCode.ADDRESS_DOES_NOT_BELONG)
        return address

    def update_user(self, user: UserModel, payload: UpdateUserIn) -> UserModel:
        if payload.default_shipping_address_id is not None:
            self._owned_address(user, payload.default_shipping_address_id, "Shipping")
            user.default_shipping_address_id = payload.default_shipping_address_id

        if payload.default_billing_address_id is not None:
            self._owned_address(user, payload.default_billing_address_id, "Billing")
            user.default_billing_address_id = payload.default_billing_address_id

        if payload.name is not None:
            user.name = payload.name

        return self.repo.save(user)

    # admin
    def list_users(self, skip: int = 0, limit: int = 100) -> dict:
        return {
            "count": self.repo.count_users(),
            "data": self.repo.list_users(skip=skip, limit=limit),
        }

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundException("User not found!", ErrorCode.USER_NOT_FOUND)
        return user

    def change_role(self, user_id: int, role: Role) -> UserModel:
        user = self.get_user(user_id)
        user.role = role.value
        updated = self.repo.save(user)
        logger.info(f"User {user_id} role changed to {role.value}")
        return updated
