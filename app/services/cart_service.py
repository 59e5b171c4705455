# app/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.cart_item import CartItemModel
from app.data.models.user import UserModel
from app.domain.exceptions import BadRequestException, ErrorCode, NotFoundException
from app.domain.schemas import CartItemOut
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


def cart_total(items: list[CartItemModel]) -> Decimal:
    # Decimal, nigdy float
    return sum((Decimal(i.product.price) * i.quantity for i in items), Decimal("0.00"))


class CartService:
    """
    Prosta implementacja cqrs dla domeny cart
    commands (add, change quantity, remove) modyfikuja stan
    query (get) tylko odczyt
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.product_repo = ProductRepo(db)

    #query - odczyt
    def get_cart(self, user: UserModel) -> Dict[str, Any]:
        items = self.repo.get_user_cart(user.id)
        return {
            "items": items,
            "total": cart_total(items),
        }

    #commands
    def add_item(self, user: UserModel, product_id: int, quantity: int) -> CartItemModel:
        if quantity <= 0:
            raise BadRequestException("Quantity must be greater than 0", ErrorCode.UNPROCESSABLE_ENTITY)

        product = self.product_repo.get_product(product_id)
        if not product:
            raise NotFoundException("Product not found!", ErrorCode.PRODUCT_NOT_FOUND)

        existing = self.repo.get_cart_item_by_product(user.id, product_id)

        try:
            if existing:
                logger.info(f"Product {product_id} already in cart of user {user.id}, adding {quantity}")
                self.repo.increment_quantity(existing.id, quantity)
                item_id = existing.id
            else:
                item_id = self._insert_or_increment(user.id, product_id, quantity)

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        self.repo.expire()
        return self.repo.get_cart_item(item_id, user.id)

    def _insert_or_increment(self, user_id: int, product_id: int, quantity: int) -> int:
        try:
            created = self.repo.add_cart_item(
                CartItemModel(user_id=user_id, product_id=product_id, quantity=quantity)
            )
            logger.info(f"Added product {product_id} to cart of user {user_id}")
            return created.id
        except IntegrityError:
            # ktos rownolegle wstawil ta sama pare (user, product) - unique constraint wygral
            self.repo.rollback()
            winner = self.repo.get_cart_item_by_product(user_id, product_id)
            if winner is None:
                raise
            self.repo.increment_quantity(winner.id, quantity)
            return winner.id

    def change_quantity(self, user: UserModel, item_id: int, quantity: int) -> CartItemModel:
        if quantity <= 0:
            raise BadRequestException("Quantity must be greater than 0", ErrorCode.UNPROCESSABLE_ENTITY)

        rowcount = self.repo.set_quantity(item_id, user.id, quantity)
        if rowcount == 0:
            self.repo.rollback()
            raise NotFoundException("Cart item not found!", ErrorCode.CART_ITEM_NOT_FOUND)

        self.repo.commit()
        logger.info(f"Cart item {item_id} of user {user.id} set to {quantity}")

        self.repo.expire()
        return self.repo.get_cart_item(item_id, user.id)

    def remove_item(self, user: UserModel, item_id: int) -> CartItemOut:
        item = self.repo.get_cart_item(item_id, user.id)
        if not item:
            raise NotFoundException("Cart item not found!", ErrorCode.CART_ITEM_NOT_FOUND)

        # snapshot odpowiedzi zanim wiersz zniknie
        removed = CartItemOut.model_validate(item)

        if self.repo.delete_cart_item(item_id, user.id) == 0:
            self.repo.rollback()
            raise NotFoundException("Cart item not found!", ErrorCode.CART_ITEM_NOT_FOUND)

        self.repo.commit()
        logger.info(f"Cart item {item_id} removed from cart of user {user.id}")
        return removed
