# app/services/order_service.py
import uuid

from redis.exceptions import RedisError
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel, OrderItemModel, OrderEventModel
from app.data.models.user import UserModel
from app.domain.enums import OrderStatus, can_transition
from app.domain.exceptions import (
    AddressNotConfigured,
    BadRequestException,
    CheckoutConflict,
    ErrorCode,
    ForbiddenException,
    NotFoundException,
)
from app.repos.address_repo import AddressRepo
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.services.auth_service import is_admin
from app.services.cart_service import cart_total
from app.services.lock_service import LockService
from app.services.notification_service import NotificationService
from app.utils.settings import CHECKOUT_LOCK_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien:
    checkout koszyka, zmiany statusu i odczyty.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.address_repo = AddressRepo(db)
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    # =====================================================
    # COMMANDS
    # =====================================================
    def checkout(self, user: UserModel) -> OrderModel | None:
        """
        Use Case: zamiana koszyka w zamowienie, wszystko albo nic.

        1. Lock checkoutu per user (redis)
        2. Odczyt koszyka z produktami, pusty koszyk -> None, zero zapisow
        3. net_amount w Decimal
        4. Snapshot domyslnego adresu wysylki
        5. Order + OrderItems + OrderEvent(PENDING)
        6. Warunkowe usuniecie linii koszyka ze snapshotu
        7. Commit; kazdy blad -> rollback calej transakcji
        """
        user_id = user.id
        token = uuid.uuid4().hex

        if not self.lock_service.acquire_checkout_lock(user_id, token, CHECKOUT_LOCK_TTL_SECONDS):
            raise BadRequestException(
                "Checkout already in progress for this user", ErrorCode.CHECKOUT_IN_PROGRESS
            )

        try:
            order = self._checkout_locked(user)
        finally:
            self._release(user_id, token)

        if order is not None:
            self.notification_service.send_order_placed(user_id, order.id)
        return order

    def _release(self, user_id: int, token: str):
        try:
            self.lock_service.release_checkout_lock(user_id, token)
        except RedisError as e:
            # lock i tak wygasnie po TTL
            logger.warning(f"Failed to release checkout lock for user {user_id}: {e}")

    def _checkout_locked(self, user: UserModel) -> OrderModel | None:
        try:
            items = self.cart_repo.get_user_cart(user.id)
            if not items:
                logger.info(f"Cart of user {user.id} is empty, nothing to checkout")
                self.repo.rollback()
                return None

            net_amount = cart_total(items)

            address = None
            if user.default_shipping_address_id is not None:
                address = self.address_repo.get_user_address(user.default_shipping_address_id, user.id)
            if address is None:
                raise AddressNotConfigured()

            order = OrderModel(
                user_id=user.id,
                net_amount=net_amount,
                address=address.formatted_address,
                status=OrderStatus.PENDING.value,
                items=[
                    OrderItemModel(product_id=i.product_id, quantity=i.quantity)
                    for i in items
                ],
                events=[OrderEventModel(status=OrderStatus.PENDING.value)],
            )
            self.repo.add_order(order)

            snapshot = [(i.id, i.quantity) for i in items]
            deleted = self.cart_repo.delete_snapshot(user.id, snapshot)
            if deleted != len(snapshot):
                logger.warning(
                    f"Cart of user {user.id} changed during checkout "
                    f"({deleted}/{len(snapshot)} lines matched)"
                )
                raise CheckoutConflict()

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {order.id} created for user {user.id}, net amount {net_amount}")
        return self.repo.get_order(order.id)

    def change_status(self, order_id: int, status: OrderStatus, actor: UserModel) -> OrderModel:
        """
        Use Case: zmiana statusu zamowienia + OrderEvent, atomowo.
        User moze tylko anulowac swoje zamowienie, admin moze wszystko (w granicach maszyny stanow).
        """
        target = OrderStatus(status)

        try:
            order = self.repo.get_order_for_update(order_id)
            if not order:
                raise NotFoundException("Order not found", ErrorCode.ORDER_NOT_FOUND)

            if not is_admin(actor):
                if order.user_id != actor.id:
                    raise ForbiddenException("Access to order denied")
                if target != OrderStatus.CANCELLED:
                    raise ForbiddenException("Only cancellation is allowed")

            if not can_transition(order.status, target):
                raise BadRequestException(
                    f"Cannot change order status from {order.status} to {target.value}",
                    ErrorCode.INVALID_STATUS_TRANSITION,
                )

            previous = order.status
            self.repo.update_order_status(order, target.value)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {order_id} status {previous} -> {target.value}")

        order = self.repo.get_order(order_id)
        self.notification_service.send_status_changed(order.user_id, order.id, order.status)
        return order

    def cancel_order(self, order_id: int, actor: UserModel) -> OrderModel:
        return self.change_status(order_id, OrderStatus.CANCELLED, actor)

    # =====================================================
    # QUERY
    # =====================================================
    def get_order(self, order_id: int, actor: UserModel) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundException("Order not found", ErrorCode.ORDER_NOT_FOUND)

        if order.user_id != actor.id and not is_admin(actor):
            raise ForbiddenException("Access to order denied")

        return order

    def list_orders(self, user: UserModel, skip: int = 0, limit: int = 100) -> list[OrderModel]:
        return self.repo.list_orders(user_id=user.id, skip=skip, limit=limit)

    def list_all_orders(
        self,
        status: OrderStatus | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[OrderModel]:
        return self.repo.list_orders(
            status=status.value if status else None,
            skip=skip,
            limit=limit,
        )

    def list_user_orders(self, user_id: int, skip: int = 0, limit: int = 100) -> list[OrderModel]:
        return self.repo.list_orders(user_id=user_id, skip=skip, limit=limit)
