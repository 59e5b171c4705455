# app/repos/cart_repo.py
from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session, joinedload

from app.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user_cart(self, user_id: int) -> list[CartItemModel]:
        """Linie koszyka usera razem z produktem (join)."""
        return list(
            self.db.execute(
                select(CartItemModel)
                .options(joinedload(CartItemModel.product))
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.id)
            ).scalars()
        )

    def get_cart_item(self, item_id: int, user_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel)
            .options(joinedload(CartItemModel.product))
            .where(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_cart_item_by_product(self, user_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def increment_quantity(self, item_id: int, quantity: int) -> int:
        # atomowo po stronie bazy: SET quantity = quantity + n
        res = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.id == item_id)
            .values(quantity=CartItemModel.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount

    def set_quantity(self, item_id: int, user_id: int, quantity: int) -> int:
        res = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount

    def delete_cart_item(self, item_id: int, user_id: int) -> int:
        res = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount

    def delete_snapshot(self, user_id: int, snapshot: list[tuple[int, int]]) -> int:
        """
        Usuwa linie koszyka tylko jesli nadal wygladaja jak w snapshocie (id + quantity).
        Zwraca liczbe usunietych wierszy - mniej niz len(snapshot) oznacza konflikt.
        """
        deleted = 0
        for item_id, quantity in snapshot:
            res = self.db.execute(
                delete(CartItemModel)
                .where(
                    CartItemModel.id == item_id,
                    CartItemModel.user_id == user_id,
                    CartItemModel.quantity == quantity,
                )
                .execution_options(synchronize_session=False)
            )
            deleted += res.rowcount
        return deleted

    def expire(self):
        self.db.expire_all()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
