from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel


def search_condition(query: str, dialect: str):
    columns = (
        ProductModel.name,
        func.coalesce(ProductModel.description, ""),
        ProductModel.tags_raw,
    )
    if dialect == "postgresql":
        # full-text: to_tsvector(kolumna) @@ plainto_tsquery(query)
        return or_(*(func.to_tsvector(c).match(query) for c in columns))

    pattern = f"%{query}%"
    return or_(*(c.ilike(pattern) for c in columns))


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self, skip: int = 0, limit: int = 5) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel).order_by(ProductModel.id).offset(skip).limit(limit)
            ).scalars()
        )

    def count_products(self) -> int:
        return self.db.execute(select(func.count(ProductModel.id))).scalar_one()

    def search(self, query: str, limit: int = 50) -> list[ProductModel]:
        dialect = self.db.get_bind().dialect.name
        return list(
            self.db.execute(
                select(ProductModel)
                .where(search_condition(query, dialect))
                .order_by(ProductModel.id)
                .limit(limit)
            ).scalars()
        )

    def save(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete(self, product: ProductModel):
        self.db.delete(product)
        self.db.commit()

    def rollback(self):
        self.db.rollback()
