from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel
from app.domain.exceptions import BadRequestException, ErrorCode, NotFoundException
from app.domain.schemas import ProductIn, ProductOut, ProductUpdate
from app.repos.product_repo import ProductRepo
from app.utils.settings import PRODUCTS_PAGE_SIZE
from app.utils.logging import get_logger

logger = get_logger(__name__)

MIN_SEARCH_LENGTH = 2


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundException("Product not found!", ErrorCode.PRODUCT_NOT_FOUND)
        return product

    def list_products(self, skip: int = 0) -> dict:
        return {
            "count": self.repo.count_products(),
            "data": self.repo.list_products(skip=skip, limit=PRODUCTS_PAGE_SIZE),
        }

    def search_products(self, q: str | None) -> list[ProductModel]:
        if not q or len(q.strip()) < MIN_SEARCH_LENGTH:
            return []
        return self.repo.search(q.strip())

    def create_product(self, payload: ProductIn) -> ProductModel:
        product = ProductModel(
            name=payload.name,
            description=payload.description,
            price=payload.price,
        )
        product.tags = payload.tags
        created = self.repo.save(product)
        logger.info(f"Product {created.id} created")
        return created

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        product = self.get_product(product_id)

        # tylko pola jawnie wyslane przez klienta
        for field, value in payload.model_dump(exclude_unset=True).items():
            if field == "tags":
                product.tags = value
            elif value is not None or field == "description":
                setattr(product, field, value)

        return self.repo.save(product)

    def delete_product(self, product_id: int) -> ProductOut:
        product = self.get_product(product_id)
        snapshot = ProductOut.model_validate(product)
        try:
            self.repo.delete(product)
        except IntegrityError:
            self.repo.rollback()
            raise BadRequestException("Product is referenced by existing orders!", ErrorCode.PRODUCT_IN_USE)

        logger.info(f"Product {product_id} deleted")
        return snapshot
