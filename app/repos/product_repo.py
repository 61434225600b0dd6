from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session
from app.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_price(self, product_id: int) -> Decimal | None:
        #sama kolumna, zawsze aktualna cena z bazy (bez identity map)
        return self.db.execute(
            select(ProductModel.price).where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def list_products(self) -> list[ProductModel]:
        return list(self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars())

    def count(self) -> int:
        return self.db.execute(select(func.count(ProductModel.id))).scalar_one()

    def add_products(self, products: list[ProductModel]) -> None:
        self.db.add_all(products)
        self.db.flush()
