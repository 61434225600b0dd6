# app/services/catalog.py
from decimal import Decimal

from sqlalchemy.orm import Session

from app.data.transaction import unit_of_work
from app.domain.errors import NotFoundError
from app.domain.pricing import to_money
from app.repos.product_repo import ProductRepo
from app.services.product_client import ProductClient
from app.utils.settings import CATALOG_BACKEND


class DbCatalog:
    """Katalog z tabeli products w tej samej bazie (read committed wystarczy)."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def get_price(self, product_id: int) -> Decimal | None:
        price = self.repo.get_price(product_id)
        return None if price is None else to_money(price)


def get_catalog(db: Session, backend: str = CATALOG_BACKEND):
    if backend == "http":
        return ProductClient()
    return DbCatalog(db)


class ProductService:
    """Odczyt katalogu dla /products."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepo(db)

    def list_products(self) -> list[dict]:
        with unit_of_work(self.db):
            return [self._to_dict(p) for p in self.repo.list_products()]

    def get_product(self, product_id: int) -> dict:
        with unit_of_work(self.db):
            product = self.repo.get_product(product_id)
            if not product:
                raise NotFoundError("Produkt nie istnieje")
            return self._to_dict(product)

    @staticmethod
    def _to_dict(product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": to_money(product.price),
        }
