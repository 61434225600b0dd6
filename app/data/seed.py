# app/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from app.data.database import SessionLocal
from app.data.models.product import ProductModel
from app.data.transaction import unit_of_work
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PRODUCTS = [
    ("Keyboard", Decimal("199.99")),
    ("Mouse", Decimal("49.50")),
    ("Monitor", Decimal("899.00")),
    ("USB cable", Decimal("12.00")),
    ("Mouse pad", Decimal("8.00")),
]


def seed(db: Session) -> int:
    # not forcing: only seed if empty
    repo = ProductRepo(db)
    with unit_of_work(db):
        if repo.count() > 0:
            return 0
        repo.add_products([ProductModel(name=name, price=price) for name, price in DEFAULT_PRODUCTS])

    logger.info(f"Dodano {len(DEFAULT_PRODUCTS)} produktow do katalogu")
    return len(DEFAULT_PRODUCTS)


if __name__ == "__main__":
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()
