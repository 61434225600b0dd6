# app/repos/cart_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel, CART_ACTIVE, CART_CHECKED_OUT
from app.data.models.cart_line import CartLineModel
from app.data.models.product import ProductModel


class CartRepo:
    """Dostep do koszykow i linii. Nie commituje - granice transakcji sa w serwisach."""

    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_cart_for_update(self, cart_id: int) -> CartModel | None:
        #SELECT ... FOR UPDATE, populate_existing zeby nie brac starego obiektu z identity map
        return self.db.execute(
            select(CartModel)
            .where(CartModel.id == cart_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def get_active_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(
                CartModel.user_id == user_id,
                CartModel.status == CART_ACTIVE,
            )
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def get_cart_lines(self, cart_id: int) -> list[CartLineModel]:
        return list(
            self.db.execute(
                select(CartLineModel)
                .where(CartLineModel.cart_id == cart_id)
                .order_by(CartLineModel.id)
            ).scalars()
        )

    def get_named_cart_lines(self, cart_id: int) -> list[tuple[CartLineModel, str | None]]:
        # outer join: linia zostaje nawet jak produkt zniknal z katalogu (name = None)
        rows = self.db.execute(
            select(CartLineModel, ProductModel.name)
            .outerjoin(ProductModel, ProductModel.id == CartLineModel.product_id)
            .where(CartLineModel.cart_id == cart_id)
            .order_by(CartLineModel.id)
        ).all()
        return [(line, name) for line, name in rows]

    def get_lines_for_carts(self, cart_ids: list[int]) -> dict[int, list[tuple[CartLineModel, str | None]]]:
        lines: dict[int, list[tuple[CartLineModel, str | None]]] = {cart_id: [] for cart_id in cart_ids}
        if not cart_ids:
            return lines

        rows = self.db.execute(
            select(CartLineModel, ProductModel.name)
            .outerjoin(ProductModel, ProductModel.id == CartLineModel.product_id)
            .where(CartLineModel.cart_id.in_(cart_ids))
            .order_by(CartLineModel.id)
        ).all()
        for line, name in rows:
            lines[line.cart_id].append((line, name))
        return lines

    def add_cart_line(self, line: CartLineModel) -> CartLineModel:
        self.db.add(line)
        self.db.flush()
        return line

    def mark_checked_out(self, cart_id: int) -> int:
        # warunek na status - drugi checkout tego samego koszyka zmieni 0 wierszy
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.status == CART_ACTIVE)
            .values(status=CART_CHECKED_OUT)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount
