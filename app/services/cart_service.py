from typing import Dict, Any
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.data.models.cart import CartModel, CART_ACTIVE
from app.data.models.cart_line import CartLineModel
from app.data.transaction import unit_of_work
from app.domain.errors import ValidationError, NotFoundError, AuthorizationError
from app.domain.pricing import line_total, cart_total, to_money
from app.repos.cart_repo import CartRepo
from app.repos.user_repo import UserRepo
from app.utils.retry import db_retry
from app.utils.logging import get_logger

logger = get_logger(__name__)


def validate_id(value: Any, name: str) -> int:
    # bool to tez int w pythonie, odrzucamy
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{name} musi byc dodatnia liczba calkowita")
    return value


def validate_quantity(quantity: Any) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError("Ilosc musi byc dodatnia liczba calkowita")
    return quantity


def serialize_line(line: CartLineModel, name: str | None = None) -> Dict[str, Any]:
    return {
        "id": line.id,
        "cart_id": line.cart_id,
        "product_id": line.product_id,
        "name": name,
        "quantity": line.quantity,
        "unit_price": to_money(line.unit_price),
        "total_price": to_money(line.total_price),
    }


class CartService:
    """
    Koszyk: tworzenie (leniwe), dodawanie linii, odczyt przez wlasciciela.

    commands (add_to_cart, add_line_to_cart) pisza w jednej transakcji,
    query (get_cart_for_owner) tylko odczyt.
    Cena linii to snapshot z katalogu w chwili dodania.
    """

    def __init__(self, db: Session, catalog=None):
        self.db = db
        self.repo = CartRepo(db)
        self.users = UserRepo(db)
        self.catalog = catalog

    #query - odczyt
    def _owned_cart(self, cart_id: int, user_id: int) -> CartModel:
        cart = self.repo.get_cart(cart_id)

        # brak koszyka i cudzy koszyk wygladaja tak samo dla klienta
        if not cart or cart.user_id != user_id:
            raise NotFoundError("Koszyk nie istnieje")
        return cart

    def get_cart_for_owner(self, cart_id: int, user_id: int) -> list[Dict[str, Any]]:
        validate_id(cart_id, "cart_id")

        with unit_of_work(self.db):
            self._owned_cart(cart_id, user_id)
            lines = [serialize_line(line, name) for line, name in self.repo.get_named_cart_lines(cart_id)]

        return lines

    def get_cart(self, cart_id: int, user_id: int) -> Dict[str, Any]:
        validate_id(cart_id, "cart_id")

        with unit_of_work(self.db):
            cart = self._owned_cart(cart_id, user_id)
            named = self.repo.get_named_cart_lines(cart_id)
            result = {
                "cart_id": cart.id,
                "user_id": cart.user_id,
                "status": cart.status,
                "lines": [serialize_line(line, name) for line, name in named],
                "total": cart_total([line for line, _ in named]),
            }

        return result

    #commands - bez commita, wolane wewnatrz unit_of_work
    def find_or_create_active_cart(self, user_id: int) -> CartModel:
        existing = self.repo.get_active_cart_by_user(user_id)
        if existing:
            return existing

        # savepoint: jak rownolegly request utworzyl koszyk pierwszy,
        # unikalny indeks (user_id, active) odrzuci insert i czytamy jeszcze raz
        try:
            with self.db.begin_nested():
                created = self.repo.create_cart(CartModel(user_id=user_id, status=CART_ACTIVE))
        except IntegrityError:
            logger.info(f"Aktywny koszyk uzytkownika {user_id} utworzony rownolegle, odczytuje go")
            existing = self.repo.get_active_cart_by_user(user_id)
            if existing is None:
                raise
            return existing

        logger.info(f"Utworzono nowy koszyk {created.id} dla uzytkownika {user_id}")
        return created

    def add_line(self, cart_id: int, product_id: int, quantity: int) -> CartLineModel:
        validate_quantity(quantity)
        validate_id(product_id, "product_id")

        unit_price = self.catalog.get_price(product_id)
        if unit_price is None:
            raise NotFoundError(f"Produkt {product_id} nie istnieje")

        line = self.repo.add_cart_line(
            CartLineModel(
                cart_id=cart_id,
                product_id=product_id,
                quantity=quantity,
                unit_price=to_money(unit_price),
                total_price=line_total(unit_price, quantity),
            )
        )
        logger.info(f"Dodano produkt {product_id} x{quantity} do koszyka {cart_id} ({line.total_price})")
        return line

    @db_retry()
    def add_to_cart(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        """
        Use Case: dodanie produktu do aktywnego koszyka uzytkownika.
        Koszyk tworzony jesli nie ma aktywnego.
        """
        validate_id(user_id, "user_id")
        validate_quantity(quantity)
        validate_id(product_id, "product_id")

        with unit_of_work(self.db):
            # nieznany uzytkownik to NotFound, nie blad klucza obcego
            if not self.users.get_user(user_id):
                raise NotFoundError("Uzytkownik nie istnieje")

            cart = self.find_or_create_active_cart(user_id)
            line = self.add_line(cart.id, product_id, quantity)
            result = {"cart_id": cart.id, "line": serialize_line(line)}

        return result

    @db_retry()
    def add_line_to_cart(
        self,
        cart_id: int,
        user_id: int,
        product_id: int,
        quantity: int,
    ) -> Dict[str, Any]:
        """
        Use Case: dodanie produktu do konkretnego koszyka.
        Koszyk musi istniec, nalezec do usera i byc aktywny.
        """
        validate_id(cart_id, "cart_id")
        validate_quantity(quantity)
        validate_id(product_id, "product_id")

        with unit_of_work(self.db):
            cart = self.repo.get_cart(cart_id)
            if not cart or cart.user_id != user_id or cart.status != CART_ACTIVE:
                raise AuthorizationError("Koszyk nie istnieje albo brak dostepu")

            line = self.add_line(cart.id, product_id, quantity)
            result = {"cart_id": cart.id, "line": serialize_line(line)}

        return result
