# app/services/checkout_service.py
from datetime import datetime, timezone
from typing import Dict, Any

from sqlalchemy.orm import Session

from app.data.models.cart import CART_ACTIVE
from app.data.models.sale import SaleModel
from app.data.transaction import unit_of_work
from app.domain.errors import NotFoundError, AuthorizationError, ConflictError
from app.domain.pricing import cart_total, to_money
from app.repos.cart_repo import CartRepo
from app.repos.sale_repo import SaleRepo
from app.services.cart_service import validate_id
from app.services.notification_service import NotificationService
from app.utils.retry import db_retry
from app.utils.settings import LOCK_TIMEOUT_MS
from app.utils.logging import get_logger

logger = get_logger(__name__)


def serialize_sale(sale: SaleModel) -> Dict[str, Any]:
    return {
        "id": sale.id,
        "user_id": sale.user_id,
        "cart_id": sale.cart_id,
        "total_price": to_money(sale.total_price),
        "sale_date": sale.sale_date,
    }


class CheckoutService:
    """
    Zamiana aktywnego koszyka w sprzedaz (active -> checked_out).

    Jedyne miejsce z pesymistyczna blokada: wiersz koszyka jest blokowany
    (SELECT ... FOR UPDATE) na czas transakcji, wiec rownolegle checkouty
    tego samego koszyka ida po kolei. Przegrany czeka na commit zwyciezcy
    i widzi koszyk juz checked_out -> NotFoundError.

    Pusty koszyk mozna sfinalizowac, sprzedaz ma wtedy total 0.00.
    Timeout czekania na blokade: LOCK_TIMEOUT_MS (postgres), na sqlite
    busy timeout z create_db_engine.
    """

    def __init__(self, db: Session, notifier: NotificationService | None = None):
        self.db = db
        self.carts = CartRepo(db)
        self.sales = SaleRepo(db)
        self.notifier = notifier or NotificationService()

    @db_retry()
    def checkout(self, cart_id: int, user_id: int) -> Dict[str, Any]:
        validate_id(cart_id, "cart_id")

        with unit_of_work(self.db, lock_timeout_ms=LOCK_TIMEOUT_MS):
            cart = self.carts.get_cart_for_update(cart_id)

            if not cart or cart.status != CART_ACTIVE:
                raise NotFoundError("Brak aktywnego koszyka o tym id")

            if cart.user_id != user_id:
                logger.warning(f"Uzytkownik {user_id} probowal sfinalizowac cudzy koszyk {cart_id}")
                raise AuthorizationError("Brak dostepu do koszyka")

            # tylko zapisane snapshoty, bez ponownego pytania katalogu
            lines = self.carts.get_cart_lines(cart_id)
            total = cart_total(lines)

            sale = self.sales.create_sale(
                SaleModel(
                    user_id=user_id,
                    cart_id=cart_id,
                    total_price=total,
                    sale_date=datetime.now(timezone.utc),
                )
            )

            rowcount = self.carts.mark_checked_out(cart_id)
            if rowcount != 1:
                raise ConflictError("Koszyk zostal zmieniony przez inna operacje")

            receipt = serialize_sale(sale)
            receipt["line_count"] = len(lines)

        logger.info(f"Koszyk {cart_id} sfinalizowany, sprzedaz {receipt['id']} na {receipt['total_price']}")

        # dopiero po commicie, blad powiadomienia nie cofa sprzedazy
        try:
            self.notifier.send_sale_notification(
                user_id, receipt["id"], receipt["total_price"], receipt["line_count"]
            )
        except Exception as e:
            logger.warning(f"Nie udalo sie wyslac powiadomienia o sprzedazy {receipt['id']}: {e}")

        return receipt
