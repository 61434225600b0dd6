# app/services/profile_service.py
from typing import Dict, Any

from sqlalchemy.orm import Session

from app.data.transaction import unit_of_work
from app.domain.errors import AuthorizationError, NotFoundError
from app.repos.cart_repo import CartRepo
from app.repos.sale_repo import SaleRepo
from app.repos.user_repo import UserRepo
from app.services.cart_service import serialize_line
from app.services.checkout_service import serialize_sale


class ProfileService:
    """
    Profil uzytkownika (tylko odczyt): historia sprzedazy + aktywny koszyk.

    Sprzedaze od najnowszej (sale_date desc, id desc), kazda z liniami
    koszyka z ktorego powstala. Linie aktywnego koszyka osobno, po sprzedazach.
    """

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepo(db)
        self.carts = CartRepo(db)
        self.sales = SaleRepo(db)

    def get_profile(self, user_id: int, requester_id: int) -> Dict[str, Any]:
        if requester_id != user_id:
            raise AuthorizationError("Mozesz ogladac tylko swoj profil")

        with unit_of_work(self.db):
            user = self.users.get_user(user_id)
            if not user:
                raise NotFoundError("Uzytkownik nie istnieje")

            sales = self.sales.list_sales_by_user(user_id)
            sale_lines = self.carts.get_lines_for_carts([s.cart_id for s in sales])

            history = []
            for sale in sales:
                entry = serialize_sale(sale)
                entry["lines"] = [serialize_line(line, name) for line, name in sale_lines[sale.cart_id]]
                history.append(entry)

            active = self.carts.get_active_cart_by_user(user_id)
            cart_lines = self.carts.get_named_cart_lines(active.id) if active else []

            profile = {
                "user_id": user.id,
                "username": user.username,
                "email": user.email,
                "sales": history,
                "cart_id": active.id if active else None,
                "cart": [serialize_line(line, name) for line, name in cart_lines],
            }

        return profile
