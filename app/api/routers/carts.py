#app/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id, get_catalog_dep, get_notifier
from app.data.database import get_db
from app.domain.schemas import ItemIn, AddToCartOut, CartOut, SaleOut
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService
from app.services.notification_service import NotificationService

router = APIRouter(tags=["carts"])


def get_service(db: Session, catalog) -> CartService:
    return CartService(db=db, catalog=catalog)


@router.post("/cart/items", response_model=AddToCartOut, status_code=201)
def add_to_cart(
    payload: ItemIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    catalog=Depends(get_catalog_dep),
):
    svc = get_service(db, catalog)
    return svc.add_to_cart(user_id, payload.product_id, payload.quantity)


@router.post("/carts/{cart_id}/items", response_model=AddToCartOut, status_code=201)
def add_to_specific_cart(
    cart_id: int,
    payload: ItemIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    catalog=Depends(get_catalog_dep),
):
    svc = get_service(db, catalog)
    return svc.add_line_to_cart(cart_id, user_id, payload.product_id, payload.quantity)


@router.get("/carts/{cart_id}", response_model=CartOut)
def get_cart(
    cart_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db, catalog=None)
    return svc.get_cart(cart_id, user_id)


@router.post("/carts/{cart_id}/checkout", response_model=SaleOut, status_code=201)
def checkout(
    cart_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
):
    svc = CheckoutService(db, notifier=notifier)
    return svc.checkout(cart_id, user_id)
