#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.user import UserModel
from app.data.models.product import ProductModel
from app.data.models.cart import CartModel, CART_ACTIVE, CART_CHECKED_OUT
from app.data.models.cart_line import CartLineModel
from app.data.models.sale import SaleModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartModel",
    "CartLineModel",
    "SaleModel",
    "CART_ACTIVE",
    "CART_CHECKED_OUT",
]
