#app/data/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Index, text
from sqlalchemy.orm import relationship

from app.data.database import Base

CART_ACTIVE = "active"
CART_CHECKED_OUT = "checked_out"


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    status = Column(String(20), nullable=False, default=CART_ACTIVE)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    lines = relationship(
        "CartLineModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartLineModel.id",
    )

    # max jeden aktywny koszyk na usera, pilnuje tego baza
    __table_args__ = (
        Index(
            "uq_carts_user_active",
            "user_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )
