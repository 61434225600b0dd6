from sqlalchemy import Column, Integer, ForeignKey, DateTime, Numeric
from datetime import datetime, timezone

from app.data.database import Base


class SaleModel(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id"), nullable=False, unique=True)

    total_price = Column(Numeric(12, 2), nullable=False)
    sale_date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
