# app/repos/sale_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.data.models.sale import SaleModel


class SaleRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_sale(self, sale: SaleModel) -> SaleModel:
        self.db.add(sale)
        self.db.flush()
        return sale

    def get_sale(self, sale_id: int) -> SaleModel | None:
        return self.db.get(SaleModel, sale_id)

    def list_sales_by_user(self, user_id: int) -> list[SaleModel]:
        # najnowsze pierwsze, przy tej samej dacie wieksze id pierwsze
        return list(
            self.db.execute(
                select(SaleModel)
                .where(SaleModel.user_id == user_id)
                .order_by(SaleModel.sale_date.desc(), SaleModel.id.desc())
            ).scalars()
        )
