# app/repos/billboard_repo.py
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.billboard import BillboardModel, BillboardSideModel


class BillboardRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_billboard(self, billboard_id: int) -> BillboardModel | None:
        return self.db.get(BillboardModel, billboard_id)

    def get_price_per_day(self, billboard_id: int) -> Decimal | None:
        return self.db.execute(
            select(BillboardModel.price_per_day).where(BillboardModel.id == billboard_id)
        ).scalar_one_or_none()

    def get_side_identifiers(self, billboard_id: int) -> list[str]:
        return list(
            self.db.execute(
                select(BillboardSideModel.side_identifier)
                .where(BillboardSideModel.billboard_id == billboard_id)
                .order_by(BillboardSideModel.id)
            ).scalars()
        )

    def get_side(self, billboard_id: int, side_identifier: str) -> BillboardSideModel | None:
        return self.db.execute(
            select(BillboardSideModel)
            .where(
                BillboardSideModel.billboard_id == billboard_id,
                BillboardSideModel.side_identifier == side_identifier,
            )
            .limit(1)
        ).scalar_one_or_none()
