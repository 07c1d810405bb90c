# app/repos/cart_repo.py
from datetime import date, datetime, timezone

from sqlalchemy import select, update, func
from sqlalchemy.orm import Session, selectinload

from app.data.models.billboard import BillboardModel
from app.data.models.cart import CartSessionModel
from app.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    # sesje
    def get_active_session(self, user_id: str) -> CartSessionModel | None:
        now = datetime.now(timezone.utc)
        return self.db.execute(
            select(CartSessionModel)
            .where(
                CartSessionModel.user_id == user_id,
                CartSessionModel.is_active.is_(True),
                CartSessionModel.expires_at > now,
            )
            .order_by(CartSessionModel.created_at.desc(), CartSessionModel.id.desc())
            .limit(1)
        ).scalar_one_or_none()

    def get_active_session_with_items(self, user_id: str) -> CartSessionModel | None:
        now = datetime.now(timezone.utc)
        return self.db.execute(
            select(CartSessionModel)
            .options(
                selectinload(CartSessionModel.items)
                .selectinload(CartItemModel.billboard)
                .selectinload(BillboardModel.images)
            )
            .where(
                CartSessionModel.user_id == user_id,
                CartSessionModel.is_active.is_(True),
                CartSessionModel.expires_at > now,
            )
            .order_by(CartSessionModel.created_at.desc(), CartSessionModel.id.desc())
            .limit(1)
        ).scalar_one_or_none()

    def create_session(self, cart_session: CartSessionModel) -> CartSessionModel:
        self.db.add(cart_session)
        self.db.commit()
        self.db.refresh(cart_session)
        return cart_session

    def deactivate_session(self, session_id: int) -> int:
        res = self.db.execute(
            update(CartSessionModel)
            .where(CartSessionModel.id == session_id)
            .values(is_active=False, updated_at=datetime.now(timezone.utc))
        )
        return res.rowcount

    def deactivate_expired_sessions(self, now: datetime) -> int:
        res = self.db.execute(
            update(CartSessionModel)
            .where(
                CartSessionModel.is_active.is_(True),
                CartSessionModel.expires_at <= now,
            )
            .values(is_active=False, updated_at=now)
        )
        return res.rowcount

    # pozycje
    def count_items(self, session_id: int) -> int:
        return self.db.execute(
            select(func.count(CartItemModel.id)).where(CartItemModel.cart_session_id == session_id)
        ).scalar_one()

    def get_item(self, item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, item_id)

    def find_duplicate_item(
        self,
        session_id: int,
        billboard_id: int,
        start_date: date,
        end_date: date,
        side: str,
    ) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel)
            .where(
                CartItemModel.cart_session_id == session_id,
                CartItemModel.billboard_id == billboard_id,
                CartItemModel.start_date == start_date,
                CartItemModel.end_date == end_date,
                CartItemModel.side_booked == side,
            )
            .limit(1)
        ).scalar_one_or_none()

    def add_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        return item

    def delete_item(self, item: CartItemModel):
        self.db.delete(item)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
