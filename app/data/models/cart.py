#app/data/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.orm import relationship

from app.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class CartSessionModel(Base):
    __tablename__ = "cart_sessions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    session_token = Column(String(128), nullable=False, unique=True)

    expires_at = Column(DateTime(timezone=True), nullable=False)
    # sesji nie usuwamy, po checkoucie tylko is_active = False
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)

    items = relationship(
        "CartItemModel",
        back_populates="cart_session",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )
