from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, Numeric, String, Date, DateTime, Boolean, Text
from sqlalchemy.orm import relationship

from app.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_session_id = Column(Integer, ForeignKey("cart_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    billboard_id = Column(Integer, ForeignKey("billboards.id"), nullable=False)
    billboard_side_id = Column(Integer, ForeignKey("billboard_sides.id"), nullable=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_days = Column(Integer, nullable=False)

    # cena zamrozona w momencie dodania
    price_per_day = Column(Numeric(12, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)

    ad_content = Column(Text, nullable=False, default="")
    ad_type = Column(String(32), nullable=False, default="static")
    side_booked = Column(String(10), nullable=False)  # A, B, BOTH, SINGLE

    availability_checked_at = Column(DateTime(timezone=True), nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)

    cart_session = relationship("CartSessionModel", back_populates="items")
    billboard = relationship("BillboardModel")
