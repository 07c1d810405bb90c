from sqlalchemy import Column, Integer, ForeignKey, String, Date, DateTime, Numeric, Text
from datetime import datetime, timezone

from app.data.database import Base

# statusy ktore blokuja termin
BLOCKING_STATUSES = ("pending", "approved", "active")


class BookingModel(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True)
    billboard_id = Column(Integer, ForeignKey("billboards.id"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    cart_session_id = Column(Integer, ForeignKey("cart_sessions.id"), nullable=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_days = Column(Integer, nullable=False)

    price_per_day = Column(Numeric(12, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    gst_amount = Column(Numeric(12, 2), nullable=False)
    final_amount = Column(Numeric(12, 2), nullable=False)

    ad_content = Column(Text, nullable=False, default="")
    ad_type = Column(String(32), nullable=False, default="static")
    side_booked = Column(String(10), nullable=False)

    status = Column(String(20), nullable=False, default="pending")  # pending, approved, active, rejected, cancelled
    payment_status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
