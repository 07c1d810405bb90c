# app/repos/booking_repo.py
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.booking import BookingModel, BLOCKING_STATUSES


class BookingRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_overlapping_sides(self, billboard_id: int, start_date: date, end_date: date) -> set[str]:
        """Strony zajete przez rezerwacje nachodzace na [start_date, end_date] (oba konce wlacznie)."""
        rows = self.db.execute(
            select(BookingModel.side_booked).where(
                BookingModel.billboard_id == billboard_id,
                BookingModel.status.in_(BLOCKING_STATUSES),
                BookingModel.start_date <= end_date,
                BookingModel.end_date >= start_date,
            )
        ).scalars()
        return set(rows)

    def create_booking(self, booking: BookingModel) -> BookingModel:
        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)
        return booking

    def get_booking(self, booking_id: int) -> BookingModel | None:
        return self.db.get(BookingModel, booking_id)

    def rollback(self):
        self.db.rollback()
