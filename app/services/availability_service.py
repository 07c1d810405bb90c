# app/services/availability_service.py
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.errors import StorageUnavailable
from app.domain.pricing import Side, sides_conflict
from app.domain.schemas import BillboardAvailability, SideAvailability
from app.repos.billboard_repo import BillboardRepo
from app.repos.booking_repo import BookingRepo
from app.utils.settings import FAIL_OPEN_AVAILABILITY
from app.utils.logging import get_logger

logger = get_logger(__name__)


def optimistic_availability(billboard_id: int) -> BillboardAvailability:
    """Wynik zwracany gdy baza nie odpowiada, a fail-open jest wlaczony."""
    return BillboardAvailability(
        billboard_id=billboard_id,
        available=True,
        side_a_available=False,
        side_b_available=False,
        single_side_available=True,
        availability_details=[SideAvailability(side=Side.SINGLE, available=True)],
    )


class AvailabilityService:
    """
    Rozstrzyga ktore strony billboardu sa wolne w zadanym terminie.
    Query only, niczego nie zapisuje i niczego nie cache'uje.
    """

    def __init__(self, db: Session, fail_open: bool = FAIL_OPEN_AVAILABILITY):
        self.billboards = BillboardRepo(db)
        self.bookings = BookingRepo(db)
        self.fail_open = fail_open

    def resolve(
        self,
        billboard_id: int,
        start_date: date,
        end_date: date,
        fail_open: bool | None = None,
    ) -> BillboardAvailability:
        fail_open = self.fail_open if fail_open is None else fail_open

        try:
            booked_sides = self.bookings.get_overlapping_sides(billboard_id, start_date, end_date)
            sides = self.billboards.get_side_identifiers(billboard_id) or [Side.SINGLE.value]
        except SQLAlchemyError as e:
            # sesja po bledzie musi byc wycofana, zanim ktos jej znowu uzyje
            self.bookings.rollback()
            if fail_open:
                logger.warning(
                    f"Availability lookup for billboard {billboard_id} failed, "
                    f"returning optimistic result: {e}"
                )
                return optimistic_availability(billboard_id)
            logger.error(f"Availability lookup for billboard {billboard_id} failed: {e}")
            raise StorageUnavailable(str(e)) from e

        details = [
            SideAvailability(side=side, available=self._is_free(side, booked_sides))
            for side in sides
        ]

        # billboard dwustronny: mozna wziac obie strony naraz
        if Side.A.value in sides and Side.B.value in sides:
            details.append(
                SideAvailability(side=Side.BOTH, available=self._is_free(Side.BOTH.value, booked_sides))
            )

        by_side = {d.side: d.available for d in details}

        return BillboardAvailability(
            billboard_id=billboard_id,
            available=any(d.available for d in details if d.side != Side.BOTH),
            side_a_available=by_side.get(Side.A, False),
            side_b_available=by_side.get(Side.B, False),
            single_side_available=by_side.get(Side.SINGLE, False),
            availability_details=details,
        )

    def has_conflict(self, billboard_id: int, side: str, start_date: date, end_date: date) -> bool:
        """Scisle sprawdzenie bez fail-open, uzywane tuz przed zapisem rezerwacji."""
        booked_sides = self.bookings.get_overlapping_sides(billboard_id, start_date, end_date)
        return not self._is_free(side, booked_sides)

    @staticmethod
    def is_side_available(availability: BillboardAvailability, side: str) -> bool:
        for detail in availability.availability_details:
            if detail.side == side:
                return detail.available
        return False

    @staticmethod
    def _is_free(side: str, booked_sides: set[str]) -> bool:
        return not any(sides_conflict(side, booked) for booked in booked_sides)
