# app/domain/pricing.py
import math
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from app.utils.settings import GST_RATE

CENT = Decimal("0.01")


class Side(str, Enum):
    A = "A"
    B = "B"
    BOTH = "BOTH"
    SINGLE = "SINGLE"


_TWO_SIDED = {Side.A.value, Side.B.value, Side.BOTH.value}


def sides_conflict(requested: str, booked: str) -> bool:
    """BOTH zajmuje A i B, SINGLE koliduje tylko z SINGLE."""
    if requested == booked:
        return True
    if Side.BOTH.value in (requested, booked):
        return requested in _TWO_SIDED and booked in _TWO_SIDED
    return False


def total_days(start_date: date, end_date: date) -> int:
    if end_date <= start_date:
        raise ValueError("end_date must be after start_date")
    return math.ceil((end_date - start_date) / timedelta(days=1))


def money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(price_per_day, days: int) -> Decimal:
    return money(Decimal(str(price_per_day)) * days)


def gst(total_amount, rate: Decimal = GST_RATE) -> tuple[Decimal, Decimal]:
    """Zwraca (gst_amount, final_amount)."""
    gst_amount = money(Decimal(str(total_amount)) * rate)
    return gst_amount, money(Decimal(str(total_amount)) + gst_amount)
