from datetime import date
from decimal import Decimal

import pytest

from app.domain.pricing import Side, gst, line_total, sides_conflict, total_days


class TestTotalDays:

    def test_three_day_span(self):
        assert total_days(date(2024, 1, 1), date(2024, 1, 4)) == 3

    def test_single_day_span(self):
        assert total_days(date(2024, 1, 1), date(2024, 1, 2)) == 1

    def test_span_across_month_and_leap_day(self):
        assert total_days(date(2024, 2, 28), date(2024, 3, 2)) == 3

    @pytest.mark.parametrize("end", [date(2024, 1, 1), date(2023, 12, 31)])
    def test_end_not_after_start_is_rejected(self, end):
        with pytest.raises(ValueError):
            total_days(date(2024, 1, 1), end)


class TestAmounts:

    def test_line_total_is_days_times_price(self):
        assert line_total(Decimal("1000"), 3) == Decimal("3000.00")

    def test_line_total_keeps_cents(self):
        assert line_total(Decimal("333.33"), 3) == Decimal("999.99")

    def test_gst_is_eighteen_percent(self):
        gst_amount, final_amount = gst(Decimal("3000.00"))
        assert gst_amount == Decimal("540.00")
        assert final_amount == Decimal("3540.00")

    def test_gst_rounds_to_cents(self):
        gst_amount, final_amount = gst(Decimal("999.99"))
        assert gst_amount == Decimal("180.00")
        assert final_amount == Decimal("1179.99")


class TestSidesConflict:

    @pytest.mark.parametrize(
        "requested,booked,expected",
        [
            ("A", "A", True),
            ("A", "B", False),
            ("BOTH", "A", True),
            ("B", "BOTH", True),
            ("BOTH", "BOTH", True),
            ("SINGLE", "SINGLE", True),
            ("SINGLE", "BOTH", False),
            ("A", "SINGLE", False),
        ],
    )
    def test_conflict_matrix(self, requested, booked, expected):
        assert sides_conflict(requested, booked) is expected

    def test_accepts_enum_members(self):
        assert sides_conflict(Side.BOTH.value, Side.A.value)
