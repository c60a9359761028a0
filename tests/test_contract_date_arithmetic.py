from __future__ import annotations

import datetime as dt
import unittest

from rescal.util.dates import add_days, add_months, add_years, clamp, diff_days, js_round, start_of_day


class TestDateArithmeticContract(unittest.TestCase):
    def test_start_of_day_truncates_time(self) -> None:
        self.assertEqual(start_of_day(dt.datetime(2024, 1, 10, 14, 30)), dt.date(2024, 1, 10))
        self.assertEqual(start_of_day(dt.date(2024, 1, 10)), dt.date(2024, 1, 10))

    def test_start_of_day_buckets_aware_datetimes_in_tz(self) -> None:
        late_utc = dt.datetime(2024, 1, 10, 23, 30, tzinfo=dt.timezone.utc)
        self.assertEqual(start_of_day(late_utc, "+02:00"), dt.date(2024, 1, 11))
        self.assertEqual(start_of_day(late_utc, "UTC"), dt.date(2024, 1, 10))

    def test_add_days_keeps_time_of_day(self) -> None:
        self.assertEqual(add_days(dt.date(2024, 2, 28), 2), dt.date(2024, 3, 1))
        self.assertEqual(add_days(dt.datetime(2024, 1, 10, 9, 15), -3), dt.datetime(2024, 1, 7, 9, 15))

    def test_add_months_rolls_over_short_months(self) -> None:
        self.assertEqual(add_months(dt.date(2024, 1, 15), 1), dt.date(2024, 2, 15))
        self.assertEqual(add_months(dt.date(2024, 11, 15), 3), dt.date(2025, 2, 15))
        self.assertEqual(add_months(dt.date(2024, 1, 15), -1), dt.date(2023, 12, 15))
        # Jan 31 + 1 month overflows February (29 days in 2024) into March.
        self.assertEqual(add_months(dt.date(2024, 1, 31), 1), dt.date(2024, 3, 2))
        self.assertEqual(add_months(dt.date(2023, 1, 31), 1), dt.date(2023, 3, 3))

    def test_add_years_rolls_over_leap_day(self) -> None:
        self.assertEqual(add_years(dt.date(2024, 2, 29), 1), dt.date(2025, 3, 1))
        self.assertEqual(add_years(dt.date(2024, 6, 1), -2), dt.date(2022, 6, 1))

    def test_diff_days_whole_days(self) -> None:
        self.assertEqual(diff_days(dt.date(2024, 1, 13), dt.date(2024, 1, 10), "UTC"), 3)
        self.assertEqual(diff_days(dt.date(2024, 1, 10), dt.date(2024, 1, 13), "UTC"), -3)
        self.assertEqual(
            diff_days(dt.datetime(2024, 1, 10, 23, 0), dt.datetime(2024, 1, 9, 1, 0), "UTC"),
            1,
        )

    def test_diff_days_absorbs_dst_drift(self) -> None:
        # 2024-03-31 is a 23h day in Europe/Bucharest; 2024-10-27 is a 25h day.
        self.assertEqual(diff_days(dt.date(2024, 4, 1), dt.date(2024, 3, 31), "Europe/Bucharest"), 1)
        self.assertEqual(diff_days(dt.date(2024, 4, 1), dt.date(2024, 3, 1), "Europe/Bucharest"), 31)
        self.assertEqual(diff_days(dt.date(2024, 10, 28), dt.date(2024, 10, 27), "Europe/Bucharest"), 1)

    def test_js_round_is_half_up(self) -> None:
        self.assertEqual(js_round(0.5), 1)
        self.assertEqual(js_round(2.5), 3)
        self.assertEqual(js_round(-0.5), 0)
        self.assertEqual(js_round(-1.5), -1)
        self.assertEqual(js_round(-1.6), -2)

    def test_clamp(self) -> None:
        self.assertEqual(clamp(5, 0, 2), 2)
        self.assertEqual(clamp(-1, 0, 2), 0)
        self.assertEqual(clamp(1, 0, 2), 1)


if __name__ == "__main__":
    unittest.main(verbosity=2)
