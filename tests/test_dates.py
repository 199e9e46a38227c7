from datetime import date, datetime, timedelta, timezone

import pytest

from lent.dates import (
    format_day,
    parse_picked_date,
    same_utc_day,
    task_for_display,
    to_display_date,
    to_storage_date,
    utc_day_key,
)
from lent.errors import DateParseError, ValidationError

from tests.conftest import make_task


class TestParsePickedDate:
    def test_accepts_iso_string(self):
        assert parse_picked_date("2025-03-10") == date(2025, 3, 10)

    def test_ignores_time_part(self):
        assert parse_picked_date("2025-03-10T18:30:00Z") == date(2025, 3, 10)

    def test_converts_aware_datetime_to_utc(self):
        value = datetime(2025, 3, 10, 22, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert parse_picked_date(value) == date(2025, 3, 11)

    @pytest.mark.parametrize("raw", ["", "   ", None, "not-a-date", "2025-13-01"])
    def test_rejects_bad_input(self, raw):
        with pytest.raises(DateParseError) as excinfo:
            parse_picked_date(raw)
        assert isinstance(excinfo.value, ValidationError)
        assert excinfo.value.operation == "parse_date"


class TestStorageShift:
    def test_storage_is_one_day_earlier_at_utc_midnight(self):
        stored = to_storage_date(date(2025, 3, 10))
        assert stored == datetime(2025, 3, 9, tzinfo=timezone.utc)

    def test_display_restores_picked_day(self):
        picked = date(2025, 3, 1)
        assert to_display_date(to_storage_date(picked)) == picked

    def test_display_accepts_iso_string(self):
        assert to_display_date("2025-02-28T00:00:00Z") == date(2025, 3, 1)

    def test_shift_crosses_year_boundary(self):
        assert to_storage_date("2025-01-01") == datetime(2024, 12, 31, tzinfo=timezone.utc)

    def test_task_for_display_moves_only_the_date(self):
        stored = make_task("a", "me", "2025-03-09", title="Fast from sweets")
        shown = task_for_display(stored)
        assert shown.date == datetime(2025, 3, 10, tzinfo=timezone.utc)
        assert shown.title == stored.title
        assert shown.created_at == stored.created_at


class TestUtcDays:
    def test_late_utc_instant_stays_on_its_day(self):
        instant = datetime(2025, 3, 4, 23, 59, 59, tzinfo=timezone.utc)
        assert utc_day_key(instant) == (2025, 3, 4)
        assert same_utc_day(instant, date(2025, 3, 4))
        assert not same_utc_day(instant, date(2025, 3, 5))

    def test_offset_instant_is_converted_before_comparing(self):
        instant = datetime(2025, 3, 4, 20, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert utc_day_key(instant) == (2025, 3, 5)

    def test_naive_datetime_is_read_as_utc(self):
        assert utc_day_key(datetime(2025, 3, 4, 23, 30)) == (2025, 3, 4)

    def test_format_day(self):
        assert format_day(date(2025, 3, 5)) == "3/5/2025"
