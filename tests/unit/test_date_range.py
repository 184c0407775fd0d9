from __future__ import annotations

from datetime import date, datetime

import pytest

from driver_roster.errors import InvalidFilterValue
from driver_roster.filters import DatePreset, DateRange, DateRangeFilter, parse_when
from driver_roster.i18n import make_translator

FIXED_TODAY = date(2024, 3, 10)


class TestParseWhen:
    def test_date_only(self):
        assert parse_when("2024-01-15") == datetime(2024, 1, 15)

    def test_datetime_with_offset_is_made_naive(self):
        assert parse_when("2024-01-15T08:30:00+03:00") == datetime(2024, 1, 15, 8, 30)

    def test_date_objects(self):
        assert parse_when(date(2024, 1, 15)) == datetime(2024, 1, 15)

    @pytest.mark.parametrize("value", ["", "   ", None, "15/01/2024", "yesterday"])
    def test_rejects_garbage(self, value):
        with pytest.raises(InvalidFilterValue):
            parse_when(value)


class TestDateRange:
    def test_coerce_from_mapping_and_pair(self):
        assert DateRange.coerce({"start": "2024-01-01"}) == DateRange(start="2024-01-01", end="")
        assert DateRange.coerce((date(2024, 1, 1), None)) == DateRange(start="2024-01-01", end="")

    def test_coerce_none_is_open(self):
        assert DateRange.coerce(None).is_open

    def test_coerce_rejects_scalars(self):
        with pytest.raises(InvalidFilterValue):
            DateRange.coerce(42)

    def test_upper_bound_is_end_of_day(self):
        assert DateRange(end="2024-01-15").upper_bound() == datetime(2024, 1, 15, 23, 59, 59)


class TestPresets:
    def test_default_window(self):
        preset = DatePreset(id="last7")
        assert preset.range(today=FIXED_TODAY) == DateRange(start="2024-03-03", end="2024-03-10")

    def test_window_override(self):
        preset = DatePreset(id="last30", days=30)
        assert preset.range(n=1, today=FIXED_TODAY) == DateRange(start="2024-03-09", end="2024-03-10")

    def test_range_ends_today_by_default(self):
        assert DatePreset(id="last7").range().end == date.today().isoformat()

    def test_label_interpolates_window(self):
        translate = make_translator("en")
        preset = DatePreset(id="last30", label_key="filter.dateRange.preset.last30", days=30)
        assert preset.label(translate) == "Last 30 days"
        assert preset.label(translate, n=14) == "Last 14 days"

    def test_preset_lookup(self):
        flt = DateRangeFilter(id="hireDate", presets=[DatePreset(id="last7")])
        assert flt.preset("last7").days == 7
        with pytest.raises(KeyError):
            flt.preset("last90")

    def test_preset_range_drives_filter(self):
        flt = DateRangeFilter(id="hireDate", presets=[DatePreset(id="last7")])
        window = flt.preset("last7").range(today=FIXED_TODAY)
        assert flt.matches({"hireDate": "2024-03-05"}, window)
        assert not flt.matches({"hireDate": "2024-02-01"}, window)


class TestBounds:
    def test_lower_bound_is_start_of_day(self):
        assert DateRange(start="2024-01-15T12:00").lower_bound() == datetime(2024, 1, 15)

    def test_start_time_does_not_exclude_same_day_record(self):
        flt = DateRangeFilter(id="hireDate")
        assert flt.matches({"hireDate": "2024-01-15"}, {"start": "2024-01-15T12:00", "end": ""})
        assert not flt.matches({"hireDate": "2024-01-14"}, {"start": "2024-01-15T12:00", "end": ""})
