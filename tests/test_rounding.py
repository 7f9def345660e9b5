"""Floor, ceil and round tests."""

from datetime import timedelta

import pytest

import pyfly
from pyfly import HOUR, Duration, ParseError, UnsupportedTypeError


@pytest.fixture
def late():
    """2016-12-03 22:45:35 +0000 UTC, past the middle of its hour."""
    return pyfly.date(2016, 12, 3, 22, 45, 35)


class TestFloor:
    def test_hour_past_half(self, late):
        assert str(late.floor("1h")) == "2016-12-03 22:00:00 +0000 UTC"

    def test_hour_before_half(self, base):
        assert str(base.floor("1h")) == "2016-12-03 22:00:00 +0000 UTC"

    def test_minute(self, base):
        assert str(base.floor("1m")) == "2016-12-03 22:15:00 +0000 UTC"

    def test_second(self, precise):
        assert str(precise.floor("1s")) == "2016-12-03 22:15:35 +0000 UTC"

    def test_millisecond(self, precise):
        assert str(precise.floor("1ms")) == "2016-12-03 22:15:35.123 +0000 UTC"

    def test_microsecond(self, precise):
        assert str(precise.floor("1us")) == "2016-12-03 22:15:35.123456 +0000 UTC"

    def test_duration_unit(self, late):
        assert late.floor(Duration(HOUR)) == late.floor("1h")
        assert late.floor(timedelta(hours=1)) == late.floor("1h")

    def test_keeps_zone(self, late):
        shanghai = late.to("Asia/Shanghai")
        assert shanghai.floor("1h").tzinfo is shanghai.tzinfo


class TestCeil:
    def test_hour_past_half(self, late):
        assert str(late.ceil("1h")) == "2016-12-03 23:00:00 +0000 UTC"

    def test_hour_before_half(self, base):
        assert str(base.ceil("1h")) == "2016-12-03 23:00:00 +0000 UTC"

    def test_minute(self, base):
        assert str(base.ceil("1m")) == "2016-12-03 22:16:00 +0000 UTC"

    def test_second(self, precise):
        assert str(precise.ceil("1s")) == "2016-12-03 22:15:36 +0000 UTC"

    def test_millisecond(self, precise):
        assert str(precise.ceil("1ms")) == "2016-12-03 22:15:35.124 +0000 UTC"

    def test_microsecond(self, precise):
        assert str(precise.ceil("1us")) == "2016-12-03 22:15:35.123457 +0000 UTC"


class TestBounds:
    @pytest.mark.parametrize("unit", ["1h", "1m", "1s", "1ms", "1us"])
    @pytest.mark.parametrize(
        "ts",
        [
            pyfly.date(2016, 12, 3, 22, 15, 35, 123456789),
            pyfly.date(2016, 12, 3, 22, 45, 35, 987654321),
            pyfly.date(2016, 12, 3, 22, 59, 59, 999999999),
            pyfly.date(2016, 12, 3, 22, 1, 1, 1001001),
        ],
    )
    def test_floor_le_original_le_ceil(self, ts, unit):
        assert ts.floor(unit) <= ts <= ts.ceil(unit)

    @pytest.mark.parametrize("unit", ["-1h", "0s", "0"])
    def test_non_positive_unit_is_unchanged(self, base, unit):
        assert base.floor(unit) is base
        assert base.ceil(unit) is base
        assert base.round(unit) is base

    def test_unparseable_unit(self, base):
        with pytest.raises(ParseError):
            base.floor("1hour")
        with pytest.raises(ParseError):
            base.ceil("hour")

    def test_unit_is_not_whitespace_stripped(self, base):
        with pytest.raises(ParseError):
            base.floor("1 h")

    def test_unsupported_unit_type(self, base):
        with pytest.raises(UnsupportedTypeError):
            base.floor(3600)

    @pytest.mark.parametrize("unit", ["1h", "1m", "1s", "1ms", "1us"])
    @pytest.mark.parametrize("zone", ["Asia/Kolkata", "Asia/Kathmandu", "America/St_Johns"])
    def test_bounds_hold_in_fractional_offset_zones(self, late, zone, unit):
        ts = late.add("123456789ns").to(zone)
        assert ts.floor(unit) <= ts <= ts.ceil(unit)

    def test_half_hour_offset_hour_boundaries(self, late):
        ts = late.to("Asia/Kolkata")
        assert str(ts) == "2016-12-04 04:15:35 +0530 IST"
        assert str(ts.floor("1h")) == "2016-12-04 03:30:00 +0530 IST"
        assert str(ts.ceil("1h")) == "2016-12-04 04:30:00 +0530 IST"


class TestRound:
    def test_down(self, base):
        assert str(base.round("1h")) == "2016-12-03 22:00:00 +0000 UTC"

    def test_up(self, late):
        assert str(late.round("1h")) == "2016-12-03 23:00:00 +0000 UTC"

    def test_halfway_rounds_up(self):
        ts = pyfly.date(2016, 12, 3, 22, 30)
        assert str(ts.round("1h")) == "2016-12-03 23:00:00 +0000 UTC"

    def test_anchored_at_midnight(self):
        ts = pyfly.date(2016, 12, 3, 22, 45, 35)
        assert str(ts.round("2h")) == "2016-12-03 22:00:00 +0000 UTC"


class TestPastHalfQuirks:
    """Only 1h, 1m, 1s, 1ms and 1us get the past-half adjustment."""

    def test_non_canonical_unit_floor_can_round_up(self):
        ts = pyfly.date(2016, 12, 3, 23, 15, 35)
        # Rounds up to midnight and is never treated as past half.
        assert str(ts.floor("2h")) == "2016-12-04 00:00:00 +0000 UTC"
        assert str(ts.ceil("2h")) == "2016-12-04 02:00:00 +0000 UTC"

    def test_exact_half_minute_is_not_past_half(self):
        ts = pyfly.date(2016, 12, 3, 22, 30, 35)
        assert str(ts.floor("1h")) == "2016-12-03 23:00:00 +0000 UTC"
