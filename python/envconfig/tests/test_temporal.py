"""Tests for temporal types and their ISO-8601 parsers."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from envconfig.core.converter import convert
from envconfig.core.temporal import (
    Instant,
    LocalDateTime,
    MonthDay,
    OffsetDateTime,
    OffsetTime,
    Period,
    Year,
    YearMonth,
    ZonedDateTime,
    parse_offset,
)
from envconfig.exceptions import DateTimeFormatError

PLUS_EIGHT = timezone(timedelta(hours=8))

ALL_TEMPORAL_TYPES = [
    datetime,
    LocalDateTime,
    OffsetDateTime,
    ZonedDateTime,
    Instant,
    date,
    time,
    OffsetTime,
    timedelta,
    Period,
    ZoneInfo,
    timezone,
    Year,
    YearMonth,
    MonthDay,
]


class TestDateTimes:
    """Test date-time readings."""

    def test_local_datetime(self):
        value = convert(LocalDateTime, "2021-08-30T23:37:18.790")
        assert value == datetime(2021, 8, 30, 23, 37, 18, 790000)
        assert value.tzinfo is None

    def test_local_datetime_rejects_offset(self):
        with pytest.raises(DateTimeFormatError, match="without offset"):
            convert(LocalDateTime, "2021-08-30T23:37:18+08:00")

    def test_offset_datetime(self):
        value = convert(OffsetDateTime, "2021-08-30T23:38:57.316746+08:00")
        assert value == datetime(2021, 8, 30, 23, 38, 57, 316746, tzinfo=PLUS_EIGHT)
        assert value.utcoffset() == timedelta(hours=8)

    def test_offset_datetime_requires_offset(self):
        with pytest.raises(DateTimeFormatError, match="with offset"):
            convert(OffsetDateTime, "2021-08-30T23:38:57")

    def test_instant_is_utc(self):
        value = convert(Instant, "2021-08-30T23:38:57+08:00")
        assert value.tzinfo is timezone.utc
        assert value == datetime(2021, 8, 30, 15, 38, 57, tzinfo=timezone.utc)

    def test_instant_epoch(self):
        assert convert(Instant, "1970-01-01T00:00:00Z") == datetime(
            1970, 1, 1, tzinfo=timezone.utc
        )

    def test_zoned_datetime(self):
        value = convert(ZonedDateTime, "2021-08-30T23:38:40.436576+08:00[Australia/Perth]")
        assert value.tzinfo == ZoneInfo("Australia/Perth")
        assert value.utcoffset() == timedelta(hours=8)
        assert value == datetime(2021, 8, 30, 23, 38, 40, 436576, tzinfo=PLUS_EIGHT)

    def test_zoned_datetime_without_zone(self):
        value = convert(ZonedDateTime, "2021-08-30T23:38:40+08:00")
        assert value.utcoffset() == timedelta(hours=8)

    def test_zoned_datetime_unknown_zone(self):
        with pytest.raises(DateTimeFormatError):
            convert(ZonedDateTime, "2021-08-30T23:38:40+08:00[Nowhere/Special]")

    def test_plain_datetime_accepts_both(self):
        assert convert(datetime, "2021-08-30T23:37:18").tzinfo is None
        assert convert(datetime, "2021-08-30T23:37:18+08:00").tzinfo is not None


class TestDatesAndTimes:
    """Test dates, times, offsets and zones."""

    def test_date(self):
        assert convert(date, "2021-08-30") == date(2021, 8, 30)

    def test_time(self):
        assert convert(time, "23:39:11.899767") == time(23, 39, 11, 899767)

    def test_offset_time(self):
        value = convert(OffsetTime, "23:39:11.899767+08:00")
        assert value == time(23, 39, 11, 899767, tzinfo=PLUS_EIGHT)

    def test_offset_time_requires_offset(self):
        with pytest.raises(DateTimeFormatError):
            convert(OffsetTime, "23:39:11")

    def test_zone_id(self):
        assert convert(ZoneInfo, "Australia/Perth") == ZoneInfo("Australia/Perth")

    def test_unknown_zone_id(self):
        with pytest.raises(DateTimeFormatError):
            convert(ZoneInfo, "Not/AZone")

    @pytest.mark.parametrize(
        "text,offset",
        [
            ("Z", timedelta(0)),
            ("+08:00", timedelta(hours=8)),
            ("-5", timedelta(hours=-5)),
            ("+0530", timedelta(hours=5, minutes=30)),
            ("-03:30", -timedelta(hours=3, minutes=30)),
            ("+01:02:03", timedelta(hours=1, minutes=2, seconds=3)),
            ("+013045", timedelta(hours=1, minutes=30, seconds=45)),
            ("+18:00", timedelta(hours=18)),
        ],
    )
    def test_zone_offset(self, text, offset):
        assert convert(timezone, text) == timezone(offset)

    @pytest.mark.parametrize(
        "text", ["+19:00", "+08:60", "08:00", "UTC", "+", "+130", "+08:0", "+0800:00"]
    )
    def test_invalid_zone_offset(self, text):
        with pytest.raises(ValueError):
            parse_offset(text)


class TestAmounts:
    """Test durations and periods."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("PT5H", timedelta(hours=5)),
            ("PT30S", timedelta(seconds=30)),
            ("P2DT30M", timedelta(days=2, minutes=30)),
            ("-PT5H", -timedelta(hours=5)),
            ("+PT1.5S", timedelta(seconds=1.5)),
        ],
    )
    def test_duration(self, text, expected):
        assert convert(timedelta, text) == expected

    @pytest.mark.parametrize(
        "text", ["five hours", "10:00", "1 day, 10:00:00", "3600", "P1Y", "P", "PT", "PT5H "]
    )
    def test_invalid_duration(self, text):
        """Test only the ISO-8601 PnDTnHnMnS form is accepted."""
        with pytest.raises(DateTimeFormatError):
            convert(timedelta, text)

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("P1Y2M3D", Period(1, 2, 3)),
            ("P2W", Period(days=14)),
            ("P1W2D", Period(days=9)),
            ("-P1M", Period(months=-1)),
            ("P-1D", Period(days=-1)),
            ("p3y", Period(years=3)),
        ],
    )
    def test_period(self, text, expected):
        assert convert(Period, text) == expected

    @pytest.mark.parametrize("text", ["P", "1Y", "P1H", "PT1H"])
    def test_invalid_period(self, text):
        with pytest.raises(DateTimeFormatError):
            convert(Period, text)

    def test_period_str(self):
        assert str(Period(1, 2, 3)) == "P1Y2M3D"
        assert str(Period(days=5)) == "P5D"
        assert str(Period()) == "P0D"


class TestCalendarParts:
    """Test year, year-month and month-day values."""

    def test_year(self):
        assert convert(Year, "2021") == Year(2021)
        assert str(Year(2021)) == "2021"
        assert str(Year(33)) == "0033"

    def test_year_month(self):
        assert convert(YearMonth, "2021-08") == YearMonth(2021, 8)
        assert str(YearMonth(2021, 8)) == "2021-08"

    def test_month_day_leap(self):
        assert convert(MonthDay, "--02-29") == MonthDay(2, 29)
        assert str(MonthDay(2, 29)) == "--02-29"

    @pytest.mark.parametrize(
        "hint,text",
        [
            (Year, "21"),
            (YearMonth, "2021-13"),
            (YearMonth, "2021-8"),
            (MonthDay, "--02-30"),
            (MonthDay, "--04-31"),
            (MonthDay, "02-28"),
        ],
    )
    def test_invalid(self, hint, text):
        with pytest.raises(DateTimeFormatError):
            convert(hint, text)

    def test_ordering(self):
        assert YearMonth(2020, 12) < YearMonth(2021, 1)
        assert MonthDay(1, 31) < MonthDay(2, 1)


class TestTemporalRoundTrip:
    """Test str() output of ISO-formatted values parses back to the same value."""

    @pytest.mark.parametrize(
        "hint,value",
        [
            (date, date(2021, 8, 30)),
            (time, time(23, 39, 11)),
            (datetime, datetime(2021, 8, 30, 23, 37, 18, 790000)),
            (LocalDateTime, datetime(2021, 8, 30, 23, 37, 18)),
            (OffsetDateTime, datetime(2021, 8, 30, 23, 38, 57, tzinfo=PLUS_EIGHT)),
            (Period, Period(1, 2, 3)),
            (Year, Year(2021)),
            (YearMonth, YearMonth(2021, 8)),
            (MonthDay, MonthDay(12, 25)),
        ],
    )
    def test_round_trip(self, hint, value):
        assert convert(hint, str(value)) == value

    @pytest.mark.parametrize("hint", ALL_TEMPORAL_TYPES)
    def test_empty_input_fails(self, hint):
        """Test no temporal type accepts an empty value."""
        with pytest.raises(DateTimeFormatError):
            convert(hint, "")
