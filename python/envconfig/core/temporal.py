"""Temporal types and their ISO-8601 parsers.

Built-in types are used where Python has one (``datetime``, ``date``,
``time``, ``timedelta``, ``timezone``, ``ZoneInfo``). Stricter readings of
``datetime`` and ``time`` are ``NewType`` markers:

    LocalDateTime     2021-08-30T23:37:18.790                       (naive)
    OffsetDateTime    2021-08-30T23:38:57.316746+08:00              (aware)
    Instant           1970-01-01T00:00:00Z                          (aware, UTC)
    ZonedDateTime     2021-08-30T23:38:40.436576+08:00[Australia/Perth]
    OffsetTime        23:39:11.899767+08:00                         (aware)

Types with no standard library equivalent are small value classes whose
``str()`` is their ISO form: Period (``P1Y2M3D``), Year (``2021``),
YearMonth (``2021-08``) and MonthDay (``--02-29``).

TEMPORAL_PARSERS maps every temporal type to its ``str -> value`` parser.
Parsers raise ValueError (or KeyError for unknown zones) on malformed input.
"""

from __future__ import annotations

import calendar
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, NewType
from zoneinfo import ZoneInfo

from pydantic import TypeAdapter

LocalDateTime = NewType("LocalDateTime", datetime)
OffsetDateTime = NewType("OffsetDateTime", datetime)
ZonedDateTime = NewType("ZonedDateTime", datetime)
Instant = NewType("Instant", datetime)
OffsetTime = NewType("OffsetTime", time)

_PERIOD = re.compile(
    r"([-+]?)P(?:([-+]?\d+)Y)?(?:([-+]?\d+)M)?(?:([-+]?\d+)W)?(?:([-+]?\d+)D)?",
    re.IGNORECASE,
)
_YEAR = re.compile(r"[-+]?\d{4,9}")
_YEAR_MONTH = re.compile(r"([-+]?\d{4,9})-(\d{2})")
_MONTH_DAY = re.compile(r"--(\d{2})-(\d{2})")
_ZONED = re.compile(r"(?P<datetime>[^\[\]]+)(?:\[(?P<zone>[^\[\]]+)\])?")
_OFFSET = re.compile(
    r"(?P<sign>[+-])(?:(?P<h>\d{1,2})"
    r"|(?P<hh>\d{2}):(?P<mm>\d{2})(?::(?P<ss>\d{2}))?"
    r"|(?P<hh2>\d{2})(?P<mm2>\d{2})(?P<ss2>\d{2})?)"
)
_DURATION_ISO = re.compile(
    r"(?P<sign>[-+]?)"
    r"(?P<body>P(?=\d|T\d)(?:\d+D)?(?:T(?=\d)(?:\d+H)?(?:\d+M)?(?:\d+(?:[.,]\d+)?S)?)?)"
)

MAX_OFFSET = timedelta(hours=18)

_DURATION = TypeAdapter(timedelta)


@dataclass(frozen=True, slots=True)
class Period:
    """A date-based amount of time in years, months and days."""

    years: int = 0
    months: int = 0
    days: int = 0

    @classmethod
    def parse(cls, text: str) -> Period:
        match = _PERIOD.fullmatch(text)
        if match is None or not any(match.group(i) for i in range(2, 6)):
            raise ValueError(f"invalid ISO-8601 period: {text!r}")
        sign = -1 if match.group(1) == "-" else 1
        years, months, weeks, days = (int(match.group(i) or 0) for i in range(2, 6))
        return cls(sign * years, sign * months, sign * (weeks * 7 + days))

    def __str__(self) -> str:
        if not (self.years or self.months or self.days):
            return "P0D"
        parts = [
            f"{amount}{unit}"
            for amount, unit in ((self.years, "Y"), (self.months, "M"), (self.days, "D"))
            if amount
        ]
        return "P" + "".join(parts)


@dataclass(frozen=True, slots=True, order=True)
class Year:
    """A year in the ISO calendar."""

    value: int

    @classmethod
    def parse(cls, text: str) -> Year:
        if _YEAR.fullmatch(text) is None:
            raise ValueError(f"invalid year: {text!r}")
        return cls(int(text))

    def __str__(self) -> str:
        return _format_year(self.value)


@dataclass(frozen=True, slots=True, order=True)
class YearMonth:
    """A year and month, e.g. ``2021-08``."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")

    @classmethod
    def parse(cls, text: str) -> YearMonth:
        match = _YEAR_MONTH.fullmatch(text)
        if match is None:
            raise ValueError(f"invalid year-month: {text!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    def __str__(self) -> str:
        return f"{_format_year(self.year)}-{self.month:02d}"


@dataclass(frozen=True, slots=True, order=True)
class MonthDay:
    """A month and day without a year, e.g. ``--02-29``."""

    month: int
    day: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")
        # leap year, so --02-29 is valid
        if not 1 <= self.day <= calendar.monthrange(2000, self.month)[1]:
            raise ValueError(f"day out of range for month {self.month}: {self.day}")

    @classmethod
    def parse(cls, text: str) -> MonthDay:
        match = _MONTH_DAY.fullmatch(text)
        if match is None:
            raise ValueError(f"invalid month-day: {text!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    def __str__(self) -> str:
        return f"--{self.month:02d}-{self.day:02d}"


def _format_year(year: int) -> str:
    return f"-{-year:04d}" if year < 0 else f"{year:04d}"


def parse_local_datetime(text: str) -> datetime:
    value = datetime.fromisoformat(text)
    if value.tzinfo is not None:
        raise ValueError(f"expected a date-time without offset: {text!r}")
    return value


def parse_offset_datetime(text: str) -> datetime:
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        raise ValueError(f"expected a date-time with offset: {text!r}")
    return value


def parse_instant(text: str) -> datetime:
    return parse_offset_datetime(text).astimezone(timezone.utc)


def parse_zoned_datetime(text: str) -> datetime:
    """Parse an offset date-time with an optional ``[Region/City]`` suffix."""
    match = _ZONED.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid zoned date-time: {text!r}")
    value = parse_offset_datetime(match.group("datetime"))
    zone = match.group("zone")
    return value.astimezone(ZoneInfo(zone)) if zone else value


def parse_offset_time(text: str) -> time:
    value = time.fromisoformat(text)
    if value.tzinfo is None:
        raise ValueError(f"expected a time with offset: {text!r}")
    return value


def parse_duration(text: str) -> timedelta:
    """Parse an ISO-8601 duration such as ``PT5H``, ``P2DT30M`` or ``-PT1.5S``.

    Only days, hours, minutes and seconds are accepted.
    """
    match = _DURATION_ISO.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid ISO-8601 duration: {text!r}")
    duration = _DURATION.validate_python(match.group("body").replace(",", "."))
    return -duration if match.group("sign") == "-" else duration


def parse_offset(text: str) -> timezone:
    """Parse a zone offset, at most 18 hours.

    Accepted forms: ``Z``, ``+h``, ``+hh``, ``+hh:mm``, ``+hhmm``, ``+hh:mm:ss``, ``+hhmmss``.
    """
    if text == "Z":
        return timezone.utc
    match = _OFFSET.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid zone offset: {text!r}")
    sign = match.group("sign")
    hours = match.group("h") or match.group("hh") or match.group("hh2")
    minutes = match.group("mm") or match.group("mm2")
    seconds = match.group("ss") or match.group("ss2")
    if int(minutes or 0) > 59 or int(seconds or 0) > 59:
        raise ValueError(f"invalid zone offset: {text!r}")
    offset = timedelta(hours=int(hours), minutes=int(minutes or 0), seconds=int(seconds or 0))
    if offset > MAX_OFFSET:
        raise ValueError(f"zone offset out of range -18:00 to +18:00: {text!r}")
    return timezone(-offset if sign == "-" else offset)


TEMPORAL_PARSERS: dict[Any, Callable[[str], Any]] = {
    datetime: datetime.fromisoformat,
    LocalDateTime: parse_local_datetime,
    OffsetDateTime: parse_offset_datetime,
    ZonedDateTime: parse_zoned_datetime,
    Instant: parse_instant,
    date: date.fromisoformat,
    time: time.fromisoformat,
    OffsetTime: parse_offset_time,
    timedelta: parse_duration,
    Period: Period.parse,
    ZoneInfo: ZoneInfo,
    timezone: parse_offset,
    Year: Year.parse,
    YearMonth: YearMonth.parse,
    MonthDay: MonthDay.parse,
}


__all__ = [
    "LocalDateTime",
    "OffsetDateTime",
    "ZonedDateTime",
    "Instant",
    "OffsetTime",
    "Period",
    "Year",
    "YearMonth",
    "MonthDay",
    "parse_local_datetime",
    "parse_offset_datetime",
    "parse_instant",
    "parse_zoned_datetime",
    "parse_offset_time",
    "parse_duration",
    "parse_offset",
    "TEMPORAL_PARSERS",
]
