"""Calendar values parsed from ISO-like text.

Purpose
-------
Represent a date, a time, or both with an optional timezone as a plain frozen
record, independent of :mod:`datetime` limits (year ``0`` is accepted), and
convert it to the stdlib types only on request.

Contents
--------
* :data:`DATE`, :data:`TIME`, :data:`TIMEZONE` – regex fragments with named
  groups (``year``, ``month``, ``day``, ``hour``, ``minute``, ``second``,
  ``ms``, ``tzutc``, ``tzhour``, ``tzminute``).
* :data:`FORMATS` – anchored, compiled patterns keyed by date type name.
* :class:`TzOffset` and :data:`UTC` – the two explicit timezone shapes.
* :class:`DateObject` – the record plus ``from_parts``/``to_iso``/``narrow``.

System Role
-----------
:class:`lib_typed_settings.domain.variables.date.DateObjectVariable` matches
input against :data:`FORMATS` and hands the named groups to
:meth:`DateObject.from_parts`, which range-checks every component.
"""

from __future__ import annotations

import calendar
import datetime as _dt
import re
from dataclasses import dataclass, replace
from typing import Any, Final, Literal, Mapping, Union

from .result import Result, failure, success

DateType = Literal["date", "time", "time_tz", "datetime", "datetime_tz"]

DATE: Final[str] = r"(?P<year>\d{4})(?:-(?P<month>\d{2}|[A-Za-z]{3,9})(?:-(?P<day>\d{2}))?)?"
TIME: Final[str] = r"(?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.(?P<ms>\d{3}))?)?"
TIMEZONE: Final[str] = r"(?:(?P<tzutc>[Zz])|(?P<tzhour>[+-]\d{2}):(?P<tzminute>\d{2}))"

FORMATS: Final[Mapping[str, re.Pattern[str]]] = {
    "date": re.compile(rf"^{DATE}$", re.ASCII),
    "time": re.compile(rf"^{TIME}$", re.ASCII),
    "time_tz": re.compile(rf"^{TIME}{TIMEZONE}?$", re.ASCII),
    "datetime": re.compile(rf"^{DATE}(?:[T ]{TIME})?$", re.ASCII),
    "datetime_tz": re.compile(rf"^{DATE}(?:[T ]{TIME}{TIMEZONE}?)?$", re.ASCII),
}

PARTS: Final[frozenset[str]] = frozenset(
    {"year", "month", "day", "hour", "minute", "second", "ms", "tzutc", "tzhour", "tzminute"}
)

_MONTH_NAMES = (
    "JANUARY",
    "FEBRUARY",
    "MARCH",
    "APRIL",
    "MAY",
    "JUNE",
    "JULY",
    "AUGUST",
    "SEPTEMBER",
    "OCTOBER",
    "NOVEMBER",
    "DECEMBER",
)
MONTHS: Final[Mapping[str, int]] = {
    **{name: index for index, name in enumerate(_MONTH_NAMES, start=1)},
    **{name[:3]: index for index, name in enumerate(_MONTH_NAMES, start=1)},
}

UTC: Final = "Z"
_MAX_OFFSET_MINUTES = 14 * 60


@dataclass(frozen=True)
class TzOffset:
    """Explicit UTC offset; ``hours`` and ``minutes`` both carry its sign.

    Examples
    --------
    >>> TzOffset(-5, -30).total_minutes
    -330
    >>> TzOffset(-5, -30).to_iso()
    '-05:30'
    """

    hours: int
    minutes: int = 0

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def to_iso(self) -> str:
        sign = "-" if self.total_minutes < 0 else "+"
        return f"{sign}{abs(self.hours):02d}:{abs(self.minutes):02d}"

    def to_tzinfo(self) -> _dt.tzinfo:
        return _dt.timezone(_dt.timedelta(minutes=self.total_minutes))


TimeZone = Union[TzOffset, str, None]


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in *month*, counting leap Februaries.

    Examples
    --------
    >>> days_in_month(2024, 2), days_in_month(1900, 2), days_in_month(2000, 2)
    (29, 28, 29)
    """

    return calendar.monthrange(year, month)[1]


def _component(issues: list[str], name: str, raw: Any, fallback: int, low: int, high: int | None) -> int:
    """Validate one integer component, returning *fallback* when absent or invalid."""

    if raw is None or raw == "":
        return fallback
    try:
        value = int(raw)
    except (TypeError, ValueError):
        issues.append(f".{name} must be a number")
        return fallback
    if value < low or (high is not None and value > high):
        if high is None:
            issues.append(f".{name} must be at least {low}")
        else:
            issues.append(f".{name} must be between {low} and {high}")
        return fallback
    return value


def _month(issues: list[str], raw: Any) -> int:
    if isinstance(raw, str) and raw and not raw.isdigit():
        number = MONTHS.get(raw.upper())
        if number is None:
            issues.append(".month must be a month number or name")
            return 1
        return number
    return _component(issues, "month", raw, 1, 1, 12)


def _timezone(issues: list[str], utc: Any, hour: Any, minute: Any) -> TimeZone:
    zone: TimeZone = UTC if isinstance(utc, str) and utc.upper() == UTC else None
    if hour is None or hour == "":
        return zone
    if zone is not None:
        issues.append(".tz can only be Z (UTC) or an offset")
        return zone
    text = str(hour).strip()
    negative = text.startswith("-")
    hours = _component(issues, "tzhour", text.lstrip("+-"), 0, 0, 14)
    minutes = _component(issues, "tzminute", minute, 0, 0, 59)
    if hours * 60 + minutes > _MAX_OFFSET_MINUTES:
        issues.append(".tz must be an offset between -14:00 and +14:00")
        return None
    if negative:
        return TzOffset(-hours, -minutes)
    return TzOffset(hours, minutes)


@dataclass(frozen=True)
class DateObject:
    """Calendar components plus timezone (``None`` local, ``"Z"`` or :class:`TzOffset`).

    Defaults describe 2000-01-01 00:00:00.000 local time so partial formats
    (a bare date or a bare time) still yield a complete record.

    Examples
    --------
    >>> DateObject.from_parts(year="2024", month="feb", day="29").value.to_iso()
    '2024-02-29'
    >>> DateObject.from_parts(year="2023", month="02", day="29").error
    ('.day must be between 1 and 28',)
    >>> DateObject(2024, 5, 1, 13, 4, tz=TzOffset(2)).to_iso(full=True)
    '2024-05-01T13:04:00.000+02:00'
    """

    year: int = 2000
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    ms: int = 0
    tz: TimeZone = None

    @classmethod
    def from_parts(cls, **raw: Any) -> Result[DateObject]:
        """Validate raw components (strings or integers) into a :class:`DateObject`.

        Every component is checked and every violation is reported. An
        invalid component falls back to its default so later checks (such as
        the day-of-month limit) still run.
        """

        issues: list[str] = []
        year = _component(issues, "year", raw.get("year"), 2000, 0, None)
        month = _month(issues, raw.get("month"))
        day = _component(issues, "day", raw.get("day"), 1, 1, days_in_month(year, month))
        hour = _component(issues, "hour", raw.get("hour"), 0, 0, 23)
        minute = _component(issues, "minute", raw.get("minute"), 0, 0, 59)
        second = _component(issues, "second", raw.get("second"), 0, 0, 59)
        ms = _component(issues, "ms", raw.get("ms"), 0, 0, 999)
        tz = _timezone(issues, raw.get("tzutc"), raw.get("tzhour"), raw.get("tzminute"))
        if issues:
            return failure(issues)
        return success(cls(year, month, day, hour, minute, second, ms, tz))

    def narrow(self, type: DateType) -> DateObject:
        """Reset the components *type* does not carry back to their defaults.

        Examples
        --------
        >>> DateObject(2024, 5, 1, 13, 4, tz=UTC).narrow("date")
        DateObject(year=2024, month=5, day=1, hour=0, minute=0, second=0, ms=0, tz=None)
        """

        has_date = type in ("date", "datetime", "datetime_tz")
        has_time = type != "date"
        has_tz = type in ("time_tz", "datetime_tz")
        defaults = DateObject()
        return replace(
            self,
            year=self.year if has_date else defaults.year,
            month=self.month if has_date else defaults.month,
            day=self.day if has_date else defaults.day,
            hour=self.hour if has_time else defaults.hour,
            minute=self.minute if has_time else defaults.minute,
            second=self.second if has_time else defaults.second,
            ms=self.ms if has_time else defaults.ms,
            tz=self.tz if has_tz else None,
        )

    def to_iso(self, full: bool = False) -> str:
        """Render as ``YYYY-MM-DD[THH:MM:SS[.mmm]][Z|±HH:MM]``.

        The time part is omitted when it is midnight and no timezone is set,
        and milliseconds are omitted when zero, unless *full* is requested.
        """

        text = f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
        has_time = self.hour or self.minute or self.second or self.ms
        if full or has_time or self.tz is not None:
            text += f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
            if full or self.ms:
                text += f".{self.ms:03d}"
        if isinstance(self.tz, TzOffset):
            text += self.tz.to_iso()
        elif self.tz is not None:
            text += self.tz
        return text

    def to_datetime(self) -> _dt.datetime:
        """Return a :class:`datetime.datetime`; naive when the timezone is local.

        Raises :class:`ValueError` for years the stdlib cannot represent.
        """

        tzinfo: _dt.tzinfo | None = None
        if isinstance(self.tz, TzOffset):
            tzinfo = self.tz.to_tzinfo()
        elif self.tz is not None:
            tzinfo = _dt.timezone.utc
        return _dt.datetime(self.year, self.month, self.day, self.hour, self.minute, self.second, self.ms * 1000, tzinfo)

    def to_date(self) -> _dt.date:
        return _dt.date(self.year, self.month, self.day)


__all__ = [
    "DATE",
    "FORMATS",
    "MONTHS",
    "PARTS",
    "TIME",
    "TIMEZONE",
    "UTC",
    "DateObject",
    "DateType",
    "TimeZone",
    "TzOffset",
    "days_in_month",
]
