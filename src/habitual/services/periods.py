"""Period windows and period keys for habit frequencies.

Everything here is pure: callers pass the instant and the timezone, nothing
reads the wall clock or touches storage. Instants may be naive (taken as UTC)
or timezone-aware; local calendar days are resolved in the given timezone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Union

import pytz

from ..errors import InvalidArgumentError
from ..models.habit import Frequency

UTC = pytz.utc
ONE_DAY = timedelta(days=1)


def resolve_timezone(tz: str | tzinfo | None) -> tzinfo:
    """Return a tzinfo for a zone name, a tzinfo, or None (UTC)."""

    if tz is None:
        return UTC
    if isinstance(tz, str):
        try:
            return pytz.timezone(tz)
        except pytz.UnknownTimeZoneError as exc:
            raise InvalidArgumentError(f"Unknown timezone: {tz}") from exc
    return tz


def coerce_frequency(value: Frequency | str) -> Frequency:
    if isinstance(value, Frequency):
        return value
    try:
        return Frequency(str(value).strip().upper())
    except ValueError as exc:
        raise InvalidArgumentError(f"Unknown frequency: {value}") from exc


def as_utc(instant: datetime) -> datetime:
    """Return ``instant`` as an aware UTC datetime; naive values are UTC."""

    if instant.tzinfo is None:
        return UTC.localize(instant)
    return instant.astimezone(UTC)


def to_storage(instant: datetime) -> datetime:
    """Naive UTC, the representation used in the database."""

    return as_utc(instant).replace(tzinfo=None)


def local_date(instant: datetime, tz: str | tzinfo | None = None) -> date:
    """Calendar date of ``instant`` in ``tz``."""

    return as_utc(instant).astimezone(resolve_timezone(tz)).date()


def local_midnight(day: date, tz: str | tzinfo | None = None) -> datetime:
    """Aware datetime for 00:00 of ``day`` in ``tz``."""

    zone = resolve_timezone(tz)
    naive = datetime.combine(day, time.min)
    if hasattr(zone, "localize"):
        return zone.localize(naive)
    return naive.replace(tzinfo=zone)


@dataclass(frozen=True)
class DailyKey:
    day: date

    def token(self) -> str:
        return self.day.isoformat()


@dataclass(frozen=True)
class WeeklyKey:
    """ISO week: ``year`` is the ISO week-numbering year."""

    year: int
    week: int

    def token(self) -> str:
        return f"{self.year:04d}-W{self.week:02d}"


@dataclass(frozen=True)
class MonthlyKey:
    year: int
    month: int

    def token(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


PeriodKey = Union[DailyKey, WeeklyKey, MonthlyKey]
_KEY_TYPES = (DailyKey, WeeklyKey, MonthlyKey)


@dataclass(frozen=True)
class PeriodWindow:
    """Half-open window ``[start, end)`` of one period, as aware datetimes."""

    start: datetime
    end: datetime
    key: PeriodKey


def period_start_date(frequency: Frequency | str, day: date) -> date:
    """First calendar day of the period containing ``day``."""

    frequency = coerce_frequency(frequency)
    if frequency is Frequency.DAILY:
        return day
    if frequency is Frequency.WEEKLY:
        # isoweekday(): Monday=1 .. Sunday=7, so Sunday closes the prior week
        return day - timedelta(days=day.isoweekday() - 1)
    return day.replace(day=1)


def next_period_start_date(frequency: Frequency | str, start: date) -> date:
    """First calendar day of the period after the one starting on ``start``."""

    frequency = coerce_frequency(frequency)
    if frequency is Frequency.DAILY:
        return start + ONE_DAY
    if frequency is Frequency.WEEKLY:
        return start + timedelta(days=7)
    if start.month == 12:
        return date(start.year + 1, 1, 1)
    return date(start.year, start.month + 1, 1)


def period_key(frequency: Frequency | str, instant: datetime, tz: str | tzinfo | None = None) -> PeriodKey:
    """Key of the period ``instant`` falls in."""

    frequency = coerce_frequency(frequency)
    day = local_date(instant, tz)
    if frequency is Frequency.DAILY:
        return DailyKey(day)
    if frequency is Frequency.WEEKLY:
        iso_year, iso_week, _ = day.isocalendar()
        return WeeklyKey(iso_year, iso_week)
    return MonthlyKey(day.year, day.month)


def period_window(
    frequency: Frequency | str, now: datetime, tz: str | tzinfo | None = None
) -> PeriodWindow:
    """Return the current period ``[start, end)`` for ``frequency`` at ``now``.

    Boundaries are local midnights in ``tz``, computed on the calendar first
    and localised afterwards so DST transitions do not shift them.
    """

    frequency = coerce_frequency(frequency)
    zone = resolve_timezone(tz)
    start_day = period_start_date(frequency, local_date(now, zone))
    end_day = next_period_start_date(frequency, start_day)
    return PeriodWindow(
        start=local_midnight(start_day, zone),
        end=local_midnight(end_day, zone),
        key=period_key(frequency, now, zone),
    )


def is_consecutive(previous: PeriodKey, current: PeriodKey) -> bool:
    """True when ``current`` is the period immediately after ``previous``.

    Keys of different kinds, gaps, repeats, and reversals are all
    non-consecutive.
    """

    for key in (previous, current):
        if not isinstance(key, _KEY_TYPES):
            raise TypeError(f"Not a period key: {key!r}")

    if isinstance(previous, DailyKey) and isinstance(current, DailyKey):
        return (current.day - previous.day).days == 1

    if isinstance(previous, WeeklyKey) and isinstance(current, WeeklyKey):
        if previous.year == current.year:
            return current.week == previous.week + 1
        if current.year == previous.year + 1:
            return previous.week >= 52 and current.week == 1
        return False

    if isinstance(previous, MonthlyKey) and isinstance(current, MonthlyKey):
        if previous.year == current.year:
            return current.month == previous.month + 1
        if current.year == previous.year + 1:
            return previous.month == 12 and current.month == 1
        return False

    return False


__all__ = [
    "DailyKey",
    "MonthlyKey",
    "PeriodKey",
    "PeriodWindow",
    "WeeklyKey",
    "as_utc",
    "coerce_frequency",
    "is_consecutive",
    "local_date",
    "local_midnight",
    "next_period_start_date",
    "period_key",
    "period_start_date",
    "period_window",
    "resolve_timezone",
    "to_storage",
]
