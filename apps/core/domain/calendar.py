# apps/core/domain/calendar.py
"""
Czyste funkcje kalendarzowe (granice dni/tygodni/miesięcy, różnice dni).

Daty (date) zostają datami, datetime zostają datetime (z zachowaniem tzinfo).
Tydzień zaczyna się w NIEDZIELĘ, dni tygodnia liczymy 0=niedziela ... 6=sobota.
"""
import math
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from apps.core.domain.exceptions import InvalidDate

DateLike = Union[date, datetime]

SECONDS_PER_DAY = 24 * 60 * 60


class NamedRange(str, Enum):
    ALL = 'all'
    PAST = 'past'
    TODAY = 'today'
    TOMORROW = 'tomorrow'
    WEEK = 'week'
    MONTH = 'month'


def _ensure(value) -> DateLike:
    # datetime dziedziczy po date, więc jeden isinstance wystarcza
    if not isinstance(value, date):
        raise InvalidDate(f"Expected a date or datetime, got {value!r}")
    return value


def parse_datetime(value, tzinfo=None) -> datetime:
    """ISO-8601 / date / datetime -> datetime. Sama data = północ w strefie tzinfo."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=tzinfo)
    if isinstance(value, str):
        try:
            parsed = isoparse(value.strip())
        except (ValueError, OverflowError) as exc:
            raise InvalidDate(f"Cannot parse date: {value!r}") from exc
        if parsed.tzinfo is None and tzinfo is not None:
            parsed = parsed.replace(tzinfo=tzinfo)
        return parsed
    raise InvalidDate(f"Cannot parse date: {value!r}")


def parse_date(value) -> date:
    """ISO-8601 / date / datetime -> date (część kalendarzowa)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_datetime(value).date()


def sunday_weekday(value: DateLike) -> int:
    """Dzień tygodnia z niedzielą = 0 (Python ma poniedziałek = 0)."""
    return (_ensure(value).weekday() + 1) % 7


def start_of_day(value: DateLike) -> DateLike:
    value = _ensure(value)
    if isinstance(value, datetime):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    return value


def start_of_week(value: DateLike) -> DateLike:
    day = start_of_day(value)
    return day - timedelta(days=sunday_weekday(day))


def start_of_month(value: DateLike) -> DateLike:
    return start_of_day(value).replace(day=1)


def start_of_quarter(value: DateLike) -> DateLike:
    day = start_of_day(value)
    # indeks miesiąca 0-11 -> floor(m/3)*3, z powrotem na 1-12
    first_month = (day.month - 1) // 3 * 3 + 1
    return day.replace(month=first_month, day=1)


def start_of_year(value: DateLike) -> DateLike:
    return start_of_day(value).replace(month=1, day=1)


def end_of_month(value: DateLike) -> DateLike:
    """Ostatni dzień miesiąca (dla datetime: jego początek)."""
    return start_of_day(value) + relativedelta(day=31)


def add_days(value: DateLike, n: int) -> DateLike:
    return _ensure(value) + timedelta(days=n)


def add_months(value: DateLike, n: int) -> DateLike:
    # relativedelta przycina dzień do długości miesiąca (31.01 + 1m = 29.02)
    return _ensure(value) + relativedelta(months=n)


def add_years(value: DateLike, n: int) -> DateLike:
    return _ensure(value) + relativedelta(years=n)


def _align(a: DateLike, b: DateLike):
    a, b = _ensure(a), _ensure(b)
    a_is_dt, b_is_dt = isinstance(a, datetime), isinstance(b, datetime)
    if a_is_dt and not b_is_dt:
        b = datetime.combine(b, time.min, tzinfo=a.tzinfo)
    elif b_is_dt and not a_is_dt:
        a = datetime.combine(a, time.min, tzinfo=b.tzinfo)
    elif a_is_dt and b_is_dt and (a.tzinfo is None) != (b.tzinfo is None):
        raise InvalidDate("Cannot compare naive and timezone-aware datetimes")
    return a, b


def days_between(a: DateLike, b: DateLike) -> int:
    """Sufit różnicy b - a w dniach kalendarzowych (może być ujemny)."""
    a, b = _align(a, b)
    delta = b - a
    if not isinstance(a, datetime):
        return delta.days
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def is_within_named_range(value, named_range, now: DateLike) -> bool:
    """
    Czy data mieści się w nazwanym zakresie względem `now`.
    week/month to zakresy [dziś, dziś+7d] / [dziś, dziś+1m] (włącznie).
    """
    named_range = NamedRange(named_range)
    if value is None or value == "":
        return False
    if named_range == NamedRange.ALL:
        return True

    day = parse_date(value)
    today = parse_date(now)

    if named_range == NamedRange.PAST:
        return day < today
    if named_range == NamedRange.TODAY:
        return day == today
    if named_range == NamedRange.TOMORROW:
        return day == today + timedelta(days=1)
    if named_range == NamedRange.WEEK:
        return today <= day <= today + timedelta(days=7)
    return today <= day <= add_months(today, 1)


def period_bounds(start: date, end: date, tzinfo=None):
    """
    Okres [start, end] (dni włącznie) jako półotwarty przedział chwil:
    [początek start, początek dnia po end).
    """
    start, end = parse_date(start), parse_date(end)
    if end < start:
        raise InvalidDate(f"end_date {end} is before start_date {start}")
    lower = datetime.combine(start, time.min, tzinfo=tzinfo)
    upper = datetime.combine(end + timedelta(days=1), time.min, tzinfo=tzinfo)
    return lower, upper


def has_ended(end: date, now: DateLike) -> bool:
    """Czy ostatni dzień `end` już minął (now jest co najmniej dzień później)."""
    return parse_date(now) > parse_date(end)
