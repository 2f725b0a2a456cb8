# apps/recurrence/domain/services/resolver.py
"""
Resolver powtórzeń: z opisu serii i daty kotwicy wyznacza następną datę.

Czysta, deterministyczna funkcja - ten sam opis + kotwica + indeks
zawsze daje ten sam wynik. Koniec serii sygnalizuje wyjątek SeriesEnded.
"""
from datetime import date, datetime, timedelta
from typing import Iterator

from dateutil.relativedelta import relativedelta
from dateutil.rrule import DAILY, WEEKLY, MO, TU, WE, TH, FR, SU, rrule

from apps.core.domain.calendar import add_months, add_years, parse_date, start_of_month
from apps.core.domain.exceptions import InvalidRecurrence, SeriesEnded
from apps.recurrence.domain.entities import EndType, RecurrenceDescriptor, RecurrencePattern

# Bezpiecznik dla serii "never" - wołający nie może generować w nieskończoność
DEFAULT_MAX_OCCURRENCES = 365

WORK_DAYS = (MO, TU, WE, TH, FR)


def validate_descriptor(descriptor: RecurrenceDescriptor) -> RecurrenceDescriptor:
    interval = descriptor.interval
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
        raise InvalidRecurrence(f"interval must be a positive integer, got {interval!r}")

    for day in descriptor.days_of_week:
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise InvalidRecurrence(f"day of week must be in 0..6 (Sunday = 0), got {day!r}")

    if descriptor.pattern == RecurrencePattern.CUSTOM_WEEKLY and not descriptor.days_of_week:
        raise InvalidRecurrence("custom-weekly recurrence requires at least one day of week")

    if descriptor.pattern == RecurrencePattern.CUSTOM_MONTHLY:
        dom = descriptor.day_of_month
        if isinstance(dom, bool) or not isinstance(dom, int) or not 1 <= dom <= 31:
            raise InvalidRecurrence(f"custom-monthly recurrence requires day_of_month in 1..31, got {dom!r}")

    end = descriptor.end
    if end.type == EndType.COUNT and (end.count is None or end.count < 0):
        raise InvalidRecurrence(f"count end condition requires a non-negative count, got {end.count!r}")
    if end.type == EndType.DATE and end.until is None:
        raise InvalidRecurrence("date end condition requires a date")

    return descriptor


def _as_datetime(day: date) -> datetime:
    return datetime.combine(day, datetime.min.time())


def _python_weekday(sunday_based: int) -> int:
    # 0=niedziela -> 6, 1=poniedziałek -> 0 (konwencja datetime/dateutil)
    return (sunday_based - 1) % 7


def _work_weekly(descriptor, anchor: date) -> date:
    # `interval`-ty dzień roboczy ściśle po kotwicy
    rule = rrule(
        DAILY,
        dtstart=_as_datetime(anchor + timedelta(days=1)),
        byweekday=WORK_DAYS,
        count=descriptor.interval,
    )
    return list(rule)[-1].date()


def _custom_weekly(descriptor, anchor: date) -> date:
    # Dla interval=1 to po prostu najbliższy pasujący dzień po kotwicy.
    # Dla interval>1 tygodnie liczone od tygodnia kotwicy (start w niedzielę).
    rule = rrule(
        WEEKLY,
        dtstart=_as_datetime(anchor),
        interval=descriptor.interval,
        wkst=SU,
        byweekday=sorted(_python_weekday(d) for d in descriptor.days_of_week),
    )
    return rule.after(_as_datetime(anchor), inc=False).date()


def _custom_monthly(descriptor, anchor: date) -> date:
    month = add_months(start_of_month(anchor), descriptor.interval)
    # relativedelta(day=N) przycina do ostatniego dnia miesiąca
    return month + relativedelta(day=descriptor.day_of_month)


_STEPS = {
    RecurrencePattern.DAILY: lambda d, a: a + timedelta(days=d.interval),
    RecurrencePattern.WEEKLY: lambda d, a: a + timedelta(weeks=d.interval),
    RecurrencePattern.WORK_WEEKLY: _work_weekly,
    RecurrencePattern.CUSTOM_WEEKLY: _custom_weekly,
    RecurrencePattern.MONTHLY: lambda d, a: add_months(a, d.interval),
    RecurrencePattern.CUSTOM_MONTHLY: _custom_monthly,
    RecurrencePattern.QUARTERLY: lambda d, a: add_months(a, 3 * d.interval),
    RecurrencePattern.YEARLY: lambda d, a: add_years(a, d.interval),
}


def next_occurrence(descriptor: RecurrenceDescriptor, anchor, occurrence_index: int = 0) -> date:
    """
    Następna data serii po `anchor`.

    occurrence_index to indeks wystąpienia, które liczymy (0 = pierwsze).
    Rzuca SeriesEnded, gdy seria się skończyła (count albo data końca).
    """
    validate_descriptor(descriptor)
    anchor = parse_date(anchor)
    end = descriptor.end

    if end.type == EndType.COUNT and occurrence_index >= end.count:
        raise SeriesEnded(occurrence_index, f"series limited to {end.count} occurrences")

    candidate = _STEPS[descriptor.pattern](descriptor, anchor)

    if end.type == EndType.DATE and candidate > end.until:
        raise SeriesEnded(occurrence_index, f"next date {candidate} is after {end.until}")

    return candidate


def iter_occurrences(
    descriptor: RecurrenceDescriptor,
    anchor,
    limit: int = DEFAULT_MAX_OCCURRENCES,
    start_index: int = 0,
) -> Iterator[date]:
    """Kolejne daty serii, każda zakotwiczona w poprzedniej. Maks. `limit` dat."""
    current = parse_date(anchor)
    for index in range(start_index, start_index + limit):
        try:
            current = next_occurrence(descriptor, current, index)
        except SeriesEnded:
            return
        yield current
