# apps/goals/domain/services/periods.py
from datetime import date, timedelta
from numbers import Real
from typing import Optional

from apps.core.domain.calendar import add_months, end_of_month, parse_date
from apps.core.domain.exceptions import InvalidDate, InvalidGoal
from apps.goals.domain.entities import GoalEntity, GoalType, MetricType, PeriodType
from apps.recurrence.domain.entities import RecurrenceDescriptor
from apps.recurrence.domain.services.resolver import validate_descriptor

# Ile miesięcy obejmuje okres (koniec = ostatni dzień ostatniego miesiąca)
MONTH_SPANS = {
    PeriodType.MONTH: 1,
    PeriodType.THREE_MONTHS: 3,
    PeriodType.SIX_MONTHS: 6,
    PeriodType.YEAR: 12,
}

WEEK_LENGTH_DAYS = 7


def compute_end_date(period_type, start_date, custom_end=None) -> date:
    """
    Data końca okresu, tak jak przy zakładaniu celu.
    week -> 7 dni włącznie ze startem; month/3months/6months/year -> koniec
    ostatniego miesiąca okresu; custom -> podana ręcznie.
    """
    try:
        period_type = PeriodType(period_type)
    except ValueError as exc:
        raise InvalidGoal(f"Unknown period type: {period_type!r}") from exc
    start = parse_date(start_date)

    if period_type == PeriodType.WEEK:
        return start + timedelta(days=WEEK_LENGTH_DAYS - 1)

    if period_type == PeriodType.CUSTOM:
        if custom_end is None:
            raise InvalidDate("A custom period requires an explicit end_date")
        end = parse_date(custom_end)
    else:
        end = end_of_month(add_months(start, MONTH_SPANS[period_type] - 1))

    if end < start:
        raise InvalidDate(f"end_date {end} is before start_date {start}")
    return end


def successor_end_date(goal: GoalEntity, next_start: date) -> date:
    """Koniec następnej instancji; custom zachowuje długość poprzednika."""
    if PeriodType(goal.period_type) == PeriodType.CUSTOM:
        length = parse_date(goal.end_date) - parse_date(goal.start_date)
        return next_start + length
    return compute_end_date(goal.period_type, next_start)


def validate_goal(goal: GoalEntity) -> GoalEntity:
    """Walidacja przy zakładaniu celu. Zwraca cel ze znormalizowanymi enumami."""
    if not goal.title or not goal.title.strip():
        raise InvalidGoal("Goal title cannot be empty")

    target = goal.target_value
    if isinstance(target, bool) or not isinstance(target, Real) or not target > 0:
        raise InvalidGoal(f"target_value must be a positive number, got {target!r}")

    try:
        goal.goal_type = GoalType(goal.goal_type)
        goal.metric_type = MetricType(goal.metric_type)
        goal.period_type = PeriodType(goal.period_type)
    except ValueError as exc:
        raise InvalidGoal(str(exc)) from exc

    goal.start_date = parse_date(goal.start_date)
    goal.end_date = parse_date(goal.end_date)
    if goal.end_date < goal.start_date:
        raise InvalidDate(f"end_date {goal.end_date} is before start_date {goal.start_date}")

    if goal.is_recurring:
        validate_descriptor(RecurrenceDescriptor.from_goal(goal))

    return goal


def resolve_end_date(goal: GoalEntity, custom_end: Optional[date] = None) -> date:
    """end_date dla nowego celu: z period_type albo (custom) z formularza."""
    return compute_end_date(goal.period_type, goal.start_date, custom_end or goal.end_date)
