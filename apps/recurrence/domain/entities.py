# apps/recurrence/domain/entities.py
import json
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import FrozenSet, Optional

from apps.core.domain.calendar import parse_date
from apps.core.domain.exceptions import InvalidRecurrence


class RecurrencePattern(str, Enum):
    DAILY = 'daily'
    WEEKLY = 'weekly'
    WORK_WEEKLY = 'work-weekly'        # pon-pt
    CUSTOM_WEEKLY = 'custom-weekly'    # wybrane dni tygodnia
    MONTHLY = 'monthly'
    CUSTOM_MONTHLY = 'custom-monthly'  # konkretny dzień miesiąca
    QUARTERLY = 'quarterly'
    YEARLY = 'yearly'


# Formularz todo ma "custom" z jednostką - mapujemy na wzorce bazowe
UNIT_ALIASES = {
    'custom': RecurrencePattern.DAILY,  # "co N dni"
    'days': RecurrencePattern.DAILY,
    'weeks': RecurrencePattern.WEEKLY,
    'months': RecurrencePattern.MONTHLY,
    'years': RecurrencePattern.YEARLY,
}


class EndType(str, Enum):
    COUNT = 'count'
    DATE = 'date'
    NEVER = 'never'


@dataclass(frozen=True)
class EndCondition:
    type: EndType = EndType.NEVER
    count: Optional[int] = None
    until: Optional[date] = None

    @classmethod
    def never(cls) -> 'EndCondition':
        return cls(EndType.NEVER)

    @classmethod
    def after(cls, count: int) -> 'EndCondition':
        return cls(EndType.COUNT, count=count)

    @classmethod
    def on_date(cls, until) -> 'EndCondition':
        return cls(EndType.DATE, until=parse_date(until))


def _pattern(value) -> RecurrencePattern:
    if isinstance(value, RecurrencePattern):
        return value
    value = UNIT_ALIASES.get(value, value)
    try:
        return RecurrencePattern(value)
    except ValueError as exc:
        raise InvalidRecurrence(f"Unknown recurrence pattern: {value!r}") from exc


@dataclass
class RecurrenceDescriptor:
    pattern: RecurrencePattern
    interval: int = 1
    days_of_week: FrozenSet[int] = frozenset()  # 0 = niedziela
    day_of_month: Optional[int] = None
    end: EndCondition = field(default_factory=EndCondition.never)

    def __post_init__(self):
        self.pattern = _pattern(self.pattern)
        self.days_of_week = frozenset(self.days_of_week or ())

    @classmethod
    def from_goal(cls, goal) -> 'RecurrenceDescriptor':
        """Cel: interwał 1 (chyba że config mówi inaczej), bez warunku końca."""
        if not goal.recurrence_pattern:
            raise InvalidRecurrence(f"Recurring goal {goal.title!r} has no recurrence pattern")

        config = goal.recurrence_config or {}
        if isinstance(config, str):
            try:
                config = json.loads(config)
            except json.JSONDecodeError as exc:
                raise InvalidRecurrence(f"Malformed recurrence config: {config!r}") from exc
        if not isinstance(config, dict):
            raise InvalidRecurrence(f"Recurrence config must be an object, got {config!r}")

        return cls(
            pattern=goal.recurrence_pattern,
            interval=config.get('interval', 1),
            days_of_week=config.get('daysOfWeek') or (),
            day_of_month=config.get('dayOfMonth'),
        )

    @classmethod
    def from_todo(cls, todo) -> 'RecurrenceDescriptor':
        pattern = _pattern(todo.recurrence_pattern)
        weekly_days = todo.weekly_days or ()
        # "co tydzień w pon i czw" = custom-weekly
        if pattern == RecurrencePattern.WEEKLY and weekly_days:
            pattern = RecurrencePattern.CUSTOM_WEEKLY

        if todo.recurrence_count:
            end = EndCondition.after(todo.recurrence_count)
        elif todo.recurrence_end_date:
            end = EndCondition.on_date(todo.recurrence_end_date)
        else:
            end = EndCondition.never()

        return cls(
            pattern=pattern,
            interval=todo.recurrence_interval or 1,
            days_of_week=weekly_days,
            day_of_month=todo.day_of_month,
            end=end,
        )
