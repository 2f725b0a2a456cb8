# apps/recurrence/domain/services/generator.py
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Optional, Union

from apps.core.domain.calendar import has_ended, parse_date
from apps.core.domain.exceptions import SeriesEnded
from apps.goals.domain.entities import GoalEntity
from apps.goals.domain.services.periods import successor_end_date
from apps.recurrence.domain.entities import RecurrenceDescriptor
from apps.recurrence.domain.services.resolver import iter_occurrences, next_occurrence
from apps.todos.domain.entities import TodoEntity


@dataclass
class NewInstanceRequest:
    """Prośba o zapis nowej instancji. Zapis robi zewnętrzne repozytorium."""
    kind: str  # 'goal' albo 'todo'
    source_id: Optional[int]
    entity: Union[GoalEntity, TodoEntity]

    @property
    def terminal_date(self) -> Optional[date]:
        if isinstance(self.entity, GoalEntity):
            return self.entity.end_date
        return self.entity.deadline


class RecurringInstanceGenerator:
    """Wylicza następną instancję powtarzalnego celu albo todo (bez zapisu)."""

    def generate(self, entity, now: datetime) -> Optional[NewInstanceRequest]:
        if isinstance(entity, GoalEntity):
            return self.next_goal(entity, now)
        if isinstance(entity, TodoEntity):
            return self.next_todo(entity, now)
        raise TypeError(f"Cannot generate a recurring instance of {type(entity).__name__}")

    def is_due(self, entity, now: datetime) -> bool:
        if not entity.is_recurring:
            return False
        if isinstance(entity, GoalEntity):
            # Cel trwa do końca dnia end_date
            return has_ended(entity.end_date, now)
        if entity.deadline is None:
            return False
        return parse_date(entity.deadline) <= parse_date(now)

    def next_goal(self, goal: GoalEntity, now: datetime) -> Optional[NewInstanceRequest]:
        if not self.is_due(goal, now):
            return None

        descriptor = RecurrenceDescriptor.from_goal(goal)
        start = parse_date(goal.start_date)
        end = parse_date(goal.end_date)

        # Idziemy po serii od startu bieżącej instancji do pierwszej daty po jej końcu.
        # Każdy krok przesuwa datę o >= 1 dzień, więc długość okresu ogranicza pętlę.
        next_start = None
        for candidate in iter_occurrences(descriptor, start, limit=(end - start).days + 1):
            if candidate > end:
                next_start = candidate
                break
        if next_start is None:
            return None

        successor = replace(
            goal,
            id=None,
            start_date=next_start,
            end_date=successor_end_date(goal, next_start),
            is_active=True,
            parent_goal_id=goal.id,
        )
        return NewInstanceRequest(kind='goal', source_id=goal.id, entity=successor)

    def next_todo(self, todo: TodoEntity, now: datetime) -> Optional[NewInstanceRequest]:
        if not self.is_due(todo, now):
            return None

        descriptor = RecurrenceDescriptor.from_todo(todo)
        index = todo.occurrence_index + 1
        try:
            deadline = next_occurrence(descriptor, todo.deadline, index)
        except SeriesEnded:
            return None

        successor = replace(
            todo,
            id=None,
            deadline=deadline,
            work_date=deadline - timedelta(days=todo.work_date_offset or 0),
            done=False,
            occurrence_index=index,
            contact_ids=list(todo.contact_ids),
            place_ids=list(todo.place_ids),
            goal_ids=list(todo.goal_ids),
            weekly_days=list(todo.weekly_days),
        )
        return NewInstanceRequest(kind='todo', source_id=todo.id, entity=successor)


_generator = RecurringInstanceGenerator()


def generate_next_instance(entity, now: datetime) -> Optional[NewInstanceRequest]:
    return _generator.generate(entity, now)
