# apps/todos/domain/entities.py
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from apps.core.domain.calendar import NamedRange, is_within_named_range


@dataclass
class TodoEntity:
    id: Optional[int]  # ID może być None przed zapisem
    title: str
    description: str = ""

    # Priorytet = pilność x ważność
    urgency: int = 1
    importance: int = 1

    work_date: Optional[date] = None  # kiedy zamierzam nad tym pracować
    deadline: Optional[date] = None
    done: bool = False

    activity_title: Optional[str] = None
    activity_category: Optional[str] = None

    # Relacje (tylko ID, żeby nie wiązać obiektów domenowych z ORM)
    contact_ids: List[int] = field(default_factory=list)
    place_ids: List[int] = field(default_factory=list)
    goal_ids: List[int] = field(default_factory=list)
    user_id: Optional[int] = None

    # Powtarzanie
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = None
    recurrence_interval: int = 1
    weekly_days: List[int] = field(default_factory=list)  # 0 = niedziela
    day_of_month: Optional[int] = None
    recurrence_count: Optional[int] = None
    recurrence_end_date: Optional[date] = None
    work_date_offset: int = 0  # ile dni przed deadlinem ustawić work_date
    recurrence_group_id: Optional[str] = None  # łączy wszystkie instancje serii
    occurrence_index: int = 0  # pozycja w serii, pierwsza = 0

    @property
    def priority(self) -> int:
        return (self.urgency or 0) * (self.importance or 0)

    def is_in_range(self, named_range, now) -> bool:
        """Filtr listy: pasuje work_date ALBO deadline."""
        if NamedRange(named_range) == NamedRange.ALL:
            return True
        return (
            is_within_named_range(self.work_date, named_range, now)
            or is_within_named_range(self.deadline, named_range, now)
        )
