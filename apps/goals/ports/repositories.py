# apps/goals/ports/repositories.py
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from apps.goals.domain.entities import GoalEntity, LogEntity


class IGoalRepository(ABC):
    @abstractmethod
    def get_by_id(self, goal_id: int) -> Optional[GoalEntity]:
        pass

    @abstractmethod
    def list_active(self, now: datetime) -> List[GoalEntity]:
        """Zwraca cele z is_active=True."""
        pass

    @abstractmethod
    def create(self, goal: GoalEntity) -> GoalEntity:
        """Zapisuje nowy cel i zwraca encję z nadanym ID."""
        pass

    @abstractmethod
    def update(self, goal_id: int, patch: Dict[str, Any]) -> Optional[GoalEntity]:
        pass

    def roll_over(self, predecessor_id: int, successor: GoalEntity) -> GoalEntity:
        """Zapisuje następcę celu powtarzalnego i wyłącza poprzednika."""
        created = self.create(successor)
        self.update(predecessor_id, {'is_active': False})
        return created


class ILogRepository(ABC):
    @abstractmethod
    def list_for_goal(self, goal_id: int, start: datetime, end: datetime) -> List[LogEntity]:
        """Logi celu, których start_time mieści się w [start, end)."""
        pass
