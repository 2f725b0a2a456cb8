# apps/recurrence/application/use_cases.py
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from apps.core.domain.exceptions import GoalEngineError
from apps.goals.domain.entities import GoalEntity
from apps.goals.ports.repositories import IGoalRepository
from apps.recurrence.domain.services.generator import NewInstanceRequest, RecurringInstanceGenerator
from apps.recurrence.domain.services.resolver import DEFAULT_MAX_OCCURRENCES
from apps.todos.domain.entities import TodoEntity
from apps.todos.ports.repositories import ITodoRepository

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    goals_created: List[GoalEntity] = field(default_factory=list)
    todos_created: List[TodoEntity] = field(default_factory=list)
    goals_closed: List[int] = field(default_factory=list)  # serie bez następcy
    errors: List[str] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.goals_created) + len(self.todos_created)


class RecurrenceSweepUseCase:
    """
    Okresowy przegląd (np. codzienny cron): dla każdego celu/serii todo,
    którego termin minął, tworzy następną instancję przez repozytorium.
    """

    def __init__(
        self,
        goal_repository: IGoalRepository,
        todo_repository: ITodoRepository,
        max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
        generator: Optional[RecurringInstanceGenerator] = None,
    ):
        self.goal_repository = goal_repository
        self.todo_repository = todo_repository
        self.max_occurrences = max_occurrences
        self.generator = generator or RecurringInstanceGenerator()

    def execute(self, now: datetime) -> SweepResult:
        result = SweepResult()
        self._sweep_goals(now, result)
        self._sweep_todos(now, result)
        logger.info(
            "Recurrence sweep at %s: %d goals, %d todos created, %d errors",
            now, len(result.goals_created), len(result.todos_created), len(result.errors)
        )
        return result

    def _sweep_goals(self, now: datetime, result: SweepResult):
        for goal in self.goal_repository.list_active(now):
            if not self.generator.is_due(goal, now):
                continue
            try:
                request = self._next_pending(goal, now)
            except GoalEngineError as exc:
                logger.error("Cannot roll over goal %s (%r): %s", goal.id, goal.title, exc)
                result.errors.append(f"goal {goal.id}: {exc}")
                continue

            if request is None:
                # Seria się skończyła - zamykamy bieżący cel bez następcy
                self.goal_repository.update(goal.id, {'is_active': False})
                result.goals_closed.append(goal.id)
                logger.info("Goal %s has no next instance, deactivated", goal.id)
                continue

            successor = request.entity
            successor.parent_goal_id = goal.id
            created = self.goal_repository.roll_over(goal.id, successor)
            result.goals_created.append(created)
            logger.info("Goal %s rolled over to %s (%s .. %s)",
                        goal.id, created.id, created.start_date, created.end_date)

    def _sweep_todos(self, now: datetime, result: SweepResult):
        for group_id, head in self._series_heads(self.todo_repository.list_recurring()).items():
            if not self.generator.is_due(head, now):
                continue
            try:
                request = self._next_pending(head, now)
            except GoalEngineError as exc:
                logger.error("Cannot generate next todo for series %s: %s", group_id, exc)
                result.errors.append(f"todo series {group_id}: {exc}")
                continue

            if request is None:
                logger.debug("Todo series %s has ended", group_id)
                continue

            successor = request.entity
            successor.recurrence_group_id = group_id
            created = self.todo_repository.create(successor)
            result.todos_created.append(created)
            logger.info("Todo series %s: created %r due %s", group_id, created.title, created.deadline)

    @staticmethod
    def _series_heads(todos: List[TodoEntity]) -> Dict[str, TodoEntity]:
        """Najnowsza instancja każdej serii (todo bez grupy = seria jednoelementowa)."""
        heads: Dict[str, TodoEntity] = {}
        for todo in todos:
            key = todo.recurrence_group_id or f"todo-{todo.id}"
            current = heads.get(key)
            if current is None or todo.occurrence_index > current.occurrence_index:
                heads[key] = todo
        return heads

    def _next_pending(self, entity, now: datetime) -> Optional[NewInstanceRequest]:
        """Następna instancja, która jeszcze nie jest do odnowienia. Zaległe pomijamy."""
        request = self.generator.generate(entity, now)
        steps = 1
        while request is not None and self.generator.is_due(request.entity, now):
            if steps >= self.max_occurrences:
                logger.warning("Gave up after %d elapsed instances of %r", steps, entity.title)
                return None
            logger.debug("Skipping elapsed instance of %r ending %s", entity.title, request.terminal_date)
            request = self.generator.generate(request.entity, now)
            steps += 1
        return request
