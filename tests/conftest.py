# tests/conftest.py
# Wspólne fabryki encji dla testów domeny (bez bazy danych)

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest

from apps.goals.domain.entities import GoalEntity, GoalType, LogEntity, MetricType, PeriodType
from apps.goals.ports.repositories import IGoalRepository, ILogRepository
from apps.todos.domain.entities import TodoEntity
from apps.todos.ports.repositories import ITodoRepository


@pytest.fixture()
def make_goal():
    def _make(**overrides) -> GoalEntity:
        data = dict(
            id=1,
            title="Czytanie",
            goal_type=GoalType.ACHIEVEMENT,
            metric_type=MetricType.TIME,
            target_value=50,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
            period_type=PeriodType.MONTH,
        )
        data.update(overrides)
        return GoalEntity(**data)
    return _make


@pytest.fixture()
def make_log():
    counter = {"id": 0}

    def _make(start: datetime, end: datetime | None = None, goal_id: int | None = 1, **overrides) -> LogEntity:
        counter["id"] += 1
        data = dict(
            id=counter["id"],
            activity_title="Czytanie",
            start_time=start,
            end_time=end,
            goal_id=goal_id,
        )
        data.update(overrides)
        return LogEntity(**data)
    return _make


@pytest.fixture()
def make_todo():
    def _make(**overrides) -> TodoEntity:
        data = dict(
            id=10,
            title="Raport miesięczny",
            deadline=date(2024, 1, 31),
            is_recurring=True,
            recurrence_pattern="monthly",
        )
        data.update(overrides)
        return TodoEntity(**data)
    return _make


class InMemoryGoalRepository(IGoalRepository):
    def __init__(self):
        self.goals: dict[int, GoalEntity] = {}
        self._next_id = 1

    def get_by_id(self, goal_id):
        return self.goals.get(goal_id)

    def list_active(self, now):
        return [g for g in self.goals.values() if g.is_active and g.start_date <= now.date()]

    def create(self, goal):
        saved = replace(goal, id=self._next_id)
        self.goals[saved.id] = saved
        self._next_id += 1
        return saved

    def update(self, goal_id, patch):
        goal = self.goals.get(goal_id)
        if goal is None:
            return None
        self.goals[goal_id] = replace(goal, **patch)
        return self.goals[goal_id]


class InMemoryLogRepository(ILogRepository):
    def __init__(self, logs=None):
        self.logs = list(logs or [])

    def list_for_goal(self, goal_id, start, end):
        return [log for log in self.logs if log.goal_id == goal_id and start <= log.start_time < end]


class InMemoryTodoRepository(ITodoRepository):
    def __init__(self):
        self.todos: dict[int, TodoEntity] = {}
        self._next_id = 100

    def add(self, todo: TodoEntity) -> TodoEntity:
        self.todos[todo.id] = todo
        return todo

    def create(self, todo):
        saved = replace(todo, id=self._next_id)
        self.todos[saved.id] = saved
        self._next_id += 1
        return saved

    def list_recurring(self):
        return [t for t in self.todos.values() if t.is_recurring]


@pytest.fixture()
def goal_repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture()
def log_repository() -> InMemoryLogRepository:
    return InMemoryLogRepository()


@pytest.fixture()
def todo_repository() -> InMemoryTodoRepository:
    return InMemoryTodoRepository()
