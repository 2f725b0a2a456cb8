# apps/goals/adapters/orm_repositories.py
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from django.db import transaction

from apps.goals.domain.entities import GoalEntity, GoalType, LogEntity, MetricType, PeriodType
from apps.goals.models import Goal as GoalModel, Log as LogModel
from apps.goals.ports.repositories import IGoalRepository, ILogRepository

# Pola encji, które zapisujemy 1:1 (bez id)
GOAL_FIELDS = (
    'title', 'description', 'goal_type', 'metric_type', 'target_value', 'period_type',
    'start_date', 'end_date', 'activity_title', 'activity_category', 'color', 'icon',
    'is_active', 'is_recurring', 'recurrence_pattern', 'recurrence_config',
    'parent_goal_id', 'user_id',
)


def _db_value(value):
    return value.value if isinstance(value, Enum) else value


class DjangoGoalRepository(IGoalRepository):
    def to_entity(self, model: GoalModel) -> GoalEntity:
        """Konwertuje Model Django -> Czystą Encję."""
        return GoalEntity(
            id=model.id,
            title=model.title,
            description=model.description,
            goal_type=GoalType(model.goal_type),
            metric_type=MetricType(model.metric_type),
            target_value=model.target_value,
            period_type=PeriodType(model.period_type),
            start_date=model.start_date,
            end_date=model.end_date,
            activity_title=model.activity_title,
            activity_category=model.activity_category,
            is_active=model.is_active,
            is_recurring=model.is_recurring,
            recurrence_pattern=model.recurrence_pattern,
            recurrence_config=model.recurrence_config,
            parent_goal_id=model.parent_goal_id,
            user_id=model.user_id,
            color=model.color,
            icon=model.icon,
        )

    def _to_fields(self, goal: GoalEntity) -> Dict[str, Any]:
        data = {name: _db_value(getattr(goal, name)) for name in GOAL_FIELDS}
        data['description'] = data['description'] or ''
        return data

    def get_by_id(self, goal_id: int) -> Optional[GoalEntity]:
        try:
            return self.to_entity(GoalModel.objects.get(id=goal_id))
        except GoalModel.DoesNotExist:
            return None

    def list_active(self, now: datetime) -> List[GoalEntity]:
        # Cele, które jeszcze się nie zaczęły, nie trafiają na dashboard
        qs = GoalModel.objects.filter(is_active=True, start_date__lte=now.date())
        return [self.to_entity(g) for g in qs]

    def create(self, goal: GoalEntity) -> GoalEntity:
        obj = GoalModel.objects.create(**self._to_fields(goal))
        return self.to_entity(obj)

    def update(self, goal_id: int, patch: Dict[str, Any]) -> Optional[GoalEntity]:
        unknown = set(patch) - set(GOAL_FIELDS)
        if unknown:
            raise ValueError(f"Unknown goal fields: {sorted(unknown)}")
        data = {name: _db_value(value) for name, value in patch.items()}
        GoalModel.objects.filter(id=goal_id).update(**data)
        return self.get_by_id(goal_id)

    def roll_over(self, predecessor_id: int, successor: GoalEntity) -> GoalEntity:
        # Następca + dezaktywacja poprzednika w jednej transakcji
        with transaction.atomic():
            created = self.create(successor)
            GoalModel.objects.filter(id=predecessor_id).update(is_active=False)
        return created


class DjangoLogRepository(ILogRepository):
    def to_entity(self, model: LogModel) -> LogEntity:
        return LogEntity(
            id=model.id,
            activity_title=model.activity_title,
            activity_category=model.activity_category,
            start_time=model.start_time,
            end_time=model.end_time,
            goal_id=model.goal_id,
            goal_count=model.goal_count,
            tags=model.tags,
            comment=model.comment,
        )

    def list_for_goal(self, goal_id: int, start: datetime, end: datetime) -> List[LogEntity]:
        qs = LogModel.objects.filter(
            goal_id=goal_id,
            start_time__gte=start,
            start_time__lt=end
        ).order_by('start_time')
        return [self.to_entity(log) for log in qs]
