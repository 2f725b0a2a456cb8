# apps/goals/application/use_cases.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union

from apps.core.domain.calendar import parse_date, period_bounds
from apps.core.domain.exceptions import GoalEngineError
from apps.goals.domain.entities import GoalDashboard, GoalEntity
from apps.goals.domain.services.periods import compute_end_date, validate_goal
from apps.goals.domain.services.progress import compute_progress
from apps.goals.domain.services.rollup import compute_historical_progress, compute_period_progress
from apps.goals.ports.repositories import IGoalRepository, ILogRepository

logger = logging.getLogger(__name__)


@dataclass
class CreateGoalInput:
    title: str
    goal_type: str
    metric_type: str
    target_value: float
    start_date: Any
    period_type: str = 'custom'
    end_date: Any = None  # wymagane tylko dla period_type=custom
    description: str = ""
    activity_title: Optional[str] = None
    activity_category: Optional[str] = None
    is_active: bool = True
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = None
    recurrence_config: Optional[Union[Dict[str, Any], str]] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    user_id: Optional[int] = None


class CreateGoalUseCase:
    def __init__(self, repository: IGoalRepository):
        self.repository = repository

    def execute(self, input_dto: CreateGoalInput) -> GoalEntity:
        start = parse_date(input_dto.start_date)
        end = compute_end_date(input_dto.period_type, start, input_dto.end_date)

        goal = GoalEntity(
            id=None,
            title=(input_dto.title or "").strip(),
            description=input_dto.description or "",
            goal_type=input_dto.goal_type,
            metric_type=input_dto.metric_type,
            target_value=input_dto.target_value,
            period_type=input_dto.period_type,
            start_date=start,
            end_date=end,
            activity_title=input_dto.activity_title,
            activity_category=input_dto.activity_category,
            is_active=input_dto.is_active,
            is_recurring=input_dto.is_recurring,
            recurrence_pattern=input_dto.recurrence_pattern if input_dto.is_recurring else None,
            recurrence_config=input_dto.recurrence_config if input_dto.is_recurring else None,
            color=input_dto.color,
            icon=input_dto.icon,
            user_id=input_dto.user_id,
        )
        # Rzuca InvalidGoal / InvalidDate / InvalidRecurrence - przed zapisem
        validate_goal(goal)

        saved = self.repository.create(goal)
        logger.info("Created goal %s %r (%s .. %s)", saved.id, saved.title, saved.start_date, saved.end_date)
        return saved


class GoalDashboardUseCase:
    """Postęp wszystkich aktywnych celów + sumy okresowe i historyczne."""

    def __init__(self, goal_repository: IGoalRepository, log_repository: ILogRepository):
        self.goal_repository = goal_repository
        self.log_repository = log_repository

    def execute(self, now: datetime) -> GoalDashboard:
        progresses = []
        for goal in self.goal_repository.list_active(now):
            try:
                start, end = period_bounds(goal.start_date, goal.end_date, tzinfo=now.tzinfo)
                logs = self.log_repository.list_for_goal(goal.id, start, end)
                progresses.append(compute_progress(goal, logs, now))
            except GoalEngineError as exc:
                # Jeden zepsuty cel nie może położyć całego dashboardu
                logger.warning("Skipping goal %s in dashboard: %s", goal.id, exc)

        dashboard = GoalDashboard(
            now=now,
            goals=progresses,
            current=compute_period_progress(progresses, now),
            historical=compute_historical_progress(progresses, now),
        )
        logger.debug("Dashboard for %s: %d goals", now, len(progresses))
        return dashboard
