# apps/goals/domain/services/progress.py
import math
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from apps.core.domain.calendar import days_between, parse_datetime, period_bounds
from apps.core.domain.exceptions import InvalidDate
from apps.goals.domain.entities import (
    GoalEntity, GoalProgress, GoalType, LogEntity, MetricType,
)

SECONDS_PER_HOUR = 3600


class GoalProgressCalculator:
    """
    Wylicza pola pochodne celu (postęp, tempo, prognoza) z jego logów.
    Czysta funkcja: brak zapisu, brak zegara systemowego - `now` przychodzi z zewnątrz.
    """

    def compute(self, goal: GoalEntity, logs: Iterable[LogEntity], now: datetime) -> GoalProgress:
        tz = now.tzinfo
        period_start, period_end = period_bounds(goal.start_date, goal.end_date, tzinfo=tz)

        # 1. Długość okresu (min. 1 dzień, żeby nie dzielić przez zero)
        total_days = max(1, days_between(goal.start_date, goal.end_date))

        # 2. Aktualna wartość z logów
        current_value = self._current_value(goal, logs, now, period_start, period_end)

        # 3-6. Dni i tempo
        days_remaining = max(0, days_between(now, goal.end_date))
        elapsed_days = max(0, total_days - days_remaining)
        current_daily_rate = current_value / elapsed_days if elapsed_days > 0 else 0.0
        daily_target = goal.target_value / total_days

        target = goal.target_value
        ratio = current_value / target * 100 if target > 0 else 0.0

        # 7. Procent: dla limitu to "zużyty budżet", bez przycinania do 100
        if goal.goal_type == GoalType.LIMITING:
            percent_complete = ratio
        else:
            percent_complete = min(100.0, ratio)
        percent_elapsed = min(100.0, elapsed_days / total_days * 100)

        # 8-9. Stan
        has_ended = now >= period_end
        if goal.goal_type == GoalType.LIMITING:
            is_completed = has_ended and current_value <= target
        else:
            is_completed = current_value >= target
        is_overdue = has_ended and not is_completed

        # 10. Prognoza
        remaining = max(0.0, target - current_value)
        if current_daily_rate > 0:
            projected_days = remaining / current_daily_rate
        else:
            projected_days = math.inf
        projected_date = self._project(now, projected_days)

        required_daily_rate = 0.0
        if days_remaining > 0 and remaining > 0:
            required_daily_rate = remaining / days_remaining

        progress = GoalProgress(
            goal=goal,
            current_value=current_value,
            total_days=total_days,
            elapsed_days=elapsed_days,
            days_remaining=days_remaining,
            daily_target=daily_target,
            current_daily_rate=current_daily_rate,
            percent_complete=percent_complete,
            percent_elapsed=percent_elapsed,
            is_completed=is_completed,
            is_overdue=is_overdue,
            remaining=remaining,
            required_daily_rate=required_daily_rate,
            projected_days_to_completion=projected_days,
            projected_completion_date=projected_date,
        )

        if goal.goal_type == GoalType.LIMITING:
            allowance = target * elapsed_days / total_days
            progress.budget_allowance = allowance
            progress.is_over_pace = current_value > allowance
            progress.is_limit_exceeded = current_value > target

        return progress

    def _current_value(self, goal, logs, now, period_start, period_end) -> float:
        total = 0.0
        for log in logs:
            if goal.id is None or log.goal_id != goal.id:
                continue

            start = self._instant(log.start_time, now)
            # Log liczy się tylko, jeśli zaczął się w okresie celu
            if not (period_start <= start < period_end):
                continue

            if goal.metric_type == MetricType.COUNT:
                total += log.goal_count if log.goal_count is not None else 1
                continue

            # Trwająca aktywność liczy się do `now`
            end = self._instant(log.end_time, now) if log.end_time else now
            end = min(end, period_end)
            begin = max(start, period_start)
            seconds = (end - begin).total_seconds()
            total += max(0.0, seconds / SECONDS_PER_HOUR)
        return total

    @staticmethod
    def _instant(value, now: datetime) -> datetime:
        instant = parse_datetime(value, tzinfo=now.tzinfo)
        if (instant.tzinfo is None) != (now.tzinfo is None):
            raise InvalidDate("Log timestamps and `now` must both be naive or both be aware")
        return instant

    @staticmethod
    def _project(now: datetime, days: float) -> Optional[datetime]:
        if not math.isfinite(days):
            return None
        try:
            return now + timedelta(days=days)
        except OverflowError:
            # Tempo tak małe, że prognoza wypada poza zakres datetime
            return None


_calculator = GoalProgressCalculator()


def compute_progress(goal: GoalEntity, logs: Iterable[LogEntity], now: datetime) -> GoalProgress:
    return _calculator.compute(goal, logs, now)


def compute_progress_for_goals(
    goals: Iterable[GoalEntity],
    logs: Iterable[LogEntity],
    now: datetime,
) -> List[GoalProgress]:
    """Grupuje logi po goal_id i liczy każdy cel dokładnie raz."""
    by_goal: Dict[Optional[int], List[LogEntity]] = defaultdict(list)
    for log in logs:
        if log.goal_id is not None:
            by_goal[log.goal_id].append(log)
    return [_calculator.compute(goal, by_goal.get(goal.id, []), now) for goal in goals]
