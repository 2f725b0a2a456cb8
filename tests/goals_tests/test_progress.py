# tests/goals_tests/test_progress.py
# Pola pochodne celu: postęp, tempo, prognoza, stan ukończenia

from __future__ import annotations

import math
from datetime import date, datetime, timezone

import pytest

from apps.core.domain.exceptions import InvalidDate
from apps.goals.domain.entities import GoalType, MetricType
from apps.goals.domain.services.progress import compute_progress, compute_progress_for_goals


@pytest.fixture()
def january_logs(make_log):
    """4 x 5h w pierwszej połowie stycznia = 20h."""
    return [
        make_log(datetime(2024, 1, day, 18), datetime(2024, 1, day, 23))
        for day in (2, 5, 8, 12)
    ]


def test_achievement_goal_mid_period(make_goal, january_logs) -> None:
    p = compute_progress(make_goal(), january_logs, datetime(2024, 1, 15))

    assert p.current_value == pytest.approx(20)
    assert p.total_days == 30
    assert p.days_remaining == 16
    assert p.elapsed_days == 14
    assert p.current_daily_rate == pytest.approx(1.43, abs=0.01)
    assert p.percent_complete == pytest.approx(40)
    assert p.projected_completion_date.date() == date(2024, 2, 5)
    assert p.is_behind_pace
    assert not p.is_overdue
    assert not p.is_completed
    assert p.remaining == pytest.approx(30)
    assert p.required_daily_rate == pytest.approx(30 / 16)


def test_achievement_goal_overdue_after_period(make_goal, make_log) -> None:
    logs = [make_log(datetime(2024, 1, day, 10), datetime(2024, 1, day, 15)) for day in range(1, 8)]
    p = compute_progress(make_goal(), logs, datetime(2024, 2, 1))

    assert p.current_value == pytest.approx(35)
    assert p.is_overdue
    assert not p.is_completed
    assert p.days_remaining == 0
    assert p.elapsed_days == 30
    assert not p.is_active


def test_achievement_goal_completed_early(make_goal, make_log) -> None:
    goal = make_goal(target_value=5)
    logs = [make_log(datetime(2024, 1, 2, 8), datetime(2024, 1, 2, 14))]
    p = compute_progress(goal, logs, datetime(2024, 1, 3))

    assert p.is_completed
    assert not p.is_overdue
    assert p.percent_complete == 100
    assert p.remaining == 0
    assert p.projected_days_to_completion == 0


def test_limiting_goal_breached(make_goal, make_log) -> None:
    goal = make_goal(goal_type=GoalType.LIMITING, metric_type=MetricType.COUNT, target_value=10)
    logs = [make_log(datetime(2024, 1, day, 12), goal_count=1) for day in range(1, 13)]
    p = compute_progress(goal, logs, datetime(2024, 2, 1))

    assert p.current_value == 12
    assert not p.is_completed
    assert p.is_overdue
    assert p.is_limit_exceeded
    # zużyty budżet, bez przycinania do 100
    assert p.percent_complete == pytest.approx(120)


def test_limiting_goal_kept_under_budget(make_goal, make_log) -> None:
    goal = make_goal(goal_type=GoalType.LIMITING, metric_type=MetricType.COUNT, target_value=10)
    logs = [make_log(datetime(2024, 1, day, 12)) for day in range(1, 9)]
    p = compute_progress(goal, logs, datetime(2024, 2, 1))

    assert p.current_value == 8
    assert p.is_completed
    assert not p.is_overdue
    assert not p.is_limit_exceeded


def test_limiting_goal_over_pace_before_end(make_goal, make_log) -> None:
    goal = make_goal(goal_type=GoalType.LIMITING, metric_type=MetricType.COUNT, target_value=10)
    logs = [make_log(datetime(2024, 1, day, 12)) for day in range(1, 7)]
    p = compute_progress(goal, logs, datetime(2024, 1, 16))

    # 15 z 30 dni -> przydział 5, zużyte 6
    assert p.budget_allowance == pytest.approx(5)
    assert p.is_over_pace
    assert not p.is_limit_exceeded
    assert not p.is_completed
    assert not p.is_overdue


def test_count_metric_defaults_to_one_per_log(make_goal, make_log) -> None:
    goal = make_goal(metric_type=MetricType.COUNT, target_value=20)
    logs = [
        make_log(datetime(2024, 1, 3, 9), goal_count=3),
        make_log(datetime(2024, 1, 4, 9)),
    ]
    assert compute_progress(goal, logs, datetime(2024, 1, 10)).current_value == 4


def test_running_log_counts_up_to_now(make_goal, make_log) -> None:
    logs = [make_log(datetime(2024, 1, 15, 8, 0))]
    p = compute_progress(make_goal(), logs, datetime(2024, 1, 15, 10, 30))
    assert p.current_value == pytest.approx(2.5)


def test_logs_outside_period_or_other_goal_are_ignored(make_goal, make_log) -> None:
    logs = [
        make_log(datetime(2023, 12, 31, 20), datetime(2024, 1, 1, 2)),  # start przed okresem
        make_log(datetime(2024, 1, 5, 10), datetime(2024, 1, 5, 12), goal_id=2),
        make_log(datetime(2024, 1, 5, 10), datetime(2024, 1, 5, 12), goal_id=None),
        make_log(datetime(2024, 2, 1, 10), datetime(2024, 2, 1, 12)),  # po okresie
    ]
    assert compute_progress(make_goal(), logs, datetime(2024, 2, 2)).current_value == 0


def test_log_crossing_period_end_is_clipped(make_goal, make_log) -> None:
    logs = [make_log(datetime(2024, 1, 31, 23), datetime(2024, 2, 1, 1))]
    assert compute_progress(make_goal(), logs, datetime(2024, 2, 2)).current_value == pytest.approx(1)


def test_unsaved_goal_has_no_logs(make_goal, make_log) -> None:
    logs = [make_log(datetime(2024, 1, 5, 10), datetime(2024, 1, 5, 12), goal_id=None)]
    assert compute_progress(make_goal(id=None), logs, datetime(2024, 1, 10)).current_value == 0


def test_zero_elapsed_days_has_no_projection(make_goal) -> None:
    p = compute_progress(make_goal(), [], datetime(2024, 1, 1))

    assert p.elapsed_days == 0
    assert p.current_daily_rate == 0
    assert math.isinf(p.projected_days_to_completion)
    assert p.projected_completion_date is None
    assert p.is_behind_pace


def test_single_day_goal(make_goal, make_log) -> None:
    goal = make_goal(start_date=date(2024, 1, 1), end_date=date(2024, 1, 1), target_value=2)
    logs = [make_log(datetime(2024, 1, 1, 8), datetime(2024, 1, 1, 9))]
    p = compute_progress(goal, logs, datetime(2024, 1, 1, 12))

    assert p.total_days == 1
    assert p.daily_target == 2
    assert p.percent_complete == pytest.approx(50)
    assert not p.is_overdue


def test_more_logs_never_decrease_progress(make_goal, make_log, january_logs) -> None:
    now = datetime(2024, 1, 15)
    before = compute_progress(make_goal(), january_logs, now)
    extra = january_logs + [make_log(datetime(2024, 1, 13, 9), datetime(2024, 1, 13, 10))]
    after = compute_progress(make_goal(), extra, now)

    assert after.current_value >= before.current_value
    assert after.percent_complete >= before.percent_complete


def test_more_logs_never_decrease_budget_consumed(make_goal, make_log) -> None:
    goal = make_goal(goal_type=GoalType.LIMITING, metric_type=MetricType.COUNT, target_value=10)
    now = datetime(2024, 1, 16)
    logs = [make_log(datetime(2024, 1, day, 12)) for day in range(1, 13)]

    results = [compute_progress(goal, logs[:n], now) for n in range(len(logs) + 1)]

    consumed = [p.percent_complete for p in results]
    assert consumed == sorted(consumed)
    assert consumed[-1] == pytest.approx(120)
    # przydział zależy tylko od czasu, nie od logów
    assert all(p.budget_allowance == pytest.approx(5) for p in results)
    over_pace = [p.is_over_pace for p in results]
    assert over_pace == sorted(over_pace)
    assert over_pace[5] is False and over_pace[6] is True


def test_compute_is_repeatable(make_goal, january_logs) -> None:
    now = datetime(2024, 1, 15)
    assert compute_progress(make_goal(), january_logs, now) == compute_progress(make_goal(), january_logs, now)


def test_aware_now_with_naive_logs_is_rejected(make_goal, make_log) -> None:
    logs = [make_log(datetime(2024, 1, 5, 10), datetime(2024, 1, 5, 12))]
    with pytest.raises(InvalidDate):
        compute_progress(make_goal(), logs, datetime(2024, 1, 10, tzinfo=timezone.utc))


def test_aware_timestamps(make_goal, make_log) -> None:
    logs = [make_log(
        datetime(2024, 1, 5, 10, tzinfo=timezone.utc),
        datetime(2024, 1, 5, 13, tzinfo=timezone.utc),
    )]
    p = compute_progress(make_goal(), logs, datetime(2024, 1, 10, tzinfo=timezone.utc))
    assert p.current_value == pytest.approx(3)


def test_progress_for_many_goals_groups_logs(make_goal, make_log) -> None:
    goals = [make_goal(id=1), make_goal(id=2, metric_type=MetricType.COUNT, target_value=3)]
    logs = [
        make_log(datetime(2024, 1, 5, 10), datetime(2024, 1, 5, 12), goal_id=1),
        make_log(datetime(2024, 1, 6, 10), goal_id=2),
        make_log(datetime(2024, 1, 7, 10), goal_id=2),
    ]
    first, second = compute_progress_for_goals(goals, logs, datetime(2024, 1, 10))

    assert first.goal_id == 1 and first.current_value == pytest.approx(2)
    assert second.goal_id == 2 and second.current_value == 2
