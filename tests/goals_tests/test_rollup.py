# tests/goals_tests/test_rollup.py
# Sumy okresowe (dzień/tydzień/...) i okna historyczne dla dashboardu

from __future__ import annotations

import math
from datetime import datetime

import pytest

from apps.goals.domain.entities import GoalProgress, PeriodProgress
from apps.goals.domain.services.rollup import (
    HISTORICAL_WINDOWS, compare_with_history, compute_historical_progress,
    compute_period_progress, current_windows, historical_windows,
)

NOW = datetime(2024, 5, 15, 12, 0)  # środa


@pytest.fixture()
def make_progress(make_goal):
    def _make(daily_target: float, rate: float, completed: bool = False, overdue: bool = False) -> GoalProgress:
        return GoalProgress(
            goal=make_goal(),
            current_value=0,
            total_days=30,
            elapsed_days=10,
            days_remaining=20,
            daily_target=daily_target,
            current_daily_rate=rate,
            percent_complete=0,
            percent_elapsed=0,
            is_completed=completed,
            is_overdue=overdue,
            remaining=0,
            required_daily_rate=0,
            projected_days_to_completion=math.inf,
        )
    return _make


def test_one_day_window_aggregate(make_progress) -> None:
    progresses = [make_progress(2, 1), make_progress(1, 1.5)]
    daily = compute_period_progress(progresses, NOW)["daily"]

    assert daily.days == 1
    assert daily.progress == pytest.approx(2.5)
    assert daily.target == pytest.approx(3)
    assert daily.percentage == 83
    assert not daily.is_on_track
    assert daily.goals_counted == 2


def test_current_windows_count_started_days(make_progress) -> None:
    windows = compute_period_progress([make_progress(1, 1)], NOW)

    assert set(windows) == {"daily", "weekly", "monthly", "quarterly", "yearly"}
    # niedziela 12.05 00:00 -> środa 15.05 12:00 = 3.5 dnia -> 4
    assert windows["weekly"].days == 4
    assert windows["weekly"].start == datetime(2024, 5, 12)
    assert windows["monthly"].days == 15
    assert windows["quarterly"].start == datetime(2024, 4, 1)
    assert windows["yearly"].target == pytest.approx(windows["yearly"].days)


def test_window_at_midnight_still_counts_one_day() -> None:
    assert current_windows(datetime(2024, 5, 15))["daily"] == (datetime(2024, 5, 15), datetime(2024, 5, 15))
    daily = compute_period_progress([], datetime(2024, 5, 15))["daily"]
    assert daily.days == 1


def test_historical_windows_are_full_calendar_periods() -> None:
    windows = historical_windows(datetime(2024, 2, 10, 10))

    assert windows["yesterday"] == (datetime(2024, 2, 9), datetime(2024, 2, 10))
    assert windows["last_week"] == (datetime(2024, 2, 3), datetime(2024, 2, 10))
    assert windows["last_month"] == (datetime(2024, 1, 1), datetime(2024, 2, 1))
    # Q1 -> Q4 poprzedniego roku
    assert windows["last_quarter"] == (datetime(2023, 10, 1), datetime(2024, 1, 1))
    assert windows["last_year"] == (datetime(2023, 1, 1), datetime(2024, 1, 1))


def test_historical_progress_uses_window_length(make_progress) -> None:
    historical = compute_historical_progress([make_progress(2, 1)], datetime(2024, 2, 10, 10))

    assert set(historical) == set(HISTORICAL_WINDOWS)
    assert historical["last_month"].days == 31
    assert historical["last_month"].progress == pytest.approx(31)
    assert historical["last_month"].target == pytest.approx(62)
    assert historical["last_quarter"].days == 92
    assert historical["last_year"].days == 365
    assert historical["last_month"].percentage == 50


def test_only_active_goals_are_counted(make_progress) -> None:
    progresses = [
        make_progress(1, 1),
        make_progress(5, 5, completed=True),
        make_progress(5, 0, overdue=True),
    ]
    daily = compute_period_progress(progresses, NOW)["daily"]
    assert daily.goals_counted == 1
    assert daily.target == pytest.approx(1)


def test_non_finite_values_are_skipped(make_progress) -> None:
    progresses = [make_progress(1, 1), make_progress(2, math.inf), make_progress(math.nan, 1)]
    daily = compute_period_progress(progresses, NOW)["daily"]

    assert daily.progress == pytest.approx(2)
    assert daily.target == pytest.approx(3)
    assert math.isfinite(daily.percentage)


def test_percentage_rounds_half_up() -> None:
    window = PeriodProgress(key="daily", start=NOW, end=NOW, days=1, progress=1, target=8)
    assert window.percentage == 13  # 12.5, nie bankierskie 12

    assert PeriodProgress(key="daily", start=NOW, end=NOW, days=1, progress=5, target=0).percentage == 0
    assert PeriodProgress(key="daily", start=NOW, end=NOW, days=1, progress=3, target=3).is_on_track


def test_compare_with_history_pairs_windows(make_progress) -> None:
    progresses = [make_progress(1, 1)]
    current = compute_period_progress(progresses, NOW)
    historical = compute_historical_progress(progresses, NOW)

    pairs = compare_with_history(current, historical)
    assert pairs["daily"] == (current["daily"], historical["yesterday"])
    assert pairs["yearly"] == (current["yearly"], historical["last_year"])
