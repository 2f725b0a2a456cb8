# tests/recurrence_tests/test_run_daily_recurrence_command.py
# Komenda cron: `manage.py run_daily_recurrence`

from __future__ import annotations

from datetime import date, datetime, timezone as dt_timezone
from io import StringIO

import pytest
from django.core.management import CommandError, call_command
from django.utils import timezone

from apps.goals.models import Goal
from apps.todos.models import Todo

pytestmark = pytest.mark.django_db


def _goal(**overrides) -> Goal:
    data = dict(
        title="Czytanie",
        goal_type="achievement",
        metric_type="time",
        target_value=10,
        period_type="month",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
        is_recurring=True,
        recurrence_pattern="monthly",
    )
    data.update(overrides)
    return Goal.objects.create(**data)


def test_command_rolls_over_goals_and_todos() -> None:
    goal = _goal()
    Todo.objects.create(
        title="Podlać kwiaty", deadline=date(2024, 1, 31), is_recurring=True,
        recurrence_pattern="weekly", work_date_offset=1,
    )
    out = StringIO()

    call_command("run_daily_recurrence", "--now", "2024-02-01T07:00:00", stdout=out)

    assert "Wygenerowano 1 celów i 1 zadań cyklicznych." in out.getvalue()
    successor = Goal.objects.get(parent_goal=goal)
    assert successor.start_date == date(2024, 2, 1)
    assert successor.end_date == date(2024, 2, 29)
    assert successor.is_active
    goal.refresh_from_db()
    assert not goal.is_active

    created = Todo.objects.get(occurrence_index=1)
    assert created.deadline == date(2024, 2, 7)
    assert created.work_date == date(2024, 2, 6)
    assert created.recurrence_group_id.startswith("todo-")


def test_command_with_nothing_due() -> None:
    _goal(start_date=date(2024, 2, 1), end_date=date(2024, 2, 29))
    out = StringIO()

    call_command("run_daily_recurrence", "--now", "2024-02-10", stdout=out)

    assert "Wygenerowano 0 celów i 0 zadań cyklicznych." in out.getvalue()
    assert Goal.objects.count() == 1


def test_command_rejects_bad_timestamp() -> None:
    with pytest.raises(CommandError):
        call_command("run_daily_recurrence", "--now", "wczoraj")


def test_command_uses_local_day_after_midnight(monkeypatch, settings) -> None:
    settings.TIME_ZONE = "Europe/Warsaw"
    # 23:30 UTC = 00:30 1 lutego w Warszawie, styczniowy cel już się skończył
    monkeypatch.setattr(timezone, "now", lambda: datetime(2024, 1, 31, 23, 30, tzinfo=dt_timezone.utc))
    goal = _goal()

    call_command("run_daily_recurrence", stdout=StringIO())

    successor = Goal.objects.get(parent_goal=goal)
    assert successor.start_date == date(2024, 2, 1)
    assert Goal.objects.count() == 2
