# apps/goals/domain/services/rollup.py
"""
Agregacja postępu wszystkich aktywnych celów w okna kalendarzowe (dashboard).

Dla każdego okna: rzeczywisty postęp = tempo dzienne x dni okna,
oczekiwany = cel dzienny x dni okna. Okna historyczne (wczoraj, zeszły
tydzień...) dają znacznik porównawczy obok bieżącego paska postępu.
"""
import math
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Tuple

from apps.core.domain.calendar import (
    add_months, add_years, days_between, start_of_day, start_of_month,
    start_of_quarter, start_of_week, start_of_year,
)
from apps.goals.domain.entities import GoalProgress, PeriodProgress

CURRENT_WINDOWS = ('daily', 'weekly', 'monthly', 'quarterly', 'yearly')
HISTORICAL_WINDOWS = ('yesterday', 'last_week', 'last_month', 'last_quarter', 'last_year')

# bieżące okno -> jego odpowiednik historyczny
HISTORY_PAIRS = dict(zip(CURRENT_WINDOWS, HISTORICAL_WINDOWS))


def current_windows(now: datetime) -> Dict[str, Tuple[datetime, datetime]]:
    """Okna od początku dnia/tygodnia/... do `now`."""
    return {
        'daily': (start_of_day(now), now),
        'weekly': (start_of_week(now), now),
        'monthly': (start_of_month(now), now),
        'quarterly': (start_of_quarter(now), now),
        'yearly': (start_of_year(now), now),
    }


def historical_windows(now: datetime) -> Dict[str, Tuple[datetime, datetime]]:
    """Pełne, półotwarte okna kalendarzowe [start, end) przed bieżącym."""
    today = start_of_day(now)
    this_month = start_of_month(now)
    this_quarter = start_of_quarter(now)
    this_year = start_of_year(now)
    return {
        'yesterday': (today - timedelta(days=1), today),
        'last_week': (today - timedelta(days=7), today),
        'last_month': (add_months(this_month, -1), this_month),
        # Q1 -> Q4 poprzedniego roku, add_months przechodzi przez rok sam
        'last_quarter': (add_months(this_quarter, -3), this_quarter),
        'last_year': (add_years(this_year, -1), this_year),
    }


class PeriodRollupAggregator:

    def compute_period_progress(self, progresses: Iterable[GoalProgress], now: datetime) -> Dict[str, PeriodProgress]:
        windows = {}
        for key, (start, end) in current_windows(now).items():
            # Już rozpoczęty dzień liczy się jako cały
            days = max(1, days_between(start, now))
            windows[key] = PeriodProgress(key=key, start=start, end=end, days=days)
        return self._accumulate(windows, progresses)

    def compute_historical_progress(self, progresses: Iterable[GoalProgress], now: datetime) -> Dict[str, PeriodProgress]:
        windows = {}
        for key, (start, end) in historical_windows(now).items():
            windows[key] = PeriodProgress(key=key, start=start, end=end, days=days_between(start, end))
        return self._accumulate(windows, progresses)

    def _accumulate(self, windows: Dict[str, PeriodProgress], progresses: Iterable[GoalProgress]):
        # Tylko aktywne cele (nieukończone i nie po terminie)
        active: List[GoalProgress] = [p for p in progresses if p.is_active]

        for window in windows.values():
            for p in active:
                actual = p.current_daily_rate * window.days
                expected = p.daily_target * window.days

                # NaN/Infinity pomijamy - jeden zepsuty cel nie psuje sumy
                counted = False
                if math.isfinite(actual):
                    window.progress += actual
                    counted = True
                if math.isfinite(expected):
                    window.target += expected
                    counted = True
                if counted:
                    window.goals_counted += 1
        return windows


def compare_with_history(current: Dict[str, PeriodProgress], historical: Dict[str, PeriodProgress]):
    """Para (bieżące okno, znacznik historyczny) dla każdego klucza bieżącego."""
    return {
        key: (window, historical.get(HISTORY_PAIRS[key]))
        for key, window in current.items()
        if key in HISTORY_PAIRS
    }


_aggregator = PeriodRollupAggregator()


def compute_period_progress(progresses: Iterable[GoalProgress], now: datetime) -> Dict[str, PeriodProgress]:
    return _aggregator.compute_period_progress(list(progresses), now)


def compute_historical_progress(progresses: Iterable[GoalProgress], now: datetime) -> Dict[str, PeriodProgress]:
    return _aggregator.compute_historical_progress(list(progresses), now)
